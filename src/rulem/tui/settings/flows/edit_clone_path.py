"""Edit-ClonePath flow, gated on a clean working tree.

Only the stored path changes; files are not moved. The next refresh of the
repository works against the new location.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from pathlib import Path

from rulem.core.changes import ChangeKind, apply_change
from rulem.core.errors import CollaboratorError, PreconditionError, ValidationError
from rulem.core.repository import RepositoryEntry
from rulem.core.validation import check_path_available, validate_repository_path
from rulem.tui.settings.events import (
    EditClonePathDirtyResult,
    EditClonePathFailed,
    KeyPressed,
    SettingsCommand,
    SettingsComplete,
    SettingsEvent,
)
from rulem.tui.settings.flows.common import (
    ACCEPT_KEYS,
    BACK_KEYS,
    COMMIT_FAILURES,
    CONFIRM_KEYS,
    REJECT_KEYS,
    KeyHandler,
    as_settings_error,
    edit_input,
    load_config,
    save_config,
)
from rulem.tui.settings.input_widget import InputConfig
from rulem.tui.settings.model import SettingsModel, SettingsServices
from rulem.tui.settings.state import FlowRegion, SettingsState

logger = logging.getLogger(__name__)

DIRTY_MESSAGE = (
    "repository has uncommitted changes - please commit or stash before changing clone path"
)


def _remote_selection(model: SettingsModel) -> RepositoryEntry | None:
    entry = model.selected_repository()
    if entry is None or not entry.is_remote:
        return None
    return entry


def _show_input(model: SettingsModel, value: str) -> None:
    entry = model.selected_repository()
    model.reset_input(InputConfig(value=value, placeholder=entry.path if entry else ""))


def start(model: SettingsModel) -> None:
    if _remote_selection(model) is None:
        model.enter_error(
            SettingsState.EDIT_CLONE_PATH_ERROR,
            PreconditionError("clone path can only be changed on a remote repository"),
        )
        return
    model.transition_to(SettingsState.UPDATE_CLONE_PATH)
    _show_input(model, "")


def handle_input_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    if event.key in ACCEPT_KEYS:
        logger.info("settings_edit_clone_path_submit")
        entry = _remote_selection(model)
        if entry is None:
            model.enter_error(
                SettingsState.EDIT_CLONE_PATH_ERROR, PreconditionError("repository not found")
            )
            return None
        try:
            path = validate_repository_path(
                model.input.value,
                model.config,
                model.services.path_ops,
                editing_id=entry.id,
            )
        except ValidationError as e:
            model.enter_error(SettingsState.EDIT_CLONE_PATH_ERROR, e)
            return None
        model.scratch.edit_clone_path = replace(model.scratch.edit_clone_path, new_path=path)
        return partial(
            check_dirty, model.services, Path(entry.path), SettingsState.UPDATE_CLONE_PATH
        )
    if event.key in BACK_KEYS:
        model.transition_to(SettingsState.REPOSITORY_ACTIONS)
        return None
    edit_input(model, event)
    return None


def check_dirty(
    services: SettingsServices, repo_path: Path, origin: SettingsState
) -> SettingsEvent:
    try:
        dirty = services.remote_ops.is_dirty(repo_path)
    except RuntimeError as e:
        return EditClonePathDirtyResult(origin=origin, error=e)
    return EditClonePathDirtyResult(origin=origin, dirty=dirty)


def on_dirty_result(
    model: SettingsModel, event: EditClonePathDirtyResult
) -> SettingsCommand | None:
    if event.error is not None:
        model.enter_error(
            SettingsState.EDIT_CLONE_PATH_ERROR,
            CollaboratorError("failed to check repository status", event.error),
        )
        return None
    if event.dirty:
        model.enter_error(SettingsState.EDIT_CLONE_PATH_ERROR, PreconditionError(DIRTY_MESSAGE))
        return None
    model.transition_to(SettingsState.EDIT_CLONE_PATH_CONFIRM)
    return None


def handle_confirm_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    repo_id = model.selected_repository_id
    if event.key in CONFIRM_KEYS and repo_id is not None:
        logger.info("settings_edit_clone_path_confirmed")
        return partial(
            commit,
            model.services,
            repo_id,
            model.scratch.edit_clone_path.new_path,
            SettingsState.EDIT_CLONE_PATH_CONFIRM,
        )
    if event.key in REJECT_KEYS:
        logger.info("settings_edit_clone_path_cancelled")
        model.scratch.reset(FlowRegion.EDIT_CLONE_PATH)
        model.transition_to(SettingsState.REPOSITORY_ACTIONS)
        return None
    if event.key in BACK_KEYS:
        model.transition_to(SettingsState.UPDATE_CLONE_PATH)
        _show_input(model, model.scratch.edit_clone_path.new_path)
    return None


def handle_error_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    model.scratch.reset(FlowRegion.EDIT_CLONE_PATH)
    model.transition_to(SettingsState.REPOSITORY_ACTIONS)
    return None


def commit(
    services: SettingsServices, repo_id: str, new_path: str, origin: SettingsState
) -> SettingsEvent:
    try:
        config = load_config(services)
        check_path_available(new_path, config, editing_id=repo_id)
        updated = apply_change(config, repo_id, ChangeKind.CLONE_PATH, new_path)
        save_config(services, updated)
    except COMMIT_FAILURES as e:
        return EditClonePathFailed(
            origin=origin, error=as_settings_error("failed to save clone path configuration", e)
        )
    logger.info("Repository %s clone path set to %s", repo_id, new_path)
    return SettingsComplete(origin=origin, config=updated)


KEY_HANDLERS: dict[SettingsState, KeyHandler] = {
    SettingsState.UPDATE_CLONE_PATH: handle_input_keys,
    SettingsState.EDIT_CLONE_PATH_CONFIRM: handle_confirm_keys,
    SettingsState.EDIT_CLONE_PATH_ERROR: handle_error_keys,
}

RESULT_HANDLERS = {EditClonePathDirtyResult: on_dirty_result}

FAILURE_STATES = {EditClonePathFailed: SettingsState.EDIT_CLONE_PATH_ERROR}

SUCCESS_STATES = {SettingsState.EDIT_CLONE_PATH_CONFIRM: SettingsState.COMPLETE}
