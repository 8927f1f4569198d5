"""Edit-Branch flow, gated on a clean working tree.

UpdateBranch validates the name and asks RemoteOps whether the clone has
uncommitted changes. Only a clean tree reaches EditBranchConfirm. The
commit verifies the branch exists on origin, saves, then fetches; a failed
fetch is logged and never undoes the save.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from pathlib import Path

from rulem.core.changes import ChangeKind, apply_change
from rulem.core.errors import CollaboratorError, PreconditionError, ValidationError
from rulem.core.repository import RepositoryEntry
from rulem.core.validation import validate_branch_name
from rulem.tui.settings.events import (
    EditBranchDirtyResult,
    EditBranchFailed,
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

BRANCH_PLACEHOLDER = "main (leave empty for default)"
DIRTY_MESSAGE = (
    "repository has uncommitted changes - please commit or stash before changing branch"
)


def _remote_selection(model: SettingsModel) -> RepositoryEntry | None:
    entry = model.selected_repository()
    if entry is None or not entry.is_remote:
        return None
    return entry


def start(model: SettingsModel) -> None:
    entry = _remote_selection(model)
    if entry is None:
        model.enter_error(
            SettingsState.EDIT_BRANCH_ERROR,
            PreconditionError("branch can only be changed on a remote repository"),
        )
        return
    model.transition_to(SettingsState.UPDATE_BRANCH)
    model.reset_input(InputConfig(value=entry.branch or "", placeholder=BRANCH_PLACEHOLDER))


def handle_input_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    if event.key in ACCEPT_KEYS:
        logger.info("settings_edit_branch_submit")
        entry = _remote_selection(model)
        if entry is None:
            model.enter_error(
                SettingsState.EDIT_BRANCH_ERROR, PreconditionError("repository not found")
            )
            return None
        try:
            branch = validate_branch_name(model.input.value)
        except ValidationError as e:
            model.enter_error(SettingsState.EDIT_BRANCH_ERROR, e)
            return None
        model.scratch.edit_branch = replace(model.scratch.edit_branch, new_branch=branch or "")
        return partial(check_dirty, model.services, Path(entry.path), SettingsState.UPDATE_BRANCH)
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
        return EditBranchDirtyResult(origin=origin, error=e)
    return EditBranchDirtyResult(origin=origin, dirty=dirty)


def on_dirty_result(model: SettingsModel, event: EditBranchDirtyResult) -> SettingsCommand | None:
    if event.error is not None:
        model.enter_error(
            SettingsState.EDIT_BRANCH_ERROR,
            CollaboratorError("failed to check repository status", event.error),
        )
        return None
    if event.dirty:
        model.enter_error(SettingsState.EDIT_BRANCH_ERROR, PreconditionError(DIRTY_MESSAGE))
        return None
    model.transition_to(SettingsState.EDIT_BRANCH_CONFIRM)
    return None


def handle_confirm_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    entry = _remote_selection(model)
    if event.key in CONFIRM_KEYS and entry is not None:
        logger.info("settings_edit_branch_confirmed")
        return partial(
            commit,
            model.services,
            entry.id,
            model.scratch.edit_branch.new_branch,
            SettingsState.EDIT_BRANCH_CONFIRM,
        )
    if event.key in REJECT_KEYS:
        logger.info("settings_edit_branch_cancelled")
        model.scratch.reset(FlowRegion.EDIT_BRANCH)
        model.transition_to(SettingsState.REPOSITORY_ACTIONS)
        return None
    if event.key in BACK_KEYS:
        model.transition_to(SettingsState.UPDATE_BRANCH)
        model.reset_input(
            InputConfig(value=model.scratch.edit_branch.new_branch, placeholder=BRANCH_PLACEHOLDER)
        )
    return None


def handle_error_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    model.scratch.reset(FlowRegion.EDIT_BRANCH)
    model.transition_to(SettingsState.REPOSITORY_ACTIONS)
    return None


def commit(
    services: SettingsServices, repo_id: str, new_branch: str, origin: SettingsState
) -> SettingsEvent:
    """Verify the branch on origin, store it, then fetch it best-effort."""
    try:
        config = load_config(services)
        entry = config.find_by_id(repo_id)
        if entry is None or entry.remote_url is None:
            raise PreconditionError(f"repository not found: {repo_id}")
        repo_path = Path(entry.path)

        if new_branch:
            try:
                exists = services.remote_ops.remote_branch_exists(repo_path, new_branch)
            except RuntimeError as e:
                raise CollaboratorError("branch validation failed", e) from e
            if not exists:
                raise PreconditionError(
                    f"branch validation failed: branch '{new_branch}' does not exist on "
                    "remote 'origin' - fetch the repository first or use a valid branch name"
                )

        updated = apply_change(config, repo_id, ChangeKind.BRANCH, new_branch)
        save_config(services, updated)
    except COMMIT_FAILURES as e:
        return EditBranchFailed(
            origin=origin, error=as_settings_error("failed to save branch configuration", e)
        )

    try:
        services.remote_ops.fetch(repo_path, entry.remote_url, new_branch or None)
    except RuntimeError as e:
        # The branch change is saved; the next refresh retries the fetch.
        logger.warning("Fetch after branch change failed for %s: %s", repo_id, e)

    logger.info("Repository %s now tracks %s", repo_id, new_branch or "the default branch")
    return SettingsComplete(origin=origin, config=updated)


KEY_HANDLERS: dict[SettingsState, KeyHandler] = {
    SettingsState.UPDATE_BRANCH: handle_input_keys,
    SettingsState.EDIT_BRANCH_CONFIRM: handle_confirm_keys,
    SettingsState.EDIT_BRANCH_ERROR: handle_error_keys,
}

RESULT_HANDLERS = {EditBranchDirtyResult: on_dirty_result}

FAILURE_STATES = {EditBranchFailed: SettingsState.EDIT_BRANCH_ERROR}

SUCCESS_STATES = {SettingsState.EDIT_BRANCH_CONFIRM: SettingsState.COMPLETE}
