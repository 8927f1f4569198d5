"""Edit-Name flow: new name, confirmation, commit."""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial

from rulem.core.changes import ChangeKind, apply_change
from rulem.core.errors import PreconditionError, ValidationError
from rulem.core.validation import validate_repository_name
from rulem.tui.settings.events import (
    EditNameFailed,
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


def start(model: SettingsModel) -> None:
    entry = model.selected_repository()
    if entry is None:
        model.enter_error(
            SettingsState.EDIT_NAME_ERROR, PreconditionError("no repository selected")
        )
        return
    model.transition_to(SettingsState.UPDATE_NAME)
    model.reset_input(InputConfig(value=entry.name, placeholder=entry.name))


def handle_input_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    if event.key in ACCEPT_KEYS:
        logger.info("settings_edit_name_submit")
        try:
            name = validate_repository_name(
                model.input.value, model.config, editing_id=model.selected_repository_id
            )
        except ValidationError as e:
            model.enter_error(SettingsState.EDIT_NAME_ERROR, e)
            return None
        model.scratch.edit_name = replace(model.scratch.edit_name, new_name=name)
        model.transition_to(SettingsState.EDIT_NAME_CONFIRM)
        return None
    if event.key in BACK_KEYS:
        model.transition_to(SettingsState.REPOSITORY_ACTIONS)
        return None
    edit_input(model, event)
    return None


def handle_confirm_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    repo_id = model.selected_repository_id
    if event.key in CONFIRM_KEYS and repo_id is not None:
        logger.info("settings_edit_name_confirmed")
        return partial(
            commit,
            model.services,
            repo_id,
            model.scratch.edit_name.new_name,
            SettingsState.EDIT_NAME_CONFIRM,
        )
    if event.key in REJECT_KEYS:
        logger.info("settings_edit_name_cancelled")
        model.scratch.reset(FlowRegion.EDIT_NAME)
        model.transition_to(SettingsState.REPOSITORY_ACTIONS)
        return None
    if event.key in BACK_KEYS:
        model.transition_to(SettingsState.UPDATE_NAME)
        entry = model.selected_repository()
        model.reset_input(
            InputConfig(
                value=model.scratch.edit_name.new_name,
                placeholder=entry.name if entry is not None else "",
            )
        )
    return None


def handle_error_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    model.scratch.reset(FlowRegion.EDIT_NAME)
    model.transition_to(SettingsState.REPOSITORY_ACTIONS)
    return None


def commit(
    services: SettingsServices, repo_id: str, new_name: str, origin: SettingsState
) -> SettingsEvent:
    """Change only the name of repo_id; every other field is kept as stored."""
    try:
        config = load_config(services)
        name = validate_repository_name(new_name, config, editing_id=repo_id)
        updated = apply_change(config, repo_id, ChangeKind.NAME, name)
        save_config(services, updated)
    except COMMIT_FAILURES as e:
        return EditNameFailed(
            origin=origin, error=as_settings_error("failed to save repository name", e)
        )
    logger.info("Renamed repository %s to %r", repo_id, new_name)
    return SettingsComplete(origin=origin, config=updated)


KEY_HANDLERS: dict[SettingsState, KeyHandler] = {
    SettingsState.UPDATE_NAME: handle_input_keys,
    SettingsState.EDIT_NAME_CONFIRM: handle_confirm_keys,
    SettingsState.EDIT_NAME_ERROR: handle_error_keys,
}

FAILURE_STATES = {EditNameFailed: SettingsState.EDIT_NAME_ERROR}

SUCCESS_STATES = {SettingsState.EDIT_NAME_CONFIRM: SettingsState.COMPLETE}
