"""Add-Local flow: name, then directory, then commit."""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial

from rulem.core.errors import CollaboratorError, ValidationError
from rulem.core.repository import RepositoryEntry, RepositoryKind
from rulem.core.repository_id import unique_repository_id
from rulem.core.validation import (
    check_path_available,
    validate_repository_name,
    validate_repository_path,
)
from rulem.tui.settings.events import (
    AddLocalFailed,
    KeyPressed,
    SettingsCommand,
    SettingsComplete,
    SettingsEvent,
)
from rulem.tui.settings.flows.common import (
    ACCEPT_KEYS,
    BACK_KEYS,
    COMMIT_FAILURES,
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

NAME_PLACEHOLDER = "e.g., My Rules Repository"
PATH_PLACEHOLDER = "e.g., ~/rules or /path/to/rules"


def start(model: SettingsModel) -> None:
    model.transition_to(SettingsState.ADD_LOCAL_NAME)
    _show_name_input(model)


def _show_name_input(model: SettingsModel) -> None:
    model.reset_input(InputConfig(value=model.scratch.add_local.name, placeholder=NAME_PLACEHOLDER))


def _show_path_input(model: SettingsModel) -> None:
    model.reset_input(InputConfig(value=model.scratch.add_local.path, placeholder=PATH_PLACEHOLDER))


def handle_name_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    if event.key in ACCEPT_KEYS:
        logger.info("settings_add_local_name_submit")
        try:
            name = validate_repository_name(model.input.value, model.config)
        except ValidationError as e:
            model.error.set(e)
            return None
        model.scratch.add_local = replace(model.scratch.add_local, name=name)
        model.transition_to(SettingsState.ADD_LOCAL_PATH)
        _show_path_input(model)
        return None
    if event.key in BACK_KEYS:
        logger.info("settings_add_local_cancelled")
        model.transition_to(SettingsState.ADD_TYPE)
        return None
    edit_input(model, event)
    return None


def handle_path_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    if event.key in ACCEPT_KEYS:
        logger.info("settings_add_local_path_submit")
        try:
            path = validate_repository_path(
                model.input.value, model.config, model.services.path_ops
            )
        except ValidationError as e:
            model.error.set(e)
            return None
        model.scratch.add_local = replace(model.scratch.add_local, path=path)
        return partial(
            commit,
            model.services,
            model.scratch.add_local.name,
            path,
            SettingsState.ADD_LOCAL_PATH,
        )
    if event.key in BACK_KEYS:
        model.transition_to(SettingsState.ADD_LOCAL_NAME)
        _show_name_input(model)
        return None
    edit_input(model, event)
    return None


def handle_error_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    model.scratch.reset(FlowRegion.ADD_LOCAL)
    model.transition_to(SettingsState.ADD_LOCAL_NAME)
    _show_name_input(model)
    return None


def commit(
    services: SettingsServices, name: str, path: str, origin: SettingsState
) -> SettingsEvent:
    """Re-check against the stored configuration, create the directory, then save."""
    try:
        config = load_config(services)
        name = validate_repository_name(name, config)
        check_path_available(path, config)
    except COMMIT_FAILURES as e:
        return AddLocalFailed(origin=origin, error=as_settings_error("failed to add repository", e))

    try:
        services.path_ops.ensure_directory(path)
    except OSError as e:
        return AddLocalFailed(
            origin=origin, error=CollaboratorError("failed to prepare new repository", e)
        )

    try:
        created_at = services.time.timestamp()
        entry = RepositoryEntry(
            id=unique_repository_id(name, created_at, {r.id for r in config.repositories}),
            name=name,
            kind=RepositoryKind.LOCAL,
            path=path,
            created_at=created_at,
        )
        updated = config.with_repository_added(entry)
        save_config(services, updated)
    except COMMIT_FAILURES as e:
        return AddLocalFailed(origin=origin, error=as_settings_error("failed to add repository", e))

    logger.info("Added local repository %s at %s", entry.id, path)
    return SettingsComplete(origin=origin, config=updated)


KEY_HANDLERS: dict[SettingsState, KeyHandler] = {
    SettingsState.ADD_LOCAL_NAME: handle_name_keys,
    SettingsState.ADD_LOCAL_PATH: handle_path_keys,
    SettingsState.ADD_LOCAL_ERROR: handle_error_keys,
}

FAILURE_STATES = {AddLocalFailed: SettingsState.ADD_LOCAL_ERROR}

SUCCESS_STATES = {SettingsState.ADD_LOCAL_PATH: SettingsState.MAIN_MENU}
