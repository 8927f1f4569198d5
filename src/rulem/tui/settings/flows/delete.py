"""Delete flow: confirm, then remove the entry from the configuration.

Files on disk are left alone.
"""

from __future__ import annotations

import logging
from functools import partial

from rulem.core.errors import PreconditionError
from rulem.tui.settings.events import (
    DeleteFailed,
    KeyPressed,
    SettingsCommand,
    SettingsComplete,
    SettingsEvent,
)
from rulem.tui.settings.flows.common import (
    COMMIT_FAILURES,
    KeyHandler,
    as_settings_error,
    load_config,
    save_config,
)
from rulem.tui.settings.model import SettingsModel, SettingsServices
from rulem.tui.settings.state import SettingsState

logger = logging.getLogger(__name__)

DELETE_KEYS = frozenset({"y", "Y"})
KEEP_KEYS = frozenset({"n", "N", "escape"})


def start(model: SettingsModel) -> None:
    model.transition_to(SettingsState.CONFIRM_DELETE)


def handle_confirm_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    if event.key in DELETE_KEYS:
        repo_id = model.selected_repository_id
        if repo_id is None:
            model.enter_error(SettingsState.DELETE_ERROR, PreconditionError("no repository selected"))
            return None
        logger.info("settings_delete_confirmed")
        return partial(commit, model.services, repo_id, SettingsState.CONFIRM_DELETE)
    if event.key in KEEP_KEYS:
        logger.info("settings_delete_cancelled")
        model.transition_back()
    return None


def handle_error_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    model.transition_to(SettingsState.REPOSITORY_ACTIONS)
    return None


def commit(services: SettingsServices, repo_id: str, origin: SettingsState) -> SettingsEvent:
    try:
        config = load_config(services)
        if config.find_by_id(repo_id) is None:
            raise PreconditionError(f"repository not found: {repo_id}")
        updated = config.without_repository(repo_id)
        save_config(services, updated)
    except COMMIT_FAILURES as e:
        return DeleteFailed(origin=origin, error=as_settings_error("failed to delete repository", e))
    logger.info("Deleted repository %s", repo_id)
    return SettingsComplete(origin=origin, config=updated)


KEY_HANDLERS: dict[SettingsState, KeyHandler] = {
    SettingsState.CONFIRM_DELETE: handle_confirm_keys,
    SettingsState.DELETE_ERROR: handle_error_keys,
}

FAILURE_STATES = {DeleteFailed: SettingsState.DELETE_ERROR}

SUCCESS_STATES = {SettingsState.CONFIRM_DELETE: SettingsState.COMPLETE}
