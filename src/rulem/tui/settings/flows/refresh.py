"""Manual refresh of a remote repository, gated on a clean working tree."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path

from rulem.core.changes import ChangeKind, apply_change
from rulem.core.errors import CollaboratorError, PreconditionError
from rulem.tui.settings.events import (
    KeyPressed,
    RefreshDirtyResult,
    RefreshDone,
    SettingsCommand,
    SettingsEvent,
)
from rulem.tui.settings.flows.common import (
    CONFIRM_KEYS,
    COMMIT_FAILURES,
    KeyHandler,
    as_settings_error,
    load_config,
    save_config,
)
from rulem.tui.settings.model import SettingsModel, SettingsServices
from rulem.tui.settings.reload import reload_config
from rulem.tui.settings.state import SettingsState

logger = logging.getLogger(__name__)

CANCEL_KEYS = frozenset({"n", "escape"})
DIRTY_MESSAGE = "repository has uncommitted changes - please commit or stash before refreshing"


def start(model: SettingsModel) -> None:
    model.transition_to(SettingsState.MANUAL_REFRESH)


def handle_confirm_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    if event.key in CONFIRM_KEYS:
        entry = model.selected_repository()
        if entry is None or entry.remote_url is None:
            model.enter_error(
                SettingsState.REFRESH_ERROR,
                PreconditionError("cannot refresh: not a remote repository"),
            )
            return None
        logger.info("settings_refresh_confirmed")
        return partial(check_dirty, model.services, Path(entry.path), SettingsState.MANUAL_REFRESH)
    if event.key in CANCEL_KEYS:
        model.transition_back()
    return None


def handle_in_progress_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    return None


def handle_error_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    model.transition_to(SettingsState.REPOSITORY_ACTIONS)
    return None


def check_dirty(
    services: SettingsServices, repo_path: Path, origin: SettingsState
) -> SettingsEvent:
    try:
        dirty = services.remote_ops.is_dirty(repo_path)
    except RuntimeError as e:
        return RefreshDirtyResult(origin=origin, error=e)
    return RefreshDirtyResult(origin=origin, dirty=dirty)


def on_dirty_result(model: SettingsModel, event: RefreshDirtyResult) -> SettingsCommand | None:
    if event.error is not None:
        model.enter_error(
            SettingsState.REFRESH_ERROR,
            CollaboratorError("failed to check repository status", event.error),
        )
        return None
    if event.dirty:
        model.enter_error(SettingsState.REFRESH_ERROR, PreconditionError(DIRTY_MESSAGE))
        return None

    entry = model.selected_repository()
    if entry is None or entry.remote_url is None:
        model.enter_error(SettingsState.REFRESH_ERROR, PreconditionError("repository not found"))
        return None
    model.transition_to(SettingsState.REFRESH_IN_PROGRESS)
    model.refresh_in_progress = True
    return partial(fetch_updates, model.services, entry.id, SettingsState.REFRESH_IN_PROGRESS)


def fetch_updates(services: SettingsServices, repo_id: str, origin: SettingsState) -> SettingsEvent:
    """Fetch the tracked branch, then record the sync time."""
    try:
        config = load_config(services)
        entry = config.find_by_id(repo_id)
        if entry is None or entry.remote_url is None:
            raise PreconditionError(f"repository not found: {repo_id}")
        try:
            services.remote_ops.fetch(Path(entry.path), entry.remote_url, entry.branch)
        except RuntimeError as e:
            raise CollaboratorError("failed to refresh repository", e) from e
        updated = apply_change(config, repo_id, ChangeKind.LAST_SYNC, services.time.timestamp())
        save_config(services, updated)
    except COMMIT_FAILURES as e:
        return RefreshDone(origin=origin, error=as_settings_error("failed to refresh repository", e))
    logger.info("Refreshed repository %s", repo_id)
    return RefreshDone(origin=origin)


def on_refresh_done(model: SettingsModel, event: RefreshDone) -> SettingsCommand | None:
    model.refresh_in_progress = False
    if event.error is not None:
        model.enter_error(SettingsState.REFRESH_ERROR, event.error)
        return None
    model.transition_to(SettingsState.MAIN_MENU)
    return partial(reload_config, model.services)


KEY_HANDLERS: dict[SettingsState, KeyHandler] = {
    SettingsState.MANUAL_REFRESH: handle_confirm_keys,
    SettingsState.REFRESH_IN_PROGRESS: handle_in_progress_keys,
    SettingsState.REFRESH_ERROR: handle_error_keys,
}

RESULT_HANDLERS = {
    RefreshDirtyResult: on_dirty_result,
    RefreshDone: on_refresh_done,
}
