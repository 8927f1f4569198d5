"""Key helpers and commit plumbing shared by the settings flows."""

from __future__ import annotations

import logging
from collections.abc import Callable

from rulem.core.errors import CollaboratorError, SettingsError
from rulem.core.repository import RulemConfig
from rulem.tui.settings.events import KeyPressed, SettingsCommand
from rulem.tui.settings.model import SettingsModel, SettingsServices

logger = logging.getLogger(__name__)

KeyHandler = Callable[[SettingsModel, KeyPressed], "SettingsCommand | None"]

ACCEPT_KEYS = frozenset({"enter"})
CONFIRM_KEYS = frozenset({"enter", "y"})
REJECT_KEYS = frozenset({"n"})
BACK_KEYS = frozenset({"escape"})
UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})
SELECT_KEYS = frozenset({"enter", "space"})

# Failures a commit step converts into an error event. Anything else is a
# bug and propagates to the host.
COMMIT_FAILURES = (SettingsError, OSError, RuntimeError, ValueError)


def move_cursor(model: SettingsModel, event: KeyPressed, item_count: int) -> bool:
    """Move the list cursor for up/down/j/k, wrapping at both ends."""
    if item_count == 0:
        return False
    if event.key in UP_KEYS:
        model.cursor = (model.cursor - 1) % item_count
        return True
    if event.key in DOWN_KEYS:
        model.cursor = (model.cursor + 1) % item_count
        return True
    return False


def edit_input(model: SettingsModel, event: KeyPressed) -> None:
    """Feed a key to the shared input; typing clears an inline validation error."""
    if model.input.handle_key(event):
        model.error.clear()


def load_config(services: SettingsServices) -> RulemConfig:
    """Read the snapshot a commit step applies its change to.

    Commit steps start from the stored document rather than the model's
    copy so the write never drops changes made since the last reload.
    """
    try:
        return services.config_store.load()
    except (OSError, ValueError) as e:
        raise CollaboratorError("failed to load configuration", e) from e


def save_config(services: SettingsServices, config: RulemConfig) -> None:
    try:
        services.config_store.save(config)
    except OSError as e:
        raise CollaboratorError("failed to save configuration", e) from e


def as_settings_error(context: str, error: Exception) -> SettingsError:
    """Keep SettingsErrors as they are; wrap everything else with context."""
    if isinstance(error, SettingsError):
        return error
    return CollaboratorError(context, error)
