"""Event dispatcher for the settings menu.

SettingsMachine owns a SettingsModel and is the only thing that mutates
it. The host feeds it events one at a time; update() returns at most one
command for the host to run off the event loop. The command's return value
comes back in as the next event.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from rulem.core.errors import SettingsError
from rulem.core.repository import RulemConfig
from rulem.tui.settings.events import (
    AsyncResult,
    ConfigReloaded,
    FlowFailed,
    KeyPressed,
    SettingsCommand,
    SettingsComplete,
    SettingsEvent,
    WindowResized,
)
from rulem.tui.settings.flows import (
    add_local,
    add_remote,
    delete,
    edit_branch,
    edit_clone_path,
    edit_name,
    menu,
    refresh,
    update_credential,
)
from rulem.tui.settings.flows.common import BACK_KEYS, KeyHandler
from rulem.tui.settings.model import SettingsModel
from rulem.tui.settings.reload import reload_config
from rulem.tui.settings.state import SELECTION_STATES, ExitReason, SettingsState

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"ctrl+c"})

ResultHandler = Callable[[SettingsModel, Any], "SettingsCommand | None"]

_FLOWS = (
    menu,
    add_local,
    add_remote,
    edit_name,
    edit_branch,
    edit_clone_path,
    delete,
    refresh,
    update_credential,
)


def _merged(attribute: str) -> dict[Any, Any]:
    merged: dict[Any, Any] = {}
    for flow in _FLOWS:
        table: Mapping[Any, Any] = getattr(flow, attribute, {})
        overlap = merged.keys() & table.keys()
        if overlap:
            raise RuntimeError(f"{flow.__name__} redefines {attribute} entries: {overlap}")
        merged.update(table)
    return merged


KEY_HANDLERS: dict[SettingsState, KeyHandler] = _merged("KEY_HANDLERS")
RESULT_HANDLERS: dict[type[AsyncResult], ResultHandler] = _merged("RESULT_HANDLERS")
FAILURE_STATES: dict[type[FlowFailed], SettingsState] = _merged("FAILURE_STATES")
SUCCESS_STATES: dict[SettingsState, SettingsState] = _merged("SUCCESS_STATES")


def unhandled_states() -> set[SettingsState]:
    """States with no registered key handler."""
    return set(SettingsState) - KEY_HANDLERS.keys()


class SettingsMachine:
    """Routes events to the handler for the current state."""

    def __init__(self, model: SettingsModel) -> None:
        self.model = model

    @property
    def state(self) -> SettingsState:
        return self.model.state

    @property
    def finished(self) -> bool:
        return self.model.exit_reason is not None

    def start(self) -> SettingsCommand:
        """Command that loads the initial configuration snapshot."""
        logger.debug("Settings menu started")
        return partial(reload_config, self.model.services)

    def update(self, event: SettingsEvent) -> SettingsCommand | None:
        if isinstance(event, KeyPressed):
            return self._on_key(event)
        if isinstance(event, WindowResized):
            self.model.resize(event.width, event.height)
            return None
        if isinstance(event, ConfigReloaded):
            self._on_config_reloaded(event)
            return None
        if isinstance(event, AsyncResult):
            return self._on_result(event)
        raise TypeError(f"unsupported settings event: {event!r}")

    def _on_key(self, event: KeyPressed) -> SettingsCommand | None:
        model = self.model
        if event.key in QUIT_KEYS:
            logger.info("settings_quit from %s", model.state.value)
            model.exit_reason = ExitReason.QUIT
            return None
        if model.pending_origin == model.state and event.key not in BACK_KEYS:
            logger.debug("Ignoring %s while %s is running", event.key, model.state.value)
            return None
        command = KEY_HANDLERS[model.state](model, event)
        self._require_selection()
        return self._issued(command)

    def _issued(self, command: SettingsCommand | None) -> SettingsCommand | None:
        # Reloads answer with ConfigReloaded, which carries no origin.
        if command is not None and getattr(command, "func", None) is not reload_config:
            self.model.pending_origin = self.model.state
        return command

    def _on_config_reloaded(self, event: ConfigReloaded) -> None:
        if event.error is not None:
            self.model.error.set(
                SettingsError(f"failed to load configuration: {event.error}")
            )
            return
        if event.config is not None:
            self._apply_config(event.config)
            logger.debug("Configuration reloaded: %d repositories", len(event.config.repositories))

    def _apply_config(self, config: RulemConfig) -> None:
        model = self.model
        model.config = config
        if model.selected_repository_id is None:
            return
        if config.find_by_id(model.selected_repository_id) is not None:
            return
        logger.info("Selected repository %s no longer exists", model.selected_repository_id)
        model.selected_repository_id = None
        self._require_selection()

    def _require_selection(self) -> None:
        model = self.model
        if model.state in SELECTION_STATES and model.selected_repository() is None:
            model.transition_to(SettingsState.MAIN_MENU)

    def _on_result(self, event: AsyncResult) -> SettingsCommand | None:
        model = self.model
        if event.origin == model.pending_origin:
            model.pending_origin = None
        if event.origin != model.state:
            logger.debug(
                "Ignoring %s from %s; current state is %s",
                type(event).__name__,
                event.origin.value,
                model.state.value,
            )
            if isinstance(event, SettingsComplete):
                return partial(reload_config, model.services)
            return None

        if isinstance(event, SettingsComplete):
            return self._on_complete(event)

        if isinstance(event, FlowFailed):
            error_state = FAILURE_STATES[type(event)]
            model.enter_error(error_state, event.error or SettingsError("operation failed"))
            return None

        handler = RESULT_HANDLERS.get(type(event))
        if handler is None:
            raise TypeError(f"no handler for {type(event).__name__}")
        return self._issued(handler(model, event))

    def _on_complete(self, event: SettingsComplete) -> SettingsCommand:
        model = self.model
        origin = event.origin
        destination = SUCCESS_STATES[origin]
        logger.info("settings_complete from %s", origin.value)
        model.scratch.reset(origin.region)
        model.transition_to(destination)
        if origin == SettingsState.CONFIRM_DELETE:
            model.selected_repository_id = None
        if event.config is not None:
            self._apply_config(event.config)
        return partial(reload_config, model.services)
