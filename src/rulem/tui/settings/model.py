"""Aggregate state of the settings menu and its transition primitives."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rulem.core.repository import RepositoryEntry, RulemConfig
from rulem.gateway.config_store.abc import ConfigStore
from rulem.gateway.credentials.abc import CredentialStore
from rulem.gateway.path_ops.abc import PathOps
from rulem.gateway.remote_ops.abc import RemoteOps
from rulem.gateway.time.abc import Time
from rulem.tui.settings.input_widget import InputConfig, TextInputModel
from rulem.tui.settings.layout import ErrorSurface, LayoutState
from rulem.tui.settings.scratch import ScratchSlots
from rulem.tui.settings.state import ExitReason, SettingsState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingsServices:
    """Collaborators the settings flows call through."""

    config_store: ConfigStore
    credentials: CredentialStore
    remote_ops: RemoteOps
    path_ops: PathOps
    time: Time


class SettingsModel:
    """Everything the settings menu knows between events.

    Only the event loop mutates a model. State changes go through
    transition_to() or transition_back(), which clear the error surface,
    reset the list cursor, and reset the scratch of a flow being left.

    pending_origin names the state whose command is still running. While
    the model is in that state only back keys are handled.
    """

    def __init__(self, services: SettingsServices, config: RulemConfig | None = None) -> None:
        self.services = services
        self.config = config or RulemConfig.empty()
        self.state = SettingsState.MAIN_MENU
        self.previous_state = SettingsState.MAIN_MENU
        self.scratch = ScratchSlots()
        self.selected_repository_id: str | None = None
        self.layout = LayoutState()
        self.input = TextInputModel(width=self.layout.input_width)
        self.error = ErrorSurface()
        self.cursor = 0
        self.refresh_in_progress = False
        self.pending_origin: SettingsState | None = None
        self.exit_reason: ExitReason | None = None

    def transition_to(self, next_state: SettingsState) -> None:
        self._enter(next_state, previous=self.state)

    def transition_back(self) -> None:
        """Return to previous_state; the state being left becomes previous_state."""
        self._enter(self.previous_state, previous=self.state)

    def _enter(self, next_state: SettingsState, *, previous: SettingsState) -> None:
        leaving = previous.region
        self.previous_state = previous
        self.state = next_state
        self.error.clear()
        self.cursor = 0
        if leaving != next_state.region:
            self.scratch.reset(leaving)
        if next_state == SettingsState.MAIN_MENU:
            self.selected_repository_id = None
        logger.debug("Settings state %s -> %s", previous.value, next_state.value)

    def enter_error(self, error_state: SettingsState, error: Exception) -> None:
        """Show error on error_state; the surface is set after the transition clears it."""
        logger.warning("%s: %s", error_state.value, error)
        self.transition_to(error_state)
        self.error.set(error)

    def reset_input(self, config: InputConfig) -> None:
        self.input.reset(config)

    def selected_repository(self) -> RepositoryEntry | None:
        if self.selected_repository_id is None:
            return None
        return self.config.find_by_id(self.selected_repository_id)

    def resize(self, width: int, height: int) -> None:
        self.layout = LayoutState(width=width, height=height)
        self.input.width = self.layout.input_width
