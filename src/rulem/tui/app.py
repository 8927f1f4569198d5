"""Textual host for the settings menu."""

import asyncio
import logging

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Static

from rulem.tui.settings.events import (
    KeyPressed,
    SettingsCommand,
    SettingsEvent,
    WindowResized,
)
from rulem.tui.settings.machine import SettingsMachine
from rulem.tui.settings.model import SettingsModel, SettingsServices
from rulem.tui.settings.state import ExitReason
from rulem.tui.settings.views import render

logger = logging.getLogger(__name__)


class SettingsApp(App[ExitReason]):
    """Interactive settings menu.

    Keys are translated into KeyPressed events for SettingsMachine. Commands
    the machine returns run in a worker thread and their results are fed
    back into the machine on the event loop. The app exits with the
    machine's ExitReason.
    """

    DEFAULT_CSS = """
    #settings-container {
        padding: 1 2;
        height: auto;
    }

    #settings-title {
        text-style: bold;
        color: $primary;
    }

    #settings-subtitle {
        color: $text-muted;
        margin-bottom: 1;
    }

    #settings-input {
        border: round $primary;
        padding: 0 1;
    }

    #settings-error {
        color: $error;
        margin-top: 1;
    }

    #settings-help {
        color: $text-muted;
        margin-top: 1;
    }
    """

    # ctrl+c is a priority binding so it reaches the machine from any state.
    BINDINGS = [
        Binding("ctrl+c", "quit_settings", "Quit", priority=True, show=False),
    ]

    def __init__(self, services: SettingsServices) -> None:
        """Initialize the settings app.

        Args:
            services: Collaborators the settings flows call through
        """
        super().__init__()
        self._machine = SettingsMachine(SettingsModel(services))

    @property
    def model(self) -> SettingsModel:
        return self._machine.model

    def compose(self) -> ComposeResult:
        with Vertical(id="settings-container"):
            yield Static(id="settings-title")
            yield Static(id="settings-subtitle")
            yield Static(id="settings-body")
            yield Static(id="settings-input")
            yield Static(id="settings-error")
            yield Static(id="settings-help")

    def on_mount(self) -> None:
        self._machine.update(WindowResized(width=self.size.width, height=self.size.height))
        self._refresh_screen()
        self._run_command(self._machine.start())

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        self._dispatch(KeyPressed(key=event.key, character=event.character))

    def on_resize(self, event: events.Resize) -> None:
        self._dispatch(WindowResized(width=event.size.width, height=event.size.height))

    def action_quit_settings(self) -> None:
        self._dispatch(KeyPressed(key="ctrl+c"))

    def _dispatch(self, event: SettingsEvent) -> None:
        command = self._machine.update(event)
        if self._machine.finished:
            self.exit(self.model.exit_reason)
            return
        self._refresh_screen()
        if command is not None:
            self._run_command(command)

    def _run_command(self, command: SettingsCommand) -> None:
        self.run_worker(self._execute(command), group="settings-commands")

    async def _execute(self, command: SettingsCommand) -> None:
        """Run a blocking command in a thread and feed its result to the machine."""
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, command)
        if result is None or self._machine.finished:
            return
        self._dispatch(result)

    def _refresh_screen(self) -> None:
        content = render(self.model)
        self.query_one("#settings-title", Static).update(Text(content.title))
        self.query_one("#settings-subtitle", Static).update(Text(content.subtitle))
        self.query_one("#settings-body", Static).update(Text("\n".join(content.body)))

        input_widget = self.query_one("#settings-input", Static)
        input_widget.display = content.input_text is not None
        if content.input_text is not None:
            style = "dim" if content.input_is_placeholder else ""
            input_widget.update(Text(content.input_text, style=style))

        error_widget = self.query_one("#settings-error", Static)
        error_widget.display = content.error is not None
        error_widget.update(Text(f"❌ {content.error}" if content.error else ""))

        self.query_one("#settings-help", Static).update(Text(content.help_text))
