"""TUI runner abstraction for testability.

CLI tests use FakeTuiRunner to check which app a command built without
starting the Textual event loop.
"""

from abc import ABC, abstractmethod

from rulem.tui.app import SettingsApp
from rulem.tui.settings.state import ExitReason


class TuiRunner(ABC):
    """Abstract interface for running TUI applications."""

    @abstractmethod
    def run(self, app: SettingsApp) -> ExitReason | None:
        """Run the app until it exits.

        Returns:
            Why the app exited, or None if it stopped without a reason
        """
        ...


class RealTuiRunner(TuiRunner):
    def run(self, app: SettingsApp) -> ExitReason | None:
        return app.run()


class FakeTuiRunner(TuiRunner):
    """Records apps passed to run() and returns a canned exit reason."""

    def __init__(self, exit_reason: ExitReason | None = ExitReason.BACK_TO_PARENT) -> None:
        self._exit_reason = exit_reason
        self._apps_run: list[SettingsApp] = []

    def run(self, app: SettingsApp) -> ExitReason | None:
        self._apps_run.append(app)
        return self._exit_reason

    @property
    def apps_run(self) -> list[SettingsApp]:
        """Apps that were passed to run().

        This property is for test assertions only.
        """
        return self._apps_run
