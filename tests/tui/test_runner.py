"""Tests for the TUI runner abstraction."""

from rulem.tui.app import SettingsApp
from rulem.tui.context import RulemContext
from rulem.tui.runner import FakeTuiRunner
from rulem.tui.settings.state import ExitReason


def test_fake_runner_records_apps_without_running_them() -> None:
    runner = FakeTuiRunner(exit_reason=ExitReason.QUIT)
    app = SettingsApp(RulemContext.for_test().services)

    assert runner.run(app) == ExitReason.QUIT
    assert runner.apps_run == [app]


def test_fake_runner_defaults_to_back_to_parent() -> None:
    runner = FakeTuiRunner()
    assert runner.run(SettingsApp(RulemContext.for_test().services)) == ExitReason.BACK_TO_PARENT
