import logging

import click

from rulem.tui.app import SettingsApp
from rulem.tui.context import RulemContext
from rulem.tui.settings.state import ExitReason

logger = logging.getLogger(__name__)


@click.command("settings")
@click.pass_obj
def settings_cmd(ctx: RulemContext) -> None:
    """Open the interactive settings menu."""
    app = SettingsApp(ctx.services)
    exit_reason = ctx.tui_runner.run(app)
    logger.debug("Settings menu exited: %s", exit_reason)
    if exit_reason == ExitReason.QUIT:
        raise SystemExit(130)
