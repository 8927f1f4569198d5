import logging
import os
from pathlib import Path

import click

from rulem.cli.commands.config import config_group
from rulem.cli.commands.repos import repos_group
from rulem.cli.commands.settings import settings_cmd
from rulem.tui.context import RulemContext

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

LOG_FORMAT = "%(asctime)s %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "rulem.log"


def default_log_path() -> Path:
    """$XDG_STATE_HOME/rulem/rulem.log, defaulting to ~/.local/state."""
    state_home = os.environ.get("XDG_STATE_HOME")
    base = Path(state_home) if state_home else Path.home() / ".local" / "state"
    return base / "rulem" / LOG_FILE_NAME


def _configure_debug_logging() -> None:
    # The settings TUI owns the terminal, so debug output goes to a file.
    log_path = default_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, filename=log_path)
    click.echo(f"Debug log: {log_path}", err=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="rulem")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (defaults to $RULEM_CONFIG_PATH or the XDG config dir)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_path: Path | None) -> None:
    """Manage the rule repositories rulem reads from."""
    if debug:
        _configure_debug_logging()

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = RulemContext.for_production(config_path)


cli.add_command(settings_cmd)
cli.add_command(repos_group)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `rulem` console script."""
    cli()
