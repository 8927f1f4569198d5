import click

from rulem.tui.context import RulemContext


@click.group("config")
def config_group() -> None:
    """Inspect the rulem configuration file."""


@config_group.command("path")
@click.pass_obj
def config_path(ctx: RulemContext) -> None:
    """Print the resolved configuration file path."""
    click.echo(str(ctx.config_store.config_path()))
