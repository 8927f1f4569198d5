from datetime import UTC, datetime

import click

from rulem.core.repository import RepositoryEntry
from rulem.tui.context import RulemContext


def _format_entry(entry: RepositoryEntry) -> str:
    line = f"{entry.id}  {entry.name}  [{entry.kind.value}]  {entry.path}"
    if entry.is_remote:
        branch = entry.branch or "default branch"
        line += f"  ({entry.remote_url}, {branch})"
        if entry.last_sync_time is not None:
            synced = datetime.fromtimestamp(entry.last_sync_time, tz=UTC)
            line += f"  synced {synced:%Y-%m-%d %H:%M}"
    return line


@click.group("repos")
def repos_group() -> None:
    """Inspect configured rule repositories."""


@repos_group.command("list")
@click.pass_obj
def list_repos(ctx: RulemContext) -> None:
    """List configured repositories in configuration order."""
    try:
        config = ctx.config_store.load()
    except (OSError, ValueError) as e:
        raise click.ClickException(f"failed to load configuration: {e}") from e

    if not config.repositories:
        click.echo("No repositories configured. Run 'rulem settings' to add one.", err=True)
        return
    for entry in config.repositories:
        click.echo(_format_entry(entry))
