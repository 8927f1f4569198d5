"""Single-field edits applied by the edit flows' commit steps."""

from dataclasses import replace
from enum import Enum, auto

from rulem.core.errors import UnknownChangeKind, ValidationError
from rulem.core.repository import RepositoryEntry, RulemConfig


class ChangeKind(Enum):
    """Which field of a repository entry an edit flow changes."""

    NAME = auto()
    BRANCH = auto()
    CLONE_PATH = auto()
    LAST_SYNC = auto()


def apply_change(
    config: RulemConfig, repo_id: str, kind: ChangeKind, value: str | int | None
) -> RulemConfig:
    """Return a snapshot where only the requested field of repo_id differs.

    Raises:
        ValidationError: If repo_id is not in the snapshot or the field does
            not apply to the entry's kind
        UnknownChangeKind: If kind is not handled
    """
    entry = config.find_by_id(repo_id)
    if entry is None:
        raise ValidationError(f"repository not found: {repo_id}")
    return config.with_repository_replaced(_changed_entry(entry, kind, value))


def _changed_entry(
    entry: RepositoryEntry, kind: ChangeKind, value: str | int | None
) -> RepositoryEntry:
    if kind == ChangeKind.NAME:
        if not isinstance(value, str) or not value:
            raise ValidationError("no repository name provided")
        return replace(entry, name=value)

    if kind == ChangeKind.BRANCH:
        if not entry.is_remote:
            raise ValidationError("branch can only be set on remote repositories")
        # An empty branch means "follow the remote's default branch".
        branch = value if isinstance(value, str) and value else None
        return replace(entry, branch=branch)

    if kind == ChangeKind.CLONE_PATH:
        if not entry.is_remote:
            raise ValidationError("clone path can only be set on remote repositories")
        if not isinstance(value, str) or not value:
            raise ValidationError("no clone path provided")
        return replace(entry, path=value)

    if kind == ChangeKind.LAST_SYNC:
        if not isinstance(value, int):
            raise ValidationError("sync time must be a timestamp")
        return replace(entry, last_sync_time=value)

    raise UnknownChangeKind(str(kind))
