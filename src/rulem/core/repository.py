"""Repository entries and the immutable configuration snapshot."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

CONFIG_VERSION = "1.0"


class RepositoryKind(Enum):
    """Where a repository's rules come from."""

    LOCAL = "local"
    REMOTE = "remote"

    @classmethod
    def parse(cls, raw: str) -> RepositoryKind:
        """Parse a persisted kind, accepting the legacy "github" spelling."""
        if raw == "github":
            return cls.REMOTE
        return cls(raw)


@dataclass(frozen=True)
class RepositoryEntry:
    """One managed repository.

    Attributes:
        id: Stable identifier assigned at creation
        name: User-visible label, unique across the collection
        kind: LOCAL directory or REMOTE clone
        path: Absolute path (the working tree for remote entries)
        created_at: Creation time in seconds since the epoch
        remote_url: Clone URL, present iff kind is REMOTE
        branch: Tracked branch, None means the remote's default branch
        last_sync_time: Seconds since the epoch of the last successful fetch
    """

    id: str
    name: str
    kind: RepositoryKind
    path: str
    created_at: int
    remote_url: str | None = None
    branch: str | None = None
    last_sync_time: int | None = None

    @property
    def is_remote(self) -> bool:
        return self.kind == RepositoryKind.REMOTE


@dataclass(frozen=True)
class RulemConfig:
    """Immutable snapshot of the persisted configuration.

    Every mutation helper returns a new snapshot; the original is never
    changed, so a flow can build its commit candidate without touching the
    snapshot the rest of the UI is rendering.
    """

    repositories: tuple[RepositoryEntry, ...] = ()
    version: str = CONFIG_VERSION
    init_time: int | None = None

    @classmethod
    def empty(cls) -> RulemConfig:
        return cls()

    def find_by_id(self, repo_id: str) -> RepositoryEntry | None:
        for entry in self.repositories:
            if entry.id == repo_id:
                return entry
        return None

    def find_by_name(self, name: str) -> RepositoryEntry | None:
        """Find an entry by exact (case-sensitive) name."""
        for entry in self.repositories:
            if entry.name == name:
                return entry
        return None

    def remote_repositories(self) -> tuple[RepositoryEntry, ...]:
        return tuple(entry for entry in self.repositories if entry.is_remote)

    def with_repository_added(self, entry: RepositoryEntry) -> RulemConfig:
        if self.find_by_id(entry.id) is not None:
            raise ValueError(f"repository id '{entry.id}' already exists")
        return replace(self, repositories=(*self.repositories, entry))

    def with_repository_replaced(self, entry: RepositoryEntry) -> RulemConfig:
        if self.find_by_id(entry.id) is None:
            raise ValueError(f"repository with id '{entry.id}' not found")
        repositories = tuple(entry if r.id == entry.id else r for r in self.repositories)
        return replace(self, repositories=repositories)

    def without_repository(self, repo_id: str) -> RulemConfig:
        if self.find_by_id(repo_id) is None:
            raise ValueError(f"repository with id '{repo_id}' not found")
        return replace(
            self, repositories=tuple(r for r in self.repositories if r.id != repo_id)
        )

