"""Abstract base class for git operations on a repository's working tree."""

from abc import ABC, abstractmethod
from pathlib import Path


class RemoteOps(ABC):
    """Abstract interface for the git operations the settings flows need.

    Query operations (is_dirty, remote_branch_exists) never modify the
    working tree. fetch() updates remote-tracking refs only; clone() creates
    a new working tree.
    """

    @abstractmethod
    def is_dirty(self, repo_path: Path) -> bool:
        """Check for uncommitted changes, including untracked files.

        Args:
            repo_path: Working tree of the clone

        Raises:
            RuntimeError: If the path is not a git working tree or git fails
        """
        ...

    @abstractmethod
    def remote_branch_exists(self, repo_path: Path, branch: str) -> bool:
        """Check whether branch exists on the 'origin' remote.

        Args:
            repo_path: Working tree of the clone
            branch: Branch name without the refs/heads/ prefix

        Raises:
            RuntimeError: If the remote cannot be queried
        """
        ...

    @abstractmethod
    def clone(self, remote_url: str, repo_path: Path, branch: str | None) -> None:
        """Clone remote_url into repo_path.

        Args:
            remote_url: URL to clone
            repo_path: Destination working tree (missing or empty)
            branch: Branch to check out, or None for the remote's default

        Raises:
            RuntimeError: If the clone fails or times out
        """
        ...

    @abstractmethod
    def fetch(self, repo_path: Path, remote_url: str, branch: str | None) -> None:
        """Fetch updates from origin.

        Args:
            repo_path: Working tree of the clone
            remote_url: URL the entry is configured with, used in messages
            branch: Branch to fetch, or None for the remote's default refs

        Raises:
            RuntimeError: If the fetch fails or times out
        """
        ...
