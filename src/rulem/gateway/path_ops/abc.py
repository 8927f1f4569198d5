"""Abstract base class for filesystem path operations.

The settings flows never touch the filesystem directly; expansion,
storage-path checks and directory inspection all go through this
interface so tests can describe the filesystem in memory.
"""

from abc import ABC, abstractmethod
from enum import Enum


class DirectoryStatus(Enum):
    """What currently lives at a candidate storage path."""

    MISSING = "missing"
    EMPTY = "empty"
    GIT_REPOSITORY = "git_repository"
    NOT_EMPTY = "not_empty"
    NOT_A_DIRECTORY = "not_a_directory"


class PathOps(ABC):
    """Abstract interface for path expansion and storage-path checks."""

    @abstractmethod
    def expand(self, raw: str) -> str:
        """Expand a leading home marker and environment variables.

        Args:
            raw: Path as typed by the user, e.g. "~/rules" or "$HOME/rules"

        Returns:
            The expanded path (unchanged when there is nothing to expand)
        """
        ...

    @abstractmethod
    def validate_storage_path(self, expanded: str) -> None:
        """Check that expanded can hold a repository.

        The path must be absolute, free of traversal segments, outside
        system directories, not an existing file, and either exist as a
        writable directory or be creatable below an existing writable one.

        Raises:
            ValueError: With a user-facing message when the path is unusable
        """
        ...

    @abstractmethod
    def inspect_directory(self, expanded: str) -> DirectoryStatus:
        """Report whether expanded is missing, empty, a git checkout or populated."""
        ...

    @abstractmethod
    def ensure_directory(self, expanded: str) -> None:
        """Create expanded (and parents) if missing.

        Raises:
            OSError: If the directory cannot be created
        """
        ...
