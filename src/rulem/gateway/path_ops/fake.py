"""Fake implementation of path operations for testing."""

import os

from rulem.gateway.path_ops.abc import DirectoryStatus, PathOps


class FakePathOps(PathOps):
    """In-memory fake implementation of path operations.

    Paths are treated as plain strings; nothing touches the filesystem.

    Constructor Injection:
    ---------------------
    - home: Replacement for a leading "~"
    - env: Variables available to $VAR expansion
    - invalid_paths: Mapping of expanded path -> validation message
    - directories: Mapping of expanded path -> DirectoryStatus (default MISSING)
    - ensure_directory_raises: Exception raised by ensure_directory()

    Mutation Tracking:
    -----------------
    - created_directories: Paths passed to ensure_directory()
    """

    def __init__(
        self,
        *,
        home: str = "/home/user",
        env: dict[str, str] | None = None,
        invalid_paths: dict[str, str] | None = None,
        directories: dict[str, DirectoryStatus] | None = None,
        ensure_directory_raises: Exception | None = None,
    ) -> None:
        self._home = home
        self._env = env or {}
        self._invalid_paths = invalid_paths or {}
        self._directories = directories or {}
        self._ensure_directory_raises = ensure_directory_raises
        self._created_directories: list[str] = []

    def expand(self, raw: str) -> str:
        text = raw.strip()
        for name, value in self._env.items():
            text = text.replace(f"${{{name}}}", value).replace(f"${name}", value)
        if text == "~":
            return self._home
        if text.startswith("~/"):
            return f"{self._home}/{text[2:]}"
        return text

    def validate_storage_path(self, expanded: str) -> None:
        if not expanded.strip():
            raise ValueError("storage directory cannot be empty")
        if expanded in self._invalid_paths:
            raise ValueError(self._invalid_paths[expanded])
        if not os.path.isabs(expanded):
            raise ValueError("path must be absolute or relative to home directory (~)")
        if self._directories.get(expanded) == DirectoryStatus.NOT_A_DIRECTORY:
            raise ValueError(f"path exists and is not a directory: {expanded}")

    def inspect_directory(self, expanded: str) -> DirectoryStatus:
        return self._directories.get(expanded, DirectoryStatus.MISSING)

    def ensure_directory(self, expanded: str) -> None:
        if self._ensure_directory_raises is not None:
            raise self._ensure_directory_raises
        self._created_directories.append(expanded)
        if self.inspect_directory(expanded) == DirectoryStatus.MISSING:
            self._directories[expanded] = DirectoryStatus.EMPTY

    @property
    def created_directories(self) -> list[str]:
        """Paths passed to ensure_directory().

        This property is for test assertions only.
        """
        return list(self._created_directories)
