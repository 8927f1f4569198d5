"""Fake implementation of remote operations for testing."""

from pathlib import Path

from rulem.gateway.remote_ops.abc import RemoteOps


class FakeRemoteOps(RemoteOps):
    """In-memory fake implementation of remote operations.

    This fake accepts pre-configured state in its constructor and tracks
    calls for test assertions.

    Constructor Injection:
    ---------------------
    - dirty_paths: Working trees that report uncommitted changes
    - remote_branches: Mapping of working tree -> branches present on origin
    - is_dirty_raises: Exception to raise when is_dirty() is called
    - remote_branch_exists_raises: Exception to raise when remote_branch_exists() is called
    - fetch_raises: Exception to raise when fetch() is called
    - clone_raises: Exception to raise when clone() is called

    Mutation Tracking:
    -----------------
    - dirty_checks: Paths passed to is_dirty()
    - branch_checks: (path, branch) tuples passed to remote_branch_exists()
    - fetches: (path, remote_url, branch) tuples passed to fetch()
    - clones: (remote_url, path, branch) tuples passed to clone()
    """

    def __init__(
        self,
        *,
        dirty_paths: set[Path] | None = None,
        remote_branches: dict[Path, set[str]] | None = None,
        is_dirty_raises: Exception | None = None,
        remote_branch_exists_raises: Exception | None = None,
        fetch_raises: Exception | None = None,
        clone_raises: Exception | None = None,
    ) -> None:
        self._dirty_paths = dirty_paths or set()
        self._remote_branches = remote_branches or {}
        self._is_dirty_raises = is_dirty_raises
        self._remote_branch_exists_raises = remote_branch_exists_raises
        self._fetch_raises = fetch_raises
        self._clone_raises = clone_raises

        self._dirty_checks: list[Path] = []
        self._branch_checks: list[tuple[Path, str]] = []
        self._fetches: list[tuple[Path, str, str | None]] = []
        self._clones: list[tuple[str, Path, str | None]] = []

    def is_dirty(self, repo_path: Path) -> bool:
        self._dirty_checks.append(repo_path)
        if self._is_dirty_raises is not None:
            raise self._is_dirty_raises
        return repo_path in self._dirty_paths

    def remote_branch_exists(self, repo_path: Path, branch: str) -> bool:
        self._branch_checks.append((repo_path, branch))
        if self._remote_branch_exists_raises is not None:
            raise self._remote_branch_exists_raises
        return branch in self._remote_branches.get(repo_path, set())

    def clone(self, remote_url: str, repo_path: Path, branch: str | None) -> None:
        self._clones.append((remote_url, repo_path, branch))
        if self._clone_raises is not None:
            raise self._clone_raises

    def fetch(self, repo_path: Path, remote_url: str, branch: str | None) -> None:
        """Record fetch, or raise if failure configured."""
        self._fetches.append((repo_path, remote_url, branch))
        if self._fetch_raises is not None:
            raise self._fetch_raises

    @property
    def dirty_checks(self) -> list[Path]:
        return list(self._dirty_checks)

    @property
    def branch_checks(self) -> list[tuple[Path, str]]:
        return list(self._branch_checks)

    @property
    def fetches(self) -> list[tuple[Path, str, str | None]]:
        """Fetches performed, including failed ones.

        This property is for test assertions only.
        """
        return list(self._fetches)

    @property
    def clones(self) -> list[tuple[str, Path, str | None]]:
        return list(self._clones)
