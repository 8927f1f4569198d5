"""Production implementation of path operations using the local filesystem."""

import os
import sys
from pathlib import Path

from rulem.gateway.path_ops.abc import DirectoryStatus, PathOps

_UNIX_RESERVED = (
    "/bin",
    "/sbin",
    "/usr/bin",
    "/usr/sbin",
    "/etc",
    "/boot",
    "/dev",
    "/proc",
    "/sys",
    "/var/log",
    "/var/lib",
    "/var/cache",
    "/root",
)

_MACOS_RESERVED = (
    "/System",
    "/usr/bin",
    "/usr/sbin",
    "/bin",
    "/sbin",
    "/etc",
    "/var/log",
    "/var/db",
    "/var/root",
    "/Library/System",
    "/Applications",
    "/private/etc",
)


def _reserved_directories() -> list[Path]:
    home = Path.home()
    base = _MACOS_RESERVED if sys.platform == "darwin" else _UNIX_RESERVED
    # The home directory itself may live under a reserved root (e.g. /root
    # when running as root); that subtree stays usable apart from the
    # credential directories below.
    reserved = [Path(p) for p in base if not home.is_relative_to(p)]
    reserved.extend([home / ".ssh", home / ".gnupg"])
    return reserved


def is_reserved_directory(path: Path) -> bool:
    """True for the filesystem root, system directories and their children."""
    resolved = path.resolve()
    if resolved == Path(resolved.anchor):
        return True
    for reserved in _reserved_directories():
        candidates = {reserved, reserved.resolve()}
        for candidate in candidates:
            if resolved == candidate or resolved.is_relative_to(candidate):
                return True
    return False


class RealPathOps(PathOps):
    """Path operations against the real filesystem."""

    def expand(self, raw: str) -> str:
        return os.path.expanduser(os.path.expandvars(raw.strip()))

    def validate_storage_path(self, expanded: str) -> None:
        text = expanded.strip()
        if not text:
            raise ValueError("storage directory cannot be empty")
        if ".." in Path(text).parts:
            raise ValueError("path traversal not allowed")

        path = Path(text)
        if not path.is_absolute():
            raise ValueError("path must be absolute or relative to home directory (~)")
        if is_reserved_directory(path):
            raise ValueError("cannot use system or reserved directories")

        if path.exists():
            if not path.is_dir():
                raise ValueError(f"path exists and is not a directory: {path}")
            if not os.access(path, os.W_OK):
                raise ValueError(f"directory is not writable: {path}")
            return

        ancestor = path.parent
        while not ancestor.exists():
            if ancestor == ancestor.parent:
                raise ValueError(f"parent directory does not exist: {path.parent}")
            ancestor = ancestor.parent
        if not ancestor.is_dir():
            raise ValueError(f"parent path is not a directory: {ancestor}")
        if not os.access(ancestor, os.W_OK):
            raise ValueError(f"cannot create directory under {ancestor}: permission denied")

    def inspect_directory(self, expanded: str) -> DirectoryStatus:
        path = Path(expanded)
        if not path.exists():
            return DirectoryStatus.MISSING
        if not path.is_dir():
            return DirectoryStatus.NOT_A_DIRECTORY
        if not any(path.iterdir()):
            return DirectoryStatus.EMPTY
        if (path / ".git").exists():
            return DirectoryStatus.GIT_REPOSITORY
        return DirectoryStatus.NOT_EMPTY

    def ensure_directory(self, expanded: str) -> None:
        Path(expanded).mkdir(parents=True, exist_ok=True)
