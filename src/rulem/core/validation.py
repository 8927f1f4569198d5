"""Synchronous input checks shared by the settings flows.

Every check raises ValidationError with a user-facing message and returns
the normalized value on success. Name comparisons are exact
(case-sensitive) string matches.
"""

from __future__ import annotations

import os

from rulem.core.errors import ValidationError
from rulem.core.git_url import ALLOWED_URL_PREFIXES, parse_git_url
from rulem.core.repository import RulemConfig
from rulem.gateway.path_ops.abc import PathOps

MAX_NAME_LENGTH = 100

# Characters git refuses in reference names, besides the space which gets
# its own message.
_INVALID_BRANCH_CHARS = ("~", "^", ":", "?", "*", "[", "\\", "\t", "\n")


def validate_repository_name(
    raw: str, config: RulemConfig, *, editing_id: str | None = None
) -> str:
    """Validate a repository name and return it trimmed.

    Args:
        raw: Name as typed
        config: Snapshot used for the duplicate check
        editing_id: Id of the entry being renamed; its own name is not a duplicate
    """
    name = raw.strip()
    if not name:
        raise ValidationError("repository name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"repository name must be {MAX_NAME_LENGTH} characters or less")

    existing = config.find_by_name(name)
    if existing is None:
        return name
    if editing_id is None:
        raise ValidationError("repository name already exists")
    if existing.id != editing_id:
        raise ValidationError(f"repository name '{name}' already exists")
    return name


def validate_remote_url(raw: str, config: RulemConfig) -> str:
    """Validate a clone URL and reject URLs already used by another entry."""
    url = raw.strip()
    if not url:
        raise ValidationError("repository URL cannot be empty")
    if not url.startswith(ALLOWED_URL_PREFIXES):
        raise ValidationError("repository URL must start with http://, https://, or git@")
    try:
        parse_git_url(url)
    except ValueError as e:
        raise ValidationError(f"invalid repository URL format: {e}") from e

    for entry in config.repositories:
        if entry.remote_url == url:
            raise ValidationError("remote URL already used by another repository")
    return url


def validate_branch_name(raw: str) -> str | None:
    """Validate a branch name.

    Returns:
        The trimmed branch, or None when empty (use the remote's default branch)
    """
    branch = raw.strip()
    if not branch:
        return None
    if " " in branch:
        raise ValidationError("branch name cannot contain spaces")
    if branch.startswith("/") or branch.endswith("/"):
        raise ValidationError("branch name cannot start or end with '/'")
    if branch.startswith("-"):
        raise ValidationError("branch name cannot start with '-'")
    if ".." in branch:
        raise ValidationError("branch name cannot contain '..'")
    for char in _INVALID_BRANCH_CHARS:
        if char in branch:
            raise ValidationError(f"branch name contains invalid character: {char!r}")
    if branch == ".":
        raise ValidationError("branch name cannot be '.'")
    if branch.endswith(".lock"):
        raise ValidationError("branch name cannot end with '.lock'")
    return branch


def validate_repository_path(
    raw: str,
    config: RulemConfig,
    path_ops: PathOps,
    *,
    editing_id: str | None = None,
) -> str:
    """Expand and validate a storage path and return the expanded form.

    Args:
        raw: Path as typed (may use ~ or environment variables)
        config: Snapshot used for the duplicate check
        path_ops: Expansion and storage-path checks
        editing_id: Id of the entry being edited; its own path is not a duplicate
    """
    text = raw.strip()
    if not text:
        raise ValidationError("path cannot be empty")

    expanded = path_ops.expand(text)
    try:
        path_ops.validate_storage_path(expanded)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    check_path_available(expanded, config, editing_id=editing_id)
    return expanded


def check_path_available(path: str, config: RulemConfig, *, editing_id: str | None = None) -> None:
    """Raise ValidationError if another entry in config already uses path."""
    normalized = os.path.normpath(path)
    for entry in config.repositories:
        if entry.id == editing_id:
            continue
        if os.path.normpath(entry.path) != normalized:
            continue
        if editing_id is None:
            raise ValidationError("path already used by another repository")
        raise ValidationError(f"path already used by repository '{entry.name}'")
