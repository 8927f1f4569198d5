"""Deterministic repository identifiers."""

import re
from collections.abc import Collection

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")
_FALLBACK_SLUG = "repo"


def slugify_name(name: str) -> str:
    """Lowercase the name and collapse every run of non-alphanumerics to '-'.

    Examples:
        "My Rules" -> "my-rules"
        "  __Team/Rules v2__ " -> "team-rules-v2"
        "***" -> "repo"
    """
    slug = _NON_SLUG_CHARS.sub("-", name.lower()).strip("-")
    if not slug:
        return _FALLBACK_SLUG
    return slug


def generate_repository_id(name: str, created_at: int) -> str:
    return f"{slugify_name(name)}-{created_at}"


def unique_repository_id(name: str, created_at: int, existing_ids: Collection[str]) -> str:
    """Generate an id for (name, created_at) that is not in existing_ids.

    On collision the timestamp suffix is bumped until the id is free.
    """
    suffix = created_at
    candidate = generate_repository_id(name, suffix)
    while candidate in existing_ids:
        suffix += 1
        candidate = generate_repository_id(name, suffix)
    return candidate
