"""Parsing of remote repository URLs.

Both SSH (git@host:owner/repo.git) and HTTP(S)
(https://host/owner/repo.git) forms are accepted. The final path segment is the repository name, with a
trailing ".git" stripped. SSH URLs take exactly one owner segment.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

ALLOWED_URL_PREFIXES = ("http://", "https://", "git@")

_SSH_URL = re.compile(r"^git@([^:]+):([^/]+)/([^/]+?)(?:\.git)?$")


@dataclass(frozen=True)
class ParsedGitUrl:
    """Components of a remote repository URL."""

    host: str
    owner: str
    repo: str
    is_ssh: bool


def parse_git_url(url: str) -> ParsedGitUrl:
    """Split a remote URL into host, owner and repository name.

    Raises:
        ValueError: If the URL is not a recognised SSH or HTTP(S) form
    """
    url = url.strip()
    if url.startswith("git@"):
        match = _SSH_URL.match(url)
        if match is None:
            raise ValueError(f"invalid SSH URL format: {url}")
        host, owner, repo = match.groups()
        return ParsedGitUrl(host=host, owner=owner, repo=repo, is_ssh=True)

    if not url.startswith(("http://", "https://")):
        raise ValueError(f"unsupported URL scheme: {url}")

    parsed = urlparse(url)
    if not parsed.hostname:
        raise ValueError(f"missing host in URL: {url}")

    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) < 2:
        raise ValueError(f"URL must include owner and repository: {url}")

    repo = parts[-1].removesuffix(".git")
    owner = "/".join(parts[:-1])
    if not repo:
        raise ValueError(f"URL must include owner and repository: {url}")
    return ParsedGitUrl(host=parsed.hostname, owner=owner, repo=repo, is_ssh=False)


def default_storage_dir() -> Path:
    """Directory under which remote repositories are cloned by default.

    Honours XDG_DATA_HOME, falling back to ~/.local/share.
    """
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "rulem"
    return Path.home() / ".local" / "share" / "rulem"


def derive_clone_path(url: str) -> str:
    """Suggest a clone location for url, or "" when the URL does not parse."""
    try:
        parsed = parse_git_url(url)
    except ValueError:
        return ""
    return str(default_storage_dir() / parsed.repo)
