"""Abstract base class for the personal access token store.

The settings flows treat the token as opaque: they only ask the store to
check its shape, check it against a live remote, and keep it.
"""

from abc import ABC, abstractmethod

MIN_TOKEN_LENGTH = 20
TOKEN_PREFIXES = ("ghp_", "github_pat_", "gho_", "ghu_", "ghs_")


def check_token_format(token: str) -> None:
    """Reject strings that cannot be a personal access token.

    Raises:
        ValueError: If token is empty, too short, or has an unknown prefix
    """
    if not token:
        raise ValueError("token cannot be empty")
    if len(token) < MIN_TOKEN_LENGTH:
        raise ValueError(f"token too short (minimum {MIN_TOKEN_LENGTH} characters)")
    if not token.startswith(TOKEN_PREFIXES):
        raise ValueError(
            "token does not match expected PAT format (should start with ghp_ or github_pat_)"
        )


class CredentialStore(ABC):
    """Abstract interface for storing and validating the access token."""

    @abstractmethod
    def get(self) -> str | None:
        """Return the stored token, or None when nothing is stored.

        Raises:
            RuntimeError: If the backing store cannot be queried
        """
        ...

    @abstractmethod
    def store(self, secret: str) -> None:
        """Store secret, replacing any previous token.

        Raises:
            RuntimeError: If the backing store rejects the write
        """
        ...

    @abstractmethod
    def validate_format(self, secret: str) -> None:
        """Check the token's shape without any network access.

        Raises:
            ValueError: With the reason the token is malformed
        """
        ...

    @abstractmethod
    def validate_against_remote(self, secret: str, url: str) -> None:
        """Check that secret grants read access to url.

        Raises:
            ValueError: If the remote rejects the token
            RuntimeError: If the remote cannot be reached
        """
        ...

    def validate_against_remotes(self, secret: str, urls: list[str]) -> None:
        """Check secret against every url; with no urls only the format is checked.

        Raises:
            ValueError: Naming the first URL that rejects the token
            RuntimeError: If a remote cannot be reached
        """
        if not urls:
            self.validate_format(secret)
            return
        for url in urls:
            try:
                self.validate_against_remote(secret, url)
            except ValueError as e:
                raise ValueError(f"{url}: {e}") from e
