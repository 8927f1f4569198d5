"""Production token store built on git's credential helpers."""

import logging
from urllib.parse import urlparse, urlunparse

from rulem.core.git_url import parse_git_url
from rulem.gateway.credentials.abc import CredentialStore, check_token_format
from rulem.gateway.subprocess_utils import (
    copied_env_for_git_subprocess,
    run_subprocess_with_context,
)

logger = logging.getLogger(__name__)

CREDENTIAL_HOST = "github.com"
CREDENTIAL_USERNAME = "rulem"

# Live validation is a single ls-remote; anything slower than this is
# reported as a network problem rather than a bad token.
_VALIDATION_TIMEOUT = 10
_CREDENTIAL_TIMEOUT = 15

_AUTH_FAILURE_MARKERS = (
    "authentication failed",
    "could not read username",
    "invalid username or password",
    "403",
    "401",
)


def _credential_request(password: str | None = None) -> str:
    lines = [
        "protocol=https",
        f"host={CREDENTIAL_HOST}",
        f"username={CREDENTIAL_USERNAME}",
    ]
    if password is not None:
        lines.append(f"password={password}")
    return "\n".join(lines) + "\n\n"


def _authenticated_url(url: str, token: str) -> str:
    """Embed token in an https URL; SSH URLs authenticate with keys and are returned as-is."""
    if url.startswith("git@"):
        return url
    parsed = urlparse(url)
    netloc = f"x-access-token:{token}@{parsed.hostname}"
    if parsed.port is not None:
        netloc = f"{netloc}:{parsed.port}"
    return urlunparse(parsed._replace(netloc=netloc))


class RealCredentialStore(CredentialStore):
    """Token store delegating to `git credential` and validating with `git ls-remote`."""

    def get(self) -> str | None:
        try:
            result = run_subprocess_with_context(
                cmd=["git", "credential", "fill"],
                operation_context="read stored token",
                timeout=_CREDENTIAL_TIMEOUT,
                env=copied_env_for_git_subprocess(),
                input_text=_credential_request(),
            )
        except RuntimeError as e:
            # With prompting disabled, `fill` exits non-zero when no helper
            # has the credential.
            logger.debug("No stored token: %s", e)
            return None

        for line in result.stdout.splitlines():
            key, _, value = line.partition("=")
            if key == "password" and value:
                return value
        return None

    def store(self, secret: str) -> None:
        run_subprocess_with_context(
            cmd=["git", "credential", "approve"],
            operation_context="store token in credential helper",
            timeout=_CREDENTIAL_TIMEOUT,
            env=copied_env_for_git_subprocess(),
            input_text=_credential_request(secret),
        )
        logger.info("Stored access token in git credential helper")

    def validate_format(self, secret: str) -> None:
        check_token_format(secret)

    def validate_against_remote(self, secret: str, url: str) -> None:
        self.validate_format(secret)
        try:
            parse_git_url(url)
        except ValueError as e:
            raise ValueError(f"invalid repository URL: {e}") from e

        try:
            run_subprocess_with_context(
                cmd=["git", "ls-remote", "--heads", _authenticated_url(url, secret)],
                operation_context=f"list references of {url}",
                timeout=_VALIDATION_TIMEOUT,
                env=copied_env_for_git_subprocess(),
            )
        except RuntimeError as e:
            message = str(e).replace(secret, "***").lower()
            if "timed out" in message:
                raise RuntimeError(
                    "timeout while validating token - please check your network connection"
                ) from None
            if any(marker in message for marker in _AUTH_FAILURE_MARKERS):
                raise ValueError("token is invalid or expired") from None
            raise RuntimeError(str(e).replace(secret, "***")) from None
