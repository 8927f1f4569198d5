"""Fake token store for testing."""

from rulem.gateway.credentials.abc import CredentialStore, check_token_format


class FakeCredentialStore(CredentialStore):
    """In-memory token store.

    Format checks use the production rules; live validation is driven by
    the constructor.

    Constructor Injection:
    ---------------------
    - secret: Initially stored token (None means nothing stored)
    - rejected_secrets: Mapping of token -> message raised as ValueError by
      validate_against_remote()
    - validate_raises: Exception raised by every validate_against_remote() call
    - get_raises: Exception to raise when get() is called
    - store_raises: Exception to raise when store() is called

    Mutation Tracking:
    -----------------
    - stored_secrets: Tokens passed to store(), in order
    - remote_validations: (token, url) pairs passed to validate_against_remote()
    """

    def __init__(
        self,
        *,
        secret: str | None = None,
        rejected_secrets: dict[str, str] | None = None,
        validate_raises: Exception | None = None,
        get_raises: Exception | None = None,
        store_raises: Exception | None = None,
    ) -> None:
        self._secret = secret
        self._rejected_secrets = rejected_secrets or {}
        self._validate_raises = validate_raises
        self._get_raises = get_raises
        self._store_raises = store_raises
        self._stored_secrets: list[str] = []
        self._remote_validations: list[tuple[str, str]] = []

    def get(self) -> str | None:
        if self._get_raises is not None:
            raise self._get_raises
        return self._secret

    def store(self, secret: str) -> None:
        if self._store_raises is not None:
            raise self._store_raises
        self._stored_secrets.append(secret)
        self._secret = secret

    def validate_format(self, secret: str) -> None:
        check_token_format(secret)

    def validate_against_remote(self, secret: str, url: str) -> None:
        self._remote_validations.append((secret, url))
        self.validate_format(secret)
        if self._validate_raises is not None:
            raise self._validate_raises
        if secret in self._rejected_secrets:
            raise ValueError(self._rejected_secrets[secret])

    @property
    def stored_secrets(self) -> list[str]:
        """Tokens passed to store().

        This property is for test assertions only.
        """
        return list(self._stored_secrets)

    @property
    def remote_validations(self) -> list[tuple[str, str]]:
        return list(self._remote_validations)
