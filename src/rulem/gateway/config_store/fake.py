"""Fake configuration store for testing."""

from pathlib import Path

from rulem.core.repository import RulemConfig
from rulem.gateway.config_store.abc import ConfigStore


class FakeConfigStore(ConfigStore):
    """In-memory configuration store.

    Constructor Injection:
    ---------------------
    - config: Initial snapshot (defaults to empty)
    - path: Value returned by config_path()
    - load_raises: Exception raised by load()
    - save_raises: Exception raised by save()

    Mutation Tracking:
    -----------------
    - saved_configs: Every snapshot passed to save(), in order
    - load_count: Number of load() calls
    """

    def __init__(
        self,
        *,
        config: RulemConfig | None = None,
        path: Path | None = None,
        load_raises: Exception | None = None,
        save_raises: Exception | None = None,
    ) -> None:
        self._config = config or RulemConfig.empty()
        self._path = path or Path("/fake/config/rulem/config.toml")
        self._load_raises = load_raises
        self._save_raises = save_raises
        self._saved_configs: list[RulemConfig] = []
        self._load_count = 0

    def config_path(self) -> Path:
        return self._path

    def load(self) -> RulemConfig:
        self._load_count += 1
        if self._load_raises is not None:
            raise self._load_raises
        return self._config

    def save(self, config: RulemConfig) -> None:
        if self._save_raises is not None:
            raise self._save_raises
        self._saved_configs.append(config)
        self._config = config

    @property
    def current(self) -> RulemConfig:
        """The snapshot the next load() returns."""
        return self._config

    @property
    def saved_configs(self) -> list[RulemConfig]:
        """Snapshots passed to save().

        This property is for test assertions only.
        """
        return list(self._saved_configs)

    @property
    def load_count(self) -> int:
        return self._load_count
