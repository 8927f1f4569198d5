"""Production configuration store backed by a TOML file."""

import logging
import os
import tempfile
import tomllib
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import tomlkit

from rulem.core.repository import CONFIG_VERSION, RepositoryEntry, RepositoryKind, RulemConfig
from rulem.gateway.config_store.abc import ConfigStore
from rulem.gateway.time.abc import Time

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "RULEM_CONFIG_PATH"
CONFIG_FILE_NAME = "config.toml"
CONFIG_FILE_MODE = 0o600


def default_config_path() -> Path:
    """$RULEM_CONFIG_PATH, else $XDG_CONFIG_HOME/rulem/config.toml."""
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "rulem" / CONFIG_FILE_NAME


def config_from_document(data: Mapping[str, Any], *, source: Path) -> RulemConfig:
    """Build a snapshot from a parsed TOML document.

    Raises:
        ValueError: If a repository table is missing a required key
    """
    repositories: list[RepositoryEntry] = []
    for index, table in enumerate(data.get("repositories", [])):
        missing = [key for key in ("id", "name", "type", "path") if key not in table]
        if missing:
            raise ValueError(
                f"Repository #{index + 1} in {source} is missing: {', '.join(missing)}"
            )
        kind = RepositoryKind.parse(str(table["type"]))
        remote_url = table.get("remote_url")
        if kind == RepositoryKind.REMOTE and not remote_url:
            raise ValueError(f"Remote repository '{table['name']}' in {source} has no remote_url")
        repositories.append(
            RepositoryEntry(
                id=str(table["id"]),
                name=str(table["name"]),
                kind=kind,
                path=str(table["path"]),
                created_at=int(table.get("created_at", 0)),
                remote_url=str(remote_url) if remote_url else None,
                branch=str(table["branch"]) if table.get("branch") else None,
                last_sync_time=(
                    int(table["last_sync_time"]) if "last_sync_time" in table else None
                ),
            )
        )

    init_time = data.get("init_time")
    return RulemConfig(
        repositories=tuple(repositories),
        version=str(data.get("version", CONFIG_VERSION)),
        init_time=int(init_time) if init_time is not None else None,
    )


def config_to_document(config: RulemConfig) -> tomlkit.TOMLDocument:
    doc = tomlkit.document()
    doc.add(tomlkit.comment("rulem configuration"))
    doc["version"] = config.version
    if config.init_time is not None:
        doc["init_time"] = config.init_time

    repositories = tomlkit.aot()
    for entry in config.repositories:
        table = tomlkit.table()
        table["id"] = entry.id
        table["name"] = entry.name
        table["type"] = entry.kind.value
        table["created_at"] = entry.created_at
        table["path"] = entry.path
        if entry.remote_url is not None:
            table["remote_url"] = entry.remote_url
        if entry.branch is not None:
            table["branch"] = entry.branch
        if entry.last_sync_time is not None:
            table["last_sync_time"] = entry.last_sync_time
        repositories.append(table)
    doc["repositories"] = repositories
    return doc


class RealConfigStore(ConfigStore):
    """Configuration store reading with tomllib and writing with tomlkit."""

    def __init__(self, time: Time, path: Path | None = None) -> None:
        """Create a store for path, or the default location when None.

        Args:
            time: Source of init_time for the first save
            path: Explicit document location (overrides the environment)
        """
        self._time = time
        self._path = path

    def config_path(self) -> Path:
        if self._path is not None:
            return self._path
        return default_config_path()

    def load(self) -> RulemConfig:
        config_path = self.config_path()
        if not config_path.exists():
            logger.debug("No config at %s, starting empty", config_path)
            return RulemConfig.empty()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
        return config_from_document(data, source=config_path)

    def save(self, config: RulemConfig) -> None:
        config_path = self.config_path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Cannot write to directory: {parent}\n"
                f"The directory exists but is not writable."
            )
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            raise PermissionError(
                f"Cannot create directory: {parent}\n"
                f"Check permissions on the parent directory."
            ) from None

        if config.init_time is None:
            config = replace(config, init_time=self._time.timestamp())
        content = tomlkit.dumps(config_to_document(config))

        # Write to a sibling temp file and rename over the target so readers
        # never observe a partially written document.
        fd, tmp_name = tempfile.mkstemp(prefix=".config-", suffix=".toml.tmp", dir=parent)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.chmod(tmp_path, CONFIG_FILE_MODE)
            os.replace(tmp_path, config_path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.info("Saved %d repositories to %s", len(config.repositories), config_path)
