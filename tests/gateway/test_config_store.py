"""Tests for the TOML configuration store."""

import stat
from pathlib import Path

import pytest

from rulem.core.repository import RulemConfig
from rulem.gateway.config_store.fake import FakeConfigStore
from rulem.gateway.config_store.real import (
    CONFIG_PATH_ENV_VAR,
    RealConfigStore,
    default_config_path,
)
from rulem.gateway.time.fake import FakeTime
from tests.fakes.settings import config_of, local_entry, remote_entry


class TestRealConfigStore:
    def test_missing_file_loads_empty(self, tmp_path: Path) -> None:
        store = RealConfigStore(FakeTime(), tmp_path / "config.toml")
        assert store.load() == RulemConfig.empty()

    def test_save_then_load_preserves_entries(self, tmp_path: Path) -> None:
        store = RealConfigStore(FakeTime(), tmp_path / "rulem" / "config.toml")
        config = config_of(local_entry(), remote_entry(branch=None))

        store.save(config)
        loaded = store.load()

        assert loaded.repositories == config.repositories
        assert loaded.version == config.version

    def test_first_save_records_init_time(self, tmp_path: Path) -> None:
        time = FakeTime()
        store = RealConfigStore(time, tmp_path / "config.toml")
        store.save(config_of())
        assert store.load().init_time == time.timestamp()

    def test_saved_file_is_private(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        RealConfigStore(FakeTime(), path).save(config_of(local_entry()))
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_save_leaves_no_temp_files(self, tmp_path: Path) -> None:
        RealConfigStore(FakeTime(), tmp_path / "config.toml").save(config_of(local_entry()))
        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_invalid_toml_raises_value_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("repositories = [", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid TOML"):
            RealConfigStore(FakeTime(), path).load()

    def test_missing_required_key(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[[repositories]]\nid = "a"\nname = "A"\n', encoding="utf-8")
        with pytest.raises(ValueError, match="missing: type, path"):
            RealConfigStore(FakeTime(), path).load()

    def test_reads_legacy_github_type(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(
            "[[repositories]]\n"
            'id = "r"\nname = "R"\ntype = "github"\npath = "/srv/r"\n'
            'remote_url = "https://github.com/acme/r.git"\n',
            encoding="utf-8",
        )
        entry = RealConfigStore(FakeTime(), path).load().repositories[0]
        assert entry.is_remote
        assert entry.branch is None

    def test_env_var_overrides_default_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(tmp_path / "custom.toml"))
        assert default_config_path() == tmp_path / "custom.toml"

    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_config_path() == tmp_path / "rulem" / "config.toml"


class TestFakeConfigStore:
    def test_tracks_saves_and_loads(self) -> None:
        store = FakeConfigStore()
        config = config_of(local_entry())

        store.save(config)

        assert store.saved_configs == [config]
        assert store.load() == config
        assert store.load_count == 1

    def test_injected_failures(self) -> None:
        store = FakeConfigStore(load_raises=OSError("disk"), save_raises=PermissionError("ro"))
        with pytest.raises(OSError, match="disk"):
            store.load()
        with pytest.raises(PermissionError):
            store.save(config_of())
        assert store.saved_configs == []
