"""Tests for remote URL parsing and clone path derivation."""

from pathlib import Path

import pytest

from rulem.core.git_url import ParsedGitUrl, default_storage_dir, derive_clone_path, parse_git_url


class TestParseGitUrl:
    def test_https_with_git_suffix(self) -> None:
        assert parse_git_url("https://github.com/acme/rules.git") == ParsedGitUrl(
            host="github.com", owner="acme", repo="rules", is_ssh=False
        )

    def test_https_nested_owner(self) -> None:
        parsed = parse_git_url("https://gitlab.com/group/sub/rules")
        assert parsed.owner == "group/sub"
        assert parsed.repo == "rules"

    def test_ssh(self) -> None:
        assert parse_git_url("git@github.com:acme/rules.git") == ParsedGitUrl(
            host="github.com", owner="acme", repo="rules", is_ssh=True
        )

    @pytest.mark.parametrize(
        "url",
        [
            "git@github.com",
            "git@github.com:acme/rules/extra",
            "https://github.com/acme",
            "https:///acme/rules",
            "file:///tmp/rules",
        ],
    )
    def test_rejects_malformed(self, url: str) -> None:
        with pytest.raises(ValueError):
            parse_git_url(url)


class TestDeriveClonePath:
    def test_uses_xdg_data_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", "/data")
        assert default_storage_dir() == Path("/data/rulem")
        assert derive_clone_path("https://github.com/acme/rules.git") == "/data/rulem/rules"

    def test_falls_back_to_local_share(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        assert default_storage_dir() == Path.home() / ".local" / "share" / "rulem"

    def test_invalid_url_gives_empty_suggestion(self) -> None:
        assert derive_clone_path("not a url") == ""

    def test_nested_ssh_path_gives_empty_suggestion(self) -> None:
        assert derive_clone_path("git@github.com:acme/rules/extra.git") == ""
