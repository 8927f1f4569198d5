"""Tests for the Add-Remote flow, including the access token step."""

from pathlib import Path

import pytest

from rulem.core.repository import RepositoryKind
from rulem.gateway.credentials.fake import FakeCredentialStore
from rulem.gateway.path_ops.abc import DirectoryStatus
from rulem.gateway.path_ops.fake import FakePathOps
from rulem.gateway.remote_ops.fake import FakeRemoteOps
from rulem.tui.settings.input_widget import EchoMode
from rulem.tui.settings.state import SettingsState
from tests.fakes.settings import (
    OTHER_TOKEN,
    VALID_TOKEN,
    SettingsHarness,
    config_of,
    make_harness,
    remote_entry,
)

URL = "https://github.com/acme/rules.git"


def _open_add_remote(harness: SettingsHarness) -> None:
    harness.press(*(["down"] * len(harness.model.config.repositories)), "enter")
    harness.press("down", "enter")
    assert harness.state == SettingsState.ADD_REMOTE_NAME


def _fill_until_path(harness: SettingsHarness, *, branch: str = "") -> None:
    _open_add_remote(harness)
    harness.submit("Team Rules")
    assert harness.state == SettingsState.ADD_REMOTE_URL
    harness.submit(URL)
    assert harness.state == SettingsState.ADD_REMOTE_BRANCH
    harness.submit(branch)
    assert harness.state == SettingsState.ADD_REMOTE_PATH


class TestAddRemoteWithStoredToken:
    def test_clones_and_saves_entry(self) -> None:
        harness = make_harness(credentials=FakeCredentialStore(secret=VALID_TOKEN))
        _fill_until_path(harness, branch="develop")

        harness.submit("/srv/rules")

        assert harness.state == SettingsState.MAIN_MENU
        (entry,) = harness.config_store.current.repositories
        assert entry.kind == RepositoryKind.REMOTE
        assert entry.remote_url == URL
        assert entry.branch == "develop"
        assert entry.path == "/srv/rules"
        assert harness.remote_ops.clones == [(URL, Path("/srv/rules"), "develop")]
        assert harness.credentials.remote_validations == [(VALID_TOKEN, URL)]
        assert harness.credentials.stored_secrets == []

    def test_empty_branch_is_stored_as_default(self) -> None:
        harness = make_harness(credentials=FakeCredentialStore(secret=VALID_TOKEN))
        _fill_until_path(harness)
        harness.submit("/srv/rules")
        assert harness.config_store.current.repositories[0].branch is None

    def test_empty_path_accepts_suggested_clone_path(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", "/data")
        harness = make_harness(credentials=FakeCredentialStore(secret=VALID_TOKEN))
        _fill_until_path(harness)
        assert harness.model.input.placeholder == "/data/rulem/rules"

        harness.press("enter")

        assert harness.config_store.current.repositories[0].path == "/data/rulem/rules"

    def test_scratch_is_empty_after_commit(self) -> None:
        harness = make_harness(credentials=FakeCredentialStore(secret=VALID_TOKEN))
        _fill_until_path(harness)
        harness.submit("/srv/rules")
        scratch = harness.model.scratch.add_remote
        assert (scratch.name, scratch.url, scratch.branch, scratch.path) == ("", "", "", "")


class TestAddRemoteTokenPrompt:
    def test_missing_token_prompts_with_masked_input(self) -> None:
        harness = make_harness()
        _fill_until_path(harness)

        harness.submit("/srv/rules")

        assert harness.state == SettingsState.ADD_REMOTE_PAT
        assert harness.model.input.echo_mode == EchoMode.MASKED
        assert harness.model.error.message is None
        assert harness.config_store.saved_configs == []

    def test_entered_token_is_validated_stored_and_used(self) -> None:
        harness = make_harness()
        _fill_until_path(harness)
        harness.submit("/srv/rules")

        harness.type_text(VALID_TOKEN)
        assert harness.model.input.display_text() == "•" * len(VALID_TOKEN)
        harness.press("enter")

        assert harness.state == SettingsState.MAIN_MENU
        assert harness.credentials.stored_secrets == [VALID_TOKEN]
        assert len(harness.config_store.current.repositories) == 1

    def test_rejected_stored_token_explains_prompt(self) -> None:
        credentials = FakeCredentialStore(
            secret=OTHER_TOKEN, rejected_secrets={OTHER_TOKEN: "token is invalid or expired"}
        )
        harness = make_harness(credentials=credentials)
        _fill_until_path(harness)

        harness.submit("/srv/rules")

        assert harness.state == SettingsState.ADD_REMOTE_PAT
        assert harness.model.error.message == "stored PAT was rejected: token is invalid or expired"

    def test_rejected_new_token_stays_on_prompt(self) -> None:
        credentials = FakeCredentialStore(rejected_secrets={OTHER_TOKEN: "no access"})
        harness = make_harness(credentials=credentials)
        _fill_until_path(harness)
        harness.submit("/srv/rules")

        harness.submit(OTHER_TOKEN)

        assert harness.state == SettingsState.ADD_REMOTE_PAT
        assert harness.model.error.message == "PAT validation failed: no access"
        assert harness.model.input.value == ""
        assert harness.credentials.stored_secrets == []

    def test_empty_token_is_inline_error(self) -> None:
        harness = make_harness()
        _fill_until_path(harness)
        harness.submit("/srv/rules")
        harness.press("enter")
        assert harness.state == SettingsState.ADD_REMOTE_PAT
        assert harness.model.error.message == "PAT cannot be empty"

    def test_malformed_token_is_inline_error(self) -> None:
        harness = make_harness()
        _fill_until_path(harness)
        harness.submit("/srv/rules")
        harness.submit("ghp_short")
        assert harness.model.error.message == (
            "invalid PAT format: token too short (minimum 20 characters)"
        )

    def test_escape_returns_to_path(self) -> None:
        harness = make_harness()
        _fill_until_path(harness)
        harness.submit("/srv/rules")
        harness.press("escape")
        assert harness.state == SettingsState.ADD_REMOTE_PATH
        assert harness.model.input.value == "/srv/rules"
        assert harness.model.input.echo_mode == EchoMode.NORMAL


class TestAddRemoteValidation:
    def test_invalid_url_stays_inline(self) -> None:
        harness = make_harness()
        _open_add_remote(harness)
        harness.submit("Team Rules")
        harness.submit("ftp://example.com/a/b")
        assert harness.state == SettingsState.ADD_REMOTE_URL
        assert "must start with" in (harness.model.error.message or "")

    def test_duplicate_url_stays_inline(self) -> None:
        harness = make_harness(config=config_of(remote_entry(remote_url=URL)))
        _open_add_remote(harness)
        harness.submit("Other Rules")
        harness.submit(URL)
        assert harness.state == SettingsState.ADD_REMOTE_URL
        assert harness.model.error.message == "remote URL already used by another repository"

    def test_invalid_branch_stays_inline(self) -> None:
        harness = make_harness()
        _open_add_remote(harness)
        harness.submit("Team Rules")
        harness.submit(URL)
        harness.submit("bad branch")
        assert harness.state == SettingsState.ADD_REMOTE_BRANCH
        assert harness.model.error.message == "branch name cannot contain spaces"

    def test_non_empty_directory_is_rejected(self) -> None:
        path_ops = FakePathOps(directories={"/srv/rules": DirectoryStatus.NOT_EMPTY})
        harness = make_harness(path_ops=path_ops)
        _fill_until_path(harness)
        harness.submit("/srv/rules")
        assert harness.state == SettingsState.ADD_REMOTE_PATH
        assert (harness.model.error.message or "").startswith("directory is not empty")

    def test_existing_git_repository_is_rejected(self) -> None:
        path_ops = FakePathOps(directories={"/srv/rules": DirectoryStatus.GIT_REPOSITORY})
        harness = make_harness(path_ops=path_ops)
        _fill_until_path(harness)
        harness.submit("/srv/rules")
        assert harness.state == SettingsState.ADD_REMOTE_PATH
        assert "already contains a Git repository" in (harness.model.error.message or "")

    def test_escape_walks_back_keeping_values(self) -> None:
        harness = make_harness()
        _fill_until_path(harness, branch="develop")

        harness.press("escape")
        assert harness.state == SettingsState.ADD_REMOTE_BRANCH
        assert harness.model.input.value == "develop"

        harness.press("escape")
        assert harness.state == SettingsState.ADD_REMOTE_URL
        assert harness.model.input.value == URL

        harness.press("escape", "escape")
        assert harness.state == SettingsState.ADD_TYPE
        assert harness.model.scratch.add_remote.url == ""


class TestAddRemoteFailures:
    def test_clone_failure_routes_to_error_state(self) -> None:
        harness = make_harness(
            credentials=FakeCredentialStore(secret=VALID_TOKEN),
            remote_ops=FakeRemoteOps(clone_raises=RuntimeError("Failed to clone: denied")),
        )
        _fill_until_path(harness)
        harness.submit("/srv/rules")

        assert harness.state == SettingsState.ADD_REMOTE_ERROR
        assert harness.model.error.message == (
            "failed to prepare new repository: Failed to clone: denied"
        )
        assert harness.config_store.saved_configs == []

    def test_unreachable_remote_routes_to_error_state(self) -> None:
        credentials = FakeCredentialStore(
            secret=VALID_TOKEN, validate_raises=RuntimeError("timeout while validating token")
        )
        harness = make_harness(credentials=credentials)
        _fill_until_path(harness)
        harness.submit("/srv/rules")
        assert harness.state == SettingsState.ADD_REMOTE_ERROR
        assert "timeout while validating token" in (harness.model.error.message or "")

    def test_dismissing_error_restarts_at_name(self) -> None:
        harness = make_harness(
            credentials=FakeCredentialStore(secret=VALID_TOKEN),
            remote_ops=FakeRemoteOps(clone_raises=RuntimeError("denied")),
        )
        _fill_until_path(harness)
        harness.submit("/srv/rules")

        harness.press("enter")

        assert harness.state == SettingsState.ADD_REMOTE_NAME
        assert harness.model.scratch.add_remote.url == ""
        assert harness.model.error.message is None


class TestAddRemoteCommitRecheck:
    def test_name_taken_since_validation_skips_clone(self) -> None:
        harness = make_harness(credentials=FakeCredentialStore(secret=VALID_TOKEN))
        _fill_until_path(harness)
        taken = config_of(remote_entry(repo_id="team", name="Team Rules", path="/srv/team"))
        harness.config_store.save(taken)

        harness.submit("/srv/rules")

        assert harness.state == SettingsState.ADD_REMOTE_ERROR
        assert harness.model.error.message == "repository name already exists"
        assert harness.remote_ops.clones == []
        assert harness.config_store.current == taken

    def test_path_taken_since_validation_skips_clone(self) -> None:
        harness = make_harness(credentials=FakeCredentialStore(secret=VALID_TOKEN))
        _fill_until_path(harness)
        taken = config_of(remote_entry(repo_id="team", name="Team", path="/srv/rules"))
        harness.config_store.save(taken)

        harness.submit("/srv/rules")

        assert harness.state == SettingsState.ADD_REMOTE_ERROR
        assert harness.model.error.message == "path already used by another repository"
        assert harness.remote_ops.clones == []

    def test_second_enter_while_cloning_is_ignored(self) -> None:
        harness = make_harness(credentials=FakeCredentialStore(secret=VALID_TOKEN))
        _fill_until_path(harness)
        harness.press("ctrl+u")
        harness.type_text("/srv/rules")

        command = harness.dispatch("enter")
        assert command is not None
        assert harness.dispatch("enter") is None
        harness.run(command)

        assert harness.state == SettingsState.MAIN_MENU
        assert harness.remote_ops.clones == [(URL, Path("/srv/rules"), None)]
        assert len(harness.config_store.saved_configs) == 1
        assert harness.model.error.message is None
