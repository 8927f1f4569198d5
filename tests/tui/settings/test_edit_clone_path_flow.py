"""Tests for the Edit-ClonePath flow."""

from pathlib import Path

from rulem.gateway.config_store.fake import FakeConfigStore
from rulem.gateway.remote_ops.fake import FakeRemoteOps
from rulem.tui.settings.state import SettingsState
from tests.fakes.settings import SettingsHarness, config_of, local_entry, make_harness, remote_entry

REMOTE = remote_entry(repo_id="team", path="/srv/team")
ALPHA = local_entry(repo_id="alpha", name="Alpha", path="/srv/alpha")


def _open_update_clone_path(harness: SettingsHarness) -> None:
    harness.open_repository("team")
    # Remote actions: Update Branch, Update Clone Path, ...
    harness.press("down", "enter")
    assert harness.state == SettingsState.UPDATE_CLONE_PATH


class TestEditClonePath:
    def test_input_starts_empty_with_current_path_as_placeholder(self) -> None:
        harness = make_harness(config=config_of(REMOTE))
        _open_update_clone_path(harness)
        assert harness.model.input.value == ""
        assert harness.model.input.placeholder == "/srv/team"

    def test_clean_tree_confirm_saves_expanded_path(self) -> None:
        harness = make_harness(config=config_of(REMOTE))
        _open_update_clone_path(harness)

        harness.submit("~/rules/team")
        assert harness.state == SettingsState.EDIT_CLONE_PATH_CONFIRM
        assert harness.model.scratch.edit_clone_path.new_path == "/home/user/rules/team"
        harness.press("y")

        assert harness.state == SettingsState.COMPLETE
        (entry,) = harness.config_store.current.repositories
        assert entry.path == "/home/user/rules/team"
        assert (entry.name, entry.remote_url, entry.branch) == (
            REMOTE.name,
            REMOTE.remote_url,
            REMOTE.branch,
        )
        assert harness.remote_ops.dirty_checks == [Path("/srv/team")]

    def test_own_path_is_not_a_duplicate(self) -> None:
        harness = make_harness(config=config_of(REMOTE))
        _open_update_clone_path(harness)
        harness.submit("/srv/team")
        assert harness.state == SettingsState.EDIT_CLONE_PATH_CONFIRM


class TestEditClonePathErrors:
    def test_dirty_tree_blocks_without_mutation(self) -> None:
        harness = make_harness(
            config=config_of(REMOTE),
            remote_ops=FakeRemoteOps(dirty_paths={Path("/srv/team")}),
        )
        _open_update_clone_path(harness)

        harness.submit("/srv/elsewhere")

        assert harness.state == SettingsState.EDIT_CLONE_PATH_ERROR
        assert harness.model.error.message == (
            "repository has uncommitted changes - please commit or stash before changing clone path"
        )
        assert harness.config_store.saved_configs == []

    def test_dirty_check_failure_blocks_without_mutation(self) -> None:
        harness = make_harness(
            config=config_of(REMOTE),
            remote_ops=FakeRemoteOps(is_dirty_raises=RuntimeError("not a git repository")),
        )
        _open_update_clone_path(harness)

        harness.submit("/srv/elsewhere")

        assert harness.state == SettingsState.EDIT_CLONE_PATH_ERROR
        assert harness.model.error.message == (
            "failed to check repository status: not a git repository"
        )
        assert harness.config_store.saved_configs == []
        assert harness.config_store.current == config_of(REMOTE)

    def test_path_taken_before_confirm_is_rejected_at_save(self) -> None:
        harness = make_harness(config=config_of(REMOTE))
        _open_update_clone_path(harness)
        harness.submit("/srv/alpha")
        assert harness.state == SettingsState.EDIT_CLONE_PATH_CONFIRM
        taken = config_of(ALPHA, REMOTE)
        harness.config_store.save(taken)

        harness.press("y")

        assert harness.state == SettingsState.EDIT_CLONE_PATH_ERROR
        assert harness.model.error.message == "path already used by repository 'Alpha'"
        assert harness.config_store.current == taken

    def test_path_of_other_repository_is_rejected(self) -> None:
        harness = make_harness(config=config_of(ALPHA, REMOTE))
        _open_update_clone_path(harness)
        harness.submit("/srv/alpha")
        assert harness.state == SettingsState.EDIT_CLONE_PATH_ERROR
        assert harness.model.error.message == "path already used by repository 'Alpha'"
        assert harness.remote_ops.dirty_checks == []

    def test_empty_path_is_rejected(self) -> None:
        harness = make_harness(config=config_of(REMOTE))
        _open_update_clone_path(harness)
        harness.press("enter")
        assert harness.state == SettingsState.EDIT_CLONE_PATH_ERROR
        assert harness.model.error.message == "path cannot be empty"

    def test_save_failure_routes_to_error_state(self) -> None:
        store = FakeConfigStore(config=config_of(REMOTE), save_raises=OSError("read-only"))
        harness = make_harness(config_store=store)
        _open_update_clone_path(harness)
        harness.submit("/srv/elsewhere")
        harness.press("enter")
        assert harness.state == SettingsState.EDIT_CLONE_PATH_ERROR
        assert harness.model.error.message == "failed to save configuration: read-only"

    def test_dismiss_returns_to_actions(self) -> None:
        harness = make_harness(config=config_of(REMOTE))
        _open_update_clone_path(harness)
        harness.press("enter")

        harness.press("escape")

        assert harness.state == SettingsState.REPOSITORY_ACTIONS
        assert harness.model.selected_repository_id == "team"


class TestEditClonePathConfirmKeys:
    def test_escape_returns_to_input_with_pending_path(self) -> None:
        harness = make_harness(config=config_of(REMOTE))
        _open_update_clone_path(harness)
        harness.submit("/srv/elsewhere")
        harness.press("escape")
        assert harness.state == SettingsState.UPDATE_CLONE_PATH
        assert harness.model.input.value == "/srv/elsewhere"

    def test_n_cancels_and_clears_pending_path(self) -> None:
        harness = make_harness(config=config_of(REMOTE))
        _open_update_clone_path(harness)
        harness.submit("/srv/elsewhere")
        harness.press("n")
        assert harness.state == SettingsState.REPOSITORY_ACTIONS
        assert harness.model.scratch.edit_clone_path.new_path == ""
        assert harness.config_store.saved_configs == []
