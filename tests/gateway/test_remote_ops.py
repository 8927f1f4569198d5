"""Tests for git-backed remote operations and the subprocess helper."""

import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from rulem.gateway.remote_ops.fake import FakeRemoteOps
from rulem.gateway.remote_ops.real import RealRemoteOps
from rulem.gateway.subprocess_utils import (
    copied_env_for_git_subprocess,
    run_subprocess_with_context,
)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _init_repo(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)
    subprocess.run(["git", "init", "--quiet"], cwd=path, check=True)


class TestRunSubprocessWithContext:
    def test_returns_output(self) -> None:
        result = run_subprocess_with_context(
            cmd=[sys.executable, "-c", "print('ok')"], operation_context="print"
        )
        assert result.stdout.strip() == "ok"

    def test_failure_includes_context_and_stderr(self) -> None:
        with pytest.raises(RuntimeError, match="Failed to explode: boom") as exc_info:
            run_subprocess_with_context(
                cmd=[sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(2)"],
                operation_context="explode",
            )
        assert isinstance(exc_info.value.__cause__, subprocess.CalledProcessError)

    def test_missing_executable(self) -> None:
        with pytest.raises(RuntimeError, match="Failed to run nothing"):
            run_subprocess_with_context(
                cmd=["definitely-not-a-real-binary-rulem"], operation_context="run nothing"
            )

    def test_git_never_prompts(self) -> None:
        assert copied_env_for_git_subprocess()["GIT_TERMINAL_PROMPT"] == "0"


@requires_git
class TestRealRemoteOpsIsDirty:
    def test_clean_repository(self, tmp_path: Path) -> None:
        _init_repo(tmp_path / "repo")
        assert RealRemoteOps().is_dirty(tmp_path / "repo") is False

    def test_untracked_file_is_dirty(self, tmp_path: Path) -> None:
        repo = tmp_path / "repo"
        _init_repo(repo)
        (repo / "rule.md").write_text("x", encoding="utf-8")
        assert RealRemoteOps().is_dirty(repo) is True

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="does not exist"):
            RealRemoteOps().is_dirty(tmp_path / "missing")


class TestFakeRemoteOps:
    def test_reports_configured_state(self) -> None:
        repo = Path("/srv/rules")
        ops = FakeRemoteOps(dirty_paths={repo}, remote_branches={repo: {"main"}})

        assert ops.is_dirty(repo) is True
        assert ops.remote_branch_exists(repo, "main") is True
        assert ops.remote_branch_exists(repo, "develop") is False
        assert ops.dirty_checks == [repo]
        assert ops.branch_checks == [(repo, "main"), (repo, "develop")]

    def test_fetch_failure_is_still_recorded(self) -> None:
        ops = FakeRemoteOps(fetch_raises=RuntimeError("offline"))
        with pytest.raises(RuntimeError, match="offline"):
            ops.fetch(Path("/srv/rules"), "https://github.com/a/r.git", None)
        assert ops.fetches == [(Path("/srv/rules"), "https://github.com/a/r.git", None)]
