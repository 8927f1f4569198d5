"""Production implementation of remote operations using the git CLI."""

from pathlib import Path

from rulem.gateway.remote_ops.abc import RemoteOps
from rulem.gateway.subprocess_utils import (
    copied_env_for_git_subprocess,
    run_subprocess_with_context,
)

# Timeout in seconds for network-touching git operations (fetch, ls-remote).
# Prevents indefinite hangs on network issues or credential prompts.
_GIT_NETWORK_TIMEOUT = 120
_GIT_LOCAL_TIMEOUT = 30


class RealRemoteOps(RemoteOps):
    """Real implementation of remote operations using subprocess."""

    def is_dirty(self, repo_path: Path) -> bool:
        if not repo_path.is_dir():
            raise RuntimeError(f"Repository directory does not exist: {repo_path}")
        result = run_subprocess_with_context(
            cmd=["git", "status", "--porcelain"],
            operation_context=f"check working tree status of {repo_path}",
            cwd=repo_path,
            timeout=_GIT_LOCAL_TIMEOUT,
            env=copied_env_for_git_subprocess(),
        )
        return bool(result.stdout.strip())

    def remote_branch_exists(self, repo_path: Path, branch: str) -> bool:
        result = run_subprocess_with_context(
            cmd=["git", "ls-remote", "--heads", "origin", f"refs/heads/{branch}"],
            operation_context=f"look up branch '{branch}' on remote 'origin'",
            cwd=repo_path,
            timeout=_GIT_NETWORK_TIMEOUT,
            env=copied_env_for_git_subprocess(),
        )
        return bool(result.stdout.strip())

    def clone(self, remote_url: str, repo_path: Path, branch: str | None) -> None:
        cmd = ["git", "clone"]
        if branch is not None:
            cmd.extend(["--branch", branch])
        cmd.extend([remote_url, str(repo_path)])
        run_subprocess_with_context(
            cmd=cmd,
            operation_context=f"clone {remote_url}",
            timeout=_GIT_NETWORK_TIMEOUT,
            env=copied_env_for_git_subprocess(),
        )

    def fetch(self, repo_path: Path, remote_url: str, branch: str | None) -> None:
        cmd = ["git", "fetch", "--prune", "origin"]
        if branch is not None:
            cmd.append(branch)
        run_subprocess_with_context(
            cmd=cmd,
            operation_context=f"fetch updates from {remote_url}",
            cwd=repo_path,
            timeout=_GIT_NETWORK_TIMEOUT,
            env=copied_env_for_git_subprocess(),
        )
