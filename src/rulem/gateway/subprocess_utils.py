"""Helpers for running git subprocesses with useful error messages."""

import logging
import os
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def copied_env_for_git_subprocess() -> dict[str, str]:
    """Copy of the environment that never lets git prompt on the terminal.

    The TUI owns the terminal, so a credential prompt would hang the
    subprocess until its timeout.
    """
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


def run_subprocess_with_context(
    *,
    cmd: list[str],
    operation_context: str,
    cwd: Path | None = None,
    timeout: float | None = None,
    env: dict[str, str] | None = None,
    input_text: str | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run cmd and raise RuntimeError describing the operation on failure.

    The original CalledProcessError/TimeoutExpired/OSError is kept in
    __cause__; the RuntimeError message includes stderr when git wrote any.

    Args:
        cmd: Command and arguments
        operation_context: Human-readable description, e.g. "fetch from origin"
        cwd: Working directory
        timeout: Seconds before the process is killed
        env: Environment for the child process
        input_text: Text written to the child's stdin
    """
    logger.debug("Running %s (cwd=%s)", cmd[:2], cwd)
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            input=input_text,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        message = f"Failed to {operation_context}"
        if stderr:
            message = f"{message}: {stderr}"
        raise RuntimeError(message) from e
    except subprocess.TimeoutExpired as e:
        raise RuntimeError(f"Failed to {operation_context}: timed out after {timeout}s") from e
    except OSError as e:
        raise RuntimeError(f"Failed to {operation_context}: {e}") from e
