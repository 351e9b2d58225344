"""Subprocess helpers shared by the git gateways.

Every call that can fail goes through run_subprocess_with_context so that the
resulting error names the operation being attempted, not just the command.
"""

import logging
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def copied_env_for_git_subprocess() -> dict[str, str]:
    """Copy the current environment with interactive git prompts disabled.

    Network operations must never block on a credential prompt.
    """
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


def run_subprocess_with_context(
    *,
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path,
    check: bool = True,
    input: str | None = None,
    timeout: float | None = None,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command, raising RuntimeError with context if it fails.

    Args:
        cmd: Command and arguments
        operation_context: Human-readable description of the operation
            (e.g., "fetch from 'origin'"), used as the error prefix
        cwd: Working directory
        check: If False, return the completed process regardless of exit code
        input: Text passed on stdin
        timeout: Seconds before the process is killed
        env: Environment for the subprocess (defaults to the current one)

    Returns:
        The completed process with text stdout/stderr

    Raises:
        RuntimeError: If the command exits non-zero (when check=True), times out,
            or cannot be started
    """
    logger.debug("running %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
            input=input,
            timeout=timeout,
            env=env,
        )
    except subprocess.TimeoutExpired as e:
        raise RuntimeError(f"Failed to {operation_context}: timed out after {e.timeout}s") from e
    except OSError as e:
        raise RuntimeError(f"Failed to {operation_context}: {e}") from e

    if check and result.returncode != 0:
        stderr = result.stderr.strip()
        message = f"Failed to {operation_context}"
        message += f"\nCommand: {' '.join(cmd)}"
        message += f"\nExit code: {result.returncode}"
        if stderr:
            message += f"\nstderr: {stderr}"
        raise RuntimeError(message)
    return result
