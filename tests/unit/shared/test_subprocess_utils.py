"""Tests for run_subprocess_with_context error reporting."""

import shutil
from pathlib import Path

import pytest

from gg_shared.subprocess_utils import copied_env_for_git_subprocess, run_subprocess_with_context


def test_missing_executable_is_wrapped(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError, match="^Failed to do the impossible: "):
        run_subprocess_with_context(
            cmd=["gg-test-no-such-binary"],
            operation_context="do the impossible",
            cwd=tmp_path,
        )


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_failure_names_operation_and_command(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError) as exc_info:
        run_subprocess_with_context(
            cmd=["git", "rev-parse", "--verify", "refs/heads/nope"],
            operation_context="resolve nope",
            cwd=tmp_path,
        )

    message = str(exc_info.value)
    assert message.startswith("Failed to resolve nope\n")
    assert "Command: git rev-parse --verify refs/heads/nope" in message
    assert "Exit code: " in message


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_unchecked_failure_returns_result(tmp_path: Path) -> None:
    result = run_subprocess_with_context(
        cmd=["git", "rev-parse", "--verify", "refs/heads/nope"],
        operation_context="resolve nope",
        cwd=tmp_path,
        check=False,
    )

    assert result.returncode != 0


def test_git_env_disables_prompts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GG_TEST_MARKER", "1")

    env = copied_env_for_git_subprocess()

    assert env["GIT_TERMINAL_PROMPT"] == "0"
    assert env["GG_TEST_MARKER"] == "1"
