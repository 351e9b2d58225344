"""Runtime context for gg commands.

GgContext holds every dependency a command needs. It is created once at the
CLI entry point and threaded through Click's context object; tests pass their
own instance via `obj=` to swap in fakes.
"""

from dataclasses import dataclass
from pathlib import Path

import click

from gg_shared.gateway.git.abc import Git
from gg_shared.gateway.git.real import RealGit
from gg_shared.output.output import user_output


@dataclass(frozen=True)
class GgContext:
    """Immutable context holding all dependencies for gg operations.

    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    cwd: Path  # Current working directory at CLI invocation
    debug: bool

    @staticmethod
    def for_test(
        git: Git | None = None,
        cwd: Path | None = None,
        debug: bool = False,
    ) -> "GgContext":
        """Create test context with optional pre-configured git.

        Args:
            git: Optional Git implementation. If None, creates empty FakeGit.
            cwd: Optional working directory. If None, defaults to
                Path("/test/default/cwd") to prevent accidental use of the
                real working directory in tests.
            debug: Debug flag

        Example:
            >>> git = FakeGit(remote_refs={"origin": {}})
            >>> ctx = GgContext.for_test(git=git)
        """
        # Inline import keeps test fakes out of production imports
        from gg_shared.gateway.git.fake import FakeGit

        return GgContext(
            git=git if git is not None else FakeGit(),
            cwd=cwd if cwd is not None else Path("/test/default/cwd"),
            debug=debug,
        )


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        (path, None) on success, (None, error_message) if the directory is gone
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def create_context(*, debug: bool) -> GgContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.
    """
    cwd, error_msg = safe_cwd()
    if cwd is None:
        user_output(click.style("Error: ", fg="red") + str(error_msg))
        raise SystemExit(1)
    return GgContext(git=RealGit(), cwd=cwd, debug=debug)
