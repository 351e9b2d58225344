from pathlib import Path

from gg.core.context import GgContext
from gg_shared.gateway.git.fake import FakeGit


def test_for_test_defaults() -> None:
    ctx = GgContext.for_test()

    assert isinstance(ctx.git, FakeGit)
    assert ctx.cwd == Path("/test/default/cwd")
    assert ctx.debug is False


def test_for_test_uses_given_git() -> None:
    git = FakeGit()

    ctx = GgContext.for_test(git=git, cwd=Path("/repo"), debug=True)

    assert ctx.git is git
    assert ctx.cwd == Path("/repo")
    assert ctx.debug is True
