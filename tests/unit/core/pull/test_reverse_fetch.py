from gg.core.pull.reverse_fetch import reverse_fetch_refspecs
from gg_shared.gateway.git.config_ops.types import FetchRefspec, Remote
from tests.test_utils.git_state import make_remote, sha


def test_maps_tracking_refs_back_to_remote_branches() -> None:
    local_refs = {
        "refs/heads/main": sha("1"),
        "refs/remotes/origin/main": sha("a"),
        "refs/remotes/origin/feature/x": sha("b"),
        "refs/remotes/origin/HEAD": sha("a"),
        "refs/remotes/fork/main": sha("c"),
        "refs/tags/v1": sha("d"),
    }

    previous = reverse_fetch_refspecs(make_remote("origin"), local_refs)

    assert dict(previous) == {
        "refs/heads/main": sha("a"),
        "refs/heads/feature/x": sha("b"),
    }


def test_literal_refspecs_and_first_match_wins() -> None:
    remote = Remote(
        name="origin",
        url="",
        fetch=(
            FetchRefspec.parse("refs/heads/main:refs/remotes/origin/trunk"),
            FetchRefspec.parse("+refs/heads/*:refs/remotes/origin/*"),
            FetchRefspec.parse("refs/heads/scratch"),
        ),
    )
    local_refs = {
        "refs/remotes/origin/trunk": sha("a"),
        "refs/remotes/origin/main": sha("b"),
    }

    previous = reverse_fetch_refspecs(remote, local_refs)

    assert previous["refs/heads/main"] == sha("a")
    assert previous["refs/heads/trunk"] == sha("a")
    assert "refs/heads/scratch" not in previous


def test_no_tracking_refs() -> None:
    assert len(reverse_fetch_refspecs(make_remote("origin"), {})) == 0
