"""Builders for FakeGit repository state used across pull tests."""

from gg_shared.gateway.git.config_ops.types import FetchRefspec, Remote

ORIGIN_URL = "https://example.com/origin.git"
MIRROR_URL = "https://example.com/mirror.git"


def sha(char: str) -> str:
    """Build a fake 40-character hash from a single hex digit."""
    return char * 40


def remote_entries(name: str, url: str) -> list[tuple[str, str | None]]:
    """Config entries for a remote with the default clone refspec."""
    return [
        (f"remote.{name}.url", url),
        (f"remote.{name}.fetch", f"+refs/heads/*:refs/remotes/{name}/*"),
    ]


def tracking_entries(branch: str, remote: str) -> list[tuple[str, str | None]]:
    """Config entries making branch track the same-named branch on remote."""
    return [
        (f"branch.{branch}.remote", remote),
        (f"branch.{branch}.merge", f"refs/heads/{branch}"),
    ]


def make_remote(name: str, url: str = ORIGIN_URL) -> Remote:
    return Remote(
        name=name,
        url=url,
        fetch=(FetchRefspec.parse(f"+refs/heads/*:refs/remotes/{name}/*"),),
    )
