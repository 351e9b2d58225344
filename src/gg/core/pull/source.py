"""Fetch sources: a configured remote or a bare URL."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from gg.core.pull.errors import NoSourceError
from gg_shared.gateway.git.config_ops.types import GitConfig, Remote
from gg_shared.gateway.git.ref_ops.types import branch_name

DEFAULT_REMOTE = "origin"


@dataclass(frozen=True)
class NamedRemote:
    """A source configured under remote.<name>.*; fetches update tracking refs."""

    remote: Remote

    @property
    def location(self) -> str:
        return self.remote.name

    def __str__(self) -> str:
        return f"remote {self.remote.name!r}"


@dataclass(frozen=True)
class RawURL:
    """A source given as a URL or path; no tracking configuration applies."""

    url: str

    @property
    def location(self) -> str:
        return self.url

    def __str__(self) -> str:
        return self.url


FetchSource = NamedRemote | RawURL


def resolve_source(source_arg: str, remotes: Mapping[str, Remote]) -> FetchSource:
    """Treat source_arg as a remote name if one is configured, else as a URL."""
    remote = remotes.get(source_arg)
    if remote is not None:
        return NamedRemote(remote=remote)
    return RawURL(url=source_arg)


def infer_source(config: GitConfig, remotes: Mapping[str, Remote], head_ref: str | None) -> str:
    """Pick the source when none was given.

    Uses the checked-out branch's configured remote, falling back to "origin".

    Raises:
        NoSourceError: If neither is available
    """
    current = branch_name(head_ref) if head_ref is not None else ""
    if current:
        configured = config.value(f"branch.{current}.remote")
        if configured:
            return configured
    if DEFAULT_REMOTE not in remotes:
        raise NoSourceError(f'no source given and no remote named "{DEFAULT_REMOTE}" found')
    return DEFAULT_REMOTE
