"""Fake implementation of Git remote operations for testing."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import NamedTuple

from gg_shared.gateway.git.config_ops.fake import FakeGitConfigOps
from gg_shared.gateway.git.config_ops.types import FetchRefspec
from gg_shared.gateway.git.remote_ops.abc import GitRemoteOps


class FetchRecord(NamedTuple):
    """Record of a fetch operation."""

    source: str
    refspecs: tuple[str, ...]


class FakeGitRemoteOps(GitRemoteOps):
    """In-memory fake implementation of Git remote operations.

    fetch() copies hashes from the configured remote refs into local_refs the
    way git does: explicit destinations are written, and for a named remote
    every fetched ref also updates its configured remote-tracking ref.

    Constructor Injection:
    ---------------------
    - local_refs: Mutable ref -> hash mapping shared with FakeGitRefOps
    - remote_refs: Mapping of source -> {ref: hash}
    - config: FakeGitConfigOps supplying remote fetch refspecs
    - fetch_raises: Exception to raise when fetch() is called

    Mutation Tracking:
    -----------------
    - fetches: FetchRecord for every fetch() call
    """

    def __init__(
        self,
        *,
        local_refs: dict[str, str] | None = None,
        remote_refs: dict[str, dict[str, str]] | None = None,
        config: FakeGitConfigOps | None = None,
        fetch_raises: Exception | None = None,
    ) -> None:
        self._local_refs = local_refs if local_refs is not None else {}
        self._remote_refs = remote_refs if remote_refs is not None else {}
        self._config = config if config is not None else FakeGitConfigOps()
        self._fetch_raises = fetch_raises

        self._fetches: list[FetchRecord] = []

    def fetch(self, repo_root: Path, source: str, refspecs: Sequence[str]) -> None:
        """Record the fetch and apply it to local_refs."""
        self._fetches.append(FetchRecord(source=source, refspecs=tuple(refspecs)))
        if self._fetch_raises is not None:
            raise self._fetch_raises
        advertised = self._remote_refs.get(source)
        if advertised is None:
            raise RuntimeError(f"Failed to fetch from '{source}': repository not found")
        remote = self._config.read_config(repo_root).list_remotes().get(source)

        for raw in refspecs:
            spec = FetchRefspec.parse(raw)
            if spec.source not in advertised:
                raise RuntimeError(
                    f"Failed to fetch from '{source}': couldn't find remote ref {spec.source}"
                )
            new_hash = advertised[spec.source]
            if spec.destination:
                self._local_refs[spec.destination] = new_hash
            if remote is not None:
                tracking = remote.map_fetch(spec.source)
                if tracking is not None:
                    self._local_refs[tracking] = new_hash

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def fetches(self) -> list[FetchRecord]:
        """Read-only access to fetch calls for test assertions."""
        return list(self._fetches)
