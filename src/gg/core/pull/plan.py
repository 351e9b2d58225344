"""Fetch plan construction.

build_fetch_plan turns the user's ref selection into the refspecs passed to
`git fetch` and the typed sets of operations the reconciler applies once the
fetch has finished. It reads the two snapshots only; nothing is mutated, so
every error raised here leaves the repository untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from fnmatch import fnmatchcase

from gg.core.pull.errors import AmbiguousRefSelectionError, RefNotFoundError, TagConflictError
from gg.core.pull.orphans import is_ref_orphaned
from gg.core.pull.reverse_fetch import reverse_fetch_refspecs
from gg.core.pull.source import FetchSource, NamedRemote
from gg_shared.gateway.git.config_ops.types import Remote
from gg_shared.gateway.git.ref_ops.snapshot import RefSnapshot
from gg_shared.gateway.git.ref_ops.types import (
    branch_name,
    branch_ref,
    is_branch_ref,
    is_tag_ref,
    short_ref_name,
    tag_ref,
)

logger = logging.getLogger(__name__)

# Branches pulled from a bare URL land here instead of in a remote namespace.
SYNTHETIC_PULL_PREFIX = "refs/ggpull/"


@dataclass(frozen=True)
class DeferredFetchOps:
    """Operations decided before the fetch and applied after it.

    Attributes:
        source: Where the refs come from
        local_refs: Local snapshot taken before the fetch
        remote_refs: Source snapshot taken before the fetch
        create_branches: Branches on the source that do not exist locally
        fast_forward_branches: Local branches whose hash differs from the source
        deleted_refs: Ref -> hash it must still have for the deletion to happen
    """

    source: FetchSource
    local_refs: RefSnapshot
    remote_refs: RefSnapshot
    create_branches: tuple[str, ...] = ()
    fast_forward_branches: tuple[str, ...] = ()
    deleted_refs: Mapping[str, str] = field(default_factory=dict)

    @property
    def branches(self) -> tuple[str, ...]:
        """All branches expected to be created or fast-forwarded."""
        return self.create_branches + self.fast_forward_branches

    def fetched_ref(self, ref: str) -> str | None:
        """Local ref the fetch stores a source branch in, if any."""
        if isinstance(self.source, NamedRemote):
            return self.source.remote.map_fetch(ref)
        return SYNTHETIC_PULL_PREFIX + branch_name(ref)


@dataclass(frozen=True)
class FetchPlan:
    """The resolved, classified set of refs for one pull.

    Attributes:
        refspecs: Arguments for `git fetch`, empty when nothing needs fetching
        ops: Work for the reconciler
        fetched_branches: Source branches the fetch requests
        fetched_tags: Tags that will be created or overwritten by the fetch
        tag_conflicts: Tags left alone because they differ from the source
    """

    refspecs: tuple[str, ...]
    ops: DeferredFetchOps
    fetched_branches: tuple[str, ...] = ()
    fetched_tags: tuple[str, ...] = ()
    tag_conflicts: tuple[str, ...] = ()

    @property
    def has_refspecs(self) -> bool:
        return bool(self.refspecs)


def build_fetch_plan(
    source: FetchSource,
    remotes: Mapping[str, Remote],
    local_refs: RefSnapshot,
    remote_refs: RefSnapshot,
    *,
    refs: Sequence[str],
    pattern: str | None,
    force_tags: bool,
) -> FetchPlan:
    """Resolve and classify the refs to pull.

    Args:
        source: Named remote or URL being pulled from
        remotes: Every configured remote, for orphan detection
        local_refs: Local snapshot
        remote_refs: Snapshot of the source
        refs: Explicitly requested ref names (short or fully qualified)
        pattern: Glob matched against ref names, or None
        force_tags: Overwrite local tags that differ from the source

    Raises:
        AmbiguousRefSelectionError: If both refs and pattern are given
        RefNotFoundError: If a requested ref is not on the source
        TagConflictError: If an explicitly requested tag differs locally and
            force_tags is False
    """
    if refs and pattern is not None:
        raise AmbiguousRefSelectionError()

    if isinstance(source, NamedRemote):
        prev_remote_refs = reverse_fetch_refspecs(source.remote, local_refs)
    else:
        prev_remote_refs = RefSnapshot()

    if refs:
        selected = [_resolve_ref_name(name, source, remote_refs, prev_remote_refs) for name in refs]
    elif pattern is not None:
        selected = _select_matching(pattern, remote_refs, prev_remote_refs)
    else:
        selected = _select_everything(remote_refs, prev_remote_refs)
    # Preserve first occurrence
    selected = list(dict.fromkeys(selected))
    explicit = bool(refs)

    refspecs: list[str] = []
    create_branches: list[str] = []
    fast_forward_branches: list[str] = []
    deleted_refs: dict[str, str] = {}
    fetched_branches: list[str] = []
    fetched_tags: list[str] = []
    tag_conflicts: list[str] = []

    for ref in selected:
        if is_branch_ref(ref):
            remote_hash = remote_refs.get(ref)
            if remote_hash is not None:
                refspecs.append(_branch_refspec(source, ref))
                fetched_branches.append(ref)
                local_hash = local_refs.get(ref)
                if local_hash is None:
                    create_branches.append(ref)
                elif local_hash != remote_hash:
                    fast_forward_branches.append(ref)
            elif ref in prev_remote_refs and isinstance(source, NamedRemote):
                deleted_refs.update(
                    _deletion_candidates(source.remote, remotes, local_refs, ref)
                )
            else:
                raise RefNotFoundError(ref, str(source))
        elif is_tag_ref(ref):
            remote_hash = remote_refs.get(ref)
            if remote_hash is None:
                raise RefNotFoundError(ref, str(source))
            local_hash = local_refs.get(ref)
            if local_hash == remote_hash:
                continue
            if local_hash is None:
                refspecs.append(f"{ref}:{ref}")
                fetched_tags.append(ref)
            elif force_tags:
                refspecs.append(f"+{ref}:{ref}")
                fetched_tags.append(ref)
            elif explicit:
                raise TagConflictError([ref])
            else:
                logger.debug("tag %s differs from %s; leaving it alone", ref, source)
                tag_conflicts.append(ref)
        else:
            raise RefNotFoundError(ref, str(source))

    logger.debug(
        "fetch plan for %s: %d refspec(s), create=%s fast-forward=%s delete=%s",
        source,
        len(refspecs),
        create_branches,
        fast_forward_branches,
        sorted(deleted_refs),
    )
    ops = DeferredFetchOps(
        source=source,
        local_refs=local_refs,
        remote_refs=remote_refs,
        create_branches=tuple(create_branches),
        fast_forward_branches=tuple(fast_forward_branches),
        deleted_refs=deleted_refs,
    )
    return FetchPlan(
        refspecs=tuple(refspecs),
        ops=ops,
        fetched_branches=tuple(fetched_branches),
        fetched_tags=tuple(fetched_tags),
        tag_conflicts=tuple(tag_conflicts),
    )


def _resolve_ref_name(
    name: str,
    source: FetchSource,
    remote_refs: Mapping[str, str],
    prev_remote_refs: Mapping[str, str],
) -> str:
    if is_branch_ref(name) or is_tag_ref(name):
        return name
    as_branch = branch_ref(name)
    if as_branch in remote_refs or as_branch in prev_remote_refs:
        return as_branch
    as_tag = tag_ref(name)
    if as_tag in remote_refs:
        return as_tag
    raise RefNotFoundError(name, str(source))


def _select_everything(
    remote_refs: Mapping[str, str], prev_remote_refs: Mapping[str, str]
) -> list[str]:
    selected = [ref for ref in sorted(remote_refs) if is_branch_ref(ref) or is_tag_ref(ref)]
    selected.extend(
        ref for ref in sorted(prev_remote_refs) if is_branch_ref(ref) and ref not in remote_refs
    )
    return selected


def _select_matching(
    pattern: str, remote_refs: Mapping[str, str], prev_remote_refs: Mapping[str, str]
) -> list[str]:
    selected = [
        ref
        for ref in sorted(remote_refs)
        if (is_branch_ref(ref) or is_tag_ref(ref)) and fnmatchcase(short_ref_name(ref), pattern)
    ]
    # Vanished branches are matched on their full ref name.
    selected.extend(
        ref
        for ref in sorted(prev_remote_refs)
        if is_branch_ref(ref) and ref not in remote_refs and fnmatchcase(ref, pattern)
    )
    return selected


def _branch_refspec(source: FetchSource, ref: str) -> str:
    if isinstance(source, NamedRemote):
        # Empty destination: git updates the configured remote-tracking ref only.
        return f"{ref}:"
    return f"+{ref}:{SYNTHETIC_PULL_PREFIX}{branch_name(ref)}"


def _deletion_candidates(
    remote: Remote,
    remotes: Mapping[str, Remote],
    local_refs: Mapping[str, str],
    ref: str,
) -> dict[str, str]:
    candidates: dict[str, str] = {}
    tracking_ref = remote.map_fetch(ref)
    if tracking_ref is not None and tracking_ref in local_refs:
        candidates[tracking_ref] = local_refs[tracking_ref]
    if is_ref_orphaned(remotes, local_refs, remote.name, ref):
        candidates[ref] = local_refs[ref]
    return candidates
