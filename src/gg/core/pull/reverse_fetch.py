"""Reconstruct a remote's last-observed refs from its remote-tracking refs."""

from collections.abc import Mapping

from gg_shared.gateway.git.config_ops.types import Remote
from gg_shared.gateway.git.ref_ops.snapshot import RefSnapshot


def reverse_fetch_refspecs(remote: Remote, local_refs: Mapping[str, str]) -> RefSnapshot:
    """Undo the remote's fetch refspecs over the local refs.

    The result maps remote ref -> hash as of the last fetch. It only tells us
    what the remote used to have, so it is used to notice deletions and never
    as a source of commits.
    """
    previous: dict[str, str] = {}
    for spec in remote.fetch:
        if not spec.destination:
            continue
        if not spec.is_wildcard:
            local_hash = local_refs.get(spec.destination)
            if local_hash is not None:
                previous.setdefault(spec.source, local_hash)
            continue
        for ref, local_hash in local_refs.items():
            # refs/remotes/<name>/HEAD is a symbolic alias, not a remote branch
            if ref == remote.head_alias:
                continue
            source_ref = spec.map_destination(ref)
            if source_ref is not None:
                previous.setdefault(source_ref, local_hash)
    return RefSnapshot(previous)
