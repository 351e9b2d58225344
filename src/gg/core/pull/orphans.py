from collections.abc import Mapping

from gg_shared.gateway.git.config_ops.types import Remote


def is_ref_orphaned(
    remotes: Mapping[str, Remote],
    local_refs: Mapping[str, str],
    current_remote_name: str,
    ref: str,
) -> bool:
    """Report whether current_remote_name was the only remote serving ref.

    The local ref must still be at the commit the current remote's tracking
    ref records (no local work since the last sync), and no other remote may
    have a tracking ref for it.
    """
    local_hash = local_refs.get(ref)
    current = remotes.get(current_remote_name)
    if local_hash is None or current is None:
        return False
    tracking_ref = current.map_fetch(ref)
    if tracking_ref is None or local_refs.get(tracking_ref) != local_hash:
        return False
    for name, remote in remotes.items():
        if name == current_remote_name:
            continue
        other_tracking_ref = remote.map_fetch(ref)
        if other_tracking_ref is not None and other_tracking_ref in local_refs:
            return False
    return True
