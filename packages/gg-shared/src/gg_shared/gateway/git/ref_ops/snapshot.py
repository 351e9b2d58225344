"""Point-in-time ref snapshots.

A RefSnapshot is captured once per invocation (for the local repository and
for the fetch source) and is never mutated afterwards. Ref changes go through
GitRefOps.mutate_refs, not through the snapshot.
"""

from collections.abc import Iterable, Iterator, Mapping

from gg_shared.gateway.git.ref_ops.types import is_valid_hash

_PEELED_SUFFIX = "^{}"


class DuplicateRefError(ValueError):
    """Raised when a ref listing names the same ref twice."""


class RefSnapshot(Mapping[str, str]):
    """Immutable mapping from ref name to hash."""

    def __init__(self, refs: Mapping[str, str] | None = None) -> None:
        self._refs: dict[str, str] = dict(refs) if refs is not None else {}

    def __getitem__(self, ref: str) -> str:
        return self._refs[ref]

    def __iter__(self) -> Iterator[str]:
        return iter(self._refs)

    def __len__(self) -> int:
        return len(self._refs)

    def __repr__(self) -> str:
        return f"RefSnapshot({self._refs!r})"

    def with_prefix(self, prefix: str) -> dict[str, str]:
        """Return the refs starting with prefix."""
        return {ref: h for ref, h in self._refs.items() if ref.startswith(prefix)}


def parse_ref_listing(lines: Iterable[str]) -> RefSnapshot:
    """Parse `git show-ref --dereference` or `git ls-remote` output.

    Each line is "<hash> <ref>" (show-ref) or "<hash>\\t<ref>" (ls-remote).
    A peeled tag line ("refs/tags/v1^{}") replaces the tag object's hash with
    the hash of the object it points to.

    Raises:
        DuplicateRefError: If a ref, or a peeled tag, appears more than once
        ValueError: If a line cannot be parsed
    """
    refs: dict[str, str] = {}
    peeled: set[str] = set()
    for line in lines:
        if not line.strip():
            continue
        parts = line.split(None, 1)
        if len(parts) != 2:
            raise ValueError(f"could not parse ref line {line!r}")
        hash_value, ref = parts[0], parts[1].strip()
        if not is_valid_hash(hash_value):
            raise ValueError(f"parse hash of ref {ref!r}: invalid hash {hash_value!r}")
        if ref.endswith(_PEELED_SUFFIX):
            ref = ref[: -len(_PEELED_SUFFIX)]
            if ref in peeled:
                raise DuplicateRefError(f"multiple hashes found for tag {ref}")
            peeled.add(ref)
        elif ref in refs:
            raise DuplicateRefError(f"multiple hashes found for {ref}")
        refs[ref] = hash_value
    return RefSnapshot(refs)
