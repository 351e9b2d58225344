"""Fake implementation of Git ref operations for testing."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from gg_shared.gateway.git.ref_ops.abc import GitRefOps
from gg_shared.gateway.git.ref_ops.snapshot import RefSnapshot
from gg_shared.gateway.git.ref_ops.types import RefMutation


class FakeGitRefOps(GitRefOps):
    """In-memory fake implementation of Git ref operations.

    Constructor Injection:
    ---------------------
    - local_refs: Mutable mapping of ref -> hash for the local repository
    - remote_refs: Mapping of source (remote name or URL) -> {ref: hash}
    - commit_parents: Mapping of commit hash -> parent hashes, used by is_ancestor()
    - head_ref: Ref HEAD points to, or None for detached HEAD
    - failing_refs: Refs whose mutation is refused, simulating ref-store contention

    Mutation Tracking:
    -----------------
    - ref_mutations: Batches successfully applied via mutate_refs()
    """

    def __init__(
        self,
        *,
        local_refs: dict[str, str] | None = None,
        remote_refs: dict[str, dict[str, str]] | None = None,
        commit_parents: dict[str, tuple[str, ...]] | None = None,
        head_ref: str | None = None,
        failing_refs: set[str] | None = None,
    ) -> None:
        self._local_refs = local_refs if local_refs is not None else {}
        self._remote_refs = remote_refs if remote_refs is not None else {}
        self._commit_parents = commit_parents if commit_parents is not None else {}
        self._head_ref = head_ref
        self._failing_refs = failing_refs if failing_refs is not None else set()

        self._ref_mutations: list[dict[str, RefMutation]] = []

    # ============================================================================
    # Query Operations
    # ============================================================================

    def get_head_ref(self, repo_root: Path) -> str | None:
        return self._head_ref

    def list_local_refs(self, repo_root: Path) -> RefSnapshot:
        return RefSnapshot(self._local_refs)

    def list_remote_refs(self, repo_root: Path, source: str) -> RefSnapshot:
        """Return the configured refs for source.

        Raises:
            RuntimeError: If source is not configured, as git would for an
                unreachable repository
        """
        if source not in self._remote_refs:
            raise RuntimeError(f"Failed to list refs of '{source}': repository not found")
        return RefSnapshot(self._remote_refs[source])

    def is_ancestor(self, repo_root: Path, ancestor: str, descendant: str) -> bool:
        """Walk commit_parents from descendant looking for ancestor."""
        seen: set[str] = set()
        pending = [descendant]
        while pending:
            commit = pending.pop()
            if commit == ancestor:
                return True
            if commit in seen:
                continue
            seen.add(commit)
            pending.extend(self._commit_parents.get(commit, ()))
        return False

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def mutate_refs(self, repo_root: Path, mutations: Mapping[str, RefMutation]) -> None:
        """Apply mutations all-or-nothing with compare-and-set checks."""
        for ref, mutation in mutations.items():
            if ref in self._failing_refs:
                raise RuntimeError(f"Failed to update refs {ref}: cannot lock ref '{ref}'")
            current = self._local_refs.get(ref)
            if mutation.kind == "create" and current is not None:
                raise RuntimeError(f"Failed to update refs {ref}: '{ref}' already exists")
            if mutation.kind == "delete" and current is None:
                raise RuntimeError(f"Failed to update refs {ref}: '{ref}' does not exist")
            if mutation.expected_old is not None and current != mutation.expected_old:
                raise RuntimeError(
                    f"Failed to update refs {ref}: '{ref}' is at {current} "
                    f"but expected {mutation.expected_old}"
                )
        for ref, mutation in mutations.items():
            if mutation.kind == "delete":
                del self._local_refs[ref]
            else:
                assert mutation.new_value is not None
                self._local_refs[ref] = mutation.new_value
        self._ref_mutations.append(dict(mutations))

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def ref_mutations(self) -> list[dict[str, RefMutation]]:
        """Read-only access to applied mutation batches for test assertions."""
        return [dict(batch) for batch in self._ref_mutations]

    @property
    def local_refs(self) -> dict[str, str]:
        """Current local refs."""
        return dict(self._local_refs)
