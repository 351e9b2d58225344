"""Abstract base class for Git ref operations.

This sub-gateway holds the ref primitives the pull engine relies on:
snapshots of local and remote refs, ancestry checks, and atomic
compare-and-set ref mutations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gg_shared.gateway.git.ref_ops.snapshot import RefSnapshot
    from gg_shared.gateway.git.ref_ops.types import RefMutation


class GitRefOps(ABC):
    """Abstract interface for Git ref operations.

    All implementations (real and fake) must implement this interface.
    """

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def get_head_ref(self, repo_root: Path) -> str | None:
        """Get the ref HEAD points to.

        Returns:
            Full ref name (e.g., "refs/heads/main"), or None when HEAD is detached
        """
        ...

    @abstractmethod
    def list_local_refs(self, repo_root: Path) -> RefSnapshot:
        """Capture every local ref with its hash.

        Annotated tags map to the hash of the object they point to.

        Raises:
            RuntimeError: If git fails
            DuplicateRefError: If git reports the same ref twice
        """
        ...

    @abstractmethod
    def list_remote_refs(self, repo_root: Path, source: str) -> RefSnapshot:
        """Capture the refs advertised by a remote name or URL.

        Raises:
            RuntimeError: If git fails
            DuplicateRefError: If the remote advertises the same ref twice
        """
        ...

    @abstractmethod
    def is_ancestor(self, repo_root: Path, ancestor: str, descendant: str) -> bool:
        """Report whether ancestor is an ancestor of (or equal to) descendant.

        Raises:
            RuntimeError: If git cannot answer (e.g., unknown revision)
        """
        ...

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def mutate_refs(self, repo_root: Path, mutations: Mapping[str, RefMutation]) -> None:
        """Apply a batch of ref mutations atomically.

        Either every mutation is applied or none is. A mutation with an
        expected_old value fails the batch if the ref has moved.

        Raises:
            RuntimeError: If any mutation is refused
        """
        ...
