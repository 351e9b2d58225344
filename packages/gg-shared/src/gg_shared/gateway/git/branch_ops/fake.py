"""Fake implementation of Git branch operations for testing."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from gg_shared.gateway.git.branch_ops.abc import GitBranchOps
from gg_shared.gateway.git.config_ops.fake import FakeGitConfigOps
from gg_shared.gateway.git.ref_ops.types import branch_name as ref_branch_name
from gg_shared.gateway.git.ref_ops.types import branch_ref, is_valid_hash


class CreatedBranch(NamedTuple):
    """Record of a create_branch operation."""

    branch: str
    start_point: str
    track: bool
    force: bool


class FakeGitBranchOps(GitBranchOps):
    """In-memory fake implementation of Git branch operations.

    Constructor Injection:
    ---------------------
    - local_refs: Mutable ref -> hash mapping shared with FakeGitRefOps
    - config: FakeGitConfigOps that receives upstream settings for tracking branches
    - head_ref: Ref HEAD points to, or None for detached HEAD
    - failing_branches: Branch names whose creation fails

    Mutation Tracking:
    -----------------
    - created_branches: CreatedBranch records from create_branch()
    - fast_forwards: Revisions passed to merge_fast_forward()
    """

    def __init__(
        self,
        *,
        local_refs: dict[str, str] | None = None,
        config: FakeGitConfigOps | None = None,
        head_ref: str | None = None,
        failing_branches: set[str] | None = None,
    ) -> None:
        self._local_refs = local_refs if local_refs is not None else {}
        self._config = config if config is not None else FakeGitConfigOps()
        self._head_ref = head_ref
        self._failing_branches = failing_branches if failing_branches is not None else set()

        self._created_branches: list[CreatedBranch] = []
        self._fast_forwards: list[str] = []

    def create_branch(
        self, repo_root: Path, branch_name: str, start_point: str, *, track: bool, force: bool
    ) -> None:
        """Create the branch in local_refs, wiring upstream config when tracking."""
        if branch_name in self._failing_branches:
            raise RuntimeError(f"Failed to create branch '{branch_name}' from '{start_point}'")
        ref = branch_ref(branch_name)
        if ref in self._local_refs and not force:
            raise RuntimeError(f"Failed to create branch '{branch_name}': branch already exists")
        target = self._resolve(start_point)
        upstream = self._find_upstream(start_point) if track else None
        self._local_refs[ref] = target
        if upstream is not None:
            remote_name, merge_ref = upstream
            self._config.set_value(f"branch.{branch_name}.remote", remote_name)
            self._config.set_value(f"branch.{branch_name}.merge", merge_ref)
        self._created_branches.append(
            CreatedBranch(branch=branch_name, start_point=start_point, track=track, force=force)
        )

    def merge_fast_forward(self, cwd: Path, rev: str) -> None:
        """Move the checked-out branch to rev (tracks mutation)."""
        if self._head_ref is None or not ref_branch_name(self._head_ref):
            raise RuntimeError(f"Failed to fast-forward to '{rev}': HEAD is detached")
        self._local_refs[self._head_ref] = self._resolve(rev)
        self._fast_forwards.append(rev)

    def _resolve(self, rev: str) -> str:
        if rev in self._local_refs:
            return self._local_refs[rev]
        if is_valid_hash(rev):
            return rev
        raise RuntimeError(f"Failed to resolve '{rev}': not a valid object name")

    def _find_upstream(self, start_point: str) -> tuple[str, str]:
        remotes = self._config.read_config(Path("/")).list_remotes()
        for remote in remotes.values():
            for spec in remote.fetch:
                merge_ref = spec.map_destination(start_point)
                if merge_ref is not None:
                    return remote.name, merge_ref
        raise RuntimeError(f"Failed to track '{start_point}': not a remote-tracking ref")

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def created_branches(self) -> list[CreatedBranch]:
        """Read-only access to created branches for test assertions."""
        return list(self._created_branches)

    @property
    def fast_forwards(self) -> list[str]:
        """Read-only access to merge_fast_forward revisions for test assertions."""
        return list(self._fast_forwards)
