"""Fake git operations for testing.

FakeGit is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from __future__ import annotations

from pathlib import Path

from gg_shared.gateway.git.abc import Git
from gg_shared.gateway.git.branch_ops.fake import CreatedBranch, FakeGitBranchOps
from gg_shared.gateway.git.config_ops.fake import FakeGitConfigOps
from gg_shared.gateway.git.ref_ops.fake import FakeGitRefOps
from gg_shared.gateway.git.ref_ops.types import RefMutation
from gg_shared.gateway.git.remote_ops.fake import FakeGitRemoteOps, FetchRecord


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    State Management:
    -----------------
    The sub-gateways share one local ref mapping and one configuration, so a
    fetch, branch creation or ref mutation is visible to every later call
    within the same test, as it would be in a real repository.

    Constructor Injection:
    ---------------------
    All INITIAL state is provided via constructor. Runtime mutations occur
    through operation methods.

    Mutation Tracking:
    -----------------
    - fetches: fetch() calls
    - created_branches: create_branch() calls
    - ref_mutations: mutate_refs() batches that were applied
    - unset_config_keys: unset_value() keys
    - fast_forwards: merge_fast_forward() revisions

    Examples:
    ---------
        >>> git = FakeGit(
        ...     local_refs={"refs/heads/main": "a" * 40},
        ...     remote_refs={"origin": {"refs/heads/main": "b" * 40}},
        ...     config_entries=[
        ...         ("remote.origin.url", "https://example.com/repo.git"),
        ...         ("remote.origin.fetch", "+refs/heads/*:refs/remotes/origin/*"),
        ...     ],
        ...     head_ref="refs/heads/main",
        ... )
    """

    def __init__(
        self,
        *,
        local_refs: dict[str, str] | None = None,
        remote_refs: dict[str, dict[str, str]] | None = None,
        commit_parents: dict[str, tuple[str, ...]] | None = None,
        config_entries: list[tuple[str, str | None]] | None = None,
        head_ref: str | None = None,
        failing_refs: set[str] | None = None,
        failing_branches: set[str] | None = None,
        fetch_raises: Exception | None = None,
        unset_config_raises: Exception | None = None,
    ) -> None:
        """Create FakeGit with pre-configured state.

        Args:
            local_refs: Local ref -> hash
            remote_refs: Source (remote name or URL) -> {ref: hash}
            commit_parents: Commit hash -> parent hashes, for ancestry checks
            config_entries: Ordered (key, value) configuration entries
            head_ref: Ref HEAD points to, or None for detached HEAD
            failing_refs: Refs whose mutation is refused
            failing_branches: Branch names whose creation fails
            fetch_raises: Exception to raise when fetch() is called
            unset_config_raises: Exception to raise when unset_value() is called
        """
        self._local_refs = dict(local_refs) if local_refs is not None else {}
        remotes = remote_refs if remote_refs is not None else {}

        self._config = FakeGitConfigOps(
            config_entries=list(config_entries) if config_entries is not None else [],
            unset_value_raises=unset_config_raises,
        )
        self._ref = FakeGitRefOps(
            local_refs=self._local_refs,
            remote_refs=remotes,
            commit_parents=commit_parents,
            head_ref=head_ref,
            failing_refs=failing_refs,
        )
        self._branch = FakeGitBranchOps(
            local_refs=self._local_refs,
            config=self._config,
            head_ref=head_ref,
            failing_branches=failing_branches,
        )
        self._remote = FakeGitRemoteOps(
            local_refs=self._local_refs,
            remote_refs=remotes,
            config=self._config,
            fetch_raises=fetch_raises,
        )

    @property
    def ref(self) -> FakeGitRefOps:
        """Access ref operations subgateway."""
        return self._ref

    @property
    def branch(self) -> FakeGitBranchOps:
        """Access branch operations subgateway."""
        return self._branch

    @property
    def remote(self) -> FakeGitRemoteOps:
        """Access remote operations subgateway."""
        return self._remote

    @property
    def config(self) -> FakeGitConfigOps:
        """Access configuration operations subgateway."""
        return self._config

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def local_refs(self) -> dict[str, str]:
        """Current local refs."""
        return dict(self._local_refs)

    @property
    def fetches(self) -> list[FetchRecord]:
        return self._remote.fetches

    @property
    def created_branches(self) -> list[CreatedBranch]:
        return self._branch.created_branches

    @property
    def ref_mutations(self) -> list[dict[str, RefMutation]]:
        return self._ref.ref_mutations

    @property
    def unset_config_keys(self) -> list[str]:
        return self._config.unset_keys

    @property
    def fast_forwards(self) -> list[str]:
        return self._branch.fast_forwards

    def config_value(self, key: str) -> str:
        """Current value of a configuration key, or "" if unset."""
        return self._config.read_config(Path("/")).value(key)
