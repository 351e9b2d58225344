"""Production implementation of Git ref operations using subprocess."""

from collections.abc import Mapping
from pathlib import Path

from gg_shared.gateway.git.ref_ops.abc import GitRefOps
from gg_shared.gateway.git.ref_ops.snapshot import RefSnapshot, parse_ref_listing
from gg_shared.gateway.git.ref_ops.types import RefMutation
from gg_shared.subprocess_utils import copied_env_for_git_subprocess, run_subprocess_with_context

# Timeout in seconds for git operations that talk to a remote.
_GIT_NETWORK_TIMEOUT = 120


class RealGitRefOps(GitRefOps):
    """Production implementation of ref operations using subprocess."""

    # ============================================================================
    # Query Operations
    # ============================================================================

    def get_head_ref(self, repo_root: Path) -> str | None:
        """Get the ref HEAD points to."""
        result = run_subprocess_with_context(
            cmd=["git", "symbolic-ref", "-q", "HEAD"],
            operation_context="read HEAD",
            cwd=repo_root,
            check=False,
        )
        # Exit code 1 means HEAD is detached
        if result.returncode == 1:
            return None
        if result.returncode != 0:
            raise RuntimeError(f"Failed to read HEAD: {result.stderr.strip()}")
        return result.stdout.strip()

    def list_local_refs(self, repo_root: Path) -> RefSnapshot:
        """Capture every local ref with its hash."""
        result = run_subprocess_with_context(
            cmd=["git", "show-ref", "--dereference"],
            operation_context="list local refs",
            cwd=repo_root,
            check=False,
        )
        # show-ref exits 1 without output when the repository has no refs
        if result.returncode == 1 and not result.stdout.strip():
            return RefSnapshot()
        if result.returncode != 0:
            raise RuntimeError(f"Failed to list local refs: {result.stderr.strip()}")
        return parse_ref_listing(result.stdout.splitlines())

    def list_remote_refs(self, repo_root: Path, source: str) -> RefSnapshot:
        """Capture the refs advertised by a remote name or URL."""
        result = run_subprocess_with_context(
            cmd=["git", "ls-remote", "--quiet", source],
            operation_context=f"list refs of '{source}'",
            cwd=repo_root,
            timeout=_GIT_NETWORK_TIMEOUT,
            env=copied_env_for_git_subprocess(),
        )
        return parse_ref_listing(result.stdout.splitlines())

    def is_ancestor(self, repo_root: Path, ancestor: str, descendant: str) -> bool:
        """Report whether ancestor is an ancestor of (or equal to) descendant."""
        result = run_subprocess_with_context(
            cmd=["git", "merge-base", "--is-ancestor", ancestor, descendant],
            operation_context=f"check '{ancestor}' ancestor of '{descendant}'",
            cwd=repo_root,
            check=False,
        )
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        raise RuntimeError(
            f"Failed to check '{ancestor}' ancestor of '{descendant}': {result.stderr.strip()}"
        )

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def mutate_refs(self, repo_root: Path, mutations: Mapping[str, RefMutation]) -> None:
        """Apply a batch of ref mutations atomically via update-ref --stdin."""
        if not mutations:
            return
        commands = "".join(
            mutation.to_update_ref_command(ref) + "\n" for ref, mutation in mutations.items()
        )
        run_subprocess_with_context(
            cmd=["git", "update-ref", "--stdin"],
            operation_context=f"update refs {', '.join(mutations)}",
            cwd=repo_root,
            input=commands,
        )
