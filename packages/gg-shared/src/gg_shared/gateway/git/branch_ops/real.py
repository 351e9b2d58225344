"""Production implementation of Git branch operations using subprocess."""

from pathlib import Path

from gg_shared.gateway.git.branch_ops.abc import GitBranchOps
from gg_shared.subprocess_utils import run_subprocess_with_context


class RealGitBranchOps(GitBranchOps):
    """Production implementation of branch operations using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def create_branch(
        self, repo_root: Path, branch_name: str, start_point: str, *, track: bool, force: bool
    ) -> None:
        """Create a branch without checking it out."""
        cmd = ["git", "branch", "--quiet"]
        cmd.append("--track" if track else "--no-track")
        if force:
            cmd.append("--force")
        cmd.extend([branch_name, start_point])
        run_subprocess_with_context(
            cmd=cmd,
            operation_context=f"create branch '{branch_name}' from '{start_point}'",
            cwd=repo_root,
        )

    def merge_fast_forward(self, cwd: Path, rev: str) -> None:
        """Fast-forward the checked-out branch and working copy to rev."""
        run_subprocess_with_context(
            cmd=["git", "merge", "--ff-only", "--quiet", rev],
            operation_context=f"fast-forward to '{rev}'",
            cwd=cwd,
        )
