"""Abstract base class for Git branch operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class GitBranchOps(ABC):
    """Abstract interface for Git branch operations.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def create_branch(
        self, repo_root: Path, branch_name: str, start_point: str, *, track: bool, force: bool
    ) -> None:
        """Create a branch without checking it out.

        Args:
            repo_root: Path to the repository root
            branch_name: Name of the branch to create (without refs/heads/)
            start_point: Ref or commit to start the branch at
            track: Set the branch's upstream to start_point (must be a
                remote-tracking ref); with False, no upstream is configured
            force: Overwrite the branch if it already exists

        Raises:
            RuntimeError: If git refuses to create the branch
        """
        ...

    @abstractmethod
    def merge_fast_forward(self, cwd: Path, rev: str) -> None:
        """Fast-forward the checked-out branch and working copy to rev.

        Raises:
            RuntimeError: If the merge is not a fast-forward or fails
        """
        ...
