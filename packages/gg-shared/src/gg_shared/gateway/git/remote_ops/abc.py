"""Abstract base class for Git remote operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path


class GitRemoteOps(ABC):
    """Abstract interface for Git remote operations.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def fetch(self, repo_root: Path, source: str, refspecs: Sequence[str]) -> None:
        """Fetch refspecs from a remote name or URL.

        Blocks until git finishes. A refspec with an empty destination
        ("refs/heads/main:") only updates FETCH_HEAD and, for a named remote,
        its configured remote-tracking refs.

        Args:
            repo_root: Path to the git repository root
            source: Remote name (e.g., "origin") or URL
            refspecs: Refspecs to request

        Raises:
            RuntimeError: If the fetch fails or times out
        """
        ...
