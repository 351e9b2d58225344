"""Abstract interface for git configuration operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from gg_shared.gateway.git.config_ops.types import GitConfig


class GitConfigOps(ABC):
    """Abstract interface for Git configuration operations.

    This interface contains both mutation and query operations for git config.
    All implementations (real and fake) must implement this interface.
    """

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def read_config(self, repo_root: Path) -> GitConfig:
        """Read every configuration setting visible from repo_root.

        Raises:
            RuntimeError: If git fails
        """
        ...

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def unset_value(self, repo_root: Path, key: str) -> None:
        """Remove every value of a key from the repository configuration.

        Idempotent: succeeds if the key is not set.

        Raises:
            RuntimeError: If git fails for any other reason
        """
        ...
