"""High-level git operations interface.

This module provides a clean abstraction over git subprocess calls, making the
codebase more testable and maintainable.

Architecture:
- Git: Abstract base class grouping the sub-gateways
- RealGit: Production implementation using subprocess
- FakeGit: In-memory implementation for tests
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gg_shared.gateway.git.branch_ops.abc import GitBranchOps
    from gg_shared.gateway.git.config_ops.abc import GitConfigOps
    from gg_shared.gateway.git.ref_ops.abc import GitRefOps
    from gg_shared.gateway.git.remote_ops.abc import GitRemoteOps


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    @property
    @abstractmethod
    def ref(self) -> GitRefOps:
        """Access ref operations subgateway."""
        ...

    @property
    @abstractmethod
    def branch(self) -> GitBranchOps:
        """Access branch operations subgateway."""
        ...

    @property
    @abstractmethod
    def remote(self) -> GitRemoteOps:
        """Access remote operations subgateway."""
        ...

    @property
    @abstractmethod
    def config(self) -> GitConfigOps:
        """Access configuration operations subgateway."""
        ...
