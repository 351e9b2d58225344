"""Production Git implementation using subprocess.

Located in gg-shared so the gateways can be used without importing the CLI.
"""

from gg_shared.gateway.git.abc import Git
from gg_shared.gateway.git.branch_ops.abc import GitBranchOps
from gg_shared.gateway.git.branch_ops.real import RealGitBranchOps
from gg_shared.gateway.git.config_ops.abc import GitConfigOps
from gg_shared.gateway.git.config_ops.real import RealGitConfigOps
from gg_shared.gateway.git.ref_ops.abc import GitRefOps
from gg_shared.gateway.git.ref_ops.real import RealGitRefOps
from gg_shared.gateway.git.remote_ops.abc import GitRemoteOps
from gg_shared.gateway.git.remote_ops.real import RealGitRemoteOps


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def __init__(self) -> None:
        self._ref = RealGitRefOps()
        self._branch = RealGitBranchOps()
        self._remote = RealGitRemoteOps()
        self._config = RealGitConfigOps()

    @property
    def ref(self) -> GitRefOps:
        """Access ref operations subgateway."""
        return self._ref

    @property
    def branch(self) -> GitBranchOps:
        """Access branch operations subgateway."""
        return self._branch

    @property
    def remote(self) -> GitRemoteOps:
        """Access remote operations subgateway."""
        return self._remote

    @property
    def config(self) -> GitConfigOps:
        """Access configuration operations subgateway."""
        return self._config
