"""Production implementation of git configuration operations."""

from pathlib import Path

from gg_shared.gateway.git.config_ops.abc import GitConfigOps
from gg_shared.gateway.git.config_ops.types import GitConfig, parse_config
from gg_shared.subprocess_utils import run_subprocess_with_context

# `git config --unset` exits 5 when the key does not exist.
_CONFIG_KEY_NOT_SET = 5


class RealGitConfigOps(GitConfigOps):
    """Production implementation of config operations using subprocess."""

    def read_config(self, repo_root: Path) -> GitConfig:
        """Read every configuration setting visible from repo_root."""
        result = run_subprocess_with_context(
            cmd=["git", "config", "-z", "--list"],
            operation_context="read git config",
            cwd=repo_root,
        )
        return parse_config(result.stdout)

    def unset_value(self, repo_root: Path, key: str) -> None:
        """Remove every value of a key from the repository configuration."""
        result = run_subprocess_with_context(
            cmd=["git", "config", "--local", "--unset-all", key],
            operation_context=f"unset config '{key}'",
            cwd=repo_root,
            check=False,
        )
        if result.returncode in (0, _CONFIG_KEY_NOT_SET):
            return
        raise RuntimeError(f"Failed to unset config '{key}': {result.stderr.strip()}")
