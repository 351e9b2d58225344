"""Production implementation of Git remote operations using subprocess."""

from collections.abc import Sequence
from pathlib import Path

from gg_shared.gateway.git.remote_ops.abc import GitRemoteOps
from gg_shared.subprocess_utils import copied_env_for_git_subprocess, run_subprocess_with_context

# Timeout in seconds for network-touching git operations.
# Prevents indefinite hangs on network issues or credential prompts.
_GIT_NETWORK_TIMEOUT = 600


class RealGitRemoteOps(GitRemoteOps):
    """Real implementation of Git remote operations using subprocess."""

    def fetch(self, repo_root: Path, source: str, refspecs: Sequence[str]) -> None:
        """Fetch refspecs from a remote name or URL."""
        run_subprocess_with_context(
            cmd=["git", "fetch", "--quiet", "--", source, *refspecs],
            operation_context=f"fetch from '{source}'",
            cwd=repo_root,
            timeout=_GIT_NETWORK_TIMEOUT,
            env=copied_env_for_git_subprocess(),
        )
