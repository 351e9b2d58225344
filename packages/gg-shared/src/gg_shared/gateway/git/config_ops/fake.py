"""Fake implementation of git configuration operations for testing."""

from pathlib import Path

from gg_shared.gateway.git.config_ops.abc import GitConfigOps
from gg_shared.gateway.git.config_ops.types import GitConfig, normalize_config_key


class FakeGitConfigOps(GitConfigOps):
    """In-memory fake implementation for testing.

    Constructor Injection: pre-configured entries passed via constructor.
    Mutation Tracking: tracks unset_value calls for test assertions.
    """

    def __init__(
        self,
        *,
        config_entries: list[tuple[str, str | None]] | None = None,
        unset_value_raises: Exception | None = None,
    ) -> None:
        """Create FakeGitConfigOps with pre-configured state.

        Args:
            config_entries: Ordered (key, value) pairs, as `git config --list` reports
            unset_value_raises: Exception to raise when unset_value() is called
        """
        self._entries = config_entries if config_entries is not None else []
        self._unset_value_raises = unset_value_raises

        # Mutation tracking
        self._unset_keys: list[str] = []

    def read_config(self, repo_root: Path) -> GitConfig:
        """Snapshot the current entries."""
        return GitConfig(self._entries)

    def unset_value(self, repo_root: Path, key: str) -> None:
        """Remove all values of key (tracks mutation)."""
        if self._unset_value_raises is not None:
            raise self._unset_value_raises
        norm = normalize_config_key(key)
        self._entries[:] = [(k, v) for k, v in self._entries if normalize_config_key(k) != norm]
        self._unset_keys.append(key)

    def set_value(self, key: str, value: str) -> None:
        """Replace all values of key; used by other fakes that write config."""
        norm = normalize_config_key(key)
        self._entries[:] = [(k, v) for k, v in self._entries if normalize_config_key(k) != norm]
        self._entries.append((key, value))

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def unset_keys(self) -> list[str]:
        """Read-only access to unset_value keys for test assertions."""
        return list(self._unset_keys)

    @property
    def entries(self) -> list[tuple[str, str | None]]:
        """Current configuration entries."""
        return list(self._entries)
