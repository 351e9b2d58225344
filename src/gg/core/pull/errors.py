"""Errors raised by the pull engine.

Hard errors (everything except ReconcileError) are raised before any ref is
touched. ReconcileError is raised after every independent ref operation has
been attempted and carries the report of what did succeed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gg.core.pull.reconcile import ReconcileReport


class PullError(Exception):
    """Base class for pull failures."""


class NoSourceError(PullError):
    """No source was given and none could be inferred."""


class RefNotFoundError(PullError):
    """A requested ref does not exist on the source."""

    def __init__(self, ref: str, source: str) -> None:
        super().__init__(f"can't find ref {ref!r} in {source}")
        self.ref = ref
        self.source = source


class AmbiguousRefSelectionError(PullError):
    """Explicit refs and a pattern were both given."""

    def __init__(self) -> None:
        super().__init__("can't pass both explicit refs and a pattern")


class TagConflictError(PullError):
    """Local tags differ from the source's and --force-tags was not given.

    When raised after reconciliation, report holds what was applied to the
    other refs; it is None when the pull aborted before any mutation.
    """

    def __init__(self, tags: Sequence[str], report: ReconcileReport | None = None) -> None:
        names = ", ".join(tags)
        super().__init__(f"tags differ from remote (use --force-tags to overwrite): {names}")
        self.tags = tuple(tags)
        self.report = report


@dataclass(frozen=True)
class RefFailure:
    """A single ref operation that failed during reconciliation."""

    ref: str
    message: str


class ReconcileError(PullError):
    """One or more ref operations failed; the rest were applied."""

    def __init__(self, report: ReconcileReport, tag_conflicts: Sequence[str] = ()) -> None:
        refs = ", ".join(failure.ref for failure in report.failures)
        message = f"failed to update {len(report.failures)} ref(s): {refs}"
        if tag_conflicts:
            message += "; tags differ from remote: " + ", ".join(tag_conflicts)
        super().__init__(message)
        self.report = report
        self.tag_conflicts = tuple(tag_conflicts)


class UpdateError(PullError):
    """The checked-out branch could not be fast-forwarded after pulling."""
