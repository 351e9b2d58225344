"""Apply a fetch plan's deferred operations to local refs.

Every operation is independent: a failure is logged and recorded, and the
reconciler moves on. Nothing is rolled back. All ref writes are conditional
on the value captured in the local snapshot, so a ref moved by someone else
since the snapshot is left alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from gg.core.pull.errors import ReconcileError, RefFailure
from gg.core.pull.plan import DeferredFetchOps
from gg.core.pull.source import NamedRemote
from gg_shared.gateway.git.abc import Git
from gg_shared.gateway.git.ref_ops.types import (
    GRAVEYARD_PREFIX,
    RefMutation,
    branch_name,
    graveyard_ref,
    is_branch_ref,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileReport:
    """What reconciliation did, ref by ref.

    Attributes:
        created: Branches created from the source
        fast_forwarded: Branches moved forward to the source's commit
        diverged: Branches left alone because they are not ancestors of the source
        ahead: Branches left alone because they already contain the source's commit
        skipped_head: The checked-out branch, if the plan wanted to touch it
        retired: Branches moved into the graveyard namespace
        deleted: Remote-tracking and graveyard refs deleted
        warnings: Messages for the user that are not failures
        failures: Operations that failed
    """

    created: tuple[str, ...] = ()
    fast_forwarded: tuple[str, ...] = ()
    diverged: tuple[str, ...] = ()
    ahead: tuple[str, ...] = ()
    skipped_head: str | None = None
    retired: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    failures: tuple[RefFailure, ...] = ()

    @property
    def mutated(self) -> bool:
        return bool(self.created or self.fast_forwarded or self.retired or self.deleted)


@dataclass
class _ReportBuilder:
    created: list[str] = field(default_factory=list)
    fast_forwarded: list[str] = field(default_factory=list)
    diverged: list[str] = field(default_factory=list)
    ahead: list[str] = field(default_factory=list)
    skipped_head: str | None = None
    retired: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    failures: list[RefFailure] = field(default_factory=list)

    def fail(self, ref: str, error: Exception) -> None:
        logger.warning("%s: %s", ref, error)
        self.failures.append(RefFailure(ref=ref, message=str(error)))

    def build(self) -> ReconcileReport:
        return ReconcileReport(
            created=tuple(self.created),
            fast_forwarded=tuple(self.fast_forwarded),
            diverged=tuple(self.diverged),
            ahead=tuple(self.ahead),
            skipped_head=self.skipped_head,
            retired=tuple(self.retired),
            deleted=tuple(self.deleted),
            warnings=tuple(self.warnings),
            failures=tuple(self.failures),
        )


def reconcile(
    git: Git, repo_root: Path, ops: DeferredFetchOps, *, head_ref: str | None
) -> ReconcileReport:
    """Create, fast-forward and retire local refs after a fetch.

    Args:
        git: Git gateway used for every mutation
        repo_root: Repository root
        ops: Deferred operations from the fetch plan
        head_ref: Ref HEAD points to; this branch is never moved

    Returns:
        Report of the applied operations

    Raises:
        ReconcileError: After attempting everything, if any operation failed
    """
    report = _ReportBuilder()
    for ref in ops.create_branches:
        if ref == head_ref:
            report.skipped_head = ref
            continue
        _create_branch(git, repo_root, ops, ref, report)
    for ref in ops.fast_forward_branches:
        if ref == head_ref:
            report.skipped_head = ref
            continue
        _fast_forward_branch(git, repo_root, ops, ref, report)
    if ops.deleted_refs:
        _prune_graveyard(git, repo_root, ops, report)
        for ref, expected in sorted(ops.deleted_refs.items()):
            if is_branch_ref(ref):
                _retire_branch(git, repo_root, ref, expected, head_ref, report)
            else:
                _delete_ref(git, repo_root, ref, expected, report)

    result = report.build()
    if result.failures:
        raise ReconcileError(result)
    return result


def _create_branch(
    git: Git, repo_root: Path, ops: DeferredFetchOps, ref: str, report: _ReportBuilder
) -> None:
    name = branch_name(ref)
    start_point = ops.fetched_ref(ref)
    track = isinstance(ops.source, NamedRemote) and start_point is not None
    if start_point is None:
        # Source refspecs don't store this branch anywhere; start from the commit.
        start_point = ops.remote_refs[ref]
    try:
        git.branch.create_branch(repo_root, name, start_point, track=track, force=False)
    except RuntimeError as e:
        report.fail(ref, e)
        return
    logger.debug("created %s at %s (track=%s)", ref, start_point, track)
    report.created.append(ref)


def _fast_forward_branch(
    git: Git, repo_root: Path, ops: DeferredFetchOps, ref: str, report: _ReportBuilder
) -> None:
    old_hash = ops.local_refs[ref]
    new_hash = ops.remote_refs[ref]
    try:
        if not git.ref.is_ancestor(repo_root, old_hash, new_hash):
            if git.ref.is_ancestor(repo_root, new_hash, old_hash):
                logger.debug("%s is ahead of %s; not updating", ref, ops.source)
                report.ahead.append(ref)
            else:
                logger.debug("%s has diverged from %s; not updating", ref, ops.source)
                report.diverged.append(ref)
            return
        git.ref.mutate_refs(repo_root, {ref: RefMutation.set_ref(new_hash, expected_old=old_hash)})
    except RuntimeError as e:
        report.fail(ref, e)
        return
    report.fast_forwarded.append(ref)


def _prune_graveyard(
    git: Git, repo_root: Path, ops: DeferredFetchOps, report: _ReportBuilder
) -> None:
    for ref, expected in sorted(ops.local_refs.with_prefix(GRAVEYARD_PREFIX).items()):
        _delete_ref(git, repo_root, ref, expected, report)


def _delete_ref(
    git: Git, repo_root: Path, ref: str, expected: str, report: _ReportBuilder
) -> None:
    try:
        git.ref.mutate_refs(repo_root, {ref: RefMutation.delete_ref(expected_old=expected)})
    except RuntimeError as e:
        report.fail(ref, e)
        return
    report.deleted.append(ref)


def _retire_branch(
    git: Git,
    repo_root: Path,
    ref: str,
    expected: str,
    head_ref: str | None,
    report: _ReportBuilder,
) -> None:
    name = branch_name(ref)
    if ref == head_ref:
        report.warnings.append(
            f"{name} was deleted from the remote but is checked out; "
            "keeping the branch and removing its upstream"
        )
        _clear_upstream(git, repo_root, ref, report)
        return
    try:
        git.ref.mutate_refs(
            repo_root,
            {
                graveyard_ref(name): RefMutation.create_ref(expected),
                ref: RefMutation.delete_ref(expected_old=expected),
            },
        )
    except RuntimeError as e:
        report.fail(ref, e)
        return
    report.retired.append(ref)
    _clear_upstream(git, repo_root, ref, report)


def _clear_upstream(git: Git, repo_root: Path, ref: str, report: _ReportBuilder) -> None:
    name = branch_name(ref)
    for key in (f"branch.{name}.remote", f"branch.{name}.merge"):
        try:
            git.config.unset_value(repo_root, key)
        except RuntimeError as e:
            report.fail(ref, e)
