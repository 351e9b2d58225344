"""Pull orchestration: snapshot, plan, fetch, reconcile."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from gg.core.pull.errors import ReconcileError, TagConflictError, UpdateError
from gg.core.pull.plan import FetchPlan, build_fetch_plan
from gg.core.pull.reconcile import ReconcileReport, reconcile
from gg.core.pull.source import FetchSource, NamedRemote, infer_source, resolve_source
from gg_shared.gateway.git.abc import Git
from gg_shared.gateway.git.config_ops.types import GitConfig
from gg_shared.gateway.git.ref_ops.types import branch_name, is_branch_ref

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullOutcome:
    """Result of a successful pull_refs call."""

    source: FetchSource
    config: GitConfig
    head_ref: str | None
    plan: FetchPlan
    report: ReconcileReport


def pull_refs(
    git: Git,
    repo_root: Path,
    *,
    source_arg: str | None,
    refs: Sequence[str],
    pattern: str | None,
    force_tags: bool,
) -> PullOutcome:
    """Fetch the selected refs and reconcile local branches and tags.

    Args:
        git: Git gateway
        repo_root: Repository root
        source_arg: Remote name or URL; inferred from the checked-out branch
            (or "origin") when None
        refs: Explicit ref names to pull; empty to pull everything
        pattern: Glob selecting refs to pull, or None
        force_tags: Overwrite local tags that differ from the source

    Raises:
        PullError: For hard errors (before any mutation), for reconciliation
            failures (ReconcileError), and for tags left in conflict
        RuntimeError: If git itself fails while reading state or fetching
    """
    config = git.config.read_config(repo_root)
    remotes = config.list_remotes()
    head_ref = git.ref.get_head_ref(repo_root)
    if source_arg is None:
        source_arg = infer_source(config, remotes, head_ref)
    source = resolve_source(source_arg, remotes)

    local_refs = git.ref.list_local_refs(repo_root)
    remote_refs = git.ref.list_remote_refs(repo_root, source.location)
    plan = build_fetch_plan(
        source,
        remotes,
        local_refs,
        remote_refs,
        refs=refs,
        pattern=pattern,
        force_tags=force_tags,
    )

    if plan.has_refspecs:
        git.remote.fetch(repo_root, source.location, plan.refspecs)
    else:
        logger.debug("nothing to fetch from %s", source)

    try:
        report = reconcile(git, repo_root, plan.ops, head_ref=head_ref)
    except ReconcileError as e:
        if plan.tag_conflicts:
            raise ReconcileError(e.report, tag_conflicts=plan.tag_conflicts) from e
        raise
    if plan.tag_conflicts:
        raise TagConflictError(plan.tag_conflicts, report=report)
    return PullOutcome(
        source=source, config=config, head_ref=head_ref, plan=plan, report=report
    )


def fast_forward_head(git: Git, repo_root: Path, outcome: PullOutcome) -> str | None:
    """Move the checked-out branch to what was just pulled for it.

    The upstream is the branch's configured merge ref when it tracks the
    source, otherwise the source branch with the same name.

    Returns:
        The commit the working copy was moved to, or None if there was
        nothing to do

    Raises:
        UpdateError: If the checked-out branch has diverged from the source
        RuntimeError: If git fails to merge
    """
    head_ref = outcome.head_ref
    if head_ref is None or not is_branch_ref(head_ref):
        return None
    name = branch_name(head_ref)
    upstream = head_ref
    if isinstance(outcome.source, NamedRemote):
        configured_remote = outcome.config.value(f"branch.{name}.remote")
        configured_merge = outcome.config.value(f"branch.{name}.merge")
        if configured_remote == outcome.source.location and configured_merge:
            upstream = configured_merge

    ops = outcome.plan.ops
    if upstream not in outcome.plan.fetched_branches:
        return None
    target = ops.remote_refs[upstream]
    current = ops.local_refs.get(head_ref)
    if current == target:
        return None
    if current is not None and git.ref.is_ancestor(repo_root, target, current):
        # Local branch already contains everything pulled.
        return None
    if current is not None and not git.ref.is_ancestor(repo_root, current, target):
        raise UpdateError(f"{name} has diverged from {upstream} in {outcome.source}; not updating")
    git.branch.merge_fast_forward(repo_root, target)
    return target
