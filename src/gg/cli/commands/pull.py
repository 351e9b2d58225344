import click

from gg.core.context import GgContext
from gg.core.pull.errors import PullError, ReconcileError, TagConflictError
from gg.core.pull.reconcile import ReconcileReport
from gg.core.pull.sync import fast_forward_head, pull_refs
from gg_shared.gateway.git.ref_ops.types import branch_name, graveyard_ref, short_ref_name
from gg_shared.output.output import user_output


@click.command("pull")
@click.argument("source", required=False)
@click.option(
    "-r",
    "--ref",
    "refs",
    multiple=True,
    metavar="REF",
    help="Branch or tag to pull (may be repeated). Defaults to everything.",
)
@click.option("--pattern", metavar="GLOB", help="Pull branches and tags whose names match GLOB.")
@click.option(
    "--force-tags", is_flag=True, help="Overwrite local tags that differ from the source."
)
@click.option(
    "-u",
    "--update",
    is_flag=True,
    help="Fast-forward the checked-out branch if new descendants were pulled.",
)
@click.pass_obj
def pull_cmd(
    ctx: GgContext,
    source: str | None,
    refs: tuple[str, ...],
    pattern: str | None,
    force_tags: bool,
    update: bool,
) -> None:
    """Pull changes from SOURCE.

    SOURCE is a remote name or URL. If omitted, the checked-out branch's
    remote is used, falling back to "origin".

    Local branches are created for new remote branches and fast-forwarded
    when the remote has descendants of them. Branches deleted on the remote
    are moved to refs/gg-old/ when no other remote still serves them. The
    checked-out branch is only moved with -u.
    """
    try:
        outcome = pull_refs(
            ctx.git,
            ctx.cwd,
            source_arg=source,
            refs=refs,
            pattern=pattern,
            force_tags=force_tags,
        )
    except (ReconcileError, TagConflictError) as e:
        if e.report is not None:
            _render_report(e.report)
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from None
    except (PullError, RuntimeError, ValueError) as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from None

    _render_report(outcome.report)
    if not update:
        if outcome.report.skipped_head is not None:
            name = branch_name(outcome.report.skipped_head)
            user_output(f"{name} is checked out; run 'gg pull -u' to update it")
        return

    try:
        target = fast_forward_head(ctx.git, ctx.cwd, outcome)
    except (PullError, RuntimeError) as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from None
    if target is not None:
        user_output(click.style("✓", fg="green") + f" Updated working copy to {target[:12]}")


def _render_report(report: ReconcileReport) -> None:
    for ref in report.created:
        user_output(click.style("✓", fg="green") + f" Created branch {branch_name(ref)}")
    for ref in report.fast_forwarded:
        user_output(click.style("✓", fg="green") + f" Updated branch {branch_name(ref)}")
    for ref in report.diverged:
        user_output(
            click.style("Warning: ", fg="yellow")
            + f"{branch_name(ref)} has diverged from the source; not updated"
        )
    for ref in report.retired:
        name = branch_name(ref)
        user_output(f"Moved deleted branch {name} to {graveyard_ref(name)}")
    for warning in report.warnings:
        user_output(click.style("Warning: ", fg="yellow") + warning)
    for failure in report.failures:
        user_output(click.style("Failed: ", fg="red") + f"{short_ref_name(failure.ref)}")
