"""Tests for the gg pull command."""

from click.testing import CliRunner

from gg.cli.cli import cli
from gg.core.context import GgContext
from gg_shared.gateway.git.fake import FakeGit
from tests.test_utils.git_state import ORIGIN_URL, remote_entries, sha, tracking_entries

MAIN = "refs/heads/main"


def _git(local: dict, remote: dict, **kwargs) -> FakeGit:
    kwargs.setdefault("head_ref", MAIN)
    kwargs.setdefault(
        "config_entries", remote_entries("origin", ORIGIN_URL) + tracking_entries("main", "origin")
    )
    return FakeGit(local_refs=local, remote_refs={"origin": remote}, **kwargs)


def test_pull_reports_created_and_retired_branches() -> None:
    git = _git(
        {
            MAIN: sha("a"),
            "refs/remotes/origin/main": sha("a"),
            "refs/heads/old": sha("c"),
            "refs/remotes/origin/old": sha("c"),
        },
        {MAIN: sha("a"), "refs/heads/feature": sha("b")},
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["pull"], obj=GgContext.for_test(git=git), catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "Created branch feature" in result.output
    assert "Moved deleted branch old to refs/gg-old/old" in result.output
    assert git.local_refs["refs/heads/feature"] == sha("b")


def test_pull_hints_at_update_for_checked_out_branch() -> None:
    git = _git({MAIN: sha("a")}, {MAIN: sha("b")}, commit_parents={sha("b"): (sha("a"),)})
    runner = CliRunner()

    result = runner.invoke(cli, ["pull"], obj=GgContext.for_test(git=git), catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "main is checked out; run 'gg pull -u' to update it" in result.output
    assert git.local_refs[MAIN] == sha("a")


def test_pull_update_moves_working_copy() -> None:
    git = _git({MAIN: sha("a")}, {MAIN: sha("b")}, commit_parents={sha("b"): (sha("a"),)})
    runner = CliRunner()

    result = runner.invoke(
        cli, ["pull", "-u"], obj=GgContext.for_test(git=git), catch_exceptions=False
    )

    assert result.exit_code == 0, result.output
    assert f"Updated working copy to {sha('b')[:12]}" in result.output
    assert git.fast_forwards == [sha("b")]


def test_pull_update_fails_on_diverged_head() -> None:
    git = _git({MAIN: sha("a")}, {MAIN: sha("b")})
    runner = CliRunner()

    result = runner.invoke(
        cli, ["pull", "-u"], obj=GgContext.for_test(git=git), catch_exceptions=False
    )

    assert result.exit_code == 1
    assert "Error: main has diverged" in result.output


def test_pull_warns_about_diverged_branch() -> None:
    git = _git({MAIN: sha("a"), "refs/heads/dev": sha("c")}, {"refs/heads/dev": sha("b")})
    runner = CliRunner()

    result = runner.invoke(cli, ["pull"], obj=GgContext.for_test(git=git), catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "Warning: dev has diverged from the source; not updated" in result.output


def test_pull_tag_conflict_exits_with_error() -> None:
    git = _git({MAIN: sha("a"), "refs/tags/v1": sha("a")}, {"refs/tags/v1": sha("b")})
    runner = CliRunner()

    result = runner.invoke(cli, ["pull"], obj=GgContext.for_test(git=git), catch_exceptions=False)

    assert result.exit_code == 1
    assert "Error: tags differ from remote (use --force-tags to overwrite)" in result.output
    assert "refs/tags/v1" in result.output


def test_pull_force_tags() -> None:
    git = _git({MAIN: sha("a"), "refs/tags/v1": sha("a")}, {"refs/tags/v1": sha("b")})
    runner = CliRunner()

    result = runner.invoke(
        cli, ["pull", "--force-tags"], obj=GgContext.for_test(git=git), catch_exceptions=False
    )

    assert result.exit_code == 0, result.output
    assert git.local_refs["refs/tags/v1"] == sha("b")


def test_pull_ref_and_pattern_are_exclusive() -> None:
    git = _git({MAIN: sha("a")}, {MAIN: sha("a")})
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["pull", "-r", "main", "--pattern", "*"],
        obj=GgContext.for_test(git=git),
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "Error: can't pass both explicit refs and a pattern" in result.output
    assert git.fetches == []


def test_pull_unknown_ref() -> None:
    git = _git({MAIN: sha("a")}, {MAIN: sha("a")})
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["pull", "origin", "-r", "nope"],
        obj=GgContext.for_test(git=git),
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "Error: can't find ref 'nope' in remote 'origin'" in result.output


def test_pull_reports_failed_refs() -> None:
    git = _git(
        {MAIN: sha("a"), "refs/heads/dev": sha("a")},
        {"refs/heads/dev": sha("b"), "refs/heads/feature": sha("c")},
        commit_parents={sha("b"): (sha("a"),)},
        failing_refs={"refs/heads/dev"},
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["pull"], obj=GgContext.for_test(git=git), catch_exceptions=False)

    assert result.exit_code == 1
    assert "Created branch feature" in result.output
    assert "Failed: dev" in result.output
    assert "Error: failed to update 1 ref(s): refs/heads/dev" in result.output


def test_pull_unreachable_source() -> None:
    git = FakeGit(head_ref=MAIN, config_entries=remote_entries("origin", ORIGIN_URL))
    runner = CliRunner()

    result = runner.invoke(cli, ["pull"], obj=GgContext.for_test(git=git), catch_exceptions=False)

    assert result.exit_code == 1
    assert "Error: Failed to list refs of 'origin'" in result.output


def test_pull_tag_conflict_still_reports_reconciled_branches() -> None:
    git = _git(
        {MAIN: sha("a"), "refs/tags/v1": sha("a"), "refs/heads/dev": sha("d")},
        {"refs/tags/v1": sha("c"), "refs/heads/feature": sha("b"), "refs/heads/dev": sha("e")},
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["pull"], obj=GgContext.for_test(git=git), catch_exceptions=False)

    assert result.exit_code == 1
    assert "Created branch feature" in result.output
    assert "Warning: dev has diverged from the source; not updated" in result.output
    assert "Error: tags differ from remote (use --force-tags to overwrite)" in result.output
    assert git.local_refs["refs/heads/feature"] == sha("b")


def test_pull_does_not_warn_about_branch_ahead_of_source() -> None:
    git = _git(
        {MAIN: sha("a"), "refs/heads/dev": sha("c")},
        {"refs/heads/dev": sha("b")},
        commit_parents={sha("c"): (sha("b"),)},
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["pull"], obj=GgContext.for_test(git=git), catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "diverged" not in result.output
    assert git.local_refs["refs/heads/dev"] == sha("c")
