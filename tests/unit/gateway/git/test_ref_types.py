"""Tests for ref naming helpers and RefMutation rendering."""

from gg_shared.gateway.git.ref_ops.types import (
    RefMutation,
    branch_name,
    branch_ref,
    graveyard_ref,
    is_branch_ref,
    is_tag_ref,
    is_valid_hash,
    short_ref_name,
    tag_ref,
)
from tests.test_utils.git_state import sha


def test_ref_classification() -> None:
    assert is_branch_ref("refs/heads/main")
    assert not is_branch_ref("refs/heads/")
    assert not is_branch_ref("refs/remotes/origin/main")
    assert is_tag_ref("refs/tags/v1")
    assert not is_tag_ref("refs/heads/v1")
    assert not is_branch_ref("HEAD")
    assert not is_tag_ref("HEAD")


def test_ref_builders() -> None:
    assert branch_ref("feature/x") == "refs/heads/feature/x"
    assert tag_ref("v1") == "refs/tags/v1"
    assert graveyard_ref("old-topic") == "refs/gg-old/old-topic"


def test_branch_name_only_for_branches() -> None:
    assert branch_name("refs/heads/feature/x") == "feature/x"
    assert branch_name("refs/tags/v1") == ""


def test_short_ref_name() -> None:
    assert short_ref_name("refs/heads/main") == "main"
    assert short_ref_name("refs/tags/v1") == "v1"
    assert short_ref_name("refs/remotes/origin/main") == "refs/remotes/origin/main"


def test_is_valid_hash() -> None:
    assert is_valid_hash(sha("a"))
    assert is_valid_hash("0" * 64)
    assert not is_valid_hash("A" * 40)
    assert not is_valid_hash("a" * 39)


def test_update_ref_commands() -> None:
    ref = "refs/heads/main"

    assert RefMutation.set_ref(sha("b")).to_update_ref_command(ref) == f"update {ref} {sha('b')}"
    assert (
        RefMutation.set_ref(sha("b"), expected_old=sha("a")).to_update_ref_command(ref)
        == f"update {ref} {sha('b')} {sha('a')}"
    )
    assert RefMutation.create_ref(sha("b")).to_update_ref_command(ref) == f"create {ref} {sha('b')}"
    assert RefMutation.delete_ref().to_update_ref_command(ref) == f"delete {ref}"
    assert (
        RefMutation.delete_ref(expected_old=sha("a")).to_update_ref_command(ref)
        == f"delete {ref} {sha('a')}"
    )
