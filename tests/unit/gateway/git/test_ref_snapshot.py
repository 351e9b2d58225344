"""Tests for ref listing parsing and RefSnapshot."""

import pytest

from gg_shared.gateway.git.ref_ops.snapshot import DuplicateRefError, RefSnapshot, parse_ref_listing
from tests.test_utils.git_state import sha


def test_parse_show_ref_output() -> None:
    """show-ref separates hash and ref with a space."""
    snapshot = parse_ref_listing(
        [
            f"{sha('a')} refs/heads/main",
            f"{sha('b')} refs/remotes/origin/main",
        ]
    )

    assert dict(snapshot) == {
        "refs/heads/main": sha("a"),
        "refs/remotes/origin/main": sha("b"),
    }


def test_parse_ls_remote_output_with_peeled_tag() -> None:
    """The peeled line of an annotated tag replaces the tag object hash."""
    snapshot = parse_ref_listing(
        [
            f"{sha('a')}\tHEAD",
            f"{sha('a')}\trefs/heads/main",
            f"{sha('c')}\trefs/tags/v1",
            f"{sha('a')}\trefs/tags/v1^{{}}",
        ]
    )

    assert snapshot["HEAD"] == sha("a")
    assert snapshot["refs/tags/v1"] == sha("a")
    assert len(snapshot) == 3


def test_parse_ignores_blank_lines() -> None:
    snapshot = parse_ref_listing(["", f"{sha('a')} refs/heads/main", "   "])

    assert list(snapshot) == ["refs/heads/main"]


def test_duplicate_ref_is_rejected() -> None:
    with pytest.raises(DuplicateRefError, match="multiple hashes found for refs/heads/main"):
        parse_ref_listing(
            [
                f"{sha('a')} refs/heads/main",
                f"{sha('b')} refs/heads/main",
            ]
        )


def test_duplicate_peeled_tag_is_rejected() -> None:
    with pytest.raises(DuplicateRefError, match="multiple hashes found for tag refs/tags/v1"):
        parse_ref_listing(
            [
                f"{sha('c')} refs/tags/v1",
                f"{sha('a')} refs/tags/v1^{{}}",
                f"{sha('b')} refs/tags/v1^{{}}",
            ]
        )


def test_malformed_line_is_rejected() -> None:
    with pytest.raises(ValueError, match="could not parse"):
        parse_ref_listing([sha("a")])


def test_invalid_hash_is_rejected() -> None:
    with pytest.raises(ValueError, match="invalid hash"):
        parse_ref_listing(["xyz refs/heads/main"])


def test_sha256_hashes_are_accepted() -> None:
    long_hash = "d" * 64
    snapshot = parse_ref_listing([f"{long_hash} refs/heads/main"])

    assert snapshot["refs/heads/main"] == long_hash


def test_snapshot_is_read_only() -> None:
    snapshot = RefSnapshot({"refs/heads/main": sha("a")})

    with pytest.raises(TypeError):
        snapshot["refs/heads/main"] = sha("b")  # type: ignore[index]


def test_snapshot_copies_its_input() -> None:
    source = {"refs/heads/main": sha("a")}
    snapshot = RefSnapshot(source)

    source["refs/heads/main"] = sha("b")

    assert snapshot["refs/heads/main"] == sha("a")


def test_with_prefix_filters_refs() -> None:
    snapshot = RefSnapshot(
        {
            "refs/gg-old/topic": sha("a"),
            "refs/gg-old/other": sha("b"),
            "refs/heads/main": sha("c"),
        }
    )

    assert snapshot.with_prefix("refs/gg-old/") == {
        "refs/gg-old/topic": sha("a"),
        "refs/gg-old/other": sha("b"),
    }
