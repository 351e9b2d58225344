"""Ref naming helpers and ref mutation types.

Refs are plain strings ("refs/heads/main", "refs/tags/v1", "HEAD"). These
helpers classify and build them without touching the repository.
"""

import re
from dataclasses import dataclass
from typing import Literal

BRANCH_PREFIX = "refs/heads/"
TAG_PREFIX = "refs/tags/"
REMOTES_PREFIX = "refs/remotes/"

# Branches whose last remote source dropped them are moved here.
GRAVEYARD_PREFIX = "refs/gg-old/"

HEAD = "HEAD"

_HASH_RE = re.compile(r"^[0-9a-f]{40}(?:[0-9a-f]{24})?$")


def is_valid_hash(value: str) -> bool:
    """Report whether value is a full SHA-1 or SHA-256 hex object id."""
    return _HASH_RE.match(value) is not None


def is_branch_ref(ref: str) -> bool:
    return ref.startswith(BRANCH_PREFIX) and len(ref) > len(BRANCH_PREFIX)


def is_tag_ref(ref: str) -> bool:
    return ref.startswith(TAG_PREFIX) and len(ref) > len(TAG_PREFIX)


def branch_ref(name: str) -> str:
    return BRANCH_PREFIX + name


def tag_ref(name: str) -> str:
    return TAG_PREFIX + name


def graveyard_ref(branch: str) -> str:
    return GRAVEYARD_PREFIX + branch


def branch_name(ref: str) -> str:
    """Return the branch name of a refs/heads/ ref, or "" for anything else."""
    if not is_branch_ref(ref):
        return ""
    return ref[len(BRANCH_PREFIX) :]


def short_ref_name(ref: str) -> str:
    """Strip the refs/heads/ or refs/tags/ prefix from a ref.

    Other refs are returned unchanged.
    """
    if is_branch_ref(ref):
        return ref[len(BRANCH_PREFIX) :]
    if is_tag_ref(ref):
        return ref[len(TAG_PREFIX) :]
    return ref


MutationKind = Literal["set", "create", "delete"]


@dataclass(frozen=True)
class RefMutation:
    """A single ref change applied by GitRefOps.mutate_refs.

    expected_old, when given, makes the change conditional: the executor must
    refuse it unless the ref currently points at that hash.

    Attributes:
        kind: "set" (create or overwrite), "create" (ref must not exist),
            or "delete"
        new_value: Target hash for "set" and "create"
        expected_old: Required current hash, or None for unconditional
    """

    kind: MutationKind
    new_value: str | None = None
    expected_old: str | None = None

    @staticmethod
    def set_ref(new_value: str, expected_old: str | None = None) -> "RefMutation":
        return RefMutation(kind="set", new_value=new_value, expected_old=expected_old)

    @staticmethod
    def create_ref(new_value: str) -> "RefMutation":
        return RefMutation(kind="create", new_value=new_value)

    @staticmethod
    def delete_ref(expected_old: str | None = None) -> "RefMutation":
        return RefMutation(kind="delete", expected_old=expected_old)

    def to_update_ref_command(self, ref: str) -> str:
        """Render this mutation as a `git update-ref --stdin` command line."""
        if self.kind == "create":
            return f"create {ref} {self.new_value}"
        if self.kind == "delete":
            if self.expected_old is None:
                return f"delete {ref}"
            return f"delete {ref} {self.expected_old}"
        if self.expected_old is None:
            return f"update {ref} {self.new_value}"
        return f"update {ref} {self.new_value} {self.expected_old}"
