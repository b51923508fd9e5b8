"""Domain enums for diff source and patch operation selection.

DiffSource picks which comparison `git diff` produces; PatchOperation maps
each user-facing command to the diff it reads and how the built patch is
applied.
"""

from __future__ import annotations

from enum import Enum


class DiffSource(Enum):
    """Which side of the index a diff is taken from.

    Attributes:
        UNSTAGED: Working tree vs index (`git diff`)
        STAGED: Index vs HEAD (`git diff --cached`)
    """

    UNSTAGED = "unstaged"
    STAGED = "staged"

    @property
    def is_staged(self) -> bool:
        return self is DiffSource.STAGED


class PatchOperation(Enum):
    """A selective apply operation.

    Attributes:
        STAGE: Unstaged hunks applied to the index
        UNSTAGE: Staged hunks reverse-applied to the index
        DISCARD: Unstaged hunks reverse-applied to the working tree
    """

    STAGE = "stage"
    UNSTAGE = "unstage"
    DISCARD = "discard"

    @property
    def diff_source(self) -> DiffSource:
        if self is PatchOperation.UNSTAGE:
            return DiffSource.STAGED
        return DiffSource.UNSTAGED

    @property
    def apply_cached(self) -> bool:
        """Whether the patch targets the index rather than the working tree."""
        return self in (PatchOperation.STAGE, PatchOperation.UNSTAGE)

    @property
    def apply_reverse(self) -> bool:
        return self in (PatchOperation.UNSTAGE, PatchOperation.DISCARD)
