"""Domain models for git-patch."""

from gitpatch.domain.diff import DiffLine, DiffLineType, FileDiff, Hunk, LineRange, parse_diff
from gitpatch.domain.diff_source import DiffSource, PatchOperation
from gitpatch.domain.selection import (
    HunkSelection,
    InvalidSelectorError,
    LineSelection,
    Selection,
    parse_selector,
)

__all__ = [
    "DiffLine",
    "DiffLineType",
    "DiffSource",
    "FileDiff",
    "Hunk",
    "HunkSelection",
    "InvalidSelectorError",
    "LineRange",
    "LineSelection",
    "PatchOperation",
    "Selection",
    "parse_diff",
    "parse_selector",
]
