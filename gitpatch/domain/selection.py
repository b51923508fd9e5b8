"""Selector parsing and hunk selection.

Selector formats:
    "1"         -> HunkSelection({1})
    "1,3,5"     -> HunkSelection({1, 3, 5})
    "1-5"       -> HunkSelection({1, 2, 3, 4, 5})
    "1-3,7,9"   -> HunkSelection({1, 2, 3, 7, 9})
    "1:2-4"     -> LineSelection(hunk_id=1, line_indices={2, 3, 4})
    "1:3,5,8"   -> LineSelection(hunk_id=1, line_indices={3, 5, 8})

Line indices count only added/removed lines within the hunk, starting at 1.
The parser knows nothing about which hunks exist; unknown ids surface later
when the patch is built.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gitpatch.domain.diff import FileDiff, all_hunk_ids

_NUMBER_PATTERN = re.compile(r"[0-9]+")
_RANGE_PATTERN = re.compile(r"([0-9]+)-([0-9]+)")


class InvalidSelectorError(Exception):
    """Raised when selector text does not match the selector grammar."""

    pass


@dataclass(frozen=True)
class HunkSelection:
    """Whole hunks selected by id."""

    ids: frozenset[int]

    @property
    def sorted_ids(self) -> list[int]:
        return sorted(self.ids)


@dataclass(frozen=True)
class LineSelection:
    """Individual change lines selected within a single hunk."""

    hunk_id: int
    line_indices: frozenset[int]


Selection = HunkSelection | LineSelection


# ============================================================
# Selector Parsing
# ============================================================


def parse_selector(text: str | None) -> Selection:
    """Parse selector text into a Selection.

    Args:
        text: Selector such as "3", "1-4,7" or "2:1,3"

    Returns:
        HunkSelection or LineSelection

    Raises:
        InvalidSelectorError: If the text is empty or malformed
    """
    if not text:
        raise InvalidSelectorError("no selector provided")

    if ":" in text:
        hunk_part, line_part = text.split(":", 1)
        if not _NUMBER_PATTERN.fullmatch(hunk_part):
            raise InvalidSelectorError(f"invalid hunk id: {hunk_part}")
        return LineSelection(
            hunk_id=int(hunk_part),
            line_indices=frozenset(expand_number_spec(line_part)),
        )

    return HunkSelection(ids=frozenset(expand_number_spec(text)))


def expand_number_spec(spec: str) -> list[int]:
    """Expand a comma-separated list of numbers and inclusive ranges.

    Raises:
        InvalidSelectorError: Naming the first offending token
    """
    numbers: list[int] = []
    for token in spec.split(","):
        token = token.strip()
        if "-" in token:
            match = _RANGE_PATTERN.fullmatch(token)
            if not match:
                raise InvalidSelectorError(f"invalid range: {token}")
            start, end = int(match.group(1)), int(match.group(2))
            if start > end:
                raise InvalidSelectorError(f"invalid range: {token}")
            numbers.extend(range(start, end + 1))
        elif _NUMBER_PATTERN.fullmatch(token):
            numbers.append(int(token))
        else:
            raise InvalidSelectorError(f"invalid number: {token}")
    return numbers


# ============================================================
# Selection Shortcuts
# ============================================================


def select_all(file_diffs: list[FileDiff]) -> HunkSelection:
    """Select every hunk in the parsed snapshot."""
    return HunkSelection(ids=frozenset(all_hunk_ids(file_diffs)))


def select_matching(file_diffs: list[FileDiff], pattern: str) -> HunkSelection:
    """Select hunks with at least one change line matching a regex.

    Only added and removed lines are searched; context is ignored.

    Raises:
        InvalidSelectorError: If the pattern is not a valid regular expression
    """
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise InvalidSelectorError(f"invalid pattern: {pattern} ({e})")

    ids = [
        hunk.id
        for file_diff in file_diffs
        for hunk in file_diff.hunks
        if any(regex.search(line.content) for line in hunk.get_change_lines())
    ]
    return HunkSelection(ids=frozenset(ids))
