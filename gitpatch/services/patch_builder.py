"""Patch reconstruction from hunk and line selections.

Builds standalone unified diffs that `git apply` accepts from a parsed
snapshot. Whole-hunk patches replay the original hunk text unchanged.
Line-level patches rewrite a single hunk so that only the selected change
lines take effect:

- unselected `-` lines become context (the line stays in the result)
- unselected `+` lines are dropped (the line never appears)

The same rewritten hunk works for staging (applied forwards) and for
unstaging or discarding (applied with --reverse).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from gitpatch.domain.diff import DiffLine, DiffLineType, FileDiff, Hunk, find_hunk
from gitpatch.domain.selection import HunkSelection, LineSelection, Selection

logger = logging.getLogger(__name__)


class HunkNotFoundError(Exception):
    """Raised when a selection references a hunk id absent from the diff."""

    pass


# ============================================================
# Public API
# ============================================================


def build_patch(file_diffs: list[FileDiff], selection: Selection) -> str:
    """Build a patch for any kind of selection."""
    if isinstance(selection, HunkSelection):
        return build_patch_from_hunks(file_diffs, selection.ids)
    if isinstance(selection, LineSelection):
        return build_patch_from_lines(file_diffs, selection.hunk_id, selection.line_indices)
    raise TypeError(f"Unsupported selection: {selection!r}")


def build_patch_from_hunks(file_diffs: list[FileDiff], hunk_ids: Iterable[int]) -> str:
    """Build a patch containing only the requested hunks.

    Args:
        file_diffs: Parsed snapshot
        hunk_ids: Ids of hunks to keep; unknown ids are ignored

    Returns:
        Patch text ending in a single newline, or "" if no hunk survived
    """
    wanted = set(hunk_ids)
    blocks: list[str] = []

    for file_diff in file_diffs:
        selected = [hunk for hunk in file_diff.hunks if hunk.id in wanted]
        if not selected:
            continue
        body = "\n".join(_format_hunk(hunk) for hunk in selected)
        blocks.append(f"{build_file_header(file_diff)}\n{body}")

    if not blocks:
        logger.debug("No hunks matched ids %s", sorted(wanted))
        return ""

    return "\n".join(blocks) + "\n"


def build_patch_from_lines(
    file_diffs: list[FileDiff],
    hunk_id: int,
    line_indices: Iterable[int],
) -> str:
    """Build a patch for selected change lines of a single hunk.

    Args:
        file_diffs: Parsed snapshot
        hunk_id: Id of the hunk to rewrite
        line_indices: 1-based change-line indices to keep; indices beyond
            the hunk's change lines select nothing

    Returns:
        Patch text for one file with one rewritten hunk

    Raises:
        HunkNotFoundError: If no hunk has the given id
    """
    found = find_hunk(file_diffs, hunk_id)
    if found is None:
        raise HunkNotFoundError(f"Hunk {hunk_id} not found")
    file_diff, hunk = found

    lines = rewrite_hunk_lines(hunk, set(line_indices))
    old_count = sum(1 for line in lines if line.line_type in (DiffLineType.CONTEXT, DiffLineType.REMOVED))
    new_count = sum(1 for line in lines if line.line_type in (DiffLineType.CONTEXT, DiffLineType.ADDED))

    header = f"@@ -{hunk.old_start},{old_count} +{hunk.new_start},{new_count} @@"
    if hunk.context:
        header += f" {hunk.context}"

    body = "\n".join([header] + [line.content for line in lines])
    return f"{build_file_header(file_diff)}\n{body}\n"


def rewrite_hunk_lines(hunk: Hunk, selected: set[int]) -> list[DiffLine]:
    """Apply a change-line selection to a hunk's lines.

    Context and no-newline lines are always kept. Change lines are numbered
    from 1 in order; unselected removals are demoted to context and
    unselected additions are dropped.
    """
    rewritten: list[DiffLine] = []
    change_index = 0

    for line in hunk.lines:
        if line.line_type in (DiffLineType.CONTEXT, DiffLineType.NO_NEWLINE):
            rewritten.append(line)
            continue

        change_index += 1
        if change_index in selected:
            rewritten.append(line)
        elif line.line_type == DiffLineType.REMOVED:
            rewritten.append(
                replace(line, line_type=DiffLineType.CONTEXT, content=f" {line.content[1:]}")
            )
        elif line.line_type == DiffLineType.ADDED:
            continue
        else:
            raise ValueError(f"Unhandled diff line type: {line.line_type}")

    return rewritten


def build_file_header(file_diff: FileDiff) -> str:
    """Build the `diff --git` / metadata / `---` / `+++` header for a file.

    Stored paths are used when present; otherwise `a/<path>` and `b/<path>`
    are synthesized so programmatically built file diffs still apply.
    """
    diff_old_path = file_diff.diff_old_path or f"a/{file_diff.path}"
    diff_new_path = file_diff.diff_new_path or f"b/{file_diff.path}"
    old_path = file_diff.old_path or diff_old_path
    new_path = file_diff.new_path or diff_new_path

    header_lines = [f"diff --git {diff_old_path} {diff_new_path}"]
    header_lines.extend(file_diff.metadata_lines)
    header_lines.extend([f"--- {old_path}", f"+++ {new_path}"])
    return "\n".join(header_lines)


def _format_hunk(hunk: Hunk) -> str:
    return "\n".join([hunk.header] + [line.content for line in hunk.lines])
