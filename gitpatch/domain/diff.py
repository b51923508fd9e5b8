"""Domain models for unified diff parsing.

Parse-once pattern: raw `git diff` output is parsed into immutable, type-safe
models at the boundary. Hunks are numbered across the whole document so a
flat selector such as "7" addresses exactly one hunk regardless of file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

HUNK_HEADER_PATTERN = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$")
DIFF_GIT_PATTERN = re.compile(r"^diff --git a/(.+) b/(.+)$")
FILE_SECTION_PATTERN = re.compile(r"^(?=diff --git )", re.MULTILINE)

METADATA_PREFIXES = (
    "index ",
    "old mode",
    "new mode",
    "new file",
    "deleted file",
    "similarity index",
    "dissimilarity index",
    "rename from",
    "rename to",
    "copy from",
    "copy to",
    "Binary files",
)


# ============================================================
# Domain Models
# ============================================================


class DiffLineType(Enum):
    """Type of line in a hunk body."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"
    NO_NEWLINE = "no-newline"

    @classmethod
    def from_raw_line(cls, raw_line: str) -> DiffLineType:
        """Classify a hunk body line by its leading sigil."""
        if raw_line.startswith("+"):
            return cls.ADDED
        if raw_line.startswith("-"):
            return cls.REMOVED
        if raw_line.startswith("\\"):
            return cls.NO_NEWLINE
        return cls.CONTEXT


@dataclass(frozen=True)
class DiffLine:
    """A single line inside a hunk.

    Attributes:
        line_type: Context, added, removed, or no-newline marker
        content: The raw line including its +/-/space/backslash sigil
        old_line_number: Line number in the old file (context/removed only)
        new_line_number: Line number in the new file (context/added only)
    """

    line_type: DiffLineType
    content: str
    old_line_number: int | None = None
    new_line_number: int | None = None

    @property
    def is_change(self) -> bool:
        """Check if this line is an added or removed line."""
        return self.line_type in (DiffLineType.ADDED, DiffLineType.REMOVED)

    def to_dict(self) -> dict:
        return {
            "type": self.line_type.value,
            "content": self.content,
            "old_line_number": self.old_line_number,
            "new_line_number": self.new_line_number,
        }


@dataclass(frozen=True)
class LineRange:
    """Inclusive line range on one side of a hunk."""

    start: int
    count: int

    @property
    def end(self) -> int:
        if self.count <= 0:
            return self.start
        return self.start + self.count - 1

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "count": self.count}


@dataclass(frozen=True)
class HunkHeader:
    """Parsed fields of an `@@ -a,b +c,d @@ context` line."""

    raw: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    context: str | None = None

    @classmethod
    def parse(cls, line: str) -> HunkHeader | None:
        """Parse a hunk range line.

        Omitted counts default to 1, per unified diff convention.

        Returns:
            Parsed header, or None if the line does not match the grammar
        """
        match = HUNK_HEADER_PATTERN.match(line)
        if not match:
            return None
        return cls(
            raw=line,
            old_start=int(match.group(1)),
            old_count=int(match.group(2)) if match.group(2) is not None else 1,
            new_start=int(match.group(3)),
            new_count=int(match.group(4)) if match.group(4) is not None else 1,
            context=match.group(5).strip() or None,
        )


@dataclass(frozen=True)
class Hunk:
    """A contiguous block of changes within one file.

    The id is unique across the whole parsed document, not per file.
    """

    id: int
    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    context: str | None = None
    lines: tuple[DiffLine, ...] = ()

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @cached_property
    def added_count(self) -> int:
        return sum(1 for line in self.lines if line.line_type == DiffLineType.ADDED)

    @cached_property
    def removed_count(self) -> int:
        return sum(1 for line in self.lines if line.line_type == DiffLineType.REMOVED)

    @property
    def old_range(self) -> LineRange:
        return LineRange(start=self.old_start, count=self.old_count)

    @property
    def new_range(self) -> LineRange:
        return LineRange(start=self.new_start, count=self.new_count)

    @property
    def display_end(self) -> int:
        """Last line number shown in the `path:start-end` listing range."""
        return self.old_start + max(self.old_count, self.new_count) - 1

    def get_change_lines(self) -> list[DiffLine]:
        """Return added and removed lines in order.

        The 1-based position in this list is the change-line index used by
        `hunk:line` selectors.
        """
        return [line for line in self.lines if line.is_change]

    def to_dict(self) -> dict:
        """Convert hunk to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "header": self.header,
            "old_start": self.old_start,
            "old_count": self.old_count,
            "new_start": self.new_start,
            "new_count": self.new_count,
            "context": self.context,
            "added_count": self.added_count,
            "removed_count": self.removed_count,
            "lines": [line.to_dict() for line in self.lines],
        }

    def to_summary_dict(self, path: str) -> dict:
        """Flattened per-hunk record used by `list --json --summary`."""
        return {
            "id": self.id,
            "path": path,
            "context": self.context,
            "added_count": self.added_count,
            "removed_count": self.removed_count,
            "old_range": self.old_range.to_dict(),
            "new_range": self.new_range.to_dict(),
        }


@dataclass(frozen=True)
class FileDiff:
    """All hunks for one file, plus the header data needed to rebuild a patch.

    Attributes:
        path: New-side path used for display and filtering
        diff_old_path: `a/...` token from the `diff --git` line
        diff_new_path: `b/...` token from the `diff --git` line
        old_path: Value of the `---` line (may be /dev/null)
        new_path: Value of the `+++` line (may be /dev/null)
        metadata_lines: index/mode/rename/similarity lines, replayed verbatim
        hunks: Hunks in input order
    """

    path: str
    diff_old_path: str | None = None
    diff_new_path: str | None = None
    old_path: str | None = None
    new_path: str | None = None
    metadata_lines: tuple[str, ...] = ()
    hunks: tuple[Hunk, ...] = field(default_factory=tuple)

    @property
    def hunk_ids(self) -> list[int]:
        return [hunk.id for hunk in self.hunks]

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "diff_old_path": self.diff_old_path,
            "diff_new_path": self.diff_new_path,
            "old_path": self.old_path,
            "new_path": self.new_path,
            "metadata_lines": list(self.metadata_lines),
            "hunks": [hunk.to_dict() for hunk in self.hunks],
        }


# ============================================================
# Parsing
# ============================================================


def parse_diff(diff_content: str) -> list[FileDiff]:
    """Parse raw unified diff text into file diffs with numbered hunks.

    Hunk ids start at 1 for every call. Unrecognized lines and malformed
    hunk headers are skipped rather than rejected.

    Args:
        diff_content: Raw output from `git diff` or `git diff --cached`

    Returns:
        File diffs in input order; files without hunks are omitted
    """
    if not diff_content or not diff_content.strip():
        return []

    file_diffs: list[FileDiff] = []
    next_id = 1
    for section in FILE_SECTION_PATTERN.split(diff_content):
        if not section.strip():
            continue
        file_diff, next_id = _parse_file_section(section, next_id)
        if file_diff is not None:
            file_diffs.append(file_diff)
    return file_diffs


def all_hunk_ids(file_diffs: list[FileDiff]) -> list[int]:
    """Return every hunk id in document order."""
    return [hunk.id for file_diff in file_diffs for hunk in file_diff.hunks]


def find_hunk(file_diffs: list[FileDiff], hunk_id: int) -> tuple[FileDiff, Hunk] | None:
    """Locate a hunk and the file it belongs to."""
    for file_diff in file_diffs:
        for hunk in file_diff.hunks:
            if hunk.id == hunk_id:
                return file_diff, hunk
    return None


def _parse_file_section(section: str, next_id: int) -> tuple[FileDiff | None, int]:
    """Parse one `diff --git` section.

    Args:
        section: Text from a `diff --git` line up to the next one
        next_id: Id to assign to the first hunk found in this section

    Returns:
        Tuple of (file diff or None, next unused hunk id)
    """
    lines = section.split("\n")
    path: str | None = None
    diff_old_path: str | None = None
    diff_new_path: str | None = None
    old_path: str | None = None
    new_path: str | None = None
    metadata_lines: list[str] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("@@"):
            break
        if line.startswith("diff --git"):
            # Example: diff --git a/src/app.py b/src/app.py
            match = DIFF_GIT_PATTERN.match(line)
            if match:
                diff_old_path = f"a/{match.group(1)}"
                diff_new_path = f"b/{match.group(2)}"
                old_path = diff_old_path
                new_path = diff_new_path
                path = match.group(2)
        elif line.startswith(METADATA_PREFIXES):
            metadata_lines.append(line)
        elif line.startswith("--- "):
            old_path = line[4:]
        elif line.startswith("+++ "):
            new_path = line[4:]
            if new_path.startswith("b/"):
                path = new_path[2:]
        i += 1

    hunks: list[Hunk] = []
    while i < len(lines):
        header = HunkHeader.parse(lines[i]) if lines[i].startswith("@@") else None
        i += 1
        if header is None:
            continue

        body_end = i
        while body_end < len(lines) and not lines[body_end].startswith("@@"):
            body_end += 1
        # A final newline leaves one empty string after the last real line
        body = lines[i:body_end]
        if body_end == len(lines) and body and body[-1] == "":
            body = body[:-1]

        hunks.append(
            Hunk(
                id=next_id,
                header=header.raw,
                old_start=header.old_start,
                old_count=header.old_count,
                new_start=header.new_start,
                new_count=header.new_count,
                context=header.context,
                lines=_number_lines(body, header.old_start, header.new_start),
            )
        )
        next_id += 1
        i = body_end

    if not path or not hunks:
        return None, next_id

    return (
        FileDiff(
            path=path,
            diff_old_path=diff_old_path,
            diff_new_path=diff_new_path,
            old_path=old_path,
            new_path=new_path,
            metadata_lines=tuple(metadata_lines),
            hunks=tuple(hunks),
        ),
        next_id,
    )


def _number_lines(raw_lines: list[str], old_start: int, new_start: int) -> tuple[DiffLine, ...]:
    """Classify hunk body lines and assign running old/new line numbers."""
    old_line = old_start
    new_line = new_start
    diff_lines: list[DiffLine] = []

    for raw_line in raw_lines:
        line_type = DiffLineType.from_raw_line(raw_line)
        if line_type == DiffLineType.CONTEXT:
            diff_lines.append(DiffLine(line_type, raw_line, old_line, new_line))
            old_line += 1
            new_line += 1
        elif line_type == DiffLineType.REMOVED:
            diff_lines.append(DiffLine(line_type, raw_line, old_line_number=old_line))
            old_line += 1
        elif line_type == DiffLineType.ADDED:
            diff_lines.append(DiffLine(line_type, raw_line, new_line_number=new_line))
            new_line += 1
        elif line_type == DiffLineType.NO_NEWLINE:
            diff_lines.append(DiffLine(line_type, raw_line))
        else:
            raise ValueError(f"Unhandled diff line type: {line_type}")

    return tuple(diff_lines)
