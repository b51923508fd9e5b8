"""Patch service.

Orchestrates one selective apply: read the relevant diff through the git
service, parse it, resolve the user's selection, build the patch, and hand it
back to git. Receives the git service via constructor injection so commands
can be tested without a repository.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from gitpatch.domain.diff import FileDiff, parse_diff
from gitpatch.domain.diff_source import DiffSource, PatchOperation
from gitpatch.domain.selection import (
    HunkSelection,
    Selection,
    parse_selector,
    select_all,
    select_matching,
)
from gitpatch.services.git_operations import GitOperationsService
from gitpatch.services.patch_builder import build_patch

logger = logging.getLogger(__name__)


class NoChangesError(Exception):
    """Raised when the diff source has no parseable hunks.

    This is an empty state rather than a failure; commands report it and
    exit successfully.
    """

    pass


class NoMatchingHunksError(Exception):
    """Raised when a --matching pattern selects no hunks."""

    def __init__(self, pattern: str):
        super().__init__(f"No hunks matching /{pattern}/.")
        self.pattern = pattern


class SelectionUsageError(Exception):
    """Raised when not exactly one of selector, --all, --matching is given."""

    pass


@dataclass
class PatchService:
    """Service for building and applying selective patches.

    Attributes:
        git: Git operations service used as diff source and patch sink
        context_lines: Optional -U value for git diff
    """

    git: GitOperationsService
    context_lines: int | None = None

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def load(self, source: DiffSource, files: Sequence[str] = ()) -> list[FileDiff]:
        """Read and parse the diff for one side of the index."""
        raw = self.git.get_diff(
            staged=source.is_staged,
            files=files,
            context_lines=self.context_lines,
        )
        file_diffs = parse_diff(raw)
        logger.debug(
            "Parsed %d file(s), %d hunk(s) from %s diff",
            len(file_diffs),
            sum(len(f.hunks) for f in file_diffs),
            source.value,
        )
        return file_diffs

    def prepare(
        self,
        operation: PatchOperation,
        selector: str | None = None,
        select_all_hunks: bool = False,
        matching: str | None = None,
        files: Sequence[str] = (),
    ) -> str:
        """Build the patch for an operation without applying it.

        Returns:
            Patch text; "" when the selection names no existing whole hunk

        Raises:
            SelectionUsageError: If not exactly one selection mode is given
            NoChangesError: If the relevant diff has no hunks
            NoMatchingHunksError: If --matching selects nothing
            InvalidSelectorError: If the selector text is malformed
            HunkNotFoundError: If a line selection names a missing hunk
        """
        self._check_selection_mode(selector, select_all_hunks, matching)

        file_diffs = self.load(operation.diff_source, files)
        if not file_diffs:
            raise NoChangesError(f"No {operation.diff_source.value} changes")

        selection = resolve_selection(file_diffs, selector, select_all_hunks, matching)
        logger.debug("Resolved selection for %s: %s", operation.value, selection)
        return build_patch(file_diffs, selection)

    def apply(self, operation: PatchOperation, patch: str) -> None:
        """Apply a prepared patch the way the operation requires.

        Diffs read with zero context lines yield context-free hunks, which
        git apply only accepts with --unidiff-zero.
        """
        self.git.apply_patch(
            patch,
            cached=operation.apply_cached,
            reverse=operation.apply_reverse,
            unidiff_zero=self.context_lines == 0,
        )

    # --------------------------------------------------------
    # Private helpers
    # --------------------------------------------------------

    @staticmethod
    def _check_selection_mode(selector: str | None, select_all_hunks: bool, matching: str | None) -> None:
        given = sum([selector is not None, select_all_hunks, matching is not None])
        if given != 1:
            raise SelectionUsageError("Specify exactly one of: <selector>, --all, --matching <regex>")


def resolve_selection(
    file_diffs: list[FileDiff],
    selector: str | None = None,
    select_all_hunks: bool = False,
    matching: str | None = None,
) -> Selection:
    """Turn the selection arguments into a Selection over a parsed snapshot.

    Raises:
        NoMatchingHunksError: If --matching selects nothing
        InvalidSelectorError: If the selector or pattern is malformed
    """
    if select_all_hunks:
        return select_all(file_diffs)
    if matching is not None:
        selection: HunkSelection = select_matching(file_diffs, matching)
        if not selection.ids:
            raise NoMatchingHunksError(matching)
        return selection
    return parse_selector(selector)
