"""Shared flow for the stage, unstage and discard commands."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from gitpatch.domain.diff_source import PatchOperation
from gitpatch.domain.selection import InvalidSelectorError
from gitpatch.infrastructure.config import Config
from gitpatch.services.git_operations import (
    GitApplyError,
    GitDiffError,
    GitOperationsService,
    GitRepositoryError,
)
from gitpatch.services.patch_builder import HunkNotFoundError
from gitpatch.services.patch_service import (
    NoChangesError,
    NoMatchingHunksError,
    PatchService,
    SelectionUsageError,
)

COMMAND_ERRORS = (
    InvalidSelectorError,
    HunkNotFoundError,
    SelectionUsageError,
    GitApplyError,
    GitDiffError,
    GitRepositoryError,
)

PROGRESS_VERBS = {
    PatchOperation.STAGE: "Staging",
    PatchOperation.UNSTAGE: "Unstaging",
    PatchOperation.DISCARD: "Discarding",
}

PAST_VERBS = {
    PatchOperation.STAGE: "Staged",
    PatchOperation.UNSTAGE: "Unstaged",
    PatchOperation.DISCARD: "Discarded",
}


def create_patch_service(config: Config, repo_path: str = ".") -> PatchService:
    """Create a PatchService wired to git for the current repository."""
    git = GitOperationsService(repo_path, git_binary=config.git_binary)
    return PatchService(git=git, context_lines=config.context_lines)


def run_patch_command(
    operation: PatchOperation,
    config: Config,
    selector: str | None = None,
    select_all: bool = False,
    matching: str | None = None,
    files: Sequence[str] = (),
    dry_run: bool = False,
    repo_path: str = ".",
) -> int:
    """Build a selective patch and apply it (or print it for a dry run).

    Returns:
        Exit code (0 for success or an empty state, 1 for error)
    """
    service = create_patch_service(config, repo_path)
    source = operation.diff_source.value

    try:
        patch = service.prepare(
            operation,
            selector=selector,
            select_all_hunks=select_all,
            matching=matching,
            files=files,
        )
    except NoChangesError:
        print(f"No {source} changes to {operation.value}.")
        return 0
    except NoMatchingHunksError as e:
        print(str(e))
        return 0
    except COMMAND_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not patch:
        print("No hunks selected.")
        return 0

    if dry_run:
        direction = " (reversed)" if operation.apply_reverse else ""
        print(f"Dry run: patch that would be applied{direction}:\n")
        print(patch, end="")
        return 0

    if matching is not None:
        print(f"{PROGRESS_VERBS[operation]} hunks matching /{matching}/")

    try:
        service.apply(operation, patch)
    except COMMAND_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{PAST_VERBS[operation]} successfully.")
    return 0
