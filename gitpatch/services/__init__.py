"""Services for git-patch.

Services encapsulate business logic and orchestrate domain models.
They receive dependencies via constructor injection.
"""

from gitpatch.services.git_operations import (
    GitApplyError,
    GitDiffError,
    GitOperationsService,
    GitRepositoryError,
    GitStatusError,
)
from gitpatch.services.patch_builder import (
    HunkNotFoundError,
    build_patch,
    build_patch_from_hunks,
    build_patch_from_lines,
)
from gitpatch.services.patch_service import (
    NoChangesError,
    NoMatchingHunksError,
    PatchService,
    SelectionUsageError,
)

__all__ = [
    "GitApplyError",
    "GitDiffError",
    "GitOperationsService",
    "GitRepositoryError",
    "GitStatusError",
    "HunkNotFoundError",
    "NoChangesError",
    "NoMatchingHunksError",
    "PatchService",
    "SelectionUsageError",
    "build_patch",
    "build_patch_from_hunks",
    "build_patch_from_lines",
]
