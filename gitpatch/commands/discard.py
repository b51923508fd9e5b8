"""Discard command - revert selected unstaged hunks or lines in the working tree.

Destructive: requires --yes, or --dry-run to print the patch instead.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from gitpatch.commands.common import run_patch_command
from gitpatch.domain.diff_source import PatchOperation
from gitpatch.infrastructure.config import Config


def cmd_discard(
    config: Config,
    selector: str | None = None,
    select_all: bool = False,
    matching: str | None = None,
    files: Sequence[str] = (),
    yes: bool = False,
    dry_run: bool = False,
) -> int:
    """Execute the discard command.

    Args:
        config: Resolved configuration
        selector: Hunk or line selector
        select_all: Discard every unstaged hunk
        matching: Discard hunks whose change lines match this regex
        files: Restrict the diff to these paths
        yes: Confirm the destructive operation
        dry_run: Print the patch that would be reverse-applied

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if not yes and not dry_run:
        print(
            "Discard is destructive. Use --yes to confirm or --dry-run to preview.",
            file=sys.stderr,
        )
        return 1

    return run_patch_command(
        PatchOperation.DISCARD,
        config,
        selector=selector,
        select_all=select_all,
        matching=matching,
        files=files,
        dry_run=dry_run,
    )
