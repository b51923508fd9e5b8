"""Stage command - add selected unstaged hunks or lines to the index."""

from __future__ import annotations

from collections.abc import Sequence

from gitpatch.commands.common import run_patch_command
from gitpatch.domain.diff_source import PatchOperation
from gitpatch.infrastructure.config import Config


def cmd_stage(
    config: Config,
    selector: str | None = None,
    select_all: bool = False,
    matching: str | None = None,
    files: Sequence[str] = (),
) -> int:
    """Execute the stage command.

    Args:
        config: Resolved configuration
        selector: Hunk or line selector (e.g. "1-3" or "2:1,4")
        select_all: Stage every unstaged hunk
        matching: Stage hunks whose change lines match this regex
        files: Restrict the diff to these paths

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    return run_patch_command(
        PatchOperation.STAGE,
        config,
        selector=selector,
        select_all=select_all,
        matching=matching,
        files=files,
    )
