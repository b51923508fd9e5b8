"""Unstage command - remove selected staged hunks or lines from the index.

The patch is built from `git diff --cached` and reverse-applied to the index,
so the working tree is left untouched.
"""

from __future__ import annotations

from collections.abc import Sequence

from gitpatch.commands.common import run_patch_command
from gitpatch.domain.diff_source import PatchOperation
from gitpatch.infrastructure.config import Config


def cmd_unstage(
    config: Config,
    selector: str | None = None,
    select_all: bool = False,
    matching: str | None = None,
    files: Sequence[str] = (),
) -> int:
    """Execute the unstage command.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    return run_patch_command(
        PatchOperation.UNSTAGE,
        config,
        selector=selector,
        select_all=select_all,
        matching=matching,
        files=files,
    )
