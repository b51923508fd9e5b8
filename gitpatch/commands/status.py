"""Status command - summarize staged, unstaged and untracked changes.

Shows hunk and file counts for both sides of the index plus a per-file
breakdown sorted by path.
"""

from __future__ import annotations

import json
import sys

from gitpatch.commands.common import create_patch_service
from gitpatch.domain.diff import FileDiff
from gitpatch.domain.diff_source import DiffSource
from gitpatch.infrastructure.config import Config
from gitpatch.services.git_operations import GitDiffError, GitRepositoryError, GitStatusError


def cmd_status(config: Config, as_json: bool = False) -> int:
    """Execute the status command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    service = create_patch_service(config)

    try:
        staged = service.load(DiffSource.STAGED)
        unstaged = service.load(DiffSource.UNSTAGED)
        untracked = service.git.get_untracked_files()
    except (GitDiffError, GitRepositoryError, GitStatusError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        document = {
            "staged": {"files": len(staged), "hunks": _hunk_count(staged)},
            "unstaged": {"files": len(unstaged), "hunks": _hunk_count(unstaged)},
            "untracked": untracked,
        }
        print(json.dumps(document, indent=config.json_indent))
        return 0

    print(f"Staged:     {_hunk_count(staged)} hunk(s) across {len(staged)} file(s)")
    print(f"Unstaged:   {_hunk_count(unstaged)} hunk(s) across {len(unstaged)} file(s)")
    print(f"Untracked:  {len(untracked)} file(s)")

    breakdown = format_breakdown(staged, unstaged, untracked)
    if breakdown:
        print()
        for line in breakdown:
            print(line)
    return 0


def format_breakdown(
    staged: list[FileDiff],
    unstaged: list[FileDiff],
    untracked: list[str],
) -> list[str]:
    """Per-file lines such as `  src/app.py    1 staged, 2 unstaged`."""
    staged_by_path = {f.path: len(f.hunks) for f in staged}
    unstaged_by_path = {f.path: len(f.hunks) for f in unstaged}
    untracked_paths = set(untracked)
    all_paths = sorted(set(staged_by_path) | set(unstaged_by_path) | untracked_paths)

    lines: list[str] = []
    for path in all_paths:
        if path in untracked_paths:
            lines.append(f"  {path}    untracked")
            continue
        parts = []
        if staged_by_path.get(path):
            parts.append(f"{staged_by_path[path]} staged")
        if unstaged_by_path.get(path):
            parts.append(f"{unstaged_by_path[path]} unstaged")
        lines.append(f"  {path}    {', '.join(parts)}")
    return lines


def _hunk_count(file_diffs: list[FileDiff]) -> int:
    return sum(len(f.hunks) for f in file_diffs)
