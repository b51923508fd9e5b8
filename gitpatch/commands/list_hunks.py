"""List command - show numbered hunks of the unstaged or staged diff.

Text output, one block per hunk:

      3  src/app.py:10-16  (+2 -1)  def greet(name):
         1  -    return "Hello, " + name
         2  +    return "Hi, " + name

The leading number is the hunk id; the indented numbers are change-line
indices for `hunk:line` selectors. --summary drops the change lines.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence

from gitpatch.commands.common import create_patch_service
from gitpatch.domain.diff import FileDiff, Hunk
from gitpatch.domain.diff_source import DiffSource
from gitpatch.infrastructure.config import Config
from gitpatch.services.git_operations import GitDiffError, GitRepositoryError


def cmd_list(
    config: Config,
    staged: bool = False,
    as_json: bool = False,
    summary: bool = False,
    files: Sequence[str] = (),
) -> int:
    """Execute the list command.

    Args:
        config: Resolved configuration
        staged: List staged hunks instead of unstaged ones
        as_json: Emit JSON instead of text
        summary: Omit change lines (text) or flatten to per-hunk records (JSON)
        files: Restrict the diff to these paths

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    source = DiffSource.STAGED if staged else DiffSource.UNSTAGED
    service = create_patch_service(config)

    try:
        file_diffs = service.load(source, files)
    except (GitDiffError, GitRepositoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(format_json(file_diffs, source, summary), indent=config.json_indent))
        return 0

    if not file_diffs:
        print(f"No {source.value} changes.")
        return 0

    print(format_text(file_diffs, source, summary), end="")
    return 0


def format_json(file_diffs: list[FileDiff], source: DiffSource, summary: bool = False) -> dict:
    """Build the JSON document for a listing."""
    if summary:
        return {
            "type": source.value,
            "hunks": [
                hunk.to_summary_dict(file_diff.path)
                for file_diff in file_diffs
                for hunk in file_diff.hunks
            ],
        }
    return {
        "type": source.value,
        "files": [file_diff.to_dict() for file_diff in file_diffs],
    }


def format_text(file_diffs: list[FileDiff], source: DiffSource, summary: bool = False) -> str:
    """Render the human-readable listing."""
    lines = [f"{source.value.capitalize()} changes:", ""]
    for file_diff in file_diffs:
        for hunk in file_diff.hunks:
            lines.append(format_hunk_line(file_diff, hunk))
            if not summary:
                for index, change in enumerate(hunk.get_change_lines(), start=1):
                    lines.append(f"     {index:>3}  {change.content}")
                lines.append("")
    if summary:
        lines.append("")
    return "\n".join(lines)


def format_hunk_line(file_diff: FileDiff, hunk: Hunk) -> str:
    """Format the `id  path:start-end  (+a -r)  context` line for a hunk."""
    line = (
        f"  {hunk.id}  {file_diff.path}:{hunk.old_start}-{hunk.display_end}"
        f"  (+{hunk.added_count} -{hunk.removed_count})"
    )
    if hunk.context:
        line += f"  {hunk.context}"
    return line
