"""git-patch: non-interactive hunk and line staging.

Select whole hunks, hunk ranges, or individual change lines from `git diff`
and stage, unstage, or discard only that subset.

Usage:
    python -m gitpatch <command> [options]
    git-patch <command> [options]

Structure:
    gitpatch/
    ├── __main__.py          # Entry point dispatcher
    ├── domain/              # Domain models (parse-once pattern)
    │   ├── diff.py          # FileDiff, Hunk, DiffLine, parse_diff
    │   ├── diff_source.py   # DiffSource, PatchOperation
    │   └── selection.py     # Selector grammar, HunkSelection, LineSelection
    ├── services/            # Business logic services
    │   ├── git_operations.py
    │   ├── patch_builder.py
    │   └── patch_service.py
    ├── infrastructure/      # Environment interactions
    │   └── config.py
    └── commands/            # Thin command orchestrators
        ├── list_hunks.py
        ├── stage.py
        ├── unstage.py
        ├── discard.py
        └── status.py
"""

__version__ = "0.1.0"
