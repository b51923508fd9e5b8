#!/usr/bin/env python3
"""CLI entry point for git-patch.

Usage:
    git-patch list [--staged] [--json] [--summary] [-- files...]
    git-patch stage <selector> | --all | --matching <regex> [-- files...]
    git-patch unstage <selector> | --all | --matching <regex> [-- files...]
    git-patch discard <selector> | --all | --matching <regex> [--yes] [--dry-run] [-- files...]
    git-patch status [--json]
"""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys

from gitpatch.commands.discard import cmd_discard
from gitpatch.commands.list_hunks import cmd_list
from gitpatch.commands.stage import cmd_stage
from gitpatch.commands.status import cmd_status
from gitpatch.commands.unstage import cmd_unstage
from gitpatch.infrastructure.config import ConfigError, load_config

DEBUG_ENV = "GIT_PATCH_DEBUG"

EPILOG = """
Selectors:
  1            Single hunk by ID
  1,3,5        Multiple hunk IDs
  1-5          Range of hunk IDs
  1:2-4        Lines 2-4 within hunk 1 (change lines only)
  1:3,5,8      Specific lines within hunk 1

Examples:
  git-patch list
  git-patch stage 1-3
  git-patch stage 2:1,4 -- src/app.py
  git-patch unstage --matching "TODO"
  git-patch discard 4 --dry-run
"""


def split_on_dash(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv into (options, file paths) at the first literal `--`."""
    if "--" not in argv:
        return argv, []
    index = argv.index("--")
    return argv[:index], argv[index + 1 :]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-patch",
        description="Non-interactive hunk and line staging for git",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log git commands and selection details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list command
    parser_list = subparsers.add_parser("list", help="List numbered hunks")
    parser_list.add_argument(
        "--staged",
        action="store_true",
        help="List staged hunks instead of unstaged ones",
    )
    parser_list.add_argument("--json", action="store_true", help="Output JSON")
    parser_list.add_argument(
        "--summary",
        action="store_true",
        help="Omit change lines; with --json, output one flat record per hunk",
    )

    # stage / unstage / discard share selection arguments
    for name, help_text in (
        ("stage", "Stage selected unstaged hunks or lines"),
        ("unstage", "Unstage selected staged hunks or lines"),
        ("discard", "Discard selected unstaged hunks or lines from the working tree"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("selector", nargs="?", help="Hunk or line selector")
        sub.add_argument("--all", action="store_true", help="Select every hunk")
        sub.add_argument(
            "--matching",
            metavar="REGEX",
            help="Select hunks with a change line matching REGEX",
        )
        if name == "discard":
            sub.add_argument(
                "--yes",
                action="store_true",
                help="Confirm discarding changes",
            )
            sub.add_argument(
                "--dry-run",
                action="store_true",
                help="Print the patch instead of applying it",
            )

    # status command
    parser_status = subparsers.add_parser("status", help="Summarize staged and unstaged changes")
    parser_status.add_argument("--json", action="store_true", help="Output JSON")

    return parser


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get(DEBUG_ENV) == "1" else logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def configure_output() -> None:
    """Let diff lines holding non-UTF-8 bytes print as the original bytes."""
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(errors="surrogateescape")


def main(argv: list[str] | None = None) -> int:
    args_list, files = split_on_dash(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(args_list)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)
    configure_output()

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Route to command implementations with explicit parameters
    if args.command == "list":
        return cmd_list(
            config,
            staged=args.staged,
            as_json=args.json,
            summary=args.summary,
            files=files,
        )

    elif args.command == "stage":
        return cmd_stage(
            config,
            selector=args.selector,
            select_all=args.all,
            matching=args.matching,
            files=files,
        )

    elif args.command == "unstage":
        return cmd_unstage(
            config,
            selector=args.selector,
            select_all=args.all,
            matching=args.matching,
            files=files,
        )

    elif args.command == "discard":
        return cmd_discard(
            config,
            selector=args.selector,
            select_all=args.all,
            matching=args.matching,
            files=files,
            yes=args.yes,
            dry_run=args.dry_run,
        )

    elif args.command == "status":
        return cmd_status(config, as_json=args.json)

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
