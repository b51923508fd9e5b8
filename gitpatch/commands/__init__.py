"""CLI command implementations."""

from gitpatch.commands.discard import cmd_discard
from gitpatch.commands.list_hunks import cmd_list
from gitpatch.commands.stage import cmd_stage
from gitpatch.commands.status import cmd_status
from gitpatch.commands.unstage import cmd_unstage

__all__ = ["cmd_discard", "cmd_list", "cmd_stage", "cmd_status", "cmd_unstage"]
