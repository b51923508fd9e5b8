"""Tests for the list and status commands.

Tests cover:
- Text listing with hunk ids and change-line indices
- Summary and JSON output shapes
- Empty-state messages
- Status counts and per-file breakdown
"""

from __future__ import annotations

import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

from gitpatch.commands.list_hunks import cmd_list
from gitpatch.commands.status import cmd_status, format_breakdown
from gitpatch.domain.diff import parse_diff
from gitpatch.infrastructure.config import Config
from gitpatch.services.git_operations import GitRepositoryError

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text()


class CommandTestCase(unittest.TestCase):
    """Base class wiring a mocked git service into the commands."""

    def setUp(self):
        self.mock_git = MagicMock()
        self.config = Config()
        patcher = patch(
            "gitpatch.commands.common.GitOperationsService",
            return_value=self.mock_git,
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def capture(self, func, *args, **kwargs) -> tuple[int, str, str]:
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = func(*args, **kwargs)
        return code, stdout.getvalue(), stderr.getvalue()


class TestCmdList(CommandTestCase):
    """Tests for cmd_list."""

    def setUp(self):
        super().setUp()
        self.mock_git.get_diff.return_value = _load_fixture("multi_hunk.diff")

    def test_text_listing(self):
        """Test hunk lines followed by indexed change lines."""
        code, out, _ = self.capture(cmd_list, self.config)

        self.assertEqual(code, 0)
        self.assertEqual(
            out,
            "Unstaged changes:\n"
            "\n"
            "  1  src/app.py:1-4  (+1 -1)\n"
            '       1  -    return "Hello, " + name\n'
            '       2  +    return "Hi, " + name\n'
            "\n"
            "  2  src/app.py:10-15  (+2 -1)  def farewell(name):\n"
            "       1  -    return message + name\n"
            '       2  +    suffix = "!"\n'
            "       3  +    return message + name + suffix\n"
            "\n",
        )

    def test_summary_listing(self):
        """Test that --summary keeps only the hunk lines."""
        _, out, _ = self.capture(cmd_list, self.config, summary=True)

        self.assertEqual(
            out,
            "Unstaged changes:\n"
            "\n"
            "  1  src/app.py:1-4  (+1 -1)\n"
            "  2  src/app.py:10-15  (+2 -1)  def farewell(name):\n",
        )

    def test_staged_listing_reads_index(self):
        _, out, _ = self.capture(cmd_list, self.config, staged=True, files=["src/app.py"])

        self.assertTrue(out.startswith("Staged changes:\n"))
        self.mock_git.get_diff.assert_called_once_with(
            staged=True, files=["src/app.py"], context_lines=None
        )

    def test_empty_listing(self):
        self.mock_git.get_diff.return_value = ""

        code, out, _ = self.capture(cmd_list, self.config, staged=True)

        self.assertEqual(code, 0)
        self.assertEqual(out, "No staged changes.\n")

    def test_json_listing(self):
        """Test the full JSON document shape."""
        _, out, _ = self.capture(cmd_list, self.config, as_json=True)

        document = json.loads(out)
        self.assertEqual(document["type"], "unstaged")
        self.assertEqual(len(document["files"]), 1)
        file_entry = document["files"][0]
        self.assertEqual(file_entry["path"], "src/app.py")
        self.assertEqual([h["id"] for h in file_entry["hunks"]], [1, 2])
        self.assertEqual(file_entry["hunks"][1]["context"], "def farewell(name):")
        self.assertEqual(file_entry["hunks"][1]["lines"][0]["type"], "context")

    def test_json_summary(self):
        """Test flattened per-hunk records with inclusive ranges."""
        _, out, _ = self.capture(cmd_list, self.config, as_json=True, summary=True)

        document = json.loads(out)
        self.assertEqual(document["type"], "unstaged")
        second = document["hunks"][1]
        self.assertEqual(second["path"], "src/app.py")
        self.assertEqual(second["added_count"], 2)
        self.assertEqual(second["removed_count"], 1)
        self.assertEqual(second["old_range"], {"start": 10, "end": 14, "count": 5})
        self.assertEqual(second["new_range"], {"start": 10, "end": 15, "count": 6})

    def test_json_empty_listing(self):
        """Test that JSON output is produced even with no changes."""
        self.mock_git.get_diff.return_value = ""

        _, out, _ = self.capture(cmd_list, self.config, as_json=True)

        self.assertEqual(json.loads(out), {"type": "unstaged", "files": []})

    def test_json_indent_from_config(self):
        self.config = Config(json_indent=0)

        _, out, _ = self.capture(cmd_list, self.config, as_json=True, summary=True)

        self.assertTrue(out.startswith('{\n"type": "unstaged"'))

    def test_error(self):
        self.mock_git.get_diff.side_effect = GitRepositoryError("Not a git repository: .")

        code, out, err = self.capture(cmd_list, self.config)

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Error: Not a git repository", err)


class TestCmdStatus(CommandTestCase):
    """Tests for cmd_status."""

    def setUp(self):
        super().setUp()
        staged_diff = _load_fixture("two_files.diff")
        unstaged_diff = _load_fixture("multi_hunk.diff")
        self.mock_git.get_diff.side_effect = lambda staged, files, context_lines: (
            staged_diff if staged else unstaged_diff
        )
        self.mock_git.get_untracked_files.return_value = ["notes.txt"]

    def test_text_status(self):
        code, out, _ = self.capture(cmd_status, self.config)

        self.assertEqual(code, 0)
        self.assertEqual(
            out,
            "Staged:     2 hunk(s) across 2 file(s)\n"
            "Unstaged:   2 hunk(s) across 1 file(s)\n"
            "Untracked:  1 file(s)\n"
            "\n"
            "  notes.txt    untracked\n"
            "  src/app.js    1 staged\n"
            "  src/app.py    2 unstaged\n"
            "  src/utils.js    1 staged\n",
        )

    def test_json_status(self):
        _, out, _ = self.capture(cmd_status, self.config, as_json=True)

        self.assertEqual(
            json.loads(out),
            {
                "staged": {"files": 2, "hunks": 2},
                "unstaged": {"files": 1, "hunks": 2},
                "untracked": ["notes.txt"],
            },
        )

    def test_clean_tree(self):
        self.mock_git.get_diff.side_effect = None
        self.mock_git.get_diff.return_value = ""
        self.mock_git.get_untracked_files.return_value = []

        _, out, _ = self.capture(cmd_status, self.config)

        self.assertEqual(
            out,
            "Staged:     0 hunk(s) across 0 file(s)\n"
            "Unstaged:   0 hunk(s) across 0 file(s)\n"
            "Untracked:  0 file(s)\n",
        )


class TestFormatBreakdown(unittest.TestCase):
    """Tests for format_breakdown()."""

    def test_file_with_both_sides(self):
        files = parse_diff(_load_fixture("two_files.diff"))

        lines = format_breakdown(files[:1], files, [])

        self.assertEqual(lines, ["  src/app.js    1 staged, 1 unstaged", "  src/utils.js    1 unstaged"])


if __name__ == "__main__":
    unittest.main()
