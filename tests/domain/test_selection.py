"""Tests for selector parsing and selection shortcuts.

Tests cover:
- Hunk-level selectors (single ids, lists, ranges, mixtures)
- Line-level selectors (hunk:line-spec)
- Error messages naming the offending token
- --all and --matching selection over a parsed diff
"""

from __future__ import annotations

import unittest
from pathlib import Path

from gitpatch.domain.diff import parse_diff
from gitpatch.domain.selection import (
    HunkSelection,
    InvalidSelectorError,
    LineSelection,
    expand_number_spec,
    parse_selector,
    select_all,
    select_matching,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class TestHunkSelectors(unittest.TestCase):
    """Tests for selectors without a colon."""

    def test_single_id(self):
        """Test that "1" selects hunk 1."""
        self.assertEqual(parse_selector("1"), HunkSelection(ids=frozenset({1})))

    def test_list_and_range_are_equivalent(self):
        """Test that "1,2" and "1-2" resolve to the same ids."""
        self.assertEqual(parse_selector("1,2"), parse_selector("1-2"))
        self.assertEqual(parse_selector("1-2").ids, frozenset({1, 2}))

    def test_mixed_ranges_and_numbers(self):
        """Test expansion of "1-3,7,9"."""
        selection = parse_selector("1-3,7,9")

        self.assertIsInstance(selection, HunkSelection)
        self.assertEqual(selection.sorted_ids, [1, 2, 3, 7, 9])

    def test_single_element_range(self):
        """Test that "4-4" selects just hunk 4."""
        self.assertEqual(parse_selector("4-4").ids, frozenset({4}))

    def test_whitespace_around_tokens_is_ignored(self):
        """Test that spaces around comma-separated tokens are trimmed."""
        self.assertEqual(parse_selector("1, 3 ,5").ids, frozenset({1, 3, 5}))


class TestLineSelectors(unittest.TestCase):
    """Tests for hunk:line-spec selectors."""

    def test_line_range(self):
        """Test that "1:2-4" selects change lines 2, 3 and 4 of hunk 1."""
        selection = parse_selector("1:2-4")

        self.assertEqual(selection, LineSelection(hunk_id=1, line_indices=frozenset({2, 3, 4})))

    def test_line_list(self):
        """Test that "12:3,5,8" keeps the hunk id and the listed lines."""
        selection = parse_selector("12:3,5,8")

        self.assertIsInstance(selection, LineSelection)
        self.assertEqual(selection.hunk_id, 12)
        self.assertEqual(selection.line_indices, frozenset({3, 5, 8}))

    def test_only_first_colon_splits(self):
        """Test that a second colon lands in the line part and is rejected."""
        with self.assertRaises(InvalidSelectorError) as ctx:
            parse_selector("1:2:3")

        self.assertIn("invalid number: 2:3", str(ctx.exception))


class TestSelectorErrors(unittest.TestCase):
    """Tests for malformed selector text."""

    def _assert_error(self, selector: str, message: str) -> None:
        with self.assertRaises(InvalidSelectorError) as ctx:
            parse_selector(selector)
        self.assertIn(message, str(ctx.exception))

    def test_empty_selector(self):
        """Test that an empty or missing selector is rejected."""
        self._assert_error("", "no selector provided")
        with self.assertRaises(InvalidSelectorError):
            parse_selector(None)

    def test_list_in_hunk_part(self):
        """Test that a list is not allowed before the colon."""
        self._assert_error("1,2:3", "invalid hunk id: 1,2")

    def test_non_numeric_hunk_part(self):
        """Test that a non-digit hunk id is rejected."""
        self._assert_error("a:1", "invalid hunk id: a")
        self._assert_error(":1", "invalid hunk id: ")

    def test_partially_numeric_tokens(self):
        """Test that trailing garbage is reported per token."""
        self._assert_error("1x", "invalid number: 1x")
        self._assert_error("1-2x", "invalid range: 1-2x")
        self._assert_error("1:2,3x", "invalid number: 3x")
        self._assert_error("1:1-a", "invalid range: 1-a")

    def test_empty_token(self):
        """Test that an empty comma-separated token is rejected."""
        self._assert_error("1,,2", "invalid number: ")
        self._assert_error("1:", "invalid number: ")

    def test_descending_ranges(self):
        """Test that every start > end range fails with a range error."""
        for start, end in [(3, 1), (2, 1), (10, 9), (100, 0)]:
            token = f"{start}-{end}"
            with self.subTest(token=token):
                self._assert_error(token, f"invalid range: {token}")

    def test_non_digit_tokens(self):
        """Test that non-digit tokens fail with a number error."""
        for token in ["abc", "one", "+1", "1.5", "#2"]:
            with self.subTest(token=token):
                self._assert_error(token, f"invalid number: {token}")

    def test_only_ascii_digits_are_numbers(self):
        """Test that non-ASCII digits and embedded newlines are rejected."""
        self._assert_error("١", "invalid number: ١")
        self._assert_error("1-٢", "invalid range: 1-٢")
        self._assert_error("1\n:2", "invalid hunk id: 1\n")
        self._assert_error("١:2", "invalid hunk id: ١")

    def test_negative_looking_token_is_a_range_error(self):
        """Test that "-3" is parsed as a malformed range."""
        self._assert_error("-3", "invalid range: -3")

    def test_expand_number_spec_directly(self):
        """Test the number-spec helper returns ids in token order."""
        self.assertEqual(expand_number_spec("5,1-2"), [5, 1, 2])


class TestSelectionShortcuts(unittest.TestCase):
    """Tests for select_all() and select_matching()."""

    def setUp(self):
        diff_text = (FIXTURES_DIR / "multi_hunk.diff").read_text() + (
            FIXTURES_DIR / "two_files.diff"
        ).read_text()
        self.files = parse_diff(diff_text)

    def test_select_all(self):
        """Test that --all selects every parsed hunk."""
        self.assertEqual(select_all(self.files).sorted_ids, [1, 2, 3, 4])

    def test_select_all_on_empty_diff(self):
        """Test that --all on an empty snapshot selects nothing."""
        self.assertEqual(select_all([]).ids, frozenset())

    def test_select_matching_searches_change_lines(self):
        """Test regex search over added/removed lines."""
        self.assertEqual(select_matching(self.files, "Hi").sorted_ids, [1, 3])
        self.assertEqual(select_matching(self.files, r"suffix\b").sorted_ids, [2])

    def test_select_matching_ignores_context(self):
        """Test that text only present in context lines does not match."""
        self.assertEqual(select_matching(self.files, "def main").ids, frozenset())

    def test_select_matching_rejects_bad_pattern(self):
        """Test that an invalid regex raises InvalidSelectorError."""
        with self.assertRaises(InvalidSelectorError) as ctx:
            select_matching(self.files, "(unclosed")

        self.assertIn("invalid pattern", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
