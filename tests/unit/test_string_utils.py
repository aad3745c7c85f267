"""Unit tests for slot text parsing utilities."""

import pytest

from motionblocks.utils.text_utils import (
    NBSP,
    HighlightSplit,
    LabeledValue,
    parse_labeled_values,
    parse_number,
    preserve_edge_spaces,
    split_first,
    split_highlight,
    split_lines,
    split_words_half,
    typed_prefix,
)


class TestPreserveEdgeSpaces:
    """Test preserve_edge_spaces function."""

    def test_leading_and_trailing(self):
        """Edge spaces become non-breaking spaces."""
        assert preserve_edge_spaces("  hi ") == NBSP * 2 + "hi" + NBSP

    def test_inner_spaces_untouched(self):
        """Spaces between words are kept as-is."""
        assert preserve_edge_spaces("a b") == "a b"

    def test_empty(self):
        """Empty string passes through."""
        assert preserve_edge_spaces("") == ""


class TestSplitLines:
    """Test split_lines function."""

    def test_trims_and_drops_blank(self):
        """Blank lines are dropped and the rest trimmed."""
        assert split_lines("a\n\n  b  \r\nc") == ["a", "b", "c"]

    def test_non_string(self):
        """Non-string input gives no lines."""
        assert split_lines(None) == []
        assert split_lines(42) == []


class TestSplitFirst:
    """Test split_first function."""

    def test_splits_on_first_comma(self):
        """Only the first separator splits."""
        assert split_first("Intro, Where it all began, 2020") == ("Intro", "Where it all began, 2020")

    def test_no_separator(self):
        """Missing separator gives an empty tail."""
        assert split_first("Solo") == ("Solo", "")


class TestParseNumber:
    """Test parse_number function."""

    @pytest.mark.parametrize("raw,expected", [
        (" 42.5 ", 42.5),
        ("10", 10.0),
        (7, 7.0),
        (-3.5, -3.5),
    ])
    def test_valid(self, raw, expected):
        """Numbers and numeric strings parse."""
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "nan", "inf", None, True, [1]])
    def test_invalid(self, raw):
        """Anything non-finite or non-numeric gives None."""
        assert parse_number(raw) is None


class TestParseLabeledValues:
    """Test parse_labeled_values function."""

    def test_rows(self):
        """Each line becomes one labeled value."""
        rows = parse_labeled_values("Q1, 10\nQ2, 25.5")
        assert rows == [LabeledValue("Q1", 10.0), LabeledValue("Q2", 25.5)]

    def test_unparseable_value_becomes_zero(self):
        """Bad or missing values default to 0."""
        rows = parse_labeled_values("Q1, x\nQ2")
        assert [r.value for r in rows] == [0.0, 0.0]

    def test_empty(self):
        """No text, no rows."""
        assert parse_labeled_values("") == []


class TestSplitHighlight:
    """Test split_highlight function."""

    def test_case_insensitive_match(self):
        """Highlight keeps the casing of the full text."""
        assert split_highlight("Make it POP today", "pop") == HighlightSplit("Make it ", "POP", " today")

    def test_not_found(self):
        """Missing needle puts everything in the prefix."""
        assert split_highlight("Nothing here", "zzz") == HighlightSplit("Nothing here", "", "")

    def test_empty_needle(self):
        """Empty needle highlights nothing."""
        assert split_highlight("Text", "") == HighlightSplit("Text", "", "")

    def test_first_occurrence(self):
        """Only the first match is highlighted."""
        parts = split_highlight("go go go", "go")
        assert parts.prefix == ""
        assert parts.suffix == " go go"


class TestWordsAndTyping:
    """Test split_words_half and typed_prefix."""

    def test_odd_word_count(self):
        """First run holds ceil(n / 2) words."""
        assert split_words_half("one two three") == ("one two", "three")

    def test_single_word(self):
        """A single word has no continuation."""
        assert split_words_half("single") == ("single", "")

    def test_typed_prefix_progress(self):
        """Reveals floor(progress * len) characters."""
        assert typed_prefix("hello", 0.5) == "he"
        assert typed_prefix("hello", 1.0) == "hello"
        assert typed_prefix("hello", -1) == ""
