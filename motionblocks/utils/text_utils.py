"""Pure functions for turning slot text into template data.

Text and data-table slots arrive as free-form strings (one entry per line,
optionally comma-separated columns). These helpers parse them the same way
for every template and never raise on malformed input.
"""

import math
import re
from typing import List, NamedTuple, Optional, Tuple

NBSP = "\u00a0"

_LEADING_SPACES = re.compile(r"^ +")
_TRAILING_SPACES = re.compile(r" +$")


class HighlightSplit(NamedTuple):
    """Text split around a highlighted substring."""
    prefix: str
    highlighted: str
    suffix: str


class LabeledValue(NamedTuple):
    """One ``label, value`` row of a data table."""
    label: str
    value: float


def preserve_edge_spaces(value: str) -> str:
    """Replace leading/trailing spaces with non-breaking spaces.

    Text layout engines trim edge whitespace, which would collapse the gap
    between adjacent text runs (prefix / highlight / suffix).

    Examples:
        >>> preserve_edge_spaces("  hi ") == "\\u00a0\\u00a0hi\\u00a0"
        True
        >>> preserve_edge_spaces("")
        ''
    """
    if not value:
        return value
    value = _LEADING_SPACES.sub(lambda m: NBSP * len(m.group(0)), value)
    return _TRAILING_SPACES.sub(lambda m: NBSP * len(m.group(0)), value)


def split_lines(text: object) -> List[str]:
    """Split multi-line slot text into trimmed, non-empty lines.

    Examples:
        >>> split_lines("a\\n\\n  b  \\r\\nc")
        ['a', 'b', 'c']
        >>> split_lines(None)
        []
    """
    if not isinstance(text, str):
        return []
    return [line.strip() for line in re.split(r"\r?\n", text) if line.strip()]


def split_first(line: str, separator: str = ",") -> Tuple[str, str]:
    """Split on the first separator into two trimmed parts.

    Examples:
        >>> split_first("Intro, Where it all began, 2020")
        ('Intro', 'Where it all began, 2020')
        >>> split_first("Solo")
        ('Solo', '')
    """
    head, sep, tail = line.partition(separator)
    return head.strip(), tail.strip() if sep else ""


def parse_number(raw: object) -> Optional[float]:
    """Parse a finite float, returning None for anything else.

    Examples:
        >>> parse_number(" 42.5 ")
        42.5
        >>> parse_number("abc") is None
        True
        >>> parse_number("nan") is None
        True
    """
    if isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_labeled_values(text: object) -> List[LabeledValue]:
    """Parse ``label, value`` rows; unparseable values become 0.

    Examples:
        >>> parse_labeled_values("Q1, 10\\nQ2, x\\nQ3")
        [LabeledValue(label='Q1', value=10.0), LabeledValue(label='Q2', value=0.0), LabeledValue(label='Q3', value=0.0)]
    """
    rows = []
    for line in split_lines(text):
        parts = [p.strip() for p in line.split(",")]
        value = parse_number(parts[1]) if len(parts) > 1 else None
        rows.append(LabeledValue(parts[0], value if value is not None else 0.0))
    return rows


def split_highlight(full_text: str, needle: str) -> HighlightSplit:
    """Case-insensitively locate ``needle`` in ``full_text``.

    The highlighted part keeps the original casing of ``full_text``. When the
    needle is empty or not found, everything is prefix.

    Examples:
        >>> split_highlight("Make it POP today", "pop")
        HighlightSplit(prefix='Make it ', highlighted='POP', suffix=' today')
        >>> split_highlight("Nothing here", "zzz")
        HighlightSplit(prefix='Nothing here', highlighted='', suffix='')
    """
    if not needle:
        return HighlightSplit(full_text, "", "")
    idx = full_text.lower().find(needle.lower())
    if idx < 0:
        return HighlightSplit(full_text, "", "")
    end = idx + len(needle)
    return HighlightSplit(full_text[:idx], full_text[idx:end], full_text[end:])


def split_words_half(text: str) -> Tuple[str, str]:
    """Split words into two runs, the first holding ``ceil(n / 2)`` words.

    Examples:
        >>> split_words_half("one two three")
        ('one two', 'three')
        >>> split_words_half("single")
        ('single', '')
    """
    tokens = (text or "").split()
    if len(tokens) <= 1:
        return " ".join(tokens), ""
    first = math.ceil(len(tokens) / 2)
    return " ".join(tokens[:first]), " ".join(tokens[first:])


def typed_prefix(text: str, progress: float) -> str:
    """Characters revealed by a typewriter at ``progress`` in ``[0, 1]``.

    Examples:
        >>> typed_prefix("hello", 0.5)
        'he'
        >>> typed_prefix("hello", 1.0)
        'hello'
    """
    count = math.floor(max(0.0, min(1.0, progress)) * len(text))
    return text[:count]
