"""Recover positions and readable messages from parser error text.

lxml reports structured positions, so these patterns only matter when an
error arrives as free text (a foreign parser, or a position libxml2 could
not fill in). Every pattern here has its own test.
"""

import re
from typing import Optional, Sequence

MAX_MESSAGE_LENGTH = 150

LINE_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"line\s*(?:number)?\s*(\d+)", re.IGNORECASE),
    re.compile(r"línea\s*(\d+)", re.IGNORECASE),
    re.compile(r"(\d+)\s*:\s*\d+"),
    re.compile(r"at\s+line\s+(\d+)", re.IGNORECASE),
)

COLUMN_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"column\s*(\d+)", re.IGNORECASE),
    re.compile(r"columna\s*(\d+)", re.IGNORECASE),
    re.compile(r"\d+\s*:\s*(\d+)"),
    re.compile(r"character\s+(\d+)", re.IGNORECASE),
)

# (pattern, replacement, count); count 0 replaces every occurrence
_CLEANUPS: Sequence[tuple[re.Pattern[str], str, int]] = (
    (re.compile(r"Location:.*$", re.MULTILINE), "", 0),
    (re.compile(r"Ubicación:.*$", re.MULTILINE), "", 0),
    (re.compile(r"----\^"), "", 0),
    (re.compile(r"\s*\(<string>, line \d+\)\s*$"), "", 0),
    (re.compile(r",\s*line \d+,\s*column \d+\s*$"), "", 0),
    (re.compile(r"XML parsing error:\s*", re.IGNORECASE), "XML Error: ", 1),
    (re.compile(r"Error de lectura XML:\s*", re.IGNORECASE), "XML Error: ", 1),
)

_TAG = re.compile(r"<[^>]*>")


def _first_number(text: str, patterns: Sequence[re.Pattern[str]]) -> Optional[int]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def find_line(text: str) -> Optional[int]:
    """Return the line number mentioned in an error message, if any."""
    return _first_number(text, LINE_PATTERNS)


def find_column(text: str) -> Optional[int]:
    """Return the column number mentioned in an error message, if any."""
    return _first_number(text, COLUMN_PATTERNS)


def locate(text: str) -> tuple[int, int]:
    """Return a 1-based (line, column) for an error message, defaulting to (1, 1)."""
    line = find_line(text)
    column = find_column(text)
    return (line if line and line > 0 else 1, column if column and column > 0 else 1)


def strip_location(text: str) -> str:
    """Drop location trailers from a thrown parser message."""
    return _CLEANUPS[0][0].sub("", text).strip()


def clean_message(text: str) -> str:
    """Reduce a parser error dump to a one-line summary for display.

    Location trailers and caret decorations are removed and known prefixes
    normalized to ``XML Error: ``. Messages still longer than
    MAX_MESSAGE_LENGTH collapse to a short message naming the first tag.
    """
    message = text
    for pattern, replacement, count in _CLEANUPS:
        message = pattern.sub(replacement, message, count=count)
    message = message.strip()

    if len(message) > MAX_MESSAGE_LENGTH:
        tag = _TAG.search(message)
        if tag:
            return f"XML syntax error near: {tag.group(0)}"
        return "XML syntax error - malformed document"
    return message
