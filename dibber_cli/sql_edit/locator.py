"""Find the statement that encloses an editor cursor."""

from __future__ import annotations


def cursor_offset(text: str, line: int, column: int) -> int:
    """Convert a (line, column) editor position into an offset into ``text``."""
    lines = text.split("\n")
    if line < 0:
        return 0
    if line >= len(lines):
        return len(text)
    offset = sum(len(previous) + 1 for previous in lines[:line])
    return offset + min(max(column, 0), len(lines[line]))


def statement_under_cursor(text: str, line: int, column: int) -> str:
    """Return the terminated statement under the cursor, or ``""``.

    Segments are delimited by every ``;`` in the buffer, including ones inside
    string literals or comments; unlike :func:`split_statements` this scan is
    not quote-aware. Text after the last semicolon is an unterminated statement
    and is never returned.
    """
    if not text.strip():
        return ""

    position = cursor_offset(text, line, column)
    semicolons = [index for index, ch in enumerate(text) if ch == ";"]
    if not semicolons:
        return ""

    start = 0
    for semi in semicolons:
        if position <= semi:
            return _segment(text, start, semi)
        start = semi + 1

    if text[start:].strip():
        return ""

    # Cursor parked after the final statement.
    previous_start = semicolons[-2] + 1 if len(semicolons) > 1 else 0
    return _segment(text, previous_start, semicolons[-1])


def _segment(text: str, start: int, semi: int) -> str:
    statement = text[start : semi + 1].strip()
    return statement.removesuffix(";").strip()
