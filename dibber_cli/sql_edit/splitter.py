"""Split a query buffer into individual statements.

The scanner understands just enough SQL lexing to keep semicolons that live
inside string literals, quoted identifiers and comments from ending a
statement:

- single-quoted strings, with ``''`` doubling and backslash escapes
- double-quoted identifiers/strings, with ``""`` doubling
- ``--`` line comments (the newline stays with the statement)
- ``/* ... */`` block comments

Dollar-quoted bodies, ``DELIMITER`` redefinition and semicolons inside
backtick identifiers are not recognised.
"""

from __future__ import annotations

import re

_ROW_KEYWORDS = ("SELECT", "WITH", "SHOW", "DESCRIBE", "DESC", "EXPLAIN", "TABLE", "VALUES", "PRAGMA")
_LEADING_WORD = re.compile(r"[A-Za-z]+")
_LEADING_NOISE = re.compile(r"(?:\s+|--[^\n]*|/\*.*?\*/)*", re.DOTALL)


def split_statements(text: str) -> list[str]:
    """Return the non-empty, trimmed statements of ``text`` in document order."""
    statements: list[str] = []
    current: list[str] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if ch == "-" and nxt == "-":
            end = text.find("\n", i)
            end = n if end == -1 else end + 1
            current.append(text[i:end])
            i = end
            continue

        if ch == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            current.append(text[i:end])
            i = end
            continue

        if ch == "'":
            end = _scan_quoted(text, i, "'", backslash_escapes=True)
            current.append(text[i:end])
            i = end
            continue

        if ch == '"':
            end = _scan_quoted(text, i, '"', backslash_escapes=False)
            current.append(text[i:end])
            i = end
            continue

        if ch == ";":
            _flush(current, statements)
            current = []
            i += 1
            continue

        current.append(ch)
        i += 1

    _flush(current, statements)
    return statements


def _scan_quoted(text: str, start: int, quote: str, *, backslash_escapes: bool) -> int:
    """Return the offset just past the quoted region opening at ``start``."""
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == quote:
            if i + 1 < n and text[i + 1] == quote:
                i += 2
                continue
            return i + 1
        if backslash_escapes and ch == "\\" and i + 1 < n:
            i += 2
            continue
        i += 1
    return n


def _flush(parts: list[str], statements: list[str]) -> None:
    statement = "".join(parts).strip()
    if statement:
        statements.append(statement)


def is_select_statement(statement: str) -> bool:
    """Return True when the statement is expected to produce a result set."""
    # Leading whitespace and comments stay attached to split statements.
    start = _LEADING_NOISE.match(statement).end()
    match = _LEADING_WORD.match(statement, start)
    if not match:
        return False
    return match.group(0).upper() in _ROW_KEYWORDS


def append_statement(buffer: str, statement: str) -> str:
    """Return ``buffer`` with ``statement`` appended as its own terminated statement."""
    if not buffer.strip():
        return statement + ";"
    head = buffer.rstrip(" \t\n")
    if not head.endswith(";"):
        head += ";"
    return head + "\n\n" + statement + ";"
