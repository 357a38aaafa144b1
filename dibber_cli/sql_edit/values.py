"""Format edited cell values as SQL literals."""

from __future__ import annotations

import re

from .dialects import Dialect
from .types import ColumnType

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

TRUE_WORDS = frozenset({"true", "1", "yes", "on", "t"})
FALSE_WORDS = frozenset({"false", "0", "no", "off", "f"})


def is_valid_number(text: str) -> bool:
    """Return True for plain decimal or scientific notation such as ``-1.5e3``."""
    return _NUMBER.fullmatch(text.strip()) is not None


def quote_string(text: str) -> str:
    """Return ``text`` as a single-quoted SQL string literal."""
    return "'" + text.replace("'", "''") + "'"


def format_value(text: str, is_null: bool, column_type: ColumnType, dialect: Dialect | str) -> str:
    """Return the SQL literal for one cell.

    NULL wins over everything; the empty string stays an empty string. Numbers
    that do not validate and unrecognised boolean words are quoted so the
    database, not this formatter, rejects them.
    """
    if is_null:
        return "NULL"
    if text == "":
        return "''"

    if column_type == ColumnType.NUMERIC:
        if is_valid_number(text):
            return text
        return quote_string(text)

    if column_type == ColumnType.BOOLEAN:
        word = text.strip().lower()
        target = Dialect.from_name(dialect)
        if word in TRUE_WORDS:
            return target.true_literal
        if word in FALSE_WORDS:
            return target.false_literal
        return quote_string(text)

    return quote_string(text)
