"""Map driver-reported column type names to semantic categories."""

from __future__ import annotations

from typing import Iterable

from .types import ColumnType

# Checked in order; the first category with a matching keyword wins.
_KEYWORDS: tuple[tuple[ColumnType, tuple[str, ...]], ...] = (
    (
        ColumnType.NUMERIC,
        (
            "INT",
            "SERIAL",
            "DECIMAL",
            "NUMERIC",
            "REAL",
            "FLOAT",
            "DOUBLE",
            "MONEY",
            "NUMBER",
        ),
    ),
    (ColumnType.BOOLEAN, ("BOOL", "BIT")),
    (ColumnType.DATETIME, ("DATE", "TIME", "YEAR")),
    (ColumnType.BLOB, ("BLOB", "BYTEA", "BINARY", "IMAGE")),
    (
        ColumnType.TEXT,
        ("CHAR", "TEXT", "CLOB", "STRING", "JSON", "UUID", "ENUM", "XML"),
    ),
)


def classify_column_type(type_name: str | None) -> ColumnType:
    """Return the semantic category for a database type name such as ``VARCHAR(255)``."""
    upper = (type_name or "").upper()
    if not upper.strip():
        return ColumnType.UNKNOWN
    for column_type, keywords in _KEYWORDS:
        if any(keyword in upper for keyword in keywords):
            return column_type
    return ColumnType.UNKNOWN


def classify_column_types(type_names: Iterable[str | None]) -> tuple[ColumnType, ...]:
    return tuple(classify_column_type(name) for name in type_names)
