"""Decide whether an executed SELECT can be edited row by row."""

from __future__ import annotations

import re
from typing import Sequence

from .types import QueryMeta

_SELECT = re.compile(r"SELECT\b", re.IGNORECASE)

_AGGREGATE_TOKENS = (
    "COUNT(",
    "SUM(",
    "AVG(",
    "MIN(",
    "MAX(",
    "GROUP_CONCAT(",
    "GROUP BY",
    "HAVING",
    "DISTINCT",
)
_TABLE_PART_TERMINATORS = (" WHERE ", " ORDER BY ", " LIMIT ", " GROUP BY ")
_FROM = " FROM "


def parse_query_meta(statement: str, columns: Sequence[str]) -> QueryMeta | None:
    """Return editability metadata, or None when the statement is not a SELECT.

    A query is editable when it reads one table without joins, aggregation or
    DISTINCT, and its result includes a column named ``id`` (any case); that
    column becomes the row key for generated UPDATE/DELETE statements.
    """
    # Collapse whitespace runs so newlines and tabs match the space-delimited keywords.
    normalized = " ".join(statement.split())
    if not _SELECT.match(normalized):
        return None

    upper = normalized.upper()
    if any(token in upper for token in _AGGREGATE_TOKENS):
        return QueryMeta.not_editable()
    if " JOIN " in upper:
        return QueryMeta.not_editable()

    from_index = upper.find(_FROM)
    if from_index == -1:
        return QueryMeta.not_editable()

    # Pad so a terminator at the very end of the statement still matches.
    after_from = normalized[from_index + len(_FROM) :] + " "
    end = len(after_from)
    for keyword in _TABLE_PART_TERMINATORS:
        index = after_from.upper().find(keyword)
        if index != -1:
            end = min(end, index)
    table_part = after_from[:end].strip()

    if "," in table_part:
        return QueryMeta.not_editable()

    table_name = extract_table_name(table_part)
    if not table_name:
        return QueryMeta.not_editable()

    for index, column in enumerate(columns):
        if column.lower() == "id":
            return QueryMeta(table_name=table_name, is_editable=True, id_column=column, id_index=index)
    return QueryMeta.not_editable()


def extract_table_name(table_part: str) -> str:
    """Return the bare table name from a FROM fragment such as ``users AS u``."""
    cleaned = table_part.strip().replace("`", "").replace('"', "")
    parts = cleaned.split()
    return parts[0] if parts else ""
