"""Statement execution helpers for dib-query."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from contextlib import contextmanager
from typing import Any, Iterator

from dibber_cli.shared.config import AppConfig
from dibber_cli.shared.database import connect
from dibber_cli.shared.exceptions import QueryError
from dibber_cli.sql_edit.dialects import Dialect
from dibber_cli.sql_edit.generator import quote_identifier
from dibber_cli.sql_edit.query_meta import parse_query_meta
from dibber_cli.sql_edit.splitter import is_select_statement, split_statements
from dibber_cli.sql_edit.types import CellValue

from .types import QueryResult

_PYTHON_TYPE_NAMES: tuple[tuple[type, str], ...] = (
    (int, "INTEGER"),
    (float, "REAL"),
    (bytes, "BLOB"),
    (str, "TEXT"),
)


def execute_statement(
    *,
    config: AppConfig,
    statement: str,
    limit: int | None = None,
    read_only: bool = False,
) -> QueryResult:
    """Execute one statement on its own connection."""

    effective_limit = _normalise_limit(config, limit)
    with _connection(config, read_only=read_only) as connection:
        return _run_statement(connection, statement, effective_limit, read_only=read_only)


def execute_script(
    *,
    config: AppConfig,
    text: str,
    limit: int | None = None,
    skip_writes: bool = False,
) -> list[QueryResult]:
    """Split ``text`` and execute each statement in order on one connection.

    Sharing the connection keeps TEMP tables, ATTACHed databases and PRAGMA
    settings alive for the rest of the buffer. Each write is committed as it
    runs; execution stops at the first failing statement. With ``skip_writes``
    only row-returning statements run; the others come back marked as skipped.
    """

    effective_limit = _normalise_limit(config, limit)
    results: list[QueryResult] = []
    with _connection(config, read_only=skip_writes) as connection:
        for statement in split_statements(text):
            if skip_writes and not is_select_statement(statement):
                results.append(QueryResult(statement=statement, skipped=True))
                continue
            results.append(_run_statement(connection, statement, effective_limit, read_only=skip_writes))
    return results


def _run_statement(
    connection: sqlite3.Connection,
    statement: str,
    limit: int | None,
    *,
    read_only: bool,
) -> QueryResult:
    try:
        cursor = connection.execute(statement)
        if cursor.description is None:
            connection.commit()
            return QueryResult(statement=statement, rowcount=cursor.rowcount)

        columns = tuple(col[0] for col in cursor.description)
        # INSERT/UPDATE/DELETE ... RETURNING must run to completion before the commit.
        drain = not read_only and not is_select_statement(statement)
        raw_rows, truncated = _fetch_rows(cursor, limit, drain=drain)
        cursor.close()
        if not read_only:
            connection.commit()
        type_names = _column_type_names(connection, statement, columns, raw_rows)
    except sqlite3.OperationalError as exc:
        raise QueryError(f"SQLite error: {exc}") from exc
    except sqlite3.Error as exc:
        raise QueryError(f"Database error during execution: {exc}") from exc

    rows = [tuple(CellValue.of(value) for value in row) for row in raw_rows]
    return QueryResult(
        statement=statement,
        columns=columns,
        type_names=type_names,
        rows=rows,
        rowcount=len(rows),
        limit_value=limit,
        truncated=truncated,
    )


# ---------------------------------------------------------------------------
# Internal helpers


def _normalise_limit(config: AppConfig, limit: int | None) -> int | None:
    if limit is None:
        limit = config.output.row_limit
    if limit <= 0:
        return None
    return limit


@contextmanager
def _connection(config: AppConfig, *, read_only: bool) -> Iterator[sqlite3.Connection]:
    try:
        with connect(config, read_only=read_only) as connection:
            yield connection
    except FileNotFoundError as exc:
        raise QueryError(f"Database path not found: {exc}") from exc


def _fetch_rows(
    cursor: sqlite3.Cursor, limit: int | None, *, drain: bool = False
) -> tuple[list[tuple[Any, ...]], bool]:
    if limit is None:
        return list(cursor.fetchall()), False

    rows = cursor.fetchall() if drain else cursor.fetchmany(limit + 1)
    truncated = len(rows) > limit
    return list(rows[:limit]), truncated


def _column_type_names(
    connection: sqlite3.Connection,
    statement: str,
    columns: Sequence[str],
    rows: Sequence[tuple[Any, ...]],
) -> tuple[str, ...]:
    """Prefer declared types of the edited table; fall back to the values themselves."""
    declared: dict[str, str] = {}
    meta = parse_query_meta(statement, columns)
    if meta is not None and meta.is_editable:
        declared = _declared_types(connection, meta.table_name)

    names: list[str] = []
    for index, column in enumerate(columns):
        name = declared.get(column.lower())
        names.append(name if name is not None else _infer_type_name(rows, index))
    return tuple(names)


def _declared_types(connection: sqlite3.Connection, table: str) -> dict[str, str]:
    cursor = connection.execute(f"PRAGMA table_info({quote_identifier(table, Dialect.SQLITE)})")
    return {str(row[1]).lower(): str(row[2] or "") for row in cursor.fetchall()}


def _infer_type_name(rows: Sequence[tuple[Any, ...]], index: int) -> str:
    for row in rows:
        value = row[index]
        if value is None:
            continue
        for python_type, type_name in _PYTHON_TYPE_NAMES:
            if isinstance(value, python_type):
                return type_name
        return ""
    return ""
