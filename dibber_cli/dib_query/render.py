"""Output rendering helpers for dib-query."""

from __future__ import annotations

import csv
import json
import sys
from typing import IO, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from dibber_cli.shared.logging import Logger
from dibber_cli.sql_edit.types import CellValue, QueryMeta

from .types import QueryResult

NULL_DISPLAY = "NULL"


def render_query_result(
    result: QueryResult,
    *,
    output_format: str,
    logger: Logger,
    stream=None,
) -> None:
    """Render one statement's result to the desired format."""
    output_stream = stream or sys.stdout

    if result.skipped:
        logger.warning(f"Skipped (dry run): {_first_line(result.statement)}")
        return
    if not result.returns_rows:
        logger.info(f"{result.rowcount} row(s) affected.")
        return

    fmt = (output_format or "table").lower()
    if fmt == "table":
        _render_table(result, logger=logger, stream=output_stream)
    elif fmt == "csv":
        _render_delimited(result, stream=output_stream, delimiter=",")
    elif fmt == "tsv":
        _render_delimited(result, stream=output_stream, delimiter="\t")
    elif fmt == "json":
        _render_json(result, stream=output_stream)
    else:  # pragma: no cover - Click validation should prevent this
        raise ValueError(f"Unsupported output format '{output_format}'.")

    if result.truncated:
        logger.warning(f"Result truncated to {result.limit_value} rows. Re-run with --limit 0 for full output.")


def render_statements(statements: Sequence[str], *, stream=None) -> None:
    """Print statements terminated with semicolons, one block per statement."""
    output_stream = stream or sys.stdout
    output_stream.write("\n\n".join(f"{statement};" for statement in statements))
    if statements:
        output_stream.write("\n")


def render_query_meta(
    meta: QueryMeta | None,
    *,
    output_format: str,
    stream=None,
) -> None:
    """Render editability metadata for a statement."""
    output_stream = stream or sys.stdout
    payload = {
        "is_select": meta is not None,
        "editable": bool(meta and meta.is_editable),
        "table": meta.table_name if meta else "",
        "id_column": meta.id_column if meta else "",
        "id_index": meta.id_index if meta else -1,
    }

    if (output_format or "table").lower() == "json":
        json.dump(payload, output_stream, indent=2)
        output_stream.write("\n")
        return

    console = Console(file=output_stream, highlight=False, force_terminal=False)
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Property", style="bold")
    table.add_column("Value")
    for key, value in payload.items():
        table.add_row(key, str(value))
    console.print(table)


def _render_table(result: QueryResult, *, logger: Logger, stream: IO[str]) -> None:
    console = Console(file=stream, highlight=False, force_terminal=False)
    table = Table(box=box.SIMPLE_HEAVY, show_header=bool(result.columns), header_style="bold")
    for column in result.columns:
        table.add_column(column or "", max_width=50, overflow="ellipsis", no_wrap=True)

    if result.rows:
        for row in result.rows:
            table.add_row(*[_table_cell(cell) for cell in row])
    else:
        logger.info("Query returned zero rows.")

    console.print(table)
    logger.info(f"({len(result.rows)} rows)")


def _render_delimited(result: QueryResult, *, stream: IO[str], delimiter: str) -> None:
    writer = csv.writer(stream, delimiter=delimiter, lineterminator="\n")
    writer.writerow(result.columns)
    for row in result.rows:
        writer.writerow(_stringify(cell) for cell in row)


def _render_json(result: QueryResult, *, stream: IO[str]) -> None:
    records = [
        {column: (None if cell.is_null else cell.value) for column, cell in zip(result.columns, row)}
        for row in result.rows
    ]
    json.dump(records, stream, indent=2)
    stream.write("\n")


def _stringify(cell: CellValue) -> str:
    return NULL_DISPLAY if cell.is_null else cell.value


def _table_cell(cell: CellValue) -> str:
    if cell.is_null:
        return NULL_DISPLAY
    # Multi-line values are shown by their first line only.
    if "\n" in cell.value:
        return cell.value.split("\n", 1)[0] + "..."
    return cell.value


def _first_line(statement: str) -> str:
    return statement.strip().split("\n", 1)[0]
