"""dib-edit CLI: turn edits of a query's row into UPDATE/DELETE/INSERT statements.

Default behaviour is dry-run: the generated statement is printed so it can be
appended to a query buffer. Use --apply to execute it as well.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import IO

import click

from dibber_cli.dib_query import executor
from dibber_cli.dib_query.types import QueryResult
from dibber_cli.shared.cli import (
    CLIContext,
    common_cli_options,
    handle_cli_errors,
    pass_cli_context,
)
from dibber_cli.shared.exceptions import EditError
from dibber_cli.sql_edit.dialects import Dialect
from dibber_cli.sql_edit.generator import generate_delete, generate_insert, generate_update
from dibber_cli.sql_edit.query_meta import parse_query_meta
from dibber_cli.sql_edit.splitter import append_statement, split_statements
from dibber_cli.sql_edit.types import CellValue, QueryMeta, RowEdit

Generator = Callable[[QueryMeta | None, RowEdit, Dialect], "str | None"]


def _effective_dry_run(cli_ctx: CLIContext, apply: bool) -> bool:
    """Return True when the generated statement must not be executed."""
    return cli_ctx.dry_run or (not apply)


@click.group(help="Generate row mutations from an editable SELECT.")
@click.option("--apply", is_flag=True, help="Execute the generated statement (default is preview only).")
@common_cli_options
@handle_cli_errors
def main(apply: bool, cli_ctx: CLIContext) -> None:
    cli_ctx.state["apply_flag"] = bool(apply)
    mode = "APPLY" if apply and not cli_ctx.dry_run else "DRY-RUN"
    cli_ctx.logger.debug(
        f"dib-edit initialised (mode={mode}, dialect={cli_ctx.dialect.value}, db={cli_ctx.db_path})"
    )


def _edit_options(func: Callable[..., None]) -> Callable[..., None]:
    func = click.option(
        "--buffer",
        "buffer",
        type=click.File("r", encoding="utf-8"),
        help="Query buffer to print with the generated statement appended.",
    )(func)
    func = click.option("--id", "row_id", required=True, type=str, help="Original id value of the row to edit.")(func)
    return click.argument("query", type=str)(func)


def _value_options(func: Callable[..., None]) -> Callable[..., None]:
    func = click.option(
        "--null",
        "null_columns",
        multiple=True,
        metavar="COLUMN",
        help="Set a column to NULL.",
    )(func)
    return click.option(
        "--set",
        "assignments",
        multiple=True,
        metavar="COLUMN=VALUE",
        help="New value for a column (use an empty VALUE for the empty string).",
    )(func)


@main.command("update")
@_edit_options
@_value_options
@pass_cli_context
@handle_cli_errors
def update_row(
    cli_ctx: CLIContext,
    query: str,
    row_id: str,
    buffer: IO[str] | None,
    assignments: Sequence[str],
    null_columns: Sequence[str],
) -> None:
    """Generate an UPDATE for the changed columns of one row."""
    _run_edit(cli_ctx, generate_update, query, row_id, buffer, assignments, null_columns)


@main.command("delete")
@_edit_options
@pass_cli_context
@handle_cli_errors
def delete_row(cli_ctx: CLIContext, query: str, row_id: str, buffer: IO[str] | None) -> None:
    """Generate a DELETE for one row."""
    _run_edit(cli_ctx, generate_delete, query, row_id, buffer, (), ())


@main.command("insert")
@_edit_options
@_value_options
@pass_cli_context
@handle_cli_errors
def insert_row(
    cli_ctx: CLIContext,
    query: str,
    row_id: str,
    buffer: IO[str] | None,
    assignments: Sequence[str],
    null_columns: Sequence[str],
) -> None:
    """Generate an INSERT copying one row, with optional column overrides."""
    _run_edit(cli_ctx, generate_insert, query, row_id, buffer, assignments, null_columns)


def _run_edit(
    cli_ctx: CLIContext,
    generate: Generator,
    query: str,
    row_id: str,
    buffer: IO[str] | None,
    assignments: Sequence[str],
    null_columns: Sequence[str],
) -> None:
    statement = _single_statement(query)
    cli_ctx.logger.statement("Row source", statement)
    if parse_query_meta(statement, ()) is None:
        raise EditError("Only SELECT queries can be edited.")
    result = executor.execute_statement(
        config=cli_ctx.config,
        statement=statement,
        limit=0,
        read_only=True,
    )
    meta = parse_query_meta(statement, result.columns)
    if meta is None or not meta.is_editable:
        raise EditError(
            "Query is not editable: it must select from a single table without joins or "
            "aggregates and return an id column."
        )

    cells = _find_row(result, meta, row_id)
    row = RowEdit.from_row(result.columns, cells, result.column_types)
    row = _apply_edits(row, _parse_assignments(assignments), null_columns)

    sql = generate(meta, row, cli_ctx.dialect)
    if sql is None:
        cli_ctx.logger.warning("Nothing to update: no column changed.")
        return

    if buffer is not None:
        click.echo(append_statement(buffer.read(), sql))
    else:
        click.echo(f"{sql};")

    if _effective_dry_run(cli_ctx, bool(cli_ctx.state.get("apply_flag"))):
        cli_ctx.logger.info("[dry-run] Statement not executed. Re-run with --apply to execute it.")
        return

    cli_ctx.logger.statement("Applying", sql)
    outcome = executor.execute_statement(config=cli_ctx.config, statement=sql)
    cli_ctx.logger.success(f"{outcome.rowcount} row(s) affected.")


def _single_statement(query: str) -> str:
    statements = split_statements(query)
    if len(statements) != 1:
        raise click.ClickException("Provide exactly one SELECT statement.")
    return statements[0]


def _find_row(result: QueryResult, meta: QueryMeta, row_id: str) -> tuple[CellValue, ...]:
    for row in result.rows:
        cell = row[meta.id_index]
        if not cell.is_null and cell.value == row_id:
            return row
    raise EditError(f"No row with {meta.id_column} = {row_id} in the query result.")


def _parse_assignments(pairs: Iterable[str]) -> dict[str, str]:
    """Convert COLUMN=VALUE CLI options into a dictionary."""
    parsed: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.ClickException(f"Assignment '{pair}' must be in COLUMN=VALUE format.")
        column, value = pair.split("=", 1)
        column = column.strip()
        if not column:
            raise click.ClickException("Column names cannot be empty.")
        parsed[column] = value
    return parsed


def _apply_edits(row: RowEdit, assignments: dict[str, str], null_columns: Iterable[str]) -> RowEdit:
    try:
        for column, value in assignments.items():
            row = row.with_text(column, value)
        for column in null_columns:
            row = row.with_null(column)
    except KeyError as exc:
        raise EditError(f"Column {exc} is not part of the query result.") from exc
    return row


if __name__ == "__main__":  # pragma: no cover
    main()
