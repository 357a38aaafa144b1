"""dib-query CLI entrypoint."""

from __future__ import annotations

from typing import IO

import click

from dibber_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors, pass_cli_context
from dibber_cli.shared.config import OUTPUT_FORMATS
from dibber_cli.shared.exceptions import QueryError
from dibber_cli.sql_edit.locator import statement_under_cursor
from dibber_cli.sql_edit.query_meta import parse_query_meta
from dibber_cli.sql_edit.splitter import is_select_statement, split_statements

from . import executor, render
from .types import QueryResult

format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    help="Output format (defaults to output.format from the config).",
)
limit_option = click.option("--limit", type=int, help="Row limit per result set; 0 disables it.")


@click.group(help="Run SQL buffers against a SQLite database and inspect statements.")
@common_cli_options
@handle_cli_errors
def cli(cli_ctx: CLIContext) -> None:
    """Primary Click group for dib-query commands."""
    cli_ctx.logger.debug(f"dib-query using {cli_ctx.db_path} ({cli_ctx.dialect.value}).")


@cli.command("run")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@format_option
@limit_option
@pass_cli_context
@handle_cli_errors
def run_buffer(
    cli_ctx: CLIContext,
    source: IO[str],
    output_format: str | None,
    limit: int | None,
) -> None:
    """Split a buffer (file or stdin) and execute every statement in order."""
    text = source.read()
    statements = split_statements(text)
    if not statements:
        raise click.ClickException("No query provided.")
    cli_ctx.logger.debug(f"Executing {len(statements)} statement(s).")
    for statement in statements:
        cli_ctx.logger.statement("Queued", statement)

    results = executor.execute_script(
        config=cli_ctx.config,
        text=text,
        limit=limit,
        skip_writes=cli_ctx.dry_run,
    )
    for result in results:
        _render_result(cli_ctx, result, output_format)


@cli.command("split")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@pass_cli_context
@handle_cli_errors
def split_buffer(cli_ctx: CLIContext, source: IO[str]) -> None:
    """Print the statements of a buffer, one per block."""
    statements = split_statements(source.read())
    cli_ctx.logger.debug(f"Found {len(statements)} statement(s).")
    render.render_statements(statements)


@cli.command("cursor")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--line", "line", type=click.IntRange(min=1), required=True, help="1-based cursor line.")
@click.option("--column", "column", type=click.IntRange(min=1), default=1, show_default=True, help="1-based cursor column.")
@click.option("--execute", is_flag=True, help="Run the statement instead of printing it.")
@format_option
@limit_option
@pass_cli_context
@handle_cli_errors
def statement_at_cursor(
    cli_ctx: CLIContext,
    source: IO[str],
    line: int,
    column: int,
    execute: bool,
    output_format: str | None,
    limit: int | None,
) -> None:
    """Show (or run) the terminated statement under a cursor position."""
    statement = statement_under_cursor(source.read(), line - 1, column - 1)
    if not statement:
        raise click.ClickException("No complete query under cursor.")

    if not execute:
        render.render_statements([statement])
        return

    read_only = cli_ctx.dry_run
    if read_only and not is_select_statement(statement):
        _render_result(cli_ctx, QueryResult(statement=statement, skipped=True), output_format)
        return
    cli_ctx.logger.statement("Executing", statement)
    result = executor.execute_statement(
        config=cli_ctx.config,
        statement=statement,
        limit=limit,
        read_only=read_only,
    )
    _render_result(cli_ctx, result, output_format)


@cli.command("meta")
@click.argument("statement", type=str)
@click.option(
    "--column",
    "columns",
    multiple=True,
    help="Result column name; when given, the statement is classified without running it.",
)
@format_option
@pass_cli_context
@handle_cli_errors
def show_meta(
    cli_ctx: CLIContext,
    statement: str,
    columns: tuple[str, ...],
    output_format: str | None,
) -> None:
    """Report whether a SELECT can be edited row by row."""
    if not statement.strip():
        raise click.ClickException("Query text must not be empty.")

    result_columns: tuple[str, ...] = columns
    if not result_columns and parse_query_meta(statement, ()) is not None:
        try:
            result = executor.execute_statement(
                config=cli_ctx.config,
                statement=statement,
                limit=1,
                read_only=True,
            )
        except QueryError as exc:
            # A failed execution has no metadata.
            cli_ctx.logger.warning(str(exc))
            render.render_query_meta(None, output_format=_format(cli_ctx, output_format))
            return
        result_columns = result.columns

    meta = parse_query_meta(statement, result_columns)
    render.render_query_meta(meta, output_format=_format(cli_ctx, output_format))


def _format(cli_ctx: CLIContext, output_format: str | None) -> str:
    return output_format or cli_ctx.config.output.format


def _render_result(cli_ctx: CLIContext, result: QueryResult, output_format: str | None) -> None:
    render.render_query_result(
        result,
        output_format=_format(cli_ctx, output_format),
        logger=cli_ctx.logger,
    )


def main() -> None:
    """Entry point for console_scripts."""
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
