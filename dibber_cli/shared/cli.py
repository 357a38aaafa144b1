"""Options, context and error handling shared by the dib-* command groups."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

import click

from dibber_cli.sql_edit.dialects import Dialect, detect_dialect

from .config import AppConfig, load_config
from .exceptions import ConfigurationError, DibberError
from .logging import Logger, get_logger

F = TypeVar("F", bound=Callable[..., Any])

DIALECT_CHOICES = ("mysql", "postgres", "postgresql", "pg", "sqlite", "sqlite3", "default")


@dataclass(slots=True)
class CLIContext:
    """Everything a subcommand needs: config, target database, dialect and logger."""

    config: AppConfig
    db_path: Path
    dialect: Dialect
    dry_run: bool
    verbose: bool
    logger: Logger
    state: dict[str, Any] = field(default_factory=dict)


pass_cli_context = click.make_pass_decorator(CLIContext)


def resolve_dialect(config: AppConfig, override: str | None = None) -> Dialect:
    """Pick the dialect from an explicit token, the config, or the database path."""
    token = override or config.database.dialect
    if token:
        return Dialect.from_name(token)
    return detect_dialect(str(config.database.path))


def common_cli_options(func: F) -> F:
    """Add --config/--db/--dialect/--dry-run/--verbose and build the CLIContext."""

    @click.option("--config", "config_path", type=click.Path(path_type=str), help="Path to config file.")
    @click.option("--db", "db_path", type=click.Path(path_type=str), help="Override database path.")
    @click.option(
        "--dialect",
        "dialect_name",
        type=click.Choice(DIALECT_CHOICES, case_sensitive=False),
        help="SQL dialect for generated statements (detected from the database path when omitted).",
    )
    @click.option("--dry-run", is_flag=True, help="Never execute statements that write.")
    @click.option("--verbose", is_flag=True, help="Log debug details and executed statements.")
    @click.pass_context
    @functools.wraps(func)
    def wrapper(
        ctx: click.Context,
        *args: Any,
        config_path: str | None = None,
        db_path: str | None = None,
        dialect_name: str | None = None,
        dry_run: bool = False,
        verbose: bool = False,
        **kwargs: Any,
    ) -> Any:
        try:
            app_config = load_config(config_path)
        except ConfigurationError as exc:
            raise click.ClickException(str(exc)) from exc

        if db_path:
            app_config = app_config.with_database_path(Path(db_path).expanduser())

        cli_ctx = CLIContext(
            config=app_config,
            db_path=app_config.database.path,
            dialect=resolve_dialect(app_config, dialect_name),
            dry_run=dry_run,
            verbose=verbose,
            logger=get_logger(verbose=verbose),
        )
        ctx.obj = cli_ctx
        kwargs["cli_ctx"] = cli_ctx
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def handle_cli_errors(func: F) -> F:
    """Convert project exceptions into Click-friendly errors."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigurationError as exc:
            raise click.ClickException(f"Configuration error: {exc}") from exc
        except DibberError as exc:
            raise click.ClickException(str(exc)) from exc
        except click.ClickException:
            raise
        except Exception as exc:  # pragma: no cover
            raise click.ClickException(f"Unexpected error: {exc}") from exc

    return wrapper  # type: ignore[return-value]
