"""Rich-backed logging for the dib-* tools.

Result sets and generated SQL are the only things written to stdout, so they
can be piped or appended to a buffer; every log line goes to stderr.
"""

from __future__ import annotations

from dataclasses import dataclass

import click
from rich.console import Console
from rich.theme import Theme
from rich.traceback import install

install(show_locals=False, suppress=[click])

_LEVEL_STYLES = {
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "debug": "dim",
    "sql": "magenta",
}

# Highlighting would decorate numbers and quotes inside SQL with ANSI sequences.
_stdout_console = Console(theme=Theme(_LEVEL_STYLES), highlight=False)
_stderr_console = Console(stderr=True, theme=Theme(_LEVEL_STYLES), highlight=False)

STATEMENT_PREVIEW_WIDTH = 120


def preview_statement(statement: str, width: int = STATEMENT_PREVIEW_WIDTH) -> str:
    """Collapse a statement onto one line, cut to ``width`` characters."""
    flat = " ".join(statement.split())
    if len(flat) <= width:
        return flat
    return flat[: width - 3] + "..."


@dataclass(slots=True)
class Logger:
    """Lightweight logger facade backed by Rich consoles."""

    verbose: bool = False

    @property
    def console(self) -> Console:
        return _stdout_console

    def _emit(self, level: str, message: str) -> None:
        _stderr_console.print(message, style=level, markup=False)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._emit("debug", message)

    def statement(self, label: str, sql: str) -> None:
        """Debug-log a one-line preview of ``sql``."""
        if self.verbose:
            self._emit("sql", f"{label}: {preview_statement(sql)}")


def get_logger(verbose: bool = False) -> Logger:
    """Return a configured Logger instance."""
    return Logger(verbose=verbose)
