"""Data structures shared across dib-query modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from dibber_cli.sql_edit.column_types import classify_column_types
from dibber_cli.sql_edit.types import CellValue, ColumnType


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Structured result of one executed statement."""

    statement: str
    columns: tuple[str, ...] = ()
    type_names: tuple[str, ...] = ()
    rows: Sequence[tuple[CellValue, ...]] = field(default_factory=tuple)
    rowcount: int = -1
    limit_value: int | None = None
    truncated: bool = False
    skipped: bool = False

    @property
    def returns_rows(self) -> bool:
        return bool(self.columns)

    @property
    def column_types(self) -> tuple[ColumnType, ...]:
        return classify_column_types(self.type_names)
