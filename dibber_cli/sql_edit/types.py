"""Value types shared by the SQL editing engine."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence


class ColumnType(str, Enum):
    """Semantic category of a database column type."""

    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    BLOB = "blob"
    TEXT = "text"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class CellValue:
    """A single result cell; NULL is distinct from the empty string."""

    value: str = ""
    is_null: bool = False

    @classmethod
    def null(cls) -> CellValue:
        return cls("", True)

    @classmethod
    def of(cls, raw: object) -> CellValue:
        """Build a cell from a value returned by a database driver."""
        if raw is None:
            return cls.null()
        if isinstance(raw, (bytes, bytearray, memoryview)):
            return cls(bytes(raw).decode("utf-8", errors="replace"))
        return cls(str(raw))

    def display(self) -> str:
        return "NULL" if self.is_null else self.value


@dataclass(frozen=True, slots=True)
class QueryMeta:
    """Editability metadata derived from an executed SELECT."""

    table_name: str = ""
    is_editable: bool = False
    id_column: str = ""
    id_index: int = -1

    @classmethod
    def not_editable(cls) -> QueryMeta:
        return cls()


@dataclass(frozen=True, slots=True)
class FieldEdit:
    """Original and current state of one column in a row edit."""

    original: CellValue
    text: str
    is_null: bool
    column_type: ColumnType = ColumnType.UNKNOWN

    @property
    def current(self) -> CellValue:
        if self.is_null:
            return CellValue.null()
        return CellValue(self.text)

    @property
    def changed(self) -> bool:
        return self.current != self.original


@dataclass(frozen=True, slots=True)
class RowEdit:
    """Immutable row edit: parallel arrays indexed like the result columns."""

    columns: tuple[str, ...]
    fields: tuple[FieldEdit, ...]

    @classmethod
    def from_row(
        cls,
        columns: Sequence[str],
        cells: Sequence[CellValue],
        column_types: Sequence[ColumnType] | None = None,
    ) -> RowEdit:
        """Start an edit with every field equal to its original value."""
        if len(columns) != len(cells):
            raise ValueError(f"Row has {len(cells)} cells for {len(columns)} columns.")
        types = list(column_types or [])
        fields = []
        for index, cell in enumerate(cells):
            column_type = types[index] if index < len(types) else ColumnType.UNKNOWN
            fields.append(FieldEdit(original=cell, text=cell.value, is_null=cell.is_null, column_type=column_type))
        return cls(columns=tuple(columns), fields=tuple(fields))

    def index_of(self, column: str) -> int:
        try:
            return self.columns.index(column)
        except ValueError:
            lowered = column.lower()
            for index, name in enumerate(self.columns):
                if name.lower() == lowered:
                    return index
        raise KeyError(column)

    def with_text(self, column: str, text: str) -> RowEdit:
        """Return a copy where ``column`` holds ``text`` as a non-NULL value."""
        return self._replace_field(self.index_of(column), text=text, is_null=False)

    def with_null(self, column: str) -> RowEdit:
        """Return a copy where ``column`` is set to NULL."""
        return self._replace_field(self.index_of(column), text="", is_null=True)

    def _replace_field(self, index: int, **changes: object) -> RowEdit:
        fields = list(self.fields)
        fields[index] = replace(fields[index], **changes)
        return replace(self, fields=tuple(fields))
