"""Generate UPDATE, DELETE and INSERT statements from a row edit."""

from __future__ import annotations

from .dialects import Dialect
from .types import QueryMeta, RowEdit
from .values import format_value


def quote_identifier(name: str, dialect: Dialect | str) -> str:
    """Wrap a table or column name in the dialect's identifier quotes."""
    quote = Dialect.from_name(dialect).quote_char
    return quote + name.replace(quote, quote * 2) + quote


def generate_update(meta: QueryMeta | None, row: RowEdit, dialect: Dialect | str) -> str | None:
    """Return an UPDATE for the changed fields, or None when nothing changed."""
    if meta is None or not meta.is_editable:
        return None
    target = Dialect.from_name(dialect)
    where = _where_clause(meta, row, target)

    assignments = []
    for column, field in zip(row.columns, row.fields):
        if not field.changed:
            continue
        value = format_value(field.text, field.is_null, field.column_type, target)
        assignments.append(f"{quote_identifier(column, target)} = {value}")

    if not assignments:
        return None
    table = quote_identifier(meta.table_name, target)
    return f"UPDATE {table} SET {', '.join(assignments)} WHERE {where}"


def generate_delete(meta: QueryMeta | None, row: RowEdit, dialect: Dialect | str) -> str | None:
    """Return a DELETE targeting the row's original id."""
    if meta is None or not meta.is_editable:
        return None
    target = Dialect.from_name(dialect)
    where = _where_clause(meta, row, target)
    return f"DELETE FROM {quote_identifier(meta.table_name, target)} WHERE {where}"


def generate_insert(meta: QueryMeta | None, row: RowEdit, dialect: Dialect | str) -> str | None:
    """Return an INSERT of the current values, leaving the id to the database."""
    if meta is None or not meta.is_editable:
        return None
    target = Dialect.from_name(dialect)
    _check_id_index(meta, row)

    columns = []
    values = []
    for index, (column, field) in enumerate(zip(row.columns, row.fields)):
        if index == meta.id_index:
            continue
        columns.append(quote_identifier(column, target))
        values.append(format_value(field.text, field.is_null, field.column_type, target))

    table = quote_identifier(meta.table_name, target)
    if not columns and target is not Dialect.MYSQL:
        # MySQL spells an all-defaults row as "() VALUES ()".
        return f"INSERT INTO {table} DEFAULT VALUES"
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(values)})"


def _check_id_index(meta: QueryMeta, row: RowEdit) -> None:
    if not 0 <= meta.id_index < len(row.fields) or len(row.columns) != len(row.fields):
        raise IndexError(
            f"id column index {meta.id_index} does not fit a row of {len(row.fields)} fields "
            f"and {len(row.columns)} columns"
        )


def _where_clause(meta: QueryMeta, row: RowEdit, dialect: Dialect) -> str:
    _check_id_index(meta, row)
    id_field = row.fields[meta.id_index]
    # The original id, never the edited one, and never NULL.
    id_value = format_value(id_field.original.value, False, id_field.column_type, dialect)
    return f"{quote_identifier(meta.id_column, dialect)} = {id_value}"
