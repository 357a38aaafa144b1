"""SQL editing engine: statement splitting, editability checks and mutation generation."""

from .column_types import classify_column_type, classify_column_types
from .dialects import Dialect, detect_dialect
from .generator import generate_delete, generate_insert, generate_update, quote_identifier
from .locator import statement_under_cursor
from .query_meta import parse_query_meta
from .splitter import append_statement, is_select_statement, split_statements
from .types import CellValue, ColumnType, FieldEdit, QueryMeta, RowEdit
from .values import format_value, is_valid_number

__all__ = [
    "CellValue",
    "ColumnType",
    "Dialect",
    "FieldEdit",
    "QueryMeta",
    "RowEdit",
    "append_statement",
    "classify_column_type",
    "classify_column_types",
    "detect_dialect",
    "format_value",
    "generate_delete",
    "generate_insert",
    "generate_update",
    "is_select_statement",
    "is_valid_number",
    "parse_query_meta",
    "quote_identifier",
    "split_statements",
    "statement_under_cursor",
]
