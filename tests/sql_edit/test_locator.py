from __future__ import annotations

from dibber_cli.sql_edit.locator import cursor_offset, statement_under_cursor

BUFFER = "SELECT 1;\nSELECT 2;\n"


def test_cursor_offset_counts_newlines() -> None:
    assert cursor_offset("ab\ncd", 0, 0) == 0
    assert cursor_offset("ab\ncd", 1, 1) == 4


def test_cursor_offset_clamps_out_of_range_positions() -> None:
    assert cursor_offset("ab\ncd", 0, 99) == 2
    assert cursor_offset("ab\ncd", 0, -5) == 0
    assert cursor_offset("ab\ncd", 7, 0) == 5
    assert cursor_offset("ab\ncd", -1, 3) == 0


def test_statement_under_cursor_picks_enclosing_segment() -> None:
    assert statement_under_cursor(BUFFER, 0, 0) == "SELECT 1"
    assert statement_under_cursor(BUFFER, 0, 8) == "SELECT 1"
    assert statement_under_cursor(BUFFER, 1, 3) == "SELECT 2"


def test_statement_under_cursor_spans_lines() -> None:
    text = "SELECT *\nFROM users\nWHERE id = 1;\nSELECT 2;"
    assert statement_under_cursor(text, 1, 2) == "SELECT *\nFROM users\nWHERE id = 1"
    assert statement_under_cursor(text, 3, 0) == "SELECT 2"


def test_cursor_after_last_statement_returns_previous() -> None:
    assert statement_under_cursor(BUFFER, 2, 0) == "SELECT 2"
    assert statement_under_cursor("SELECT 1;", 0, 9) == "SELECT 1"
    assert statement_under_cursor("SELECT 1;\n\n  ", 5, 0) == "SELECT 1"


def test_unterminated_statement_is_never_returned() -> None:
    text = "SELECT 1;\nSELECT 2"
    assert statement_under_cursor(text, 1, 0) == ""
    assert statement_under_cursor(text, 0, 0) == "SELECT 1"


def test_no_semicolon_means_no_statement() -> None:
    assert statement_under_cursor("SELECT * FROM users", 0, 5) == ""
    assert statement_under_cursor("   \n ", 0, 0) == ""
    assert statement_under_cursor("", 0, 0) == ""


def test_locator_is_not_quote_aware() -> None:
    assert statement_under_cursor("SELECT 'a;b';", 0, 0) == "SELECT 'a"
    assert statement_under_cursor("SELECT 'a;b';", 0, 11) == "b'"
