from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from dibber_cli.dib_edit.main import main
from dibber_cli.shared import paths
from dibber_cli.shared.config import AppConfig
from dibber_cli.shared.database import connect

QUERY = "SELECT id, name, age, active FROM users"


def _invoke(tmp_path: Path, db_path: str, *args: str):
    runner = CliRunner()
    env = {paths.CONFIG_DIR_ENV: str(tmp_path / "config"), "NO_COLOR": "1"}
    return runner.invoke(main, ["--db", db_path, *args], env=env)


def _fetch(config: AppConfig, sql: str) -> list[tuple]:
    with connect(config, read_only=True) as connection:
        return connection.execute(sql).fetchall()


def test_update_previews_statement_without_executing(
    tmp_path: Path, app_config: AppConfig, db_path: str
) -> None:
    result = _invoke(tmp_path, db_path, "update", QUERY, "--id", "1", "--set", "name=Alicia")

    assert result.exit_code == 0, result.output
    assert """UPDATE "users" SET "name" = 'Alicia' WHERE "id" = 1;""" in result.output
    assert "[dry-run] Statement not executed." in result.output
    assert _fetch(app_config, "SELECT name FROM users WHERE id = 1") == [("Alice",)]


def test_update_apply_executes_statement(tmp_path: Path, app_config: AppConfig, db_path: str) -> None:
    result = _invoke(
        tmp_path, db_path, "--apply", "update", QUERY, "--id", "1", "--set", "age=32", "--null", "name"
    )

    assert result.exit_code == 0, result.output
    assert """UPDATE "users" SET "name" = NULL, "age" = 32 WHERE "id" = 1;""" in result.output
    assert "1 row(s) affected." in result.output
    assert _fetch(app_config, "SELECT name, age FROM users WHERE id = 1") == [(None, 32)]


def test_dry_run_flag_wins_over_apply(tmp_path: Path, app_config: AppConfig, db_path: str) -> None:
    result = _invoke(tmp_path, db_path, "--apply", "--dry-run", "delete", QUERY, "--id", "2")

    assert result.exit_code == 0, result.output
    assert "[dry-run]" in result.output
    assert _fetch(app_config, "SELECT count(*) FROM users") == [(3,)]


def test_update_without_changes_warns(tmp_path: Path, db_path: str) -> None:
    result = _invoke(tmp_path, db_path, "update", QUERY, "--id", "1", "--set", "name=Alice")

    assert result.exit_code == 0, result.output
    assert "Nothing to update: no column changed." in result.output
    assert "UPDATE" not in result.output


def test_update_empty_string_is_not_null(tmp_path: Path, db_path: str) -> None:
    result = _invoke(tmp_path, db_path, "update", QUERY, "--id", "2", "--set", "name=")

    assert result.exit_code == 0, result.output
    assert """UPDATE "users" SET "name" = '' WHERE "id" = 2;""" in result.output


def test_update_escapes_quotes(tmp_path: Path, db_path: str) -> None:
    result = _invoke(tmp_path, db_path, "update", QUERY, "--id", "3", "--set", "name=O'Neil")

    assert result.exit_code == 0, result.output
    assert """SET "name" = 'O''Neil' WHERE "id" = 3;""" in result.output


def test_delete_with_mysql_dialect(tmp_path: Path, db_path: str) -> None:
    result = _invoke(tmp_path, db_path, "--dialect", "mysql", "delete", QUERY, "--id", "3")

    assert result.exit_code == 0, result.output
    assert "DELETE FROM `users` WHERE `id` = 3;" in result.output


def test_insert_copies_row_without_id(tmp_path: Path, app_config: AppConfig, db_path: str) -> None:
    result = _invoke(tmp_path, db_path, "--apply", "insert", QUERY, "--id", "2", "--set", "name=Cara")

    assert result.exit_code == 0, result.output
    assert """INSERT INTO "users" ("name", "age", "active") VALUES ('Cara', NULL, FALSE);""" in result.output
    assert _fetch(app_config, "SELECT id, name FROM users WHERE name = 'Cara'") == [(4, "Cara")]


def test_buffer_gets_statement_appended(tmp_path: Path, db_path: str) -> None:
    buffer = tmp_path / "buffer.sql"
    buffer.write_text("SELECT * FROM users\n", encoding="utf-8")

    result = _invoke(tmp_path, db_path, "delete", QUERY, "--id", "2", "--buffer", str(buffer))

    assert result.exit_code == 0, result.output
    assert 'SELECT * FROM users;\n\nDELETE FROM "users" WHERE "id" = 2;' in result.output
    assert buffer.read_text(encoding="utf-8") == "SELECT * FROM users\n"


def test_non_editable_queries_are_rejected(tmp_path: Path, db_path: str) -> None:
    no_id = _invoke(tmp_path, db_path, "delete", "SELECT name FROM users", "--id", "1")
    aggregate = _invoke(tmp_path, db_path, "delete", "SELECT id, count(*) FROM users", "--id", "1")
    not_select = _invoke(tmp_path, db_path, "delete", "DELETE FROM users", "--id", "1")

    assert no_id.exit_code != 0
    assert "Query is not editable" in no_id.output
    assert aggregate.exit_code != 0
    assert "Query is not editable" in aggregate.output
    assert not_select.exit_code != 0
    assert "Only SELECT queries can be edited." in not_select.output


def test_multiple_statements_are_rejected(tmp_path: Path, db_path: str) -> None:
    result = _invoke(tmp_path, db_path, "delete", "SELECT id FROM users; SELECT 1;", "--id", "1")

    assert result.exit_code != 0
    assert "exactly one SELECT statement" in result.output


def test_unknown_row_and_column_errors(tmp_path: Path, db_path: str) -> None:
    missing_row = _invoke(tmp_path, db_path, "delete", QUERY, "--id", "99")
    missing_column = _invoke(tmp_path, db_path, "update", QUERY, "--id", "1", "--set", "nope=1")
    bad_assignment = _invoke(tmp_path, db_path, "update", QUERY, "--id", "1", "--set", "name")

    assert missing_row.exit_code != 0
    assert "No row with id = 99" in missing_row.output
    assert missing_column.exit_code != 0
    assert "is not part of the query result" in missing_column.output
    assert bad_assignment.exit_code != 0
    assert "COLUMN=VALUE" in bad_assignment.output
