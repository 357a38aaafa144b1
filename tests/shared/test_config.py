from __future__ import annotations

from pathlib import Path

import pytest

from dibber_cli.shared import paths
from dibber_cli.shared.config import AppConfig, load_config
from dibber_cli.shared.exceptions import ConfigurationError


def test_load_config_defaults(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path / "config")}
    cfg = load_config(env=env)
    assert isinstance(cfg, AppConfig)
    assert cfg.source_path == tmp_path / "config" / "config.yaml"
    assert cfg.database.path == paths.default_database_path(env=env)
    assert cfg.database.dialect == ""
    assert cfg.output.format == "table"
    assert cfg.output.row_limit == 200


def test_load_config_from_yaml(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(
        """
        database:
          path: ~/alt.db
          dialect: postgres
        output:
          format: CSV
        """,
        encoding="utf-8",
    )
    cfg = load_config(config_path=cfg_file, env={})
    assert cfg.database.path == paths.resolve_path("~/alt.db")
    assert cfg.database.dialect == "postgres"
    assert cfg.output.format == "csv"
    assert cfg.output.row_limit == 200


def test_load_config_env_overrides(tmp_path: Path) -> None:
    custom_db = tmp_path / "custom.db"
    env = {
        paths.CONFIG_DIR_ENV: str(tmp_path),
        "DIBBER_DATABASE_PATH": str(custom_db),
        "DIBBER_DIALECT": "mysql",
        "DIBBER_OUTPUT_FORMAT": "json",
        "DIBBER_ROW_LIMIT": "25",
    }
    cfg = load_config(env=env)
    assert cfg.database.path == paths.resolve_path(custom_db)
    assert cfg.database.dialect == "mysql"
    assert cfg.output.format == "json"
    assert cfg.output.row_limit == 25


def test_invalid_env_override_raises(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path), "DIBBER_ROW_LIMIT": "lots"}
    with pytest.raises(ConfigurationError):
        load_config(env=env)


def test_invalid_yaml_raises_configuration_error(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("- just a list", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(config_path=cfg_file, env={})


def test_unknown_output_format_raises(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("output:\n  format: xml\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(config_path=cfg_file, env={})


def test_with_database_path_returns_copy(tmp_path: Path) -> None:
    cfg = load_config(env={paths.CONFIG_DIR_ENV: str(tmp_path), paths.DATABASE_PATH_ENV: str(tmp_path / "base.db")})
    moved = cfg.with_database_path(tmp_path / "other.db")
    assert moved.database.path == tmp_path / "other.db"
    assert cfg.database.path == tmp_path / "base.db"
    assert moved.output == cfg.output
