from __future__ import annotations

from pathlib import Path

import pytest

from dibber_cli.shared import paths
from dibber_cli.shared.config import AppConfig, load_config
from dibber_cli.shared.database import connect


def _seed(config: AppConfig) -> None:
    with connect(config) as connection:
        connection.executescript(
            """
            CREATE TABLE users (
                id INTEGER PRIMARY KEY,
                name TEXT,
                age INTEGER,
                active BOOLEAN,
                joined DATETIME
            );
            INSERT INTO users (id, name, age, active, joined) VALUES
                (1, 'Alice', 30, 1, '2024-01-02'),
                (2, 'Bob', NULL, 0, '2024-02-03'),
                (3, 'O''Brien', 41, 1, NULL);
            """
        )
        connection.commit()


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    env = {
        paths.CONFIG_DIR_ENV: str(tmp_path / "config"),
        paths.DATABASE_PATH_ENV: str(tmp_path / "dib.db"),
    }
    config = load_config(env=env)
    _seed(config)
    return config


@pytest.fixture
def db_path(app_config: AppConfig) -> str:
    return str(app_config.database.path)
