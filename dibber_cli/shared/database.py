"""SQLite connection helpers."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import AppConfig
from .exceptions import DatabaseError


def _resolve_database_path(config: AppConfig, *, create_parents: bool) -> Path:
    db_path = config.database.path
    if create_parents:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def _open_connection(path: Path, *, read_only: bool = False) -> sqlite3.Connection:
    if read_only:
        if not path.exists():
            raise FileNotFoundError(str(path))
        uri = f"file:{path}?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
    else:
        conn = sqlite3.connect(path)
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


@contextmanager
def connect(config: AppConfig, *, read_only: bool = False) -> Iterator[sqlite3.Connection]:
    """Yield a SQLite connection for the configured database."""
    db_path = _resolve_database_path(config, create_parents=not read_only)
    try:
        connection = _open_connection(db_path, read_only=read_only)
    except sqlite3.Error as exc:
        raise DatabaseError(f"Unable to open database {db_path}: {exc}") from exc
    try:
        yield connection
    finally:
        connection.close()
