"""SQL dialects and the handful of spellings that differ between them."""

from __future__ import annotations

from enum import Enum

_SYNONYMS = {
    "mysql": "mysql",
    "postgres": "postgres",
    "postgresql": "postgres",
    "pg": "postgres",
    "sqlite": "sqlite",
    "sqlite3": "sqlite",
}


class Dialect(str, Enum):
    """Target database family for generated SQL."""

    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"
    DEFAULT = "default"

    @classmethod
    def from_name(cls, name: str | None) -> Dialect:
        """Normalise a user or config token; unknown names map to DEFAULT."""
        if isinstance(name, Dialect):
            return name
        key = _SYNONYMS.get((name or "").strip().lower())
        return cls(key) if key else cls.DEFAULT

    @property
    def quote_char(self) -> str:
        return "`" if self is Dialect.MYSQL else '"'

    @property
    def true_literal(self) -> str:
        return "1" if self is Dialect.MYSQL else "TRUE"

    @property
    def false_literal(self) -> str:
        return "0" if self is Dialect.MYSQL else "FALSE"


def detect_dialect(dsn: str) -> Dialect:
    """Guess the dialect from a connection string or database path."""
    lowered = dsn.lower()

    if lowered.startswith(("postgres://", "postgresql://")) or "host=" in lowered:
        return Dialect.POSTGRES

    # user:pass@tcp(host)/db style driver strings
    if "@tcp(" in dsn or "@unix(" in dsn or "mysql://" in lowered:
        return Dialect.MYSQL

    if (
        lowered.endswith((".db", ".sqlite", ".sqlite3"))
        or lowered == ":memory:"
        or dsn.startswith(("/", "./", "file:"))
    ):
        return Dialect.SQLITE

    return Dialect.DEFAULT
