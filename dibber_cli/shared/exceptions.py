"""Project-wide custom exceptions."""

from __future__ import annotations


class DibberError(Exception):
    """Base exception for the dibber CLI suite."""


class ConfigurationError(DibberError):
    """Raised when configuration loading or validation fails."""


class DatabaseError(DibberError):
    """Raised for database-related issues."""


class QueryError(DatabaseError):
    """Raised when statement execution fails."""


class EditError(DibberError):
    """Raised when a row edit cannot be turned into a statement."""
