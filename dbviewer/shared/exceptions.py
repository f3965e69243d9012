"""Project-wide custom exceptions."""

from __future__ import annotations


class DBViewerError(Exception):
    """Base exception for the database browser."""


class ConfigurationError(DBViewerError):
    """Raised when configuration loading or validation fails."""


class DatabaseError(DBViewerError):
    """Raised for database-related issues."""


class InvalidArgumentError(DatabaseError):
    """Raised when pagination parameters are malformed."""


class NoConnectionError(DatabaseError):
    """Raised when an operation needs an open session and none exists."""

    def __init__(self, message: str = "No database connected") -> None:
        super().__init__(message)


class ConnectionFailure(DatabaseError):
    """Raised when a database file cannot be opened."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class UnknownTableError(DatabaseError):
    """Raised when a table is not present in the connected database."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Table '{table}' does not exist in the database.")
        self.table = table


class ProvisionFailure(DatabaseError):
    """Raised when the sample database could not be fully created."""
