"""Local SQLite database browser."""

__version__ = "0.1.0"
