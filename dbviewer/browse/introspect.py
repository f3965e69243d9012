"""Schema introspection for the connected database."""

from __future__ import annotations

import sqlite3

from dbviewer.shared.database import Session
from dbviewer.shared.exceptions import DatabaseError, UnknownTableError

from .types import ColumnInfo, TableInfo

_TABLES_SQL = "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"


def quote_identifier(name: str) -> str:
    """Return ``name`` as a double-quoted SQLite identifier."""
    return '"' + name.replace('"', '""') + '"'


def list_tables(session: Session) -> list[TableInfo]:
    """Return user tables in catalog order."""
    with session.connection() as connection:
        try:
            rows = connection.execute(_TABLES_SQL).fetchall()
        except sqlite3.DatabaseError as exc:
            raise DatabaseError(f"Unable to list tables: {exc}") from exc
    return [TableInfo(name=row[0]) for row in rows]


def list_columns(session: Session, table: str) -> list[ColumnInfo]:
    """Return the columns of ``table`` in declared order.

    ``table`` is expected to come from :func:`list_tables`; use
    :func:`require_table` first for names supplied from outside.
    """
    with session.connection() as connection:
        try:
            rows = connection.execute(f"PRAGMA table_info({quote_identifier(table)})").fetchall()
        except sqlite3.DatabaseError as exc:
            raise DatabaseError(f"Unable to read columns of '{table}': {exc}") from exc
    # PRAGMA table_info yields nothing rather than failing for a missing table.
    if not rows:
        raise UnknownTableError(table)
    return [
        ColumnInfo(
            name=row[1],
            declared_type=row[2] or "",
            not_null=bool(row[3]),
            primary_key=bool(row[5]),
            position=int(row[0]),
        )
        for row in rows
    ]


def require_table(session: Session, table: str) -> str:
    """Validate an externally supplied table name against the catalog."""
    known = {info.name for info in list_tables(session)}
    if table not in known:
        raise UnknownTableError(table)
    return table
