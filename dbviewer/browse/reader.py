"""Paginated table reads."""

from __future__ import annotations

import sqlite3

from dbviewer.shared.database import Session
from dbviewer.shared.exceptions import DatabaseError, InvalidArgumentError

from .introspect import list_columns, quote_identifier, require_table
from .types import RowWindow

DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_CHOICES = (5, 10, 20, 50)


def _check_non_negative(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}.")
    if value < 0:
        raise InvalidArgumentError(f"{name} must not be negative, got {value}.")
    return value


def page_to_offset(page: int, page_size: int) -> int:
    """Translate a zero-based page index into a row offset."""
    _check_non_negative("page", page)
    _check_non_negative("page_size", page_size)
    return page * page_size


def read_page(
    session: Session,
    table: str,
    *,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> RowWindow:
    """Return up to ``limit`` rows of ``table`` starting at ``offset``.

    Rows come back in SQLite's scan order; no ORDER BY is applied. The total
    count and the window are separate statements, so a concurrent writer can
    make them disagree.
    """
    limit = _check_non_negative("limit", limit)
    offset = _check_non_negative("offset", offset)

    with session.connection() as connection:
        table = require_table(session, table)
        columns = tuple(column.name for column in list_columns(session, table))
        quoted = quote_identifier(table)
        try:
            cursor = connection.execute(
                f"SELECT * FROM {quoted} LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = [dict(row) for row in cursor.fetchall()]
            total_rows = int(connection.execute(f"SELECT COUNT(*) FROM {quoted}").fetchone()[0])
        except sqlite3.DatabaseError as exc:
            raise DatabaseError(f"Unable to read table '{table}': {exc}") from exc

    return RowWindow(
        table=table,
        columns=columns,
        rows=rows,
        total_rows=total_rows,
        limit=limit,
        offset=offset,
    )
