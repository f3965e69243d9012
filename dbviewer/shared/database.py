"""SQLite session management."""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .exceptions import ConnectionFailure, NoConnectionError

DEFAULT_TIMEOUT = 5.0


def _open_connection(path: Path, *, timeout: float) -> sqlite3.Connection:
    conn = sqlite3.connect(path, timeout=timeout, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        # Forces the header read so a non-database file fails here, not on first use.
        conn.execute("SELECT COUNT(*) FROM sqlite_master").fetchone()
    except sqlite3.Error:
        conn.close()
        raise
    return conn


class Session:
    """Owns at most one open SQLite handle.

    ``connect`` replaces the current handle atomically under the session lock;
    readers borrow the handle through :meth:`connection`, which takes the same
    lock, so nobody sees a half-swapped session.
    """

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout
        self._lock = threading.RLock()
        self._connection: sqlite3.Connection | None = None
        self._path: Path | None = None
        self._foreign_keys_enabled = False

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def foreign_keys_enabled(self) -> bool:
        return self._foreign_keys_enabled

    def is_open(self) -> bool:
        return self._connection is not None

    def connect(self, path: str | Path) -> Path:
        """Open ``path``, closing whatever was open before."""
        db_path = Path(path)
        with self._lock:
            self._close_quietly()
            try:
                db_path.parent.mkdir(parents=True, exist_ok=True)
            except (OSError, ValueError) as exc:
                raise ConnectionFailure(
                    f"Unable to create directory {db_path.parent}: {exc}"
                ) from exc
            try:
                connection = _open_connection(db_path, timeout=self.timeout)
            except (sqlite3.Error, ValueError) as exc:
                raise ConnectionFailure(f"Unable to open database {db_path}: {exc}") from exc
            self._connection = connection
            self._path = db_path
            self._foreign_keys_enabled = True
            return db_path

    def disconnect(self) -> None:
        with self._lock:
            self._close_quietly()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield the live handle, holding the session lock for the duration."""
        with self._lock:
            if self._connection is None:
                raise NoConnectionError()
            yield self._connection

    def _close_quietly(self) -> None:
        connection = self._connection
        self._connection = None
        self._path = None
        self._foreign_keys_enabled = False
        if connection is None:
            return
        try:
            connection.close()
        except sqlite3.Error:
            pass

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()
