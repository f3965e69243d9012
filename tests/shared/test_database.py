from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

import pytest

from dbviewer.browse.introspect import list_tables
from dbviewer.shared.database import Session
from dbviewer.shared.exceptions import ConnectionFailure, NoConnectionError


def test_new_session_is_closed() -> None:
    session = Session()
    assert session.is_open() is False
    assert session.path is None
    with pytest.raises(NoConnectionError):
        with session.connection():
            pass


def test_connect_creates_file_and_parent_dirs(tmp_path: Path) -> None:
    target = tmp_path / "deep" / "dir" / "fresh.db"
    with Session() as session:
        assert session.connect(target) == target
        assert session.is_open()
        assert session.path == target
    assert target.exists()


def test_connect_enables_foreign_keys(sample_db: Path) -> None:
    with Session() as session:
        session.connect(sample_db)
        assert session.foreign_keys_enabled is True
        with session.connection() as connection:
            assert connection.execute("PRAGMA foreign_keys").fetchone()[0] == 1


def test_disconnect_is_safe_to_repeat(sample_db: Path) -> None:
    session = Session()
    session.connect(sample_db)

    session.disconnect()
    session.disconnect()

    assert session.is_open() is False
    assert session.foreign_keys_enabled is False


def test_reconnect_closes_previous_handle(tmp_path: Path, sample_db: Path) -> None:
    other = tmp_path / "other.db"
    session = Session()
    session.connect(sample_db)
    with session.connection() as first_handle:
        pass

    session.connect(other)

    assert session.path == other
    with pytest.raises(sqlite3.ProgrammingError):
        first_handle.execute("SELECT 1")
    session.disconnect()


def test_corrupt_file_is_rejected_and_session_stays_closed(tmp_path: Path, sample_db: Path) -> None:
    corrupt = tmp_path / "corrupt.db"
    corrupt.write_bytes(b"this is definitely not sqlite" * 64)
    session = Session()
    session.connect(sample_db)

    with pytest.raises(ConnectionFailure):
        session.connect(corrupt)

    assert session.is_open() is False
    assert session.path is None


def test_uncreatable_parent_raises_connection_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(ConnectionFailure) as excinfo:
        Session().connect(blocker / "inner" / "db.sqlite")

    assert excinfo.value.reason


def test_nul_in_path_raises_connection_failure(tmp_path: Path) -> None:
    session = Session()

    with pytest.raises(ConnectionFailure):
        session.connect(tmp_path / "bad\x00name.db")

    assert session.is_open() is False


def test_readers_never_see_a_half_swapped_handle(tmp_path: Path, sample_db: Path) -> None:
    other = tmp_path / "other.db"
    connection = sqlite3.connect(other)
    connection.execute("CREATE TABLE only_here (id INTEGER PRIMARY KEY)")
    connection.commit()
    connection.close()

    session = Session(timeout=1.0)
    session.connect(sample_db)
    errors: list[BaseException] = []
    seen: set[int] = set()
    done = threading.Event()

    def swap() -> None:
        try:
            for index in range(100):
                session.connect(other if index % 2 == 0 else sample_db)
        except Exception as exc:
            errors.append(exc)
        finally:
            done.set()

    def read() -> None:
        try:
            while not done.is_set():
                seen.add(len(list_tables(session)))
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=swap), threading.Thread(target=read)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    session.disconnect()
    assert errors == []
    assert seen <= {1, 6}
