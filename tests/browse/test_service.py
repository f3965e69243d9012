from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from dbviewer.browse.service import BrowserService
from dbviewer.shared.config import load_config
from dbviewer.shared.exceptions import NoConnectionError, ProvisionFailure, UnknownTableError
from dbviewer.shared.sample import SAMPLE_TABLES, ensure_sample


@pytest.fixture
def service():
    svc = BrowserService(load_config())
    yield svc
    svc.close()


def test_connect_sample_provisions_into_data_dir(service: BrowserService, isolated_dirs: Path) -> None:
    result = service.connect("sample")

    assert result.success is True
    assert result.path == isolated_dirs / "sample.db"
    assert result.message == "Connected successfully"
    assert sorted(table.name for table in service.list_tables()) == sorted(SAMPLE_TABLES)


def test_connect_with_url_descriptor(service: BrowserService, sample_db: Path) -> None:
    result = service.connect(f"sqlite://{sample_db}")

    assert result.success is True
    assert result.path == sample_db
    assert service.session.path == sample_db


def test_connect_failure_reports_error_and_drops_previous(
    service: BrowserService, sample_db: Path, tmp_path: Path
) -> None:
    corrupt = tmp_path / "corrupt.db"
    corrupt.write_bytes(b"garbage" * 200)
    assert service.connect(str(sample_db)).success

    result = service.connect(str(corrupt))

    assert result.success is False
    assert result.error
    assert result.path is None
    with pytest.raises(NoConnectionError):
        service.list_tables()


def test_sample_provision_failure_is_reported(
    service: BrowserService, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing(path):
        raise ProvisionFailure("disk full")

    monkeypatch.setattr("dbviewer.browse.service.ensure_sample", failing)

    result = service.connect("sample")

    assert result.success is False
    assert result.error == "disk full"


def test_reconnect_switches_schema(service: BrowserService, sample_db: Path, tmp_path: Path) -> None:
    other = tmp_path / "other.db"
    connection = sqlite3.connect(other)
    connection.execute("CREATE TABLE only_here (id INTEGER PRIMARY KEY)")
    connection.commit()
    connection.close()

    service.connect(str(sample_db))
    service.connect(f"sqlite:{other}")

    assert [table.name for table in service.list_tables()] == ["only_here"]


def test_get_table_data_defaults(service: BrowserService, sample_db: Path) -> None:
    service.connect(str(sample_db))

    window = service.get_table_data("reviews")

    assert window.limit == 10
    assert window.offset == 0
    assert window.row_count == 10
    assert window.total_rows == 40


def test_list_columns_validates_name(service: BrowserService, sample_db: Path) -> None:
    service.connect(str(sample_db))
    assert [column.name for column in service.list_columns("categories")] == [
        "id",
        "name",
        "description",
        "created_at",
    ]
    with pytest.raises(UnknownTableError):
        service.list_columns("categories)--")


def test_create_sample_reports_connection_string(service: BrowserService, isolated_dirs: Path) -> None:
    info = service.create_sample()

    assert info.path == isolated_dirs / "sample.db"
    assert info.connection_string == f"sqlite://{isolated_dirs / 'sample.db'}"
    assert info.path.exists()


def test_ensure_sample_at_custom_path(service: BrowserService, tmp_path: Path) -> None:
    info = service.ensure_sample(tmp_path / "custom.db")
    assert info.connection_string == f"sqlite://{tmp_path / 'custom.db'}"


def test_load_sample_returns_first_page(service: BrowserService) -> None:
    loaded = service.load_sample(page_size=5)

    assert loaded.result.success is True
    assert len(loaded.tables) == 6
    assert loaded.first_page is not None
    assert loaded.first_page.table == loaded.tables[0].name
    assert loaded.first_page.row_count == 5
    assert loaded.first_page.total_rows == 40


def test_data_path_and_close(service: BrowserService, isolated_dirs: Path) -> None:
    assert service.data_path() == isolated_dirs
    ensure_sample(isolated_dirs / "sample.db")
    service.connect("sample")
    service.close()
    assert service.session.is_open() is False


def test_connect_with_nul_descriptor_reports_failure(
    service: BrowserService, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    result = service.connect("bad\x00name.db")

    assert result.success is False
    assert result.error
    assert service.session.is_open() is False
