from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from dbviewer.shared import paths
from dbviewer.shared.database import Session
from dbviewer.shared.sample import ensure_sample

_DBVIEWER_ENV = (
    paths.CONFIG_FILE_ENV,
    "DBVIEWER_DATABASE",
    "DBVIEWER_PAGE_SIZE",
    "DBVIEWER_TIMEOUT",
    "DBVIEWER_PROVISION_SAMPLE",
)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from the real ~/.dbviewer."""
    data_dir = tmp_path / "appdata"
    monkeypatch.setenv(paths.DATA_DIR_ENV, str(data_dir))
    monkeypatch.setenv(paths.CONFIG_DIR_ENV, str(tmp_path / "config"))
    for name in _DBVIEWER_ENV:
        monkeypatch.delenv(name, raising=False)
    return data_dir


@pytest.fixture
def sample_db(tmp_path: Path) -> Path:
    return ensure_sample(tmp_path / "shop.db")


@pytest.fixture
def session(sample_db: Path) -> Iterator[Session]:
    with Session(timeout=1.0) as live:
        live.connect(sample_db)
        yield live
