"""The operations the presentation layer calls into."""

from __future__ import annotations

from pathlib import Path

from dbviewer.shared.config import SAMPLE_DESCRIPTOR, AppConfig
from dbviewer.shared.connection import format_connection_string, resolve_descriptor
from dbviewer.shared.database import Session
from dbviewer.shared.exceptions import DBViewerError
from dbviewer.shared.logging import Logger, get_logger
from dbviewer.shared.sample import ensure_sample

from . import introspect, reader
from .types import ColumnInfo, ConnectResult, RowWindow, SampleInfo, SampleLoad, TableInfo


class BrowserService:
    """Connect, list and page through tables on a single session."""

    def __init__(
        self,
        config: AppConfig,
        session: Session | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.config = config
        self.session = session or Session(timeout=config.browser.timeout)
        self.logger = logger or get_logger()

    def connect(self, descriptor: str) -> ConnectResult:
        """Open the database a descriptor names; ``"sample"`` means the bundled sample."""
        try:
            if descriptor == SAMPLE_DESCRIPTOR:
                target = ensure_sample(self.config.sample_path)
            else:
                target = resolve_descriptor(descriptor)
            self.logger.debug(f"Connecting to {target}")
            path = self.session.connect(target)
        except DBViewerError as exc:
            self.session.disconnect()
            self.logger.debug(f"Connect failed for '{descriptor}': {exc}")
            return ConnectResult(success=False, error=str(exc))
        return ConnectResult(success=True, path=path, message="Connected successfully")

    def list_tables(self) -> list[TableInfo]:
        return introspect.list_tables(self.session)

    def list_columns(self, table: str) -> list[ColumnInfo]:
        introspect.require_table(self.session, table)
        return introspect.list_columns(self.session, table)

    def get_table_data(
        self,
        table: str,
        limit: int = reader.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> RowWindow:
        return reader.read_page(self.session, table, limit=limit, offset=offset)

    def ensure_sample(self, path: str | Path) -> SampleInfo:
        full_path = ensure_sample(path)
        return SampleInfo(path=full_path, connection_string=format_connection_string(full_path))

    def create_sample(self) -> SampleInfo:
        return self.ensure_sample(self.config.sample_path)

    def load_sample(self, page_size: int | None = None) -> SampleLoad:
        """Connect to the sample and fetch the first page of its first table."""
        sample = self.create_sample()
        result = self.connect(sample.connection_string)
        if not result.success:
            return SampleLoad(result=result)
        tables = self.list_tables()
        first_page = None
        if tables:
            first_page = self.get_table_data(
                tables[0].name,
                limit=page_size or self.config.browser.page_size,
                offset=0,
            )
        return SampleLoad(result=result, tables=tables, first_page=first_page)

    def data_path(self) -> Path:
        return self.config.data_dir

    def close(self) -> None:
        self.session.disconnect()
