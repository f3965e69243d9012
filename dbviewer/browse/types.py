"""Data structures shared across the browse modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Sequence, Union

Scalar = Union[int, float, str, bytes, None]


class ScalarKind(str, Enum):
    """Storage class of a single cell value."""

    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"
    NULL = "null"
    BLOB = "blob"

    @classmethod
    def of(cls, value: Scalar) -> ScalarKind:
        if value is None:
            return cls.NULL
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.REAL
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.BLOB
        return cls.TEXT


@dataclass(frozen=True, slots=True)
class TableInfo:
    """A user table as listed in the SQLite catalog."""

    name: str


@dataclass(frozen=True, slots=True)
class ColumnInfo:
    """One column from ``PRAGMA table_info``."""

    name: str
    declared_type: str = ""
    not_null: bool = False
    primary_key: bool = False
    position: int = 0


@dataclass(frozen=True, slots=True)
class RowWindow:
    """A bounded slice of a table plus the table's total row count."""

    table: str
    columns: tuple[str, ...]
    rows: Sequence[Mapping[str, Scalar]]
    total_rows: int
    limit: int
    offset: int

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def has_more(self) -> bool:
        return self.offset + self.row_count < self.total_rows


@dataclass(frozen=True, slots=True)
class ConnectResult:
    """Outcome of a connect request as reported to the presentation layer."""

    success: bool
    path: Path | None = None
    message: str | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class SampleInfo:
    """Location of the provisioned sample database."""

    path: Path
    connection_string: str


@dataclass(frozen=True, slots=True)
class SampleLoad:
    """Everything the ``load-sample`` flow produces in one go."""

    result: ConnectResult
    tables: Sequence[TableInfo] = field(default_factory=tuple)
    first_page: RowWindow | None = None
