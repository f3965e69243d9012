"""Output rendering helpers for the browse commands."""

from __future__ import annotations

import csv
import json
import sys
from typing import IO, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from dbviewer.shared.logging import Logger

from .types import ColumnInfo, RowWindow, Scalar, ScalarKind, TableInfo

WINDOW_FORMATS = ("table", "csv", "tsv", "json")
LISTING_FORMATS = ("table", "json")


def render_row_window(
    window: RowWindow,
    *,
    output_format: str,
    logger: Logger,
    stream=None,
) -> None:
    """Render one page of table rows in the desired format."""
    output_stream = stream or sys.stdout
    fmt = (output_format or "table").lower()

    if fmt == "table":
        _render_window_table(window, logger=logger, stream=output_stream)
    elif fmt == "csv":
        _render_delimited(window, stream=output_stream, delimiter=",")
    elif fmt == "tsv":
        _render_delimited(window, stream=output_stream, delimiter="\t")
    elif fmt == "json":
        _render_window_json(window, stream=output_stream)
    else:  # pragma: no cover - Click validation should prevent this
        raise ValueError(f"Unsupported output format '{output_format}'.")

    logger.info(pagination_summary(window))


def render_tables(
    tables: Sequence[TableInfo],
    *,
    output_format: str,
    logger: Logger,
    stream=None,
) -> None:
    """Render the table listing of the connected database."""
    output_stream = stream or sys.stdout
    if (output_format or "table").lower() == "json":
        json.dump([{"name": table.name} for table in tables], output_stream, indent=2)
        output_stream.write("\n")
        return

    if not tables:
        logger.info("No tables found in database.")
        return

    console = Console(file=output_stream, highlight=False, force_terminal=False)
    listing = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    listing.add_column("Table", style="bold")
    for table in tables:
        listing.add_row(table.name)
    console.print(listing)


def render_columns(
    table: str,
    columns: Sequence[ColumnInfo],
    *,
    output_format: str,
    stream=None,
) -> None:
    """Render column metadata for one table."""
    output_stream = stream or sys.stdout
    if (output_format or "table").lower() == "json":
        payload = {
            "table": table,
            "columns": [
                {
                    "position": column.position,
                    "name": column.name,
                    "type": column.declared_type,
                    "not_null": column.not_null,
                    "primary_key": column.primary_key,
                }
                for column in columns
            ],
        }
        json.dump(payload, output_stream, indent=2)
        output_stream.write("\n")
        return

    console = Console(file=output_stream, highlight=False, force_terminal=False)
    console.print(f"[bold]{table}[/bold]")
    column_table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    column_table.add_column("#", justify="right")
    column_table.add_column("Column")
    column_table.add_column("Type")
    column_table.add_column("Not Null")
    column_table.add_column("PK")
    for column in columns:
        column_table.add_row(
            str(column.position),
            column.name,
            column.declared_type,
            "✅" if column.not_null else "",
            "✅" if column.primary_key else "",
        )
    console.print(column_table)


def pagination_summary(window: RowWindow) -> str:
    if window.row_count == 0:
        return f"Showing 0 of {window.total_rows} rows"
    first = window.offset + 1
    last = window.offset + window.row_count
    return f"Showing rows {first}-{last} of {window.total_rows}"


def display_value(value: Scalar) -> str:
    """Convert a cell value into the text shown in the grid."""
    kind = ScalarKind.of(value)
    if kind is ScalarKind.NULL:
        return "NULL"
    if kind is ScalarKind.BLOB:
        return f"<{len(bytes(value))} bytes>"  # type: ignore[arg-type]
    return str(value)


def _render_window_table(window: RowWindow, *, logger: Logger, stream: IO[str]) -> None:
    console = Console(file=stream, highlight=False, force_terminal=False)
    console.print(f"[bold]{window.table}[/bold]")

    table = Table(box=box.SIMPLE_HEAVY, show_header=bool(window.columns), header_style="bold")
    for column in window.columns:
        table.add_column(column)

    if window.rows:
        for row in window.rows:
            table.add_row(*[display_value(row.get(column)) for column in window.columns])
    else:
        logger.info("No rows in this page.")

    console.print(table)


def _render_delimited(window: RowWindow, *, stream: IO[str], delimiter: str) -> None:
    writer = csv.writer(stream, delimiter=delimiter)
    writer.writerow(window.columns)
    for row in window.rows:
        writer.writerow(_delimited_value(row.get(column)) for column in window.columns)


def _render_window_json(window: RowWindow, *, stream: IO[str]) -> None:
    payload = {
        "table": window.table,
        "columns": list(window.columns),
        "rows": [
            {column: _convert_json_value(row.get(column)) for column in window.columns}
            for row in window.rows
        ],
        "row_count": window.row_count,
        "total_rows": window.total_rows,
        "limit": window.limit,
        "offset": window.offset,
    }
    json.dump(payload, stream, indent=2)
    stream.write("\n")


def _delimited_value(value: Scalar) -> str:
    kind = ScalarKind.of(value)
    if kind is ScalarKind.NULL:
        return ""
    if kind is ScalarKind.BLOB:
        return bytes(value).hex()  # type: ignore[arg-type]
    return str(value)


def _convert_json_value(value: Scalar) -> object:
    if ScalarKind.of(value) is ScalarKind.BLOB:
        return bytes(value).hex()  # type: ignore[arg-type]
    return value
