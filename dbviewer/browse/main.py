"""dbviewer CLI entrypoint."""

from __future__ import annotations

import click

from dbviewer.shared.cli import CLIContext, common_cli_options, handle_cli_errors, pass_cli_context
from dbviewer.shared.exceptions import ConnectionFailure

from . import reader, render
from .service import BrowserService


@click.group(help="Browse tables of a local SQLite database.")
@common_cli_options
@handle_cli_errors
def cli(cli_ctx: CLIContext) -> None:
    """Primary Click group for dbviewer commands."""
    cli_ctx.logger.debug(f"dbviewer started (database: {cli_ctx.descriptor})")


@cli.command("connect")
@pass_cli_context
@handle_cli_errors
def connect_command(cli_ctx: CLIContext) -> None:
    """Open the database and report where it lives."""
    service = _connected_service(cli_ctx)
    tables = service.list_tables()
    click.echo(f"Connected to: {service.session.path}")
    cli_ctx.logger.success(f"Connected successfully ({len(tables)} table(s)).")


@cli.command("tables")
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(render.LISTING_FORMATS),
)
@pass_cli_context
@handle_cli_errors
def tables_command(cli_ctx: CLIContext, output_format: str) -> None:
    """List user tables."""
    service = _connected_service(cli_ctx)
    render.render_tables(service.list_tables(), output_format=output_format, logger=cli_ctx.logger)


@cli.command("columns")
@click.argument("table", type=str)
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(render.LISTING_FORMATS),
)
@pass_cli_context
@handle_cli_errors
def columns_command(cli_ctx: CLIContext, table: str, output_format: str) -> None:
    """Show the columns of TABLE."""
    service = _connected_service(cli_ctx)
    render.render_columns(table, service.list_columns(table), output_format=output_format)


@cli.command("data")
@click.argument("table", type=str)
@click.option("--limit", type=int, help="Rows per page (defaults to browser.page_size).")
@click.option("--offset", type=int, help="Number of rows to skip.")
@click.option("--page", type=int, help="Zero-based page index; overrides --offset.")
@click.option(
    "--page-size",
    type=click.Choice([str(size) for size in reader.PAGE_SIZE_CHOICES]),
    help="Rows per page when paging with --page (defaults to --limit or browser.page_size).",
)
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(render.WINDOW_FORMATS),
)
@pass_cli_context
@handle_cli_errors
def data_command(
    cli_ctx: CLIContext,
    table: str,
    limit: int | None,
    offset: int | None,
    page: int | None,
    page_size: str | None,
    output_format: str,
) -> None:
    """Show one page of rows from TABLE."""
    if page_size is not None:
        effective_limit = int(page_size)
    elif limit is not None:
        effective_limit = limit
    else:
        effective_limit = cli_ctx.config.browser.page_size
    if page is not None:
        effective_offset = reader.page_to_offset(page, effective_limit)
    else:
        effective_offset = offset or 0

    service = _connected_service(cli_ctx)
    window = service.get_table_data(table, limit=effective_limit, offset=effective_offset)
    render.render_row_window(window, output_format=output_format, logger=cli_ctx.logger)


@cli.command("sample")
@pass_cli_context
@handle_cli_errors
def sample_command(cli_ctx: CLIContext) -> None:
    """Create the sample database if needed and print how to open it."""
    service = _service(cli_ctx)
    sample = service.create_sample()
    click.echo(f"Path: {sample.path}")
    click.echo(f"Connection string: {sample.connection_string}")


@cli.command("load-sample")
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(render.WINDOW_FORMATS),
)
@pass_cli_context
@handle_cli_errors
def load_sample_command(cli_ctx: CLIContext, output_format: str) -> None:
    """Open the sample database and show the first page of its first table."""
    service = _service(cli_ctx)
    loaded = service.load_sample()
    if not loaded.result.success:
        raise ConnectionFailure(loaded.result.error or "Sample load failed")
    cli_ctx.logger.success(f"Connected to: {loaded.result.path}")
    cli_ctx.logger.info("Tables: " + ", ".join(table.name for table in loaded.tables))
    if loaded.first_page is None:
        cli_ctx.logger.warning("The sample database has no tables.")
        return
    render.render_row_window(loaded.first_page, output_format=output_format, logger=cli_ctx.logger)


@cli.command("data-path")
@pass_cli_context
def data_path_command(cli_ctx: CLIContext) -> None:
    """Print the application data directory."""
    click.echo(str(_service(cli_ctx).data_path()))


def _service(cli_ctx: CLIContext) -> BrowserService:
    """Build the command's service; its session is closed when the command exits."""
    service = BrowserService(cli_ctx.config, cli_ctx.session, cli_ctx.logger)
    click.get_current_context().call_on_close(service.close)
    return service


def _connected_service(cli_ctx: CLIContext) -> BrowserService:
    service = _service(cli_ctx)
    result = service.connect(cli_ctx.descriptor)
    if not result.success:
        raise ConnectionFailure(result.error or f"Unable to connect to '{cli_ctx.descriptor}'")
    cli_ctx.logger.debug(f"{result.message}: {result.path}")
    return service


def main() -> None:
    """Entry point for console_scripts."""
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
