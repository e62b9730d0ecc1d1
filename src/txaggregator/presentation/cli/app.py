"""txagg CLI application using Typer.

Commands for managing the database schema, importing bank-statement CSV
files and reading back transactions and statistics.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from txaggregator.application.dtos import (
    ImportResult,
    ImportStatusView,
    TransactionFilter,
)
from txaggregator.bootstrap import ImportPipeline, build_pipeline
from txaggregator.domain.shared import DomainException
from txaggregator.domain.transactions import Category, YearMonth
from txaggregator.infrastructure.persistence.sqlalchemy import (
    create_engine,
    create_tables,
    display_url,
    drop_tables,
)
from txaggregator_config import get_settings

T = TypeVar("T")

app = typer.Typer(
    name="txagg",
    help="Bank-statement CSV import, transaction queries and statistics",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
app.add_typer(db_app)

stats_app = typer.Typer(
    name="stats",
    help="Aggregate transaction statistics",
    no_args_is_help=True,
)
app.add_typer(stats_app)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure logging once from the ``log_level`` setting."""
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Override any existing config
    )

    logging.getLogger("txaggregator").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


@app.callback()
def main() -> None:
    _configure_logging()


def _run(action: Callable[[ImportPipeline], Awaitable[T]]) -> T:
    """Run one async action against a freshly built pipeline."""

    async def _runner() -> T:
        pipeline = build_pipeline(get_settings())
        try:
            await pipeline.create_schema()
            return await action(pipeline)
        finally:
            await pipeline.close()

    try:
        return asyncio.run(_runner())
    except DomainException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e


def _parse_date(value: Optional[str], option: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        msg = f"Invalid date for {option}: {value} (expected YYYY-MM-DD)"
        raise typer.BadParameter(msg) from None


def _parse_month(value: str) -> YearMonth:
    try:
        return YearMonth.parse(value)
    except DomainException as e:
        raise typer.BadParameter(e.message) from None


# ---------------------------------------------------------------------------
# db
# ---------------------------------------------------------------------------


@db_app.command("init")
def db_init() -> None:
    """Create all database tables (idempotent)."""
    settings = get_settings()
    console.print(f"Database: {display_url(settings.database_url)}")

    async def _init() -> None:
        engine = create_engine(settings)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    console.print("[green]Database initialized[/green]")


@db_app.command("drop")
def db_drop(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """Drop all database tables (deletes all data)."""
    settings = get_settings()
    console.print(f"Database: {display_url(settings.database_url)}")

    if not force:
        console.print("[yellow]WARNING: This will DELETE ALL DATA![/yellow]")
        if not typer.confirm("Drop all tables?", default=False):
            console.print("Aborted.")
            raise typer.Exit(1)

    async def _drop() -> None:
        engine = create_engine(settings)
        try:
            await drop_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_drop())
    console.print("[green]Database tables dropped[/green]")


# ---------------------------------------------------------------------------
# import / status
# ---------------------------------------------------------------------------


@app.command("import")
def import_file(
    file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="CSV file with columns iban,date,currency,category,amount",
    ),
    no_wait: bool = typer.Option(
        False,
        "--no-wait",
        help="Print the import id without showing the final status",
    ),
) -> None:
    """Import a bank-statement CSV file."""
    content = file.read_bytes()

    async def _import(pipeline: ImportPipeline):
        result = await pipeline.import_service.import_transactions(file.name, content)
        if no_wait:
            return result, None
        await pipeline.wait_for_imports()
        return result, await pipeline.import_service.get_status(result.import_id)

    result, view = _run(_import)
    _print_import_result(result)
    if view is not None:
        _print_status(view)


@app.command("status")
def status(import_id: str = typer.Argument(..., help="Import batch id")) -> None:
    """Show the status of an import batch."""
    view = _run(lambda pipeline: pipeline.import_service.get_status(import_id))
    if view is None:
        console.print(f"[red]Import not found:[/red] {import_id}")
        raise typer.Exit(1)
    _print_status(view)


def _print_import_result(result: ImportResult) -> None:
    console.print(
        f"[bold]{result.message}[/bold]  "
        f"id=[cyan]{result.import_id}[/cyan]  status={result.status.value}"
    )


def _print_status(view: ImportStatusView) -> None:
    table = Table(title=f"Import {view.import_id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("File", view.filename)
    table.add_row("Status", view.status.value)
    table.add_row("Rows", str(view.total_rows))
    table.add_row("Stored", str(view.success_count))
    table.add_row("Errors", str(view.error_count))
    table.add_row("Created", view.created_at.isoformat())
    table.add_row(
        "Completed",
        view.completed_at.isoformat() if view.completed_at else "-",
    )
    console.print(table)

    if view.errors:
        errors = Table(title="Row errors")
        errors.add_column("Row", justify="right")
        errors.add_column("Message")
        for error in view.errors:
            errors.add_row(str(error.row), error.message)
        console.print(errors)


# ---------------------------------------------------------------------------
# transactions
# ---------------------------------------------------------------------------


@app.command("transactions")
def transactions(  # noqa: PLR0913
    iban: Optional[str] = typer.Option(None, "--iban", help="Filter by IBAN"),
    category: Optional[str] = typer.Option(
        None,
        "--category",
        help="Filter by category (e.g. FOOD)",
    ),
    date_from: Optional[str] = typer.Option(None, "--from", help="YYYY-MM-DD"),
    date_to: Optional[str] = typer.Option(None, "--to", help="YYYY-MM-DD"),
    page: int = typer.Option(0, "--page", help="Zero-based page index"),
    size: int = typer.Option(20, "--size", help="Page size (1-100)"),
) -> None:
    """List stored transactions, newest first."""
    try:
        parsed_category = (
            Category.from_string_or_raise(category) if category else None
        )
    except DomainException as e:
        raise typer.BadParameter(e.message) from None

    transaction_filter = TransactionFilter(
        iban=iban,
        category=parsed_category,
        date_from=_parse_date(date_from, "--from"),
        date_to=_parse_date(date_to, "--to"),
        page=page,
        size=size,
    )
    result = _run(lambda p: p.transactions_query.execute(transaction_filter))

    table = Table(
        title=(
            f"Transactions (page {result.page + 1}/{max(result.total_pages, 1)}, "
            f"{result.total_elements} total)"
        ),
    )
    table.add_column("Date")
    table.add_column("IBAN")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Currency")
    for tx in result.content:
        table.add_row(
            tx.transaction_date.isoformat(),
            tx.iban,
            tx.category.display_name,
            f"{tx.amount:.2f}",
            tx.currency,
        )
    console.print(table)


# ---------------------------------------------------------------------------
# stats
# ---------------------------------------------------------------------------


@stats_app.command("category")
def stats_category(month: str = typer.Argument(..., help="YYYY-MM")) -> None:
    """Totals per category for one month."""
    period = _parse_month(month)
    result = _run(lambda p: p.statistics_service.get_statistics_by_category(period))

    table = Table(title=f"Statistics by category, {result.month}")
    table.add_column("Category")
    table.add_column("Transactions", justify="right")
    table.add_column("Total", justify="right")
    for summary in result.categories:
        table.add_row(
            summary.category.display_name,
            str(summary.transaction_count),
            f"{summary.total_amount:.2f}",
        )
    console.print(table)


@stats_app.command("iban")
def stats_iban(month: str = typer.Argument(..., help="YYYY-MM")) -> None:
    """Income, expense and balance per IBAN for one month."""
    period = _parse_month(month)
    result = _run(lambda p: p.statistics_service.get_statistics_by_iban(period))

    table = Table(title=f"Statistics by IBAN, {result.month}")
    table.add_column("IBAN")
    table.add_column("Income", justify="right")
    table.add_column("Expense", justify="right")
    table.add_column("Balance", justify="right")
    for summary in result.ibans:
        table.add_row(
            summary.iban,
            f"{summary.total_income:.2f}",
            f"{summary.total_expense:.2f}",
            f"{summary.balance:.2f}",
        )
    console.print(table)


@stats_app.command("monthly")
def stats_monthly(year: int = typer.Argument(..., help="Four-digit year")) -> None:
    """Income, expense and balance per month for one year."""
    result = _run(lambda p: p.statistics_service.get_statistics_by_month(year))

    table = Table(title=f"Statistics by month, {result.year}")
    table.add_column("Month")
    table.add_column("Income", justify="right")
    table.add_column("Expense", justify="right")
    table.add_column("Balance", justify="right")
    for summary in result.months:
        table.add_row(
            str(summary.month),
            f"{summary.total_income:.2f}",
            f"{summary.total_expense:.2f}",
            f"{summary.balance:.2f}",
        )
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
