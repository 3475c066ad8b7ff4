# ruff: noqa: I001
"""CLI for the ``ledger_summary`` package.

This module exposes callable command handlers (``cmd_init_db``,
``cmd_ingest``, ``cmd_summary``) and a Typer-based console interface.
Connection settings (``DATABASE_URL`` or ``POSTGRES_*``) are loaded from a
local ``.env`` using ``python-dotenv`` before delegating to command logic.
Business logic lives in ``ledger_summary.api`` and ``ledger_db``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from ledger_db.client import engine_scope
from ledger_db.errors import StoreError
from ledger_db.schema import initialize

from .logging_setup import configure_logging
from .models import Summary


def _format_summary(summary: Summary) -> list[str]:
    lines = [
        f"Total balance: {summary.total_balance}",
        f"Total transactions: {summary.total_transactions}",
        f"Average debit amount: {summary.avg_debit}",
        f"Average credit amount: {summary.avg_credit}",
    ]
    if summary.created_at is not None:
        lines.append(f"Created at: {summary.created_at.isoformat()}")
    return lines


def cmd_init_db(database_url: str | None = None) -> int:
    """Create tables and apply pending migrations. Returns a process exit code."""

    try:
        with engine_scope(database_url) as engine:
            applied = initialize(engine)
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if applied:
        print(f"Schema ready; applied migrations: {', '.join(str(v) for v in applied)}")
    else:
        print("Schema ready; no migrations pending.")
    return 0


def cmd_ingest(csv_path: Path, *, database_url: str | None = None, year: int | None = None) -> int:
    """Parse ``csv_path``, store it as the current batch and print its summary."""

    from .api import ingest_statement
    from .ingest import StatementParseError
    from .summarize import transactions_by_month

    if not csv_path.is_file():
        print(f"Error: CSV file not found: {csv_path}", file=sys.stderr)
        return 1

    try:
        with engine_scope(database_url) as engine:
            initialize(engine)
            result = ingest_statement(csv_path, engine=engine, year=year)
    except StatementParseError as e:
        print(f"Error: invalid statement {csv_path.name}: {e}", file=sys.stderr)
        return 1
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in _format_summary(result.summary):
        print(line)
    for month, count in transactions_by_month(result.transactions).items():
        print(f"Number of transactions in {month}: {count}")
    return 0


def cmd_summary(database_url: str | None = None) -> int:
    """Print the latest stored summary."""

    from .persistence import get_latest_summary

    try:
        with engine_scope(database_url) as engine:
            summary = get_latest_summary(engine)
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if summary is None:
        print("No summary stored yet.")
        return 0
    for line in _format_summary(summary):
        print(line)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Store statement transactions and summaries in Postgres. "
        "Reads DATABASE_URL (or POSTGRES_*) from the environment or a local .env."
    ),
)

# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults).
DATABASE_URL_OPTION: OptionInfo = typer.Option(
    "--database-url", help="Override DATABASE_URL (falls back to env vars)."
)
YEAR_OPTION: OptionInfo = typer.Option(
    "--year", help="Year for M/D dates in the statement (defaults to the current year)."
)


@app.command("init-db")
def init_db_cmd(database_url: Annotated[str | None, DATABASE_URL_OPTION] = None) -> None:
    """Create tables and apply pending migrations."""

    rc = cmd_init_db(database_url)
    if rc:
        raise typer.Exit(rc)


@app.command("ingest")
def ingest_cmd(
    csv_path: Annotated[Path, typer.Argument(help="Statement CSV (Id, Date, Transaction).")],
    year: Annotated[int | None, YEAR_OPTION] = None,
    database_url: Annotated[str | None, DATABASE_URL_OPTION] = None,
) -> None:
    """Replace stored transactions with CSV_PATH and append its summary."""

    rc = cmd_ingest(csv_path, database_url=database_url, year=year)
    if rc:
        raise typer.Exit(rc)


@app.command("summary")
def summary_cmd(database_url: Annotated[str | None, DATABASE_URL_OPTION] = None) -> None:
    """Show the most recent summary."""

    rc = cmd_summary(database_url)
    if rc:
        raise typer.Exit(rc)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the current directory and configure logging."""

    # override=False keeps variables already set in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover
    app()
