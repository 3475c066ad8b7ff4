"""Public API for ingesting statements into the ledger store."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike

from sqlalchemy.engine import Engine

from .ingest import parse_statement
from .models import Summary, Transaction
from .persistence import save_transactions_and_summary
from .summarize import summarize


@dataclass(frozen=True, slots=True)
class IngestResult:
    """What one ingestion wrote: the parsed batch and its summary.

    ``summary.created_at`` is ``None``; the timestamp is assigned by the
    server (read it back with ``get_latest_summary``).
    """

    transactions: list[Transaction]
    summary: Summary


def ingest_statement(
    csv_path: str | PathLike[str],
    *,
    engine: Engine,
    year: int | None = None,
) -> IngestResult:
    """Parse ``csv_path``, summarize it, and replace the stored batch with it.

    The schema must already be initialized (see ``ledger_db.schema.initialize``).
    """

    transactions = parse_statement(csv_path, year=year)
    summary = summarize(transactions)
    save_transactions_and_summary(engine, transactions, summary)
    return IngestResult(transactions=transactions, summary=summary)


__all__ = ["IngestResult", "ingest_statement"]
