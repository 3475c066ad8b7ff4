"""Public interface for the ``ledger_summary`` package.

Re-exports the ingestion API, the persistence operations and the domain
records. The store itself (tables, engine helpers, schema bootstrap, errors)
lives in ``ledger_db``.
"""

from .api import IngestResult, ingest_statement
from .ingest import StatementParseError, parse_statement
from .models import Summary, Transaction
from .persistence import get_latest_summary, list_transactions, save_transactions_and_summary
from .summarize import summarize, transactions_by_month

__all__ = [
    # API
    "ingest_statement",
    "IngestResult",
    "parse_statement",
    "summarize",
    "transactions_by_month",
    # Persistence
    "save_transactions_and_summary",
    "get_latest_summary",
    "list_transactions",
    # Models / errors
    "Transaction",
    "Summary",
    "StatementParseError",
]
