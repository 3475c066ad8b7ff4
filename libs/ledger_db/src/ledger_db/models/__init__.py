"""ORM model registry for the ledger store tables."""

from .ledger import Base, SummaryRow, TransactionRow

__all__ = ["Base", "SummaryRow", "TransactionRow"]
