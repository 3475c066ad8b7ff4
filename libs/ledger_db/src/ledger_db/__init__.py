"""ledger_db: store library for statement transactions and summaries (SQLAlchemy/Alembic).

Public exports
--------------
- ``Base`` and ``metadata`` for table creation
- ORM models in ``ledger_db.models.ledger`` (re-exported for convenience)
- Engine helpers in ``ledger_db.client``; schema bootstrap in ``ledger_db.schema``
- Error taxonomy in ``ledger_db.errors``
"""

from __future__ import annotations

from .errors import (
    CommitError,
    ConfigError,
    ReadError,
    SchemaError,
    StoreConnectionError,
    StoreError,
    TransactionStartError,
    WriteError,
)
from .models.ledger import Base, SummaryRow, TransactionRow

metadata = Base.metadata

__all__ = [
    "Base",
    "metadata",
    "SummaryRow",
    "TransactionRow",
    "StoreError",
    "ConfigError",
    "StoreConnectionError",
    "SchemaError",
    "TransactionStartError",
    "WriteError",
    "CommitError",
    "ReadError",
]
