"""Error taxonomy for the ledger store.

Every public store operation raises a subclass of :class:`StoreError`, chained
to the underlying SQLAlchemy/driver exception. Callers can catch the base class
for "any store failure" or a specific subclass to tell apart, e.g., a failed
write from a failed commit.
"""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base class for all ledger store failures."""


class ConfigError(StoreError):
    """Connection settings are missing or invalid."""


class StoreConnectionError(StoreError):
    """The store cannot be reached (connect or ping failed)."""


class SchemaError(StoreError):
    """Table creation, migration DDL, or catalog introspection failed."""


class TransactionStartError(StoreError):
    """The atomic unit of work could not be opened."""


class WriteError(StoreError):
    """A statement inside the atomic unit of work failed.

    Attributes
    ----------
    step:
        Which sub-step failed: ``"clear"``, ``"insert_transaction"`` or
        ``"insert_summary"``.
    index:
        Position of the failing transaction in the input sequence, only for
        ``step == "insert_transaction"``.
    """

    def __init__(self, step: str, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.step = step
        self.index = index


class CommitError(StoreError):
    """All statements succeeded but the commit failed."""


class ReadError(StoreError):
    """A read query failed for a reason other than "no rows"."""


__all__ = [
    "StoreError",
    "ConfigError",
    "StoreConnectionError",
    "SchemaError",
    "TransactionStartError",
    "WriteError",
    "CommitError",
    "ReadError",
]
