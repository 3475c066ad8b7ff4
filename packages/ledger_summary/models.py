"""Domain records for ``ledger_summary``.

These are the in-memory shapes produced by statement parsing and aggregation
and consumed by persistence. They are independent of the ORM rows in
``ledger_db.models.ledger``; persistence maps between the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_cents(value: Decimal | int | str) -> Decimal:
    """Quantize ``value`` to two decimal places (``ROUND_HALF_UP``)."""

    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single statement line.

    Amounts are signed: credits are positive, debits negative.
    """

    date: date
    amount: Decimal


@dataclass(frozen=True, slots=True)
class Summary:
    """Aggregate measures over one batch of transactions.

    Attributes
    ----------
    total_balance:
        Sum of all amounts.
    total_transactions:
        Number of transactions in the batch.
    avg_debit:
        Mean of the negative amounts (``0.00`` when there are none).
    avg_credit:
        Mean of the positive amounts (``0.00`` when there are none).
    created_at:
        Server-assigned write time; ``None`` until the summary is persisted.
    """

    total_balance: Decimal
    total_transactions: int
    avg_debit: Decimal
    avg_credit: Decimal
    created_at: datetime | None = None


__all__ = [
    "CENT",
    "to_cents",
    "Transaction",
    "Summary",
]
