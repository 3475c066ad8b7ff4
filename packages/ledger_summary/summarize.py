"""Aggregate a batch of transactions into a :class:`~ledger_summary.models.Summary`."""

from __future__ import annotations

import calendar
from collections import Counter
from collections.abc import Sequence
from decimal import Decimal

from .models import Summary, Transaction, to_cents


def _mean(values: Sequence[Decimal]) -> Decimal:
    if not values:
        return to_cents(0)
    return to_cents(sum(values, Decimal(0)) / len(values))


def summarize(transactions: Sequence[Transaction]) -> Summary:
    """Compute balance, count and per-side averages.

    Debits are the negative amounts, credits the positive ones; zero amounts
    count toward the total but toward neither average.
    """

    debits = [t.amount for t in transactions if t.amount < 0]
    credits = [t.amount for t in transactions if t.amount > 0]
    return Summary(
        total_balance=to_cents(sum((t.amount for t in transactions), Decimal(0))),
        total_transactions=len(transactions),
        avg_debit=_mean(debits),
        avg_credit=_mean(credits),
    )


def transactions_by_month(transactions: Sequence[Transaction]) -> dict[str, int]:
    """Count transactions per calendar month, keyed by month name in calendar order.

    Months from different years are merged (statements cover a single year).
    """

    counts = Counter(t.date.month for t in transactions)
    return {calendar.month_name[m]: counts[m] for m in sorted(counts)}


__all__ = [
    "summarize",
    "transactions_by_month",
]
