from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Integer, Numeric, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# ---------------------------
# Core: transactions
# ---------------------------


class TransactionRow(Base):
    __tablename__ = "transactions"

    # Plain INTEGER key: SERIAL on Postgres, rowid on SQLite. Insertion order is
    # the only ordering the table carries; there is no sequence column.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)


# ---------------------------
# History: summary
# ---------------------------


class SummaryRow(Base):
    __tablename__ = "summary"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    total_balance: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    # Added after the first deployments; see ledger_db.schema.MIGRATIONS.
    total_transactions: Mapped[int] = mapped_column(Integer, nullable=False)
    avg_debit: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    avg_credit: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


__all__ = [
    "Base",
    "TransactionRow",
    "SummaryRow",
]
