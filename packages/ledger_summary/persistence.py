# ruff: noqa: I001
"""Persistence integration for ledger_summary.

Functions here write statement transactions and summaries to the store owned
by ``libs/ledger_db``. They take the caller's SQLAlchemy ``Engine`` explicitly
and open a short-lived ORM ``Session`` per call.

Scope:
- Replace the whole ``transactions`` table and append one ``summary`` row in a
  single database transaction.
- Read back the latest summary and the stored transactions.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, insert, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger_db.errors import (
    CommitError,
    ReadError,
    TransactionStartError,
    WriteError,
)
from ledger_db.models.ledger import SummaryRow, TransactionRow
from .logging_setup import get_logger
from .models import Summary, Transaction

logger = get_logger(__name__)


def _clear_transactions(session: Session) -> None:
    if session.get_bind().dialect.name == "postgresql":
        session.execute(text("TRUNCATE TABLE transactions RESTART IDENTITY"))
    else:
        # SQLite: rowid keys restart from 1 once the table is empty.
        session.execute(delete(TransactionRow))


def _write_batch(
    session: Session, transactions: Sequence[Transaction], summary: Summary
) -> None:
    try:
        _clear_transactions(session)
    except SQLAlchemyError as exc:
        raise WriteError("clear", f"failed to clean transactions: {exc}") from exc

    for i, t in enumerate(transactions):
        try:
            session.execute(insert(TransactionRow).values(date=t.date, amount=t.amount))
        except SQLAlchemyError as exc:
            raise WriteError(
                "insert_transaction",
                f"failed to insert transaction #{i} ({t.date}, {t.amount}): {exc}",
                index=i,
            ) from exc

    try:
        session.execute(
            insert(SummaryRow).values(
                total_balance=summary.total_balance,
                total_transactions=summary.total_transactions,
                avg_debit=summary.avg_debit,
                avg_credit=summary.avg_credit,
            )
        )
    except SQLAlchemyError as exc:
        raise WriteError("insert_summary", f"failed to insert summary: {exc}") from exc


def save_transactions_and_summary(
    engine: Engine,
    transactions: Sequence[Transaction],
    summary: Summary,
) -> None:
    """Replace all stored transactions and append ``summary``, atomically.

    Steps, all inside one database transaction:

    1. empty ``transactions`` and reset its identity counter;
    2. insert ``transactions`` in the given order (an empty sequence leaves the
       table empty);
    3. insert ``summary``; ``created_at`` is assigned by the server.

    Any failure rolls the whole unit back, so readers never observe a partial
    batch.

    Raises
    ------
    TransactionStartError
        A connection could not be acquired or the transaction not begun.
    WriteError
        A statement failed; ``step`` names which one.
    CommitError
        Every statement succeeded but the commit did not.
    """

    session = Session(bind=engine, expire_on_commit=False)
    try:
        try:
            session.begin()
            # Session.begin() is lazy; force connection checkout here so that
            # an unreachable store surfaces as a start failure.
            session.connection()
        except SQLAlchemyError as exc:
            raise TransactionStartError(f"failed to start transaction: {exc}") from exc

        try:
            _write_batch(session, transactions, summary)
            try:
                session.commit()
            except SQLAlchemyError as exc:
                raise CommitError(f"failed to commit transaction: {exc}") from exc
        finally:
            # No-op after a successful commit.
            if session.in_transaction():
                session.rollback()
    finally:
        session.close()

    logger.info(
        "Saved %d transactions and summary (balance=%s)",
        len(transactions),
        summary.total_balance,
    )


def get_latest_summary(engine: Engine) -> Summary | None:
    """Return the most recently created summary, or ``None`` when none is stored.

    Rows with equal ``created_at`` (same server clock tick) are ordered by
    ``id`` so the later insert wins.
    """

    stmt = (
        select(
            SummaryRow.total_balance,
            SummaryRow.total_transactions,
            SummaryRow.avg_debit,
            SummaryRow.avg_credit,
            SummaryRow.created_at,
        )
        .order_by(SummaryRow.created_at.desc(), SummaryRow.id.desc())
        .limit(1)
    )
    try:
        with Session(bind=engine) as session:
            row = session.execute(stmt).first()
    except SQLAlchemyError as exc:
        raise ReadError(f"failed to get latest summary: {exc}") from exc

    if row is None:
        return None
    return Summary(
        total_balance=row.total_balance,
        total_transactions=row.total_transactions,
        avg_debit=row.avg_debit,
        avg_credit=row.avg_credit,
        created_at=row.created_at,
    )


def list_transactions(engine: Engine) -> list[Transaction]:
    """Return the stored transactions in insertion order."""

    stmt = select(TransactionRow.date, TransactionRow.amount).order_by(TransactionRow.id)
    try:
        with Session(bind=engine) as session:
            rows = session.execute(stmt).all()
    except SQLAlchemyError as exc:
        raise ReadError(f"failed to list transactions: {exc}") from exc
    return [Transaction(date=r.date, amount=r.amount) for r in rows]


__all__ = [
    "save_transactions_and_summary",
    "get_latest_summary",
    "list_transactions",
]
