"""Statement CSV parsing into :class:`~ledger_summary.models.Transaction` records.

Expected header (case-insensitive, extra columns ignored):
``Id, Date, Transaction`` where ``Amount`` is accepted in place of
``Transaction``.

- ``Date``: ``YYYY-MM-DD``, or ``M/D`` with the year supplied by the caller
  (defaults to the current year).
- ``Transaction``/``Amount``: signed decimal, e.g. ``+60.5`` or ``-10.3``;
  stored with two decimal places.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from os import PathLike
from pathlib import Path

from .logging_setup import get_logger
from .models import Transaction, to_cents

logger = get_logger(__name__)

DATE_COLUMNS = ("date",)
AMOUNT_COLUMNS = ("transaction", "amount")


class StatementParseError(ValueError):
    """A statement row or header could not be parsed.

    ``line`` is the 1-based record number counting the header as 1.
    """

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(f"line {line}: {message}" if line is not None else message)
        self.line = line


def _pick_column(fieldnames: Iterable[str], candidates: tuple[str, ...]) -> str | None:
    by_lower = {name.strip().lower(): name for name in fieldnames}
    for c in candidates:
        if c in by_lower:
            return by_lower[c]
    return None


def _parse_date(raw: str, *, year: int) -> date:
    s = raw.strip()
    try:
        if "-" in s:
            return date.fromisoformat(s)
        month, day = (int(p) for p in s.split("/"))
        return date(year, month, day)
    except ValueError:
        raise ValueError(f"unrecognized date {raw!r} (expected YYYY-MM-DD or M/D)") from None


def _parse_amount(raw: str) -> Decimal:
    s = raw.strip()
    try:
        amount = Decimal(s)
    except InvalidOperation:
        raise ValueError(f"unrecognized amount {raw!r}") from None
    if not amount.is_finite():
        raise ValueError(f"unrecognized amount {raw!r}")
    try:
        return to_cents(amount)
    except ArithmeticError:
        # quantize() overflows the decimal context for huge exponents (e.g. 1e30)
        raise ValueError(f"amount out of range {raw!r}") from None


def parse_rows(
    rows: Iterable[Mapping[str, str | None]],
    *,
    fieldnames: Iterable[str],
    year: int | None = None,
) -> list[Transaction]:
    """Convert CSV dict rows to transactions, preserving input order.

    Rows whose date and amount cells are both empty are skipped.
    """

    fields = list(fieldnames)
    date_col = _pick_column(fields, DATE_COLUMNS)
    amount_col = _pick_column(fields, AMOUNT_COLUMNS)
    if date_col is None or amount_col is None:
        raise StatementParseError(
            f"header must contain Date and Transaction (or Amount) columns, got {fields}",
            line=1,
        )

    default_year = year if year is not None else datetime.now().year
    out: list[Transaction] = []
    for line, row in enumerate(rows, start=2):
        raw_date = (row.get(date_col) or "").strip()
        raw_amount = (row.get(amount_col) or "").strip()
        if not raw_date and not raw_amount:
            continue
        if not raw_date or not raw_amount:
            raise StatementParseError("row is missing a date or an amount", line=line)
        try:
            out.append(
                Transaction(
                    date=_parse_date(raw_date, year=default_year),
                    amount=_parse_amount(raw_amount),
                )
            )
        except ValueError as exc:
            raise StatementParseError(str(exc), line=line) from exc
    return out


def parse_statement(csv_path: str | PathLike[str], *, year: int | None = None) -> list[Transaction]:
    """Read a statement CSV from disk and return its transactions.

    The file must be UTF-8; a leading byte-order mark (as written by Excel) is
    dropped. Undecodable bytes and malformed CSV raise
    :class:`StatementParseError`.
    """

    p = Path(csv_path)
    try:
        with p.open(encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            if not reader.fieldnames:
                raise StatementParseError(f"CSV appears to have no header row: {csv_path}")
            transactions = parse_rows(reader, fieldnames=reader.fieldnames, year=year)
    except UnicodeDecodeError as exc:
        raise StatementParseError(
            f"{p.name} is not UTF-8 text (byte {exc.start}: {exc.reason})"
        ) from exc
    except csv.Error as exc:
        raise StatementParseError(f"malformed CSV in {p.name}: {exc}") from exc
    logger.info("Parsed %d transactions from %s", len(transactions), p.name)
    return transactions


__all__ = [
    "StatementParseError",
    "parse_rows",
    "parse_statement",
]
