"""SQLAlchemy engine helpers for the ledger store.

Usage
-----
from ledger_db.client import engine_scope

with engine_scope("postgresql+psycopg://...") as engine:
    initialize(engine)
    ...

There is no module-level engine: callers own the handle and pass it to every
store operation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import resolve_database_url
from .errors import StoreConnectionError

logger = logging.getLogger(__name__)


def ping(engine: Engine) -> None:
    """Round-trip ``SELECT 1``; raise :class:`StoreConnectionError` on failure."""

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise StoreConnectionError(
            f"failed to ping database {engine.url!s}: {exc}"
        ) from exc


def open_engine(database_url: str | URL | None = None) -> Engine:
    """Create an engine for ``database_url`` and verify it is reachable.

    When ``database_url`` is ``None`` the URL is resolved from the environment
    (see :func:`ledger_db.config.resolve_database_url`).
    """

    url = resolve_database_url(database_url)
    try:
        engine = create_engine(url, pool_pre_ping=True)
    except (SQLAlchemyError, ValueError) as exc:
        raise StoreConnectionError(f"failed to connect to database: {exc}") from exc

    try:
        ping(engine)
    except StoreConnectionError:
        engine.dispose()
        raise
    logger.debug("Connected to %s", engine.url)
    return engine


@contextmanager
def engine_scope(database_url: str | URL | None = None) -> Iterator[Engine]:
    """Yield an opened engine and dispose of its pool on exit."""

    engine = open_engine(database_url)
    try:
        yield engine
    finally:
        engine.dispose()


__all__ = [
    "ping",
    "open_engine",
    "engine_scope",
]
