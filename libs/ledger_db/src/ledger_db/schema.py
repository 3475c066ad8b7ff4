# ruff: noqa: I001
"""Schema bootstrap for the ledger store.

``initialize(engine)`` is called once per process start. It creates missing
tables from the ORM metadata and then walks :data:`MIGRATIONS`, a versioned,
ordered list of additive changes for deployments created before a column
existed. Each migration carries its own catalog check, so running the list
again is a no-op once the store is current.

Migration DDL goes through Alembic's ``Operations`` (the ``op.*`` API) bound to
the live connection, without an ``alembic_version`` table: the catalog itself
is the source of truth.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.engine.reflection import Inspector
from sqlalchemy.exc import SQLAlchemyError

from .errors import SchemaError
from .models import Base

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Migration:
    """One additive, idempotent schema change.

    Attributes
    ----------
    version:
        Monotonic ordering key; migrations run in ascending ``version``.
    description:
        Human-readable summary used in logs.
    is_applied:
        Catalog check returning True when the change is already present.
    upgrade:
        Applies the change through Alembic ``Operations``.
    """

    version: int
    description: str
    is_applied: Callable[[Inspector], bool]
    upgrade: Callable[[Operations], None]


def _has_column(inspector: Inspector, table: str, column: str) -> bool:
    return any(c["name"] == column for c in inspector.get_columns(table))


def _add_summary_total_transactions(op: Operations) -> None:
    # Pre-existing summary rows are backfilled with 0. That is a placeholder,
    # not the true historical count.
    op.add_column(
        "summary",
        sa.Column("total_transactions", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        description="add summary.total_transactions (NOT NULL DEFAULT 0)",
        is_applied=lambda insp: _has_column(insp, "summary", "total_transactions"),
        upgrade=_add_summary_total_transactions,
    ),
)


def _create_tables(conn: Connection) -> None:
    try:
        Base.metadata.create_all(bind=conn, checkfirst=True)
    except SQLAlchemyError as exc:
        raise SchemaError(f"failed to create tables: {exc}") from exc


def _is_applied(conn: Connection, migration: Migration) -> bool:
    try:
        # Fresh inspector per check: reflection results are cached per instance.
        return migration.is_applied(sa.inspect(conn))
    except SQLAlchemyError as exc:
        raise SchemaError(
            f"failed to inspect catalog for migration {migration.version}: {exc}"
        ) from exc


def _apply_migrations(conn: Connection, migrations: Sequence[Migration]) -> list[int]:
    ops = Operations(MigrationContext.configure(conn))
    applied: list[int] = []
    for migration in sorted(migrations, key=lambda m: m.version):
        if _is_applied(conn, migration):
            continue
        try:
            migration.upgrade(ops)
        except SQLAlchemyError as exc:
            raise SchemaError(
                f"failed to apply migration {migration.version} "
                f"({migration.description}): {exc}"
            ) from exc
        logger.info("Applied migration %d: %s", migration.version, migration.description)
        applied.append(migration.version)
    return applied


def initialize(engine: Engine, *, migrations: Sequence[Migration] = MIGRATIONS) -> list[int]:
    """Create missing tables and apply pending migrations in one transaction.

    Returns the versions applied by this call (empty when already current).
    Raises :class:`SchemaError` when DDL or catalog introspection fails.
    """

    try:
        with engine.begin() as conn:
            _create_tables(conn)
            applied = _apply_migrations(conn, migrations)
    except SchemaError:
        raise
    except SQLAlchemyError as exc:
        raise SchemaError(f"failed to initialize schema: {exc}") from exc

    logger.debug("Schema ready (migrations applied: %s)", applied or "none")
    return applied


def pending_migrations(
    engine: Engine, *, migrations: Sequence[Migration] = MIGRATIONS
) -> list[int]:
    """Return versions of migrations that :func:`initialize` would apply.

    Only meaningful once the tables exist; on an empty store every migration
    whose table is missing reports a :class:`SchemaError`.
    """

    try:
        with engine.connect() as conn:
            return [
                m.version
                for m in sorted(migrations, key=lambda m: m.version)
                if not _is_applied(conn, m)
            ]
    except SchemaError:
        raise
    except SQLAlchemyError as exc:
        raise SchemaError(f"failed to inspect catalog: {exc}") from exc


__all__ = [
    "Migration",
    "MIGRATIONS",
    "initialize",
    "pending_migrations",
]
