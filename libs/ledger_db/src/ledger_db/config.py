"""Connection settings for the ledger store.

The store is addressed either by a full SQLAlchemy URL (``DATABASE_URL``) or by
discrete Postgres settings read from ``POSTGRES_*`` environment variables.
Loading a ``.env`` file is the entrypoint's job (see ``ledger_summary.cli``);
this module only reads ``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from sqlalchemy.engine import URL

from .errors import ConfigError

DEFAULT_PORT = 5432
DRIVERNAME = "postgresql+psycopg"


@dataclass(frozen=True, slots=True)
class PostgresConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    sslmode: str = "disable"

    def url(self) -> URL:
        """Return a SQLAlchemy URL; ``str()`` of it masks the password."""

        return URL.create(
            DRIVERNAME,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
            query={"sslmode": self.sslmode},
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PostgresConfig:
        """Build settings from ``POSTGRES_*`` variables.

        ``POSTGRES_HOST``, ``POSTGRES_USER`` and ``POSTGRES_DB`` are required.
        ``POSTGRES_PASSWORD`` may be empty (trust/peer auth), ``POSTGRES_PORT``
        defaults to 5432 and ``POSTGRES_SSLMODE`` to ``disable``.
        """

        env = os.environ if environ is None else environ
        missing = [
            k for k in ("POSTGRES_HOST", "POSTGRES_USER", "POSTGRES_DB") if not env.get(k)
        ]
        if missing:
            raise ConfigError(f"missing database settings: {', '.join(missing)}")

        raw_port = env.get("POSTGRES_PORT") or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigError(f"POSTGRES_PORT must be an integer, got {raw_port!r}") from None

        return cls(
            host=env["POSTGRES_HOST"],
            port=port,
            user=env["POSTGRES_USER"],
            password=env.get("POSTGRES_PASSWORD", ""),
            database=env["POSTGRES_DB"],
            sslmode=env.get("POSTGRES_SSLMODE") or "disable",
        )


def resolve_database_url(
    override: str | URL | None = None, *, environ: Mapping[str, str] | None = None
) -> str | URL:
    """Pick the database URL: explicit override, then ``DATABASE_URL``, then ``POSTGRES_*``."""

    if override:
        return override
    env = os.environ if environ is None else environ
    url = env.get("DATABASE_URL")
    if url:
        return url
    return PostgresConfig.from_env(env).url()


__all__ = [
    "DEFAULT_PORT",
    "PostgresConfig",
    "resolve_database_url",
]
