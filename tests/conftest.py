"""Pytest configuration for test isolation.

Connection settings are resolved from the environment (``DATABASE_URL`` and
``POSTGRES_*``) when no explicit URL is passed. A developer shell pointing at a
real Postgres must never leak into tests, so every test starts with those
variables removed; tests that need them set them via ``monkeypatch``.
"""

from __future__ import annotations

import pytest

_ENV_VARS = (
    "DATABASE_URL",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_DB",
    "POSTGRES_SSLMODE",
    "LEDGER_SUMMARY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_connection_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
