"""Logging configuration for ``ledger_summary``.

``configure_logging(...)`` is for entrypoints (the CLI) and attaches a single
``StreamHandler`` to the ``"ledger_summary"`` logger. Library modules only call
``get_logger(__name__)``; until an entrypoint configures output, the package
logger carries a ``NullHandler`` so importing code stays silent.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PKG_LOGGER_NAME = "ledger_summary"
LEVEL_ENV_VAR = "LEDGER_SUMMARY_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def parse_level(level: int | str | None) -> int:
    """Resolve ``level`` (int, name or numeric string) to a logging level.

    ``None`` falls back to ``LEDGER_SUMMARY_LOG_LEVEL``, then ``INFO``.
    Unknown names also resolve to ``INFO``.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach one stream handler to the package logger (first call wins).

    ``ledger_db`` loggers are routed through the same handler so store
    messages (migrations applied, connection failures) appear alongside the
    application's own.
    """

    global _handler
    pkg_logger = logging.getLogger(PKG_LOGGER_NAME)
    if _handler is not None:
        return pkg_logger

    resolved = parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    for name in (PKG_LOGGER_NAME, "ledger_db"):
        lg = logging.getLogger(name)
        for h in list(lg.handlers):
            if isinstance(h, logging.NullHandler):
                lg.removeHandler(h)
        lg.addHandler(handler)
        lg.setLevel(resolved)
        lg.propagate = False

    _handler = handler
    return pkg_logger


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``, keeping the package quiet until configured."""

    pkg_logger = logging.getLogger(PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = [
    "configure_logging",
    "get_logger",
    "parse_level",
]
