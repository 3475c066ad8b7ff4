# ruff: noqa: E402, I001
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` and `libs/` dirs are on sys.path
_ROOT = Path(__file__).resolve().parents[1]
sys.path[:0] = [
    p
    for p in [str(_ROOT / "packages"), str(_ROOT / "libs/ledger_db/src"), str(_ROOT)]
    if p not in sys.path
]

from typer.testing import CliRunner  # noqa: E402

import ledger_summary.cli as cli_mod  # noqa: E402

from tests.helpers.db import sqlite_url  # noqa: E402

STATEMENT = Path(__file__).resolve().parent / "data/statement_jul_aug.csv"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI away from a developer's .env and global log handlers."""

    monkeypatch.chdir(tmp_path)
    # setenv first so teardown also removes a value loaded from a test .env
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.delenv("DATABASE_URL")
    monkeypatch.setattr(cli_mod, "configure_logging", lambda *a, **kw: None)


def test_init_db_then_empty_summary(tmp_path: Path):
    url = sqlite_url(tmp_path / "ledger.db")

    res = runner.invoke(cli_mod.app, ["init-db", "--database-url", url])
    assert res.exit_code == 0, res.output
    assert "Schema ready" in res.output

    res = runner.invoke(cli_mod.app, ["summary", "--database-url", url])
    assert res.exit_code == 0, res.output
    assert "No summary stored yet." in res.output


def test_ingest_prints_summary_and_monthly_counts(tmp_path: Path):
    url = sqlite_url(tmp_path / "ledger.db")

    res = runner.invoke(
        cli_mod.app, ["ingest", str(STATEMENT), "--year", "2021", "--database-url", url]
    )
    assert res.exit_code == 0, res.output
    assert "Total balance: 39.74" in res.output
    assert "Average debit amount: -15.38" in res.output
    assert "Number of transactions in July: 2" in res.output
    assert "Number of transactions in August: 2" in res.output

    res = runner.invoke(cli_mod.app, ["summary", "--database-url", url])
    assert res.exit_code == 0, res.output
    assert "Total transactions: 4" in res.output


def test_database_url_read_from_dotenv(tmp_path: Path):
    url = sqlite_url(tmp_path / "from-dotenv.db")
    (tmp_path / ".env").write_text(f"DATABASE_URL={url}\n", encoding="utf-8")

    res = runner.invoke(cli_mod.app, ["init-db"])

    assert res.exit_code == 0, res.output
    assert (tmp_path / "from-dotenv.db").exists()


def test_ingest_missing_file_exits_nonzero(tmp_path: Path):
    res = runner.invoke(
        cli_mod.app,
        ["ingest", str(tmp_path / "nope.csv"), "--database-url", sqlite_url(tmp_path / "x.db")],
    )

    assert res.exit_code == 1
    assert "CSV file not found" in res.output


def test_unreachable_store_exits_nonzero(tmp_path: Path):
    url = sqlite_url(tmp_path / "missing" / "ledger.db")

    res = runner.invoke(cli_mod.app, ["summary", "--database-url", url])

    assert res.exit_code == 1
    assert "failed to ping" in res.output


def test_ingest_invalid_statement_exits_nonzero(tmp_path: Path):
    csv_path = tmp_path / "bad.csv"
    csv_path.write_text("Id,Date,Transaction\n0,7/15,1e30\n", encoding="utf-8")

    res = runner.invoke(
        cli_mod.app,
        ["ingest", str(csv_path), "--year", "2024", "--database-url", sqlite_url(tmp_path / "x.db")],
    )

    assert res.exit_code == 1
    assert "invalid statement bad.csv" in res.output
    assert "line 2" in res.output
