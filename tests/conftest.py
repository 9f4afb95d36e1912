"""Shared pytest fixtures and test helpers for ledgerctl tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from ledgerctl.infrastructure.ledger import Ledger
from ledgerctl.services.accounts import AccountService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def ledger() -> Ledger:
    """Empty ledger with default configuration."""
    return Ledger()


@pytest.fixture
def service(ledger: Ledger) -> AccountService:
    return AccountService(ledger)


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no stray ledgerctl.toml is found.

    Use via ``@pytest.mark.usefixtures("_isolated_config")`` on command
    test classes.
    """
    monkeypatch.delenv("LEDGERCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def open_account(
    service: AccountService,
    kind: str,
    holder: str,
    balance: float,
) -> dict[str, Any]:
    """Create an account via AccountService, asserting success."""
    result = service.create_account(kind, holder, balance)
    assert result.ok, result.error
    return result.data
