"""Tests for config section models."""

import pytest
from pydantic import ValidationError

from ledgerctl.config.models import DisplayConfig, LedgerConfig


class TestLedgerConfig:
    def test_defaults(self) -> None:
        cfg = LedgerConfig()
        assert cfg.first_account_number == 100
        assert cfg.savings_floor == 100.0
        assert cfg.current_floor == 0.0
        assert cfg.low_balance_threshold == 100.0

    def test_negative_first_number_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LedgerConfig(first_account_number=-1)

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            LedgerConfig().savings_floor = 5.0  # type: ignore[misc]


class TestDisplayConfig:
    def test_defaults(self) -> None:
        cfg = DisplayConfig()
        assert cfg.currency == "Rs"
        assert cfg.width == 120

    def test_narrow_width_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DisplayConfig(width=10)
