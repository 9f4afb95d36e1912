"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ledgerctl.toml only contains
overrides.  A missing file yields a ledger numbered from 100 with the
standard savings (100.00) and current (0.00) floors.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- ledgerctl.toml sections ---


class LedgerConfig(BaseModel):
    """[ledger] section."""

    model_config = {"frozen": True}

    first_account_number: int = Field(default=100, ge=0)
    savings_floor: float = 100.0
    current_floor: float = 0.0
    low_balance_threshold: float = 100.0


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    currency: str = "Rs"
    width: int = Field(default=120, ge=40)
