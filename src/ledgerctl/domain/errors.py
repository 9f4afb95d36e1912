"""Ledger error hierarchy.

Every error carries a stable ``code`` that the service layer copies into
``ServiceError.code`` and a ``detail`` dict with the offending values.
A failed operation never leaves partial state behind.
"""

from __future__ import annotations

from typing import Any


class LedgerError(Exception):
    """Base class for recoverable ledger failures."""

    code = "LEDGER_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidKindError(LedgerError):
    """Account kind text is neither ``savings`` nor ``current``."""

    code = "INVALID_KIND"

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Invalid account type: {value!r}. Please use 'savings' or 'current'.",
            kind=str(value),
        )


class InvalidDirectionError(LedgerError):
    """Transaction code is neither 1 (deposit) nor 0 (withdrawal)."""

    code = "INVALID_DIRECTION"

    def __init__(self, value: object) -> None:
        super().__init__(
            "Invalid transaction code (1 for deposit, 0 for withdrawal)",
            code=str(value),
        )


class InvalidHolderNameError(LedgerError):
    """Holder name is empty."""

    code = "INVALID_NAME"

    def __init__(self) -> None:
        super().__init__("Account holder name must not be empty")


class DuplicateAccountError(LedgerError):
    """An active account already has this holder name and kind."""

    code = "DUPLICATE_ACCOUNT"

    def __init__(self, holder_name: str, kind: str) -> None:
        super().__init__(
            f"Account for '{holder_name}' of type '{kind}' already exists",
            holder=holder_name,
            kind=kind,
        )


class AccountNotFoundError(LedgerError):
    """No active account matches the lookup."""

    code = "NOT_FOUND"


class InsufficientFundsError(LedgerError):
    """A withdrawal would take the balance below the kind's floor."""

    code = "INSUFFICIENT_FUNDS"

    def __init__(self, number: int, kind: str, balance: float, amount: float, floor: float) -> None:
        if floor > 0:
            reason = f"minimum {floor:.2f} required for {kind}"
        else:
            reason = "cannot overdraw"
        super().__init__(
            f"The balance is insufficient for the specified withdrawal ({reason})",
            number=number,
            kind=kind,
            balance=balance,
            amount=amount,
            floor=floor,
        )
