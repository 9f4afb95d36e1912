"""Account kinds and transaction directions.

Both enums parse the exact tokens accepted by the command language:
``savings``/``current`` for kinds and the integer codes ``1``/``0`` for
deposit and withdrawal.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum

from ledgerctl.domain.errors import InvalidDirectionError, InvalidKindError


class AccountKind(StrEnum):
    """The two account products the ledger supports."""

    SAVINGS = "savings"
    CURRENT = "current"

    @classmethod
    def parse(cls, value: AccountKind | str) -> AccountKind:
        """Return the kind named by *value*.

        Matching is exact and case-sensitive.

        Raises:
            InvalidKindError: If *value* is not ``"savings"`` or ``"current"``.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidKindError(value) from None


class TransactionDirection(IntEnum):
    """Transaction codes: 1 deposits, 0 withdraws."""

    WITHDRAW = 0
    DEPOSIT = 1

    @classmethod
    def parse(cls, value: TransactionDirection | int) -> TransactionDirection:
        """Return the direction for an integer transaction code.

        Raises:
            InvalidDirectionError: For any code other than 0 or 1.
        """
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True/False are not transaction codes
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDirectionError(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidDirectionError(value) from None
