"""Account records and the active Account Set.

:class:`Account` is immutable; a balance change swaps in a new record at
the same position, so callers holding an earlier snapshot never observe
later mutations.

INVARIANT: within an :class:`AccountSet`, ``number`` is unique and
``(holder_name, kind)`` is unique.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any

from ledgerctl.domain.types import AccountKind


@dataclass(frozen=True)
class Account:
    """A single active bank account."""

    number: int
    holder_name: str
    kind: AccountKind
    balance: float

    def with_balance(self, balance: float) -> Account:
        return replace(self, balance=balance)

    def matches(self, holder_name: str, kind: AccountKind) -> bool:
        """Exact, case-sensitive identity match on holder name and kind."""
        return self.holder_name == holder_name and self.kind is kind

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "holder": self.holder_name,
            "kind": str(self.kind),
            "balance": self.balance,
        }


@dataclass(frozen=True)
class LowBalanceReport:
    """Accounts below a threshold, ascending by number.

    ``total_accounts`` keeps an empty ledger distinguishable from a ledger
    where no account is below the threshold.
    """

    threshold: float
    accounts: tuple[Account, ...]
    total_accounts: int

    @property
    def ledger_empty(self) -> bool:
        return self.total_accounts == 0


class AccountSet:
    """Active accounts in creation order.

    Lookups are linear scans.  Display order is produced on demand by
    :meth:`sorted_by_number` and never changes the stored order.
    """

    def __init__(self) -> None:
        self._accounts: list[Account] = []

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(tuple(self._accounts))

    def __getitem__(self, idx: int) -> Account:
        return self._accounts[idx]

    def index_of_number(self, number: int) -> int | None:
        for idx, account in enumerate(self._accounts):
            if account.number == number:
                return idx
        return None

    def index_of_identity(self, holder_name: str, kind: AccountKind) -> int | None:
        """Position of the first account matching *holder_name* and *kind*."""
        for idx, account in enumerate(self._accounts):
            if account.matches(holder_name, kind):
                return idx
        return None

    def get(self, number: int) -> Account | None:
        idx = self.index_of_number(number)
        return None if idx is None else self._accounts[idx]

    def contains_identity(self, holder_name: str, kind: AccountKind) -> bool:
        return self.index_of_identity(holder_name, kind) is not None

    def append(self, account: Account) -> None:
        """Insert *account* at the tail.

        Raises:
            ValueError: If the number or the (holder, kind) pair is taken.
        """
        if self.index_of_number(account.number) is not None:
            msg = f"Account number {account.number} is already active"
            raise ValueError(msg)
        if self.contains_identity(account.holder_name, account.kind):
            msg = f"Account for {account.holder_name!r} of type {account.kind} is already active"
            raise ValueError(msg)
        self._accounts.append(account)

    def replace_at(self, idx: int, account: Account) -> None:
        current = self._accounts[idx]
        if current.number != account.number:
            msg = f"Cannot renumber account {current.number} to {account.number}"
            raise ValueError(msg)
        self._accounts[idx] = account

    def remove_at(self, idx: int) -> Account:
        return self._accounts.pop(idx)

    def sorted_by_number(self) -> list[Account]:
        """Snapshot of all accounts, ascending by number."""
        return sorted(self._accounts, key=lambda account: account.number)

    def below(self, threshold: float) -> list[Account]:
        """Accounts with ``balance < threshold``, ascending by number."""
        return [a for a in self.sorted_by_number() if a.balance < threshold]

    def clear(self) -> int:
        released = len(self._accounts)
        self._accounts.clear()
        return released
