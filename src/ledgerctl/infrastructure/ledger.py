"""Ledger — sole owner of the Account Set and the Reclaimed Number Pool.

Every operation runs inside :meth:`Ledger.transaction`, a ledger-wide
re-entrant lock, so duplicate checks and number allocation can never
interleave with another caller's mutation.  Failed operations raise a
:class:`~ledgerctl.domain.errors.LedgerError` and leave both collections
and the fresh-number counter untouched.

Accounts handed out are immutable snapshots; nothing outside the ledger
holds a reference into its collections.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from ledgerctl.config.models import LedgerConfig
from ledgerctl.domain.accounts import Account, AccountSet, LowBalanceReport
from ledgerctl.domain.errors import (
    AccountNotFoundError,
    DuplicateAccountError,
    InsufficientFundsError,
    InvalidHolderNameError,
)
from ledgerctl.domain.numbers import NumberAllocator, ReclaimedNumberPool
from ledgerctl.domain.types import AccountKind, TransactionDirection

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


class Ledger:
    """In-memory bank ledger with smallest-first account number recycling."""

    def __init__(self, config: LedgerConfig | None = None) -> None:
        self.config = config or LedgerConfig()
        self._accounts = AccountSet()
        self._pool = ReclaimedNumberPool()
        self._allocator = NumberAllocator(self._pool, self.config.first_account_number)
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Hold the ledger-wide lock for the duration of the block."""
        with self._lock:
            yield

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._accounts)

    @property
    def next_fresh(self) -> int:
        return self._allocator.next_fresh

    @property
    def reclaimed_numbers(self) -> tuple[int, ...]:
        """Pooled numbers in the order they will be reused."""
        with self.transaction():
            return tuple(self._pool)

    def floor_for(self, kind: AccountKind) -> float:
        if kind is AccountKind.SAVINGS:
            return self.config.savings_floor
        return self.config.current_floor

    def get(self, number: int) -> Account:
        with self.transaction():
            account = self._accounts.get(number)
        if account is None:
            raise AccountNotFoundError(
                f"Account with number {number} does not exist",
                number=number,
            )
        return account

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        kind: AccountKind | str,
        holder_name: str,
        initial_balance: float,
    ) -> Account:
        """Open an account, reusing the smallest reclaimed number if any.

        The initial balance is stored as given; floors apply only to
        withdrawals.

        Raises:
            InvalidKindError: *kind* text is not a known account kind.
            InvalidHolderNameError: *holder_name* is empty.
            DuplicateAccountError: *holder_name* already holds a *kind* account.
        """
        kind = AccountKind.parse(kind)
        if not holder_name:
            raise InvalidHolderNameError()

        with self.transaction():
            if self._accounts.contains_identity(holder_name, kind):
                raise DuplicateAccountError(holder_name, str(kind))

            # Build the record before claiming its number so a failed
            # construction leaves the pool and counter as they were.
            account = Account(
                number=self._allocator.peek(),
                holder_name=str(holder_name),
                kind=kind,
                balance=float(initial_balance),
            )
            reused = bool(self._pool)
            self._allocator.allocate()
            self._accounts.append(account)

        logger.debug(
            "account created number=%s kind=%s reused=%s",
            account.number,
            account.kind,
            reused,
        )
        return account

    def delete(self, kind: AccountKind | str, holder_name: str) -> int:
        """Close the account held by *holder_name* of *kind*.

        Its number goes into the reclaimed pool and is returned.

        Raises:
            InvalidKindError: *kind* text is not a known account kind.
            AccountNotFoundError: No active account matches.
        """
        kind = AccountKind.parse(kind)
        with self.transaction():
            if not len(self._accounts):
                raise AccountNotFoundError(
                    "No accounts to delete",
                    holder=holder_name,
                    kind=str(kind),
                )
            idx = self._accounts.index_of_identity(holder_name, kind)
            if idx is None:
                raise AccountNotFoundError(
                    f"Account '{holder_name}' of type {kind} does not exist",
                    holder=holder_name,
                    kind=str(kind),
                )
            removed = self._accounts.remove_at(idx)
            self._pool.add(removed.number)

        logger.debug("account deleted number=%s; number reclaimed", removed.number)
        return removed.number

    def transact(
        self,
        number: int,
        amount: float,
        direction: TransactionDirection | int,
    ) -> Account:
        """Deposit into or withdraw from account *number*.

        Amounts are applied as given, without sign checks.

        Raises:
            AccountNotFoundError: *number* is not active.
            InvalidDirectionError: *direction* is not deposit (1) or withdraw (0).
            InsufficientFundsError: A withdrawal would breach the kind's floor.
        """
        with self.transaction():
            if not len(self._accounts):
                raise AccountNotFoundError(
                    "No accounts available for transactions",
                    number=number,
                )
            idx = self._accounts.index_of_number(number)
            if idx is None:
                raise AccountNotFoundError(
                    f"Account with number {number} does not exist",
                    number=number,
                )
            direction = TransactionDirection.parse(direction)
            account = self._accounts[idx]

            if direction is TransactionDirection.DEPOSIT:
                updated = account.with_balance(account.balance + amount)
            else:
                floor = self.floor_for(account.kind)
                if account.balance - amount < floor:
                    raise InsufficientFundsError(
                        number,
                        str(account.kind),
                        account.balance,
                        amount,
                        floor,
                    )
                updated = account.with_balance(account.balance - amount)
            self._accounts.replace_at(idx, updated)

        logger.debug(
            "transaction applied number=%s direction=%s balance=%.2f",
            number,
            direction.name.lower(),
            updated.balance,
        )
        return updated

    def deposit(self, number: int, amount: float) -> Account:
        return self.transact(number, amount, TransactionDirection.DEPOSIT)

    def withdraw(self, number: int, amount: float) -> Account:
        return self.transact(number, amount, TransactionDirection.WITHDRAW)

    def clear(self) -> tuple[int, int]:
        """Release every account and pooled number.

        The fresh-number counter keeps its value.  Returns
        ``(accounts_released, numbers_released)``.
        """
        with self.transaction():
            accounts = self._accounts.clear()
            numbers = self._pool.clear()
        logger.debug("ledger cleared accounts=%s numbers=%s", accounts, numbers)
        return accounts, numbers

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_sorted_by_number(self) -> list[Account]:
        with self.transaction():
            return self._accounts.sorted_by_number()

    def low_balance_report(self, threshold: float | None = None) -> LowBalanceReport:
        """Accounts with a balance strictly below *threshold*.

        *threshold* defaults to ``config.low_balance_threshold``.
        """
        if threshold is None:
            threshold = self.config.low_balance_threshold
        with self.transaction():
            return LowBalanceReport(
                threshold=threshold,
                accounts=tuple(self._accounts.below(threshold)),
                total_accounts=len(self._accounts),
            )

    def duplicate_exists(self, holder_name: str, kind: AccountKind | str) -> bool:
        kind = AccountKind.parse(kind)
        with self.transaction():
            return self._accounts.contains_identity(holder_name, kind)
