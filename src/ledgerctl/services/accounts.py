"""AccountService — ledger operations wrapped in ServiceResult.

Each public method maps to one shell command.  Ledger errors are
recovered here and reported as failed results; the ledger is left exactly
as it was before the call.
"""

from __future__ import annotations

import logging
from typing import Any

from ledgerctl.domain.errors import LedgerError
from ledgerctl.domain.types import AccountKind, TransactionDirection
from ledgerctl.services.base import BaseService
from ledgerctl.services.result import ServiceResult
from ledgerctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class AccountService(BaseService):
    """Create, close, transact on, and report ledger accounts."""

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def create_account(
        self,
        kind: AccountKind | str,
        holder_name: str,
        initial_balance: float,
    ) -> ServiceResult:
        """Open an account; the confirmation carries its assigned number."""
        op = "create_account"
        try:
            # The pool is read and consumed under one hold of the ledger lock.
            with self._ledger.transaction(), trace_span("ledger.create"):
                reused = bool(self._ledger.reclaimed_numbers)
                account = self._ledger.create(kind, holder_name, initial_balance)
        except LedgerError as exc:
            return self._failed(op, exc)
        except MemoryError:
            logger.exception("Allocation failed while creating account for %s", holder_name)
            return ServiceResult.failure(
                op,
                "ALLOCATION_FAILED",
                "Failed to allocate memory for new account",
                holder=holder_name,
            )

        return ServiceResult(ok=True, op=op, data={**account.to_dict(), "reused_number": reused})

    @traced
    def delete_account(self, kind: AccountKind | str, holder_name: str) -> ServiceResult:
        """Close an account and return its number to the reclaimed pool."""
        op = "delete_account"
        try:
            with trace_span("ledger.delete"):
                number = self._ledger.delete(kind, holder_name)
        except LedgerError as exc:
            return self._failed(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "number": number,
                "holder": holder_name,
                "kind": str(AccountKind.parse(kind)),
                "reclaimed": list(self._ledger.reclaimed_numbers),
            },
        )

    @traced
    def transact(
        self,
        number: int,
        amount: float,
        code: TransactionDirection | int,
    ) -> ServiceResult:
        """Apply a transaction code (1 deposit, 0 withdraw) to an account."""
        op = "transaction"
        try:
            with trace_span("ledger.transact"):
                account = self._ledger.transact(number, amount, code)
        except LedgerError as exc:
            return self._failed(op, exc)

        direction = TransactionDirection.parse(code)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **account.to_dict(),
                "direction": direction.name.lower(),
                "amount": amount,
            },
        )

    def deposit(self, number: int, amount: float) -> ServiceResult:
        return self.transact(number, amount, TransactionDirection.DEPOSIT)

    def withdraw(self, number: int, amount: float) -> ServiceResult:
        return self.transact(number, amount, TransactionDirection.WITHDRAW)

    @traced
    def shutdown(self) -> ServiceResult:
        """Release all accounts and pooled numbers."""
        accounts, numbers = self._ledger.clear()
        return ServiceResult(
            ok=True,
            op="exit",
            data={"accounts_released": accounts, "numbers_released": numbers},
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @traced
    def list_accounts(self) -> ServiceResult:
        """All active accounts, ascending by number."""
        with trace_span("ledger.list_sorted_by_number"):
            accounts = self._ledger.list_sorted_by_number()
        items: list[dict[str, Any]] = [a.to_dict() for a in accounts]
        return ServiceResult(
            ok=True,
            op="list_accounts",
            data={"items": items, "count": len(items)},
        )

    @traced
    def low_balance(self, threshold: float | None = None) -> ServiceResult:
        """Accounts whose balance is below *threshold* (config default 100.00).

        ``total_accounts == 0`` means the ledger itself is empty, which the
        renderers report differently from an empty match list.
        """
        with trace_span("ledger.low_balance_report"):
            report = self._ledger.low_balance_report(threshold)
        return ServiceResult(
            ok=True,
            op="low_balance",
            data={
                "items": [a.to_dict() for a in report.accounts],
                "count": len(report.accounts),
                "threshold": report.threshold,
                "total_accounts": report.total_accounts,
            },
        )

    @traced
    def check_duplicate(self, holder_name: str, kind: AccountKind | str) -> ServiceResult:
        op = "check_duplicate"
        try:
            exists = self._ledger.duplicate_exists(holder_name, kind)
        except LedgerError as exc:
            return self._failed(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"holder": holder_name, "kind": str(kind), "exists": exists},
        )
