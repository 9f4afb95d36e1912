"""Tests for AccountService — ledger operations as ServiceResult."""

from __future__ import annotations

import threading

import pytest

from ledgerctl.infrastructure.ledger import Ledger
from ledgerctl.services.accounts import AccountService
from tests.conftest import open_account


class TestCreateAccount:
    def test_success(self, service: AccountService) -> None:
        result = service.create_account("savings", "JohnDoe", 1500.0)
        assert result.ok
        assert result.op == "create_account"
        assert result.data == {
            "number": 100,
            "holder": "JohnDoe",
            "kind": "savings",
            "balance": 1500.0,
            "reused_number": False,
        }

    def test_reused_flag(self, service: AccountService) -> None:
        open_account(service, "savings", "A", 1.0)
        service.delete_account("savings", "A")
        data = open_account(service, "savings", "B", 1.0)
        assert data["number"] == 100
        assert data["reused_number"] is True

    def test_reused_flag_read_under_ledger_lock(
        self, service: AccountService, ledger: Ledger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        open_account(service, "savings", "A", 1.0)
        service.delete_account("savings", "A")
        real_create = ledger.create
        lock_free_elsewhere: list[bool] = []

        def create_checking_lock(*args: object) -> object:
            def try_lock() -> None:
                acquired = ledger._lock.acquire(blocking=False)
                if acquired:
                    ledger._lock.release()
                lock_free_elsewhere.append(acquired)

            worker = threading.Thread(target=try_lock)
            worker.start()
            worker.join()
            return real_create(*args)

        monkeypatch.setattr(ledger, "create", create_checking_lock)
        data = open_account(service, "current", "B", 1.0)
        assert lock_free_elsewhere == [False]
        assert data["number"] == 100
        assert data["reused_number"] is True

    def test_duplicate(self, service: AccountService, ledger: Ledger) -> None:
        open_account(service, "current", "Jane", 10.0)
        result = service.create_account("current", "Jane", 99.0)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "DUPLICATE_ACCOUNT"
        assert result.error.detail == {"holder": "Jane", "kind": "current"}
        assert len(ledger) == 1

    def test_invalid_kind(self, service: AccountService) -> None:
        result = service.create_account("checking", "Jane", 10.0)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_KIND"

    def test_invalid_name(self, service: AccountService) -> None:
        result = service.create_account("savings", "", 10.0)
        assert result.error is not None
        assert result.error.code == "INVALID_NAME"

    def test_allocation_failure_is_recovered(
        self,
        service: AccountService,
        ledger: Ledger,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _boom(*_args: object, **_kwargs: object) -> None:
            raise MemoryError

        monkeypatch.setattr("ledgerctl.infrastructure.ledger.Account", _boom)
        result = service.create_account("savings", "Ann", 10.0)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ALLOCATION_FAILED"
        assert len(ledger) == 0
        assert ledger.next_fresh == 100


class TestDeleteAccount:
    def test_success(self, service: AccountService) -> None:
        open_account(service, "savings", "JohnDoe", 1500.0)
        result = service.delete_account("savings", "JohnDoe")
        assert result.ok
        assert result.data["number"] == 100
        assert result.data["reclaimed"] == [100]

    def test_not_found(self, service: AccountService, ledger: Ledger) -> None:
        open_account(service, "savings", "JohnDoe", 1500.0)
        result = service.delete_account("current", "JohnDoe")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert ledger.reclaimed_numbers == ()
        assert len(ledger) == 1

    def test_invalid_kind(self, service: AccountService) -> None:
        result = service.delete_account("bogus", "JohnDoe")
        assert result.error is not None
        assert result.error.code == "INVALID_KIND"


class TestTransact:
    def test_deposit(self, service: AccountService) -> None:
        open_account(service, "savings", "Ann", 100.0)
        result = service.deposit(100, 25.0)
        assert result.ok
        assert result.op == "transaction"
        assert result.data["balance"] == 125.0
        assert result.data["direction"] == "deposit"
        assert result.data["amount"] == 25.0

    def test_withdraw(self, service: AccountService) -> None:
        open_account(service, "current", "Ann", 100.0)
        result = service.transact(100, 100.0, 0)
        assert result.ok
        assert result.data["balance"] == 0.0
        assert result.data["direction"] == "withdraw"

    def test_insufficient_funds(self, service: AccountService, ledger: Ledger) -> None:
        open_account(service, "current", "JaneSmith", 2500.0)
        result = service.withdraw(100, 2600.0)
        assert result.error is not None
        assert result.error.code == "INSUFFICIENT_FUNDS"
        assert result.error.detail["floor"] == 0.0
        assert ledger.get(100).balance == 2500.0

    def test_invalid_direction(self, service: AccountService) -> None:
        open_account(service, "current", "Ann", 100.0)
        result = service.transact(100, 1.0, 5)
        assert result.error is not None
        assert result.error.code == "INVALID_DIRECTION"

    def test_not_found(self, service: AccountService) -> None:
        result = service.deposit(100, 1.0)
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"


class TestReads:
    def test_list_accounts_sorted(self, service: AccountService) -> None:
        for name in ("A", "B", "C"):
            open_account(service, "savings", name, 500.0)
        service.delete_account("savings", "A")
        open_account(service, "current", "D", 1.0)
        result = service.list_accounts()
        assert result.ok
        assert [item["number"] for item in result.data["items"]] == [100, 101, 102]
        assert result.data["items"][0]["holder"] == "D"
        assert result.data["count"] == 3

    def test_low_balance(self, service: AccountService) -> None:
        open_account(service, "current", "JaneSmith", 2500.0)
        open_account(service, "savings", "Amit", 50.0)
        result = service.low_balance()
        assert result.data["count"] == 1
        assert result.data["items"][0]["holder"] == "Amit"
        assert result.data["threshold"] == 100.0
        assert result.data["total_accounts"] == 2

    def test_low_balance_empty_ledger(self, service: AccountService) -> None:
        result = service.low_balance()
        assert result.ok
        assert result.data["count"] == 0
        assert result.data["total_accounts"] == 0

    def test_check_duplicate(self, service: AccountService) -> None:
        open_account(service, "savings", "Ann", 1.0)
        assert service.check_duplicate("Ann", "savings").data["exists"] is True
        assert service.check_duplicate("Ann", "current").data["exists"] is False
        bad = service.check_duplicate("Ann", "nope")
        assert bad.error is not None
        assert bad.error.code == "INVALID_KIND"


class TestShutdown:
    def test_releases_state(self, service: AccountService, ledger: Ledger) -> None:
        open_account(service, "savings", "A", 1.0)
        open_account(service, "savings", "B", 1.0)
        service.delete_account("savings", "A")
        result = service.shutdown()
        assert result.op == "exit"
        assert result.data == {"accounts_released": 1, "numbers_released": 1}
        assert len(ledger) == 0
