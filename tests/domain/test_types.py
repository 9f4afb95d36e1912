"""Tests for AccountKind and TransactionDirection parsing."""

import pytest

from ledgerctl.domain.errors import InvalidDirectionError, InvalidKindError
from ledgerctl.domain.types import AccountKind, TransactionDirection


class TestAccountKind:
    def test_values(self) -> None:
        assert AccountKind.SAVINGS == "savings"
        assert AccountKind.CURRENT == "current"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("savings", AccountKind.SAVINGS), ("current", AccountKind.CURRENT)],
    )
    def test_parse_text(self, text: str, expected: AccountKind) -> None:
        assert AccountKind.parse(text) is expected

    def test_parse_passes_enum_through(self) -> None:
        assert AccountKind.parse(AccountKind.CURRENT) is AccountKind.CURRENT

    @pytest.mark.parametrize("text", ["Savings", "CURRENT", "checking", "", " savings"])
    def test_parse_is_exact(self, text: str) -> None:
        with pytest.raises(InvalidKindError) as exc_info:
            AccountKind.parse(text)
        assert exc_info.value.code == "INVALID_KIND"
        assert exc_info.value.detail["kind"] == text


class TestTransactionDirection:
    def test_codes(self) -> None:
        assert TransactionDirection.parse(1) is TransactionDirection.DEPOSIT
        assert TransactionDirection.parse(0) is TransactionDirection.WITHDRAW

    @pytest.mark.parametrize("code", [2, -1, 10])
    def test_other_codes_rejected(self, code: int) -> None:
        with pytest.raises(InvalidDirectionError):
            TransactionDirection.parse(code)

    def test_bool_is_not_a_code(self) -> None:
        with pytest.raises(InvalidDirectionError):
            TransactionDirection.parse(True)  # type: ignore[arg-type]

    def test_string_is_not_a_code(self) -> None:
        with pytest.raises(InvalidDirectionError):
            TransactionDirection.parse("1")  # type: ignore[arg-type]
