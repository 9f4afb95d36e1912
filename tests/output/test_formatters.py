"""Tests for output mode dispatch."""

import json

from ledgerctl.output.formatters import OutputSettings, format_result
from ledgerctl.services.result import ServiceResult

_RESULT = ServiceResult(
    ok=True,
    op="create_account",
    data={"number": 100, "holder": "Ann", "kind": "savings", "balance": 500.0},
)


class TestFormatResult:
    def test_default_is_human(self) -> None:
        output = format_result(_RESULT)
        assert "OK" in output
        assert "Rs 500.00" in output

    def test_json_indented(self) -> None:
        output = format_result(_RESULT, settings=OutputSettings(json_output=True))
        assert "\n" in output
        assert json.loads(output)["data"]["number"] == 100

    def test_json_lines_compact(self) -> None:
        settings = OutputSettings(json_output=True, json_lines=True)
        output = format_result(_RESULT, settings=settings)
        assert "\n" not in output
        assert json.loads(output)["op"] == "create_account"

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(_RESULT, settings=settings))["ok"] is True

    def test_quiet(self) -> None:
        assert format_result(_RESULT, settings=OutputSettings(quiet=True)) == "100"

    def test_currency_passed_through(self) -> None:
        output = format_result(_RESULT, settings=OutputSettings(currency="USD"))
        assert "USD 500.00" in output
