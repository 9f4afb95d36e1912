"""Output mode dispatch for ServiceResult.

The CLI renders ServiceResult for humans (Rich tables and fields) or
machines (``--json``).  ``--quiet`` trims human output to account numbers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from ledgerctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from ledgerctl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """How a single result should be written."""

    model_config = {"frozen": True}

    json_output: bool = False
    json_lines: bool = False
    quiet: bool = False
    verbose: bool = False
    currency: str = "Rs"
    width: int | None = None


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over verbose.  With ``json_lines`` the
    JSON document is compact so a stream of results stays one per line.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        if settings.json_lines:
            return result.model_dump_json()
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result, currency=settings.currency)
    return render_result(
        result,
        verbose=settings.verbose,
        currency=settings.currency,
        width=settings.width,
    )
