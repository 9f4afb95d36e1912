"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Owns the process-wide :class:`Ledger` (created
lazily so ``--help`` and ``--version`` never build one) and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ledgerctl.config.logging import configure_logging
from ledgerctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from ledgerctl.config.settings import LedgerSettings
    from ledgerctl.infrastructure.ledger import Ledger
    from ledgerctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: LedgerSettings) -> None:
        self.settings = settings
        self._ledger: Ledger | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from ledgerctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def ledger(self) -> Ledger:
        """The ledger instance (created on first access)."""
        if self._ledger is None:
            from ledgerctl.infrastructure.ledger import Ledger

            self._ledger = Ledger(self.settings.ledger)
        return self._ledger

    def output_settings(self, *, json_lines: bool = False) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            json_lines=json_lines,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            currency=self.settings.display.currency,
            width=self.settings.display.width,
        )

    def emit(
        self,
        result: ServiceResult,
        *,
        exit_on_error: bool = True,
        json_lines: bool = False,
    ) -> None:
        """Format and output a ServiceResult.

        * Success: writes to stdout.  Warnings go to stderr outside JSON
          mode so they don't pollute piped output.
        * Failure: writes to stderr; exits with code 1 unless
          *exit_on_error* is False (the shell keeps reading commands).
        """
        settings = self.output_settings(json_lines=json_lines)
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return

        click.echo(output, err=True)
        if exit_on_error:
            raise SystemExit(1)
