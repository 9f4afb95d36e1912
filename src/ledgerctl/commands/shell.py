"""Line-oriented command shell over the ledger.

Commands (case-sensitive) and the tokens each one reads next::

    CREATE       <savings|current> <name> <initial-amount>
    DELETE       <savings|current> <name>
    TRANSACTION  <account-number> <amount> <code: 1 deposit, 0 withdraw>
    DISPLAY
    LOWBALANCE
    EXIT

Tokens are whitespace-delimited and may span lines.  Every command is
answered with one emitted :class:`ServiceResult`; failures are reported
and the shell keeps reading.  End of input behaves like ``EXIT``.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, TextIO

import click

from ledgerctl.commands._base import LedgerCommand
from ledgerctl.services.accounts import AccountService
from ledgerctl.services.result import ServiceResult

if TYPE_CHECKING:
    from ledgerctl.commands._context import AppContext

COMMAND_NAMES = ("CREATE", "DELETE", "DISPLAY", "TRANSACTION", "LOWBALANCE", "EXIT")


class EndOfInput(Exception):
    """The stream ran out in the middle of a command."""


class TokenReader:
    """Whitespace-delimited tokens pulled lazily from a text stream.

    With ``comments=True`` a token starting with ``#`` discards the rest
    of its line.
    """

    def __init__(self, stream: TextIO, *, comments: bool = False) -> None:
        self._lines: Iterator[str] = iter(stream)
        self._pending: list[str] = []
        self._comments = comments

    def next_token(self) -> str | None:
        """Return the next token, or None at end of input."""
        while not self._pending:
            line = next(self._lines, None)
            if line is None:
                return None
            tokens = line.split()
            if self._comments:
                for idx, token in enumerate(tokens):
                    if token.startswith("#"):
                        tokens = tokens[:idx]
                        break
            self._pending = tokens
        return self._pending.pop(0)

    def require(self) -> str:
        token = self.next_token()
        if token is None:
            raise EndOfInput
        return token


def _parse_amount(token: str) -> float | None:
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_int(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def _invalid(op: str, message: str, token: str) -> ServiceResult:
    return ServiceResult.failure(op, "INVALID_INPUT", message, token=token)


class CommandShell:
    """Reads commands from a :class:`TokenReader` and emits their results."""

    def __init__(
        self,
        app: AppContext,
        reader: TokenReader,
        *,
        interactive: bool = False,
        stop_on_error: bool = False,
    ) -> None:
        self._app = app
        self._reader = reader
        self._interactive = interactive
        self._stop_on_error = stop_on_error
        self._service = AccountService(app.ledger)
        self._handlers: dict[str, Callable[[], ServiceResult]] = {
            "CREATE": self._create,
            "DELETE": self._delete,
            "DISPLAY": self._service.list_accounts,
            "TRANSACTION": self._transaction,
            "LOWBALANCE": self._service.low_balance,
        }
        self.failures = 0

    def run(self) -> int:
        """Process commands until EXIT or end of input.

        Returns the number of failed commands.
        """
        if self._interactive and not self._app.settings.quiet:
            click.echo("Bank Management System")
            click.echo(f"Commands: {', '.join(COMMAND_NAMES)}")

        while True:
            self._prompt("\nEnter command: ")
            command = self._reader.next_token()
            if command is None or command == "EXIT":
                break

            handler = self._handlers.get(command)
            if handler is None:
                result = ServiceResult.failure(
                    "command",
                    "UNKNOWN_COMMAND",
                    f"Invalid command: '{command}'. Please use {', '.join(COMMAND_NAMES)}.",
                    command=command,
                )
            else:
                try:
                    result = handler()
                except EndOfInput:
                    result = ServiceResult.failure(
                        command.lower(),
                        "INVALID_INPUT",
                        f"Unexpected end of input while reading {command}",
                    )

            self._emit(result)
            if not result.ok and self._stop_on_error:
                return self.failures

        self._emit(self._service.shutdown())
        return self.failures

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------

    def _create(self) -> ServiceResult:
        kind = self._ask("Enter account type (savings/current): ")
        name = self._ask("Enter account holder's name: ")
        raw_amount = self._ask("Enter initial deposit amount: ")
        amount = _parse_amount(raw_amount)
        if amount is None:
            return _invalid("create_account", f"Invalid amount: '{raw_amount}'", raw_amount)
        return self._service.create_account(kind, name, amount)

    def _delete(self) -> ServiceResult:
        kind = self._ask("Enter account type to delete (savings/current): ")
        name = self._ask("Enter account holder's name to delete: ")
        return self._service.delete_account(kind, name)

    def _transaction(self) -> ServiceResult:
        raw_number = self._ask("Enter account number for transaction: ")
        raw_amount = self._ask("Enter amount: ")
        raw_code = self._ask("Enter transaction code (1 for deposit, 0 for withdrawal): ")

        number = _parse_int(raw_number)
        if number is None:
            return _invalid("transaction", f"Invalid account number: '{raw_number}'", raw_number)
        amount = _parse_amount(raw_amount)
        if amount is None:
            return _invalid("transaction", f"Invalid amount: '{raw_amount}'", raw_amount)
        code = _parse_int(raw_code)
        if code is None:
            return _invalid("transaction", f"Invalid transaction code: '{raw_code}'", raw_code)
        return self._service.transact(number, amount, code)

    # ------------------------------------------------------------------
    # I/O
    # ------------------------------------------------------------------

    def _prompt(self, text: str) -> None:
        if self._interactive:
            click.echo(text, nl=False)

    def _ask(self, text: str) -> str:
        self._prompt(text)
        return self._reader.require()

    def _emit(self, result: ServiceResult) -> None:
        if not result.ok:
            self.failures += 1
        self._app.emit(result, exit_on_error=False, json_lines=True)


def _is_interactive(app: AppContext, stream: TextIO) -> bool:
    """Prompts need: no ``--no-interact``, no ``--json``, and a TTY."""
    if app.settings.no_interact or app.settings.json_output:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


@click.command(
    cls=LedgerCommand,
    examples="""\
  ledgerctl shell
  printf 'CREATE savings JohnDoe 1500\\nDISPLAY\\nEXIT\\n' | ledgerctl shell
  ledgerctl --json shell < commands.txt""",
)
@click.argument("source", type=click.File("r"), default="-", required=False)
@click.pass_obj
def shell(app: AppContext, source: TextIO) -> None:
    """Run the interactive ledger shell on SOURCE (default: standard input)."""
    interactive = _is_interactive(app, source)
    CommandShell(app, TokenReader(source), interactive=interactive).run()


@click.command(
    cls=LedgerCommand,
    examples="""\
  ledgerctl run session.txt
  ledgerctl run --fail-fast session.txt
  ledgerctl --json run session.txt""",
)
@click.argument("script", type=click.File("r"))
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Stop at the first failed command and exit with status 1.",
)
@click.pass_obj
def run(app: AppContext, script: TextIO, fail_fast: bool) -> None:
    """Execute ledger commands from SCRIPT ('-' for stdin).

    Lines may carry '#' comments.
    """
    runner = CommandShell(app, TokenReader(script, comments=True), stop_on_error=fail_fast)
    failures = runner.run()
    if fail_fast and failures:
        raise SystemExit(1)
