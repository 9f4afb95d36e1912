"""Subcommand modules for ledgerctl.

Provides register_commands(); imports are deferred so ``ledgerctl --help``
does not load the ledger or service layers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the shell and script runner on the root CLI group."""
    from ledgerctl.commands.shell import run, shell

    cli.add_command(shell)
    cli.add_command(run)
