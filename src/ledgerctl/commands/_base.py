"""Click base classes for ledgerctl commands.

``LedgerCommand`` accepts an ``examples=`` text; passing ``--examples`` on
the command line prints it and exits, so ``--help`` stays short.
``LedgerGroup`` makes every subcommand a ``LedgerCommand``.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_callback(examples: str):
    def _callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return _callback


class LedgerCommand(click.Command):
    """Command with an optional eager ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_examples_callback(examples),
                    help="Show usage examples.",
                )
            )


class LedgerGroup(click.Group):
    """Root group whose subcommands are all :class:`LedgerCommand`."""

    command_class = LedgerCommand
