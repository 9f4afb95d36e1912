"""Rich Console factory and theme for ledgerctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  Outside a terminal (tests, pipes) Rich drops color
codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LEDGER_THEME = Theme(
    {
        "ledger.ok": "bold green",
        "ledger.error": "bold red",
        "ledger.warning": "bold yellow",
        "ledger.op": "bold cyan",
        "ledger.key": "dim",
        "ledger.number": "bold blue",
        "ledger.holder": "bold",
        "ledger.amount": "magenta",
        "ledger.kind.savings": "green",
        "ledger.kind.current": "yellow",
    }
)

_KIND_STYLES: dict[str, str] = {
    "savings": "ledger.kind.savings",
    "current": "ledger.kind.current",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps table layout stable in tests).
    """
    return Console(
        file=StringIO(),
        theme=LEDGER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for an account kind."""
    return _KIND_STYLES.get(kind, "")


def format_money(amount: float, currency: str = "Rs") -> str:
    """``Rs 1500.00``-style amount; no currency prefix when *currency* is empty."""
    text = f"{amount:.2f}"
    return f"{currency} {text}" if currency else text
