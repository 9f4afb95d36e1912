"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from ledgerctl.output.console import create_console, format_money, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from ledgerctl.services.result import ServiceResult

NO_ACCOUNTS = "No accounts to display"


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    currency: str = "Rs",
    width: int | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console(width=width)
    ctx = _RenderContext(console=console, verbose=verbose, currency=currency)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, ctx)
    else:
        _render_error(result, ctx)

    if verbose:
        _render_meta(result, ctx)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult, *, currency: str = "Rs") -> str:
    """Render minimal output for ``--quiet`` mode.

    Listings collapse to one account number per line; single-account
    mutations to the affected number.  Empty listings keep their message
    so an empty ledger reads differently from an empty low-balance match.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items:
        return "\n".join(str(item["number"]) for item in items if "number" in item)

    if result.op in ("list_accounts", "low_balance"):
        return _empty_listing_message(result, currency)

    if "number" in result.data:
        return str(result.data["number"])

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


class _RenderContext:
    def __init__(self, *, console: Console, verbose: bool, currency: str) -> None:
        self.console = console
        self.verbose = verbose
        self.currency = currency

    def money(self, amount: Any) -> str:
        return format_money(float(amount), self.currency)


def _status_line(ctx: _RenderContext, result: ServiceResult) -> None:
    label = Text("OK", style="ledger.ok")
    op = Text(f"  {result.op}", style="ledger.op")
    ctx.console.print(label, op, sep="")


def _field(ctx: _RenderContext, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ledger.key")
    if key == "number":
        v = Text(str(value), style="ledger.number")
    elif key == "holder":
        v = Text(str(value), style="ledger.holder")
    elif key == "kind":
        v = Text(str(value), style=style_for_kind(str(value)))
    elif key in ("balance", "amount"):
        v = Text(ctx.money(value), style="ledger.amount")
    else:
        v = Text(str(value))
    ctx.console.print(k, v, sep="")


def _render_meta(result: ServiceResult, ctx: _RenderContext) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return

    ctx.console.print()
    ctx.console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(ctx.console, v, indent=4)
        else:
            ctx.console.print(Text(f"    {k}: {v}"))


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = Text(" " * indent)
    line.append(f"{duration:>8.3f}ms", style=style)
    line.append(f"  {span.get('name', '?')}")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _account_table(ctx: _RenderContext, items: list[dict[str, Any]], *, with_kind: bool) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Account Number", style="ledger.number", no_wrap=True, justify="right")
    if with_kind:
        table.add_column("Account Type")
    table.add_column("Name", style="ledger.holder")
    label = f"Balance ({ctx.currency})" if ctx.currency else "Balance"
    table.add_column(label, style="ledger.amount", justify="right")

    for item in items:
        row: list[Text] = [Text(str(item.get("number", "")))]
        if with_kind:
            kind = str(item.get("kind", ""))
            row.append(Text(kind, style=style_for_kind(kind)))
        row.append(Text(str(item.get("holder", ""))))
        row.append(Text(f"{float(item.get('balance', 0.0)):.2f}"))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, ctx: _RenderContext) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text("ERROR", style="ledger.error")
    line.append(f"  {result.op}", style="ledger.op")
    line.append(" — ")
    line.append(msg)
    ctx.console.print(line)

    if ctx.verbose and err and err.detail:
        ctx.console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            ctx.console.print(Text(f"    {k}: {v}"))


# ── Mutation renderers ────────────────────────────────────────────────


def _render_created(result: ServiceResult, ctx: _RenderContext) -> None:
    _status_line(ctx, result)
    for key in ("number", "holder", "kind", "balance"):
        if key in result.data:
            _field(ctx, key, result.data[key])
    if result.data.get("reused_number"):
        ctx.console.print(Text("  (reclaimed account number reused)", style="dim"))


def _render_deleted(result: ServiceResult, ctx: _RenderContext) -> None:
    _status_line(ctx, result)
    for key in ("number", "holder", "kind"):
        if key in result.data:
            _field(ctx, key, result.data[key])
    if ctx.verbose:
        pool = ", ".join(str(n) for n in result.data.get("reclaimed", []))
        _field(ctx, "reclaimed", pool or "-")


def _render_transaction(result: ServiceResult, ctx: _RenderContext) -> None:
    _status_line(ctx, result)
    for key in ("number", "direction", "amount", "balance"):
        if key in result.data:
            _field(ctx, key, result.data[key])


def _render_exit(result: ServiceResult, ctx: _RenderContext) -> None:
    ctx.console.print("Exiting program. Goodbye!")
    if ctx.verbose:
        for key in ("accounts_released", "numbers_released"):
            _field(ctx, key, result.data.get(key, 0))


# ── Read renderers ────────────────────────────────────────────────────


def _empty_listing_message(result: ServiceResult, currency: str) -> str:
    """Message for a listing with no rows.

    A low-balance report on a non-empty ledger names its threshold; an
    empty ledger always reads as :data:`NO_ACCOUNTS`.
    """
    if result.op == "low_balance" and result.data.get("total_accounts"):
        threshold = format_money(float(result.data.get("threshold", 0.0)), currency)
        return f"No accounts found with balance less than {threshold}"
    return NO_ACCOUNTS


def _render_account_list(result: ServiceResult, ctx: _RenderContext) -> None:
    items = result.data.get("items", [])
    if not items:
        ctx.console.print(_empty_listing_message(result, ctx.currency))
        return
    ctx.console.print(_account_table(ctx, items, with_kind=True))
    count = result.data.get("count", len(items))
    ctx.console.print(f"\n{count} account{'' if count == 1 else 's'}")


def _render_low_balance(result: ServiceResult, ctx: _RenderContext) -> None:
    """Empty ledger and empty match list print different messages."""
    items = result.data.get("items", [])
    if not items:
        ctx.console.print(_empty_listing_message(result, ctx.currency))
        return

    threshold = ctx.money(result.data.get("threshold", 0.0))
    ctx.console.print(f"Accounts with balance less than {threshold}:")
    ctx.console.print(_account_table(ctx, items, with_kind=False))


def _render_generic(result: ServiceResult, ctx: _RenderContext) -> None:
    _status_line(ctx, result)
    for key, value in result.data.items():
        _field(ctx, key, value)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, _RenderContext], None]] = {
    # Mutations
    "create_account": _render_created,
    "delete_account": _render_deleted,
    "transaction": _render_transaction,
    "exit": _render_exit,
    # Reads
    "list_accounts": _render_account_list,
    "low_balance": _render_low_balance,
}
