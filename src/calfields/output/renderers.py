"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from calfields.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from calfields.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False, width: int | None = None) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console(width=width)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"
    if result.op == "match":
        return "true" if result.data.get("matches") else "false"
    if result.op == "encode":
        return str(result.data.get("payload", ""))
    if result.op == "rules":
        return "\n".join(item["name"] for item in result.data.get("items", []))
    if "rendered" in result.data:
        return str(result.data["rendered"])
    return f"OK: {result.op}"


# --- Helpers ---


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cal.ok"), Text(f"  {result.op}", style="cal.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="cal.key"), Text(str(value)), sep="")


# --- Renderers ---


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="cal.error"),
        Text(f"  {result.op}", style="cal.op"),
        Text(" - "),
        Text(msg),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_fields(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render show/decode results."""
    _status_line(console, result)
    _field(console, "fields", result.data.get("rendered", "{}"))
    if verbose:
        _field(console, "count", result.data.get("count", 0))


def _render_match(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "fields", d.get("rendered", "{}"))
    for key in ("date", "time"):
        if d.get(key) is not None:
            _field(console, key, d[key])
    style = "cal.ok" if d.get("matches") else "cal.error"
    console.print(
        Text("  matches: ", style="cal.key"),
        Text("yes" if d.get("matches") else "no", style=style),
        sep="",
    )
    for mismatch in d.get("mismatches", []):
        console.print(
            f"    [cal.field]{mismatch['field']}[/cal.field]: "
            f"expected {mismatch['expected']}, got {mismatch['actual']}"
        )


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="cal.field", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Min", justify="right", style="cal.value")
    table.add_column("Max", justify="right", style="cal.value")
    if verbose:
        table.add_column("Period")
        table.add_column("Range")

    for item in result.data.get("items", []):
        kind = str(item.get("kind", ""))
        row: list[str | Text] = [
            item["name"],
            Text(kind, style=f"cal.kind.{kind}" if kind else ""),
            str(item.get("minimum", "")),
            str(item.get("maximum", "")),
        ]
        if verbose:
            row.extend([str(item.get("period", "")), str(item.get("range", ""))])
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} rules")


def _render_encode(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "payload", result.data.get("payload", ""))


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "rules": _render_rules,
    "show": _render_fields,
    "decode": _render_fields,
    "match": _render_match,
    "encode": _render_encode,
}
