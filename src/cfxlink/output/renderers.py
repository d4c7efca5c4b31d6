"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cfxlink.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from cfxlink.services.result import ServiceResult

_Renderer = Callable[["ServiceResult", "Console", str, bool], None]


def render_result(result: ServiceResult, *, separator: str = " | ", verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, separator, verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "label":
        return str(result.data.get("label", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cfx.ok"), Text(f"  {result.op}", style="cfx.op"))


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    console.print(Text(f"  {key}: ", style="cfx.key"), Text(str(value), style=style), sep="")


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text(f"  warning: {warning}", style="cfx.key"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="cfx.error"), Text(f"  {result.op}", style="cfx.op"), Text(msg)
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Op renderers ──────────────────────────────────────────────────────


def _render_resolve(
    result: ServiceResult, console: Console, separator: str, verbose: bool
) -> None:
    _status_line(console, result)
    data = result.data
    references = data.get("references", [])
    if references:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Kind", style="cfx.kind", no_wrap=True)
        table.add_column("Space", style="cfx.target")
        table.add_column("Page", style="cfx.target")
        table.add_column("Anchor")
        table.add_column("Label", style="cfx.label")
        for ref in references:
            label = ref.get("label") or "".join(ref.get("label_text", []))
            table.add_row(
                ref.get("kind", ""),
                ref.get("space", ""),
                ref.get("attachment") or ref.get("page", ""),
                ref.get("anchor", ""),
                label,
            )
        console.print(table)
    for user in data.get("mentions", []):
        _field(console, "mention", user, "cfx.target")
    for macro in data.get("macros", []):
        params = separator.join(f"{k}={v}" for k, v in macro.get("parameters", {}).items())
        target = macro.get("target", "")
        name = macro.get("id", "")
        shown = name if target == name else f"{name} -> {target}"
        _field(console, "macro", f"{shown} ({params})" if params else shown, "cfx.macro")
    if verbose:
        _field(console, "count", data.get("count", 0))
    _render_warnings(console, result)


def _render_label(result: ServiceResult, console: Console, separator: str, verbose: bool) -> None:
    _status_line(console, result)
    _field(console, "label", result.data.get("label", ""), "cfx.label")
    if verbose:
        for key, value in result.data.get("reference", {}).items():
            _field(console, key, value)


def _render_generic(
    result: ServiceResult, console: Console, separator: str, verbose: bool
) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)
    _render_warnings(console, result)


_OP_RENDERERS: dict[str, _Renderer] = {
    "resolve": _render_resolve,
    "label": _render_label,
}
