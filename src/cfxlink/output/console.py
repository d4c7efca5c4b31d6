"""Rich Console factory and theme for cfxlink output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CFX_THEME = Theme(
    {
        "cfx.ok": "bold green",
        "cfx.error": "bold red",
        "cfx.op": "bold cyan",
        "cfx.key": "dim",
        "cfx.kind": "magenta",
        "cfx.target": "bold blue",
        "cfx.label": "bold",
        "cfx.macro": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CFX_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
