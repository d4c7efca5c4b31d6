"""Command: resolve the links in a storage-format fragment."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cfxlink.commands._base import CfxCommand

if TYPE_CHECKING:
    from cfxlink.commands._context import AppContext


@click.command(
    cls=CfxCommand,
    examples="""\
  cfxlink resolve page.xhtml
  cfxlink --json resolve page.xhtml
  cat page.xhtml | cfxlink resolve -""",
)
@click.argument("source", default="-")
@click.pass_obj
def resolve(app: AppContext, source: str) -> None:
    """Resolve every link in SOURCE (a file, or - for stdin)."""
    from cfxlink.services.resolve import ResolveService

    svc = ResolveService(app.settings, app.plugins)
    if source == "-":
        app.emit(svc.resolve_fragment(click.get_text_stream("stdin").read(), source="<stdin>"))
    else:
        app.emit(svc.resolve_file(Path(source)))
