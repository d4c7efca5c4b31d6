"""Command: show the label synthesized for an anchor link."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cfxlink.commands._base import CfxCommand

if TYPE_CHECKING:
    from cfxlink.commands._context import AppContext


@click.command(
    cls=CfxCommand,
    examples="""\
  cfxlink label top
  cfxlink label top --page Intro
  cfxlink label top --page @home --space "currentSpace()"
  cfxlink -q label top --page @home --space DOC""",
)
@click.argument("anchor")
@click.option("--page", default=None, help="Page title, @self or @home.")
@click.option("--space", default=None, help="Space key or currentSpace().")
@click.pass_obj
def label(app: AppContext, anchor: str, page: str | None, space: str | None) -> None:
    """Show the label given to a link to ANCHOR that has no label of its own."""
    from cfxlink.services.resolve import ResolveService

    app.emit(ResolveService(app.settings, app.plugins).label(anchor, page=page, space=space))
