"""Subcommand modules for cfxlink."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from cfxlink.commands.label import label
    from cfxlink.commands.resolve import resolve

    cli.add_command(resolve)
    cli.add_command(label)
