"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy plugin loading and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cfxlink.config.logging import configure_logging
from cfxlink.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cfxlink.config.settings import CfxSettings
    from cfxlink.plugins.manager import PluginManager
    from cfxlink.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Plugins are discovered on first use so ``--help`` and ``--version``
    never import entry points.
    """

    def __init__(self, settings: CfxSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (entry points loaded lazily on first access)."""
        if self._plugins is None:
            from cfxlink.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            separator=self.settings.output.separator,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
