"""Plugin discovery, loading, and hook dispatch.

Discovery: entry points in the ``cfxlink.plugins`` group via pluggy.
Capabilities: replacement reference converters, per-macro converters,
and post-resolve notifications.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

import pluggy

from cfxlink.plugins.hookspecs import CfxlinkHookSpec

if TYPE_CHECKING:
    from cfxlink.config.settings import CfxSettings
    from cfxlink.domain.macros import MacroConverter
    from cfxlink.domain.resolver import ReferenceConverter

PROJECT_NAME = "cfxlink"
ENTRY_POINT_GROUP = "cfxlink.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(CfxlinkHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load plugins advertised under the ``cfxlink.plugins`` entry point group.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Collaborator lookup
    # ------------------------------------------------------------------

    def reference_converter(
        self, settings: CfxSettings, default: ReferenceConverter
    ) -> ReferenceConverter:
        """The first plugin-supplied reference converter, else *default*."""
        converter = self._pm.hook.cfxlink_reference_converter(settings=settings)
        return converter if converter is not None else default

    def macro_converter(self, macro_id: str, default: MacroConverter) -> MacroConverter:
        """The first plugin-supplied converter for *macro_id*, else *default*."""
        converter = self._pm.hook.cfxlink_macro_converter(macro_id=macro_id)
        return converter if converter is not None else default

    def notify_resolved(
        self, kind: str, emitted: str, link: dict[str, Any], warnings: list[str]
    ) -> None:
        """Fire ``post_resolve``. Plugin failures become warnings."""
        try:
            self._pm.hook.post_resolve(kind=kind, emitted=emitted, link=link)
        except Exception:
            logger.debug("post_resolve dispatch failed", exc_info=True)
            warnings.append("post_resolve dispatch failed")

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
