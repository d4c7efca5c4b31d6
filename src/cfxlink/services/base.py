"""BaseService — shared wiring for cfxlink services.

Every service receives the run's :class:`CfxSettings` and, optionally, a
:class:`PluginManager`. Collaborators come from plugins first and fall
back to the built-in implementations configured by the settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cfxlink.domain.macros import DefaultMacroConverter, MacroConverter
from cfxlink.domain.resolver import LinkResolver, ReferenceConverter
from cfxlink.infrastructure.references import WikiReferenceConverter

if TYPE_CHECKING:
    from cfxlink.config.settings import CfxSettings
    from cfxlink.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ResolveService(BaseService):
            def resolve_fragment(self, fragment: str) -> ServiceResult:
                resolver = self._resolver()
                ...
    """

    def __init__(
        self,
        settings: CfxSettings,
        plugins: PluginManager | None = None,
        *,
        converter: ReferenceConverter | None = None,
    ) -> None:
        self._settings = settings
        self._plugins = plugins
        self._converter = converter

    @property
    def converter(self) -> ReferenceConverter:
        """The reference converter: explicit, plugin-supplied, or the default."""
        if self._converter is None:
            default = WikiReferenceConverter(self._settings.references)
            if self._plugins is not None:
                self._converter = self._plugins.reference_converter(self._settings, default)
            else:
                self._converter = default
        return self._converter

    def _resolver(self) -> LinkResolver:
        return LinkResolver(self.converter)

    def _macro_converter(self, macro_id: str) -> MacroConverter:
        default = DefaultMacroConverter()
        if self._plugins is None:
            return default
        return self._plugins.macro_converter(macro_id, default)
