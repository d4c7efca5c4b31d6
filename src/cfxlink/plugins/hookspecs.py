"""Pluggy hook specifications for cfxlink.

Two setup-time hooks let plugins supply collaborators; one notification
hook fires after every resolved link.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from cfxlink.config.settings import CfxSettings
    from cfxlink.domain.macros import MacroConverter
    from cfxlink.domain.resolver import ReferenceConverter

hookspec = pluggy.HookspecMarker("cfxlink")
hookimpl = pluggy.HookimplMarker("cfxlink")


class CfxlinkHookSpec:
    """Hook specifications for the cfxlink plugin system."""

    @hookspec(firstresult=True)
    def cfxlink_reference_converter(self, settings: CfxSettings) -> ReferenceConverter | None:
        """Return a reference converter replacing the default one."""

    @hookspec(firstresult=True)
    def cfxlink_macro_converter(self, macro_id: str) -> MacroConverter | None:
        """Return the converter for *macro_id*, or None to leave it to others."""

    @hookspec
    def post_resolve(self, kind: str, emitted: str, link: dict[str, Any]) -> None:
        """Called after a link construct is resolved.

        *emitted* is ``"reference"``, ``"text"`` or ``"suppressed"``.
        """
