"""Macro parameter conversion.

A macro converter maps a Confluence macro id and raw parameter map onto
the target macro. :func:`convert_macro` runs one and keeps every original
parameter the converter dropped under an ``orig<name>`` key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

ORIGINAL_PREFIX = "orig"


class MacroConverter(Protocol):
    """Converts one Confluence macro into its target id and parameters."""

    def to_target_id(
        self, macro_id: str, parameters: dict[str, str], content: str | None, inline: bool
    ) -> str: ...

    def to_target_parameters(
        self, macro_id: str, parameters: dict[str, str], content: str | None
    ) -> dict[str, str]: ...


class DefaultMacroConverter:
    """Keeps the macro id and parameters as they are."""

    def to_target_id(
        self, macro_id: str, parameters: dict[str, str], content: str | None, inline: bool
    ) -> str:
        return macro_id

    def to_target_parameters(
        self, macro_id: str, parameters: dict[str, str], content: str | None
    ) -> dict[str, str]:
        return dict(parameters)


@dataclass(frozen=True)
class ConvertedMacro:
    """Result of converting one macro."""

    source_id: str
    target_id: str
    parameters: dict[str, str]
    inline: bool = False
    warnings: list[str] = field(default_factory=list)


def convert_macro(
    converter: MacroConverter,
    macro_id: str,
    parameters: dict[str, str],
    content: str | None = None,
    *,
    inline: bool = False,
    preserve_original: bool = True,
) -> ConvertedMacro:
    """Run *converter* over one macro.

    Exceptions raised by the converter propagate to the caller.
    """
    target_id = converter.to_target_id(macro_id, parameters, content, inline)
    target_params = dict(converter.to_target_parameters(macro_id, parameters, content))
    warnings: list[str] = []

    if preserve_original:
        for name, value in parameters.items():
            if name in target_params:
                continue
            orig_name = f"{ORIGINAL_PREFIX}{name}"
            if orig_name in target_params:
                msg = (
                    f"Macro {macro_id}: converted parameter {orig_name!r} collides "
                    f"with original parameter {name!r}"
                )
                logger.warning(msg)
                warnings.append(msg)
                continue
            target_params[orig_name] = value

    return ConvertedMacro(
        source_id=macro_id,
        target_id=target_id,
        parameters=target_params,
        inline=inline,
        warnings=warnings,
    )
