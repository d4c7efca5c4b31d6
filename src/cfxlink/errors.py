"""Exceptions raised while walking a storage-format fragment."""

from __future__ import annotations


class CfxlinkError(Exception):
    """Base class for cfxlink failures."""


class WalkerError(CfxlinkError):
    """The fragment could not be walked (malformed XML, nested links)."""


class MacroConversionError(CfxlinkError):
    """A macro converter raised while converting a macro."""

    def __init__(self, macro_id: str, message: str) -> None:
        super().__init__(message)
        self.macro_id = macro_id


class ReferenceConversionError(CfxlinkError):
    """The reference converter raised while resolving a link."""
