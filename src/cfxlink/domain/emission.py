"""Emission context and decisions for resolved links.

The walker snapshots its state into an :class:`EmissionContext` and hands
it to the resolver; the resolver answers with one of three decisions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cfxlink.domain.reference import LinkReference


@dataclass(frozen=True)
class EmissionContext:
    """Parse state around a closing link construct."""

    inside_macro_parameter: bool = False
    inside_view_file_macro: bool = False
    parent_content: str = ""


@dataclass
class ContentBuffer:
    """Flat text accumulated for a macro parameter."""

    parts: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "".join(self.parts)

    def append(self, text: str | None) -> None:
        if text:
            self.parts.append(text)

    def __str__(self) -> str:
        return self.content


@dataclass(frozen=True)
class Suppressed:
    """Nothing is emitted for the link."""

    reason: str


@dataclass(frozen=True)
class StructuredReference:
    """Insert a reference node carrying the final link state."""

    link: LinkReference


@dataclass(frozen=True)
class InlineText:
    """Append plain text to the enclosing parameter buffer."""

    text: str
    separator: str = ""

    def apply(self, buffer: ContentBuffer) -> None:
        buffer.append(self.separator)
        buffer.append(self.text)


EmissionDecision = Suppressed | StructuredReference | InlineText
