"""Tag-tree walker for Confluence storage-format fragments.

Parses a fragment with lxml and walks it depth-first with an explicit
frame stack. Link, macro and macro-parameter constructs push frames;
``ri:*`` resource identifiers and link bodies fill in the innermost open
:class:`LinkReference`. When a link closes it is handed to the
:class:`LinkResolver` together with an :class:`EmissionContext` built
from the stack, and the decision is applied here.
"""

from __future__ import annotations

import html.entities
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TypeVar

import lxml.etree as ET

from cfxlink.domain.emission import (
    ContentBuffer,
    EmissionContext,
    EmissionDecision,
    InlineText,
    StructuredReference,
)
from cfxlink.domain.macros import (
    ConvertedMacro,
    DefaultMacroConverter,
    MacroConverter,
    convert_macro,
)
from cfxlink.domain.reference import LinkReference
from cfxlink.domain.resolver import LinkResolver
from cfxlink.errors import CfxlinkError, MacroConversionError, ReferenceConversionError, WalkerError

logger = logging.getLogger(__name__)

AC_NS = "http://atlassian.com/content"
RI_NS = "http://atlassian.com/resource/identifier"

# Parents under which a macro renders inline rather than as a block.
_INLINE_PARENTS = frozenset({"p", "span", "a", "em", "strong", "h1", "h2", "h3", "h4", "h5", "h6"})

# Named HTML entities are not defined in XML; the five XML ones are kept.
_ENTITY_PATTERN = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")
_XML_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})
# CDATA content is literal and is left untouched.
_CDATA_PATTERN = re.compile(r"(<!\[CDATA\[.*?\]\]>)", re.DOTALL)


def AC(name: str) -> str:  # noqa: N802
    """Clark-notation name in the ``ac:`` namespace."""
    return f"{{{AC_NS}}}{name}"


def RI(name: str) -> str:  # noqa: N802
    """Clark-notation name in the ``ri:`` namespace."""
    return f"{{{RI_NS}}}{name}"


def _replace_entities(text: str) -> str:
    def repl(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in _XML_ENTITIES:
            return match.group(0)
        codepoint = html.entities.name2codepoint.get(name)
        return f"&#{codepoint};" if codepoint is not None else match.group(0)

    parts = _CDATA_PATTERN.split(text)
    # Odd indices hold the captured CDATA sections.
    return "".join(
        part if i % 2 else _ENTITY_PATTERN.sub(repl, part) for i, part in enumerate(parts)
    )


def parse_fragment(fragment: str) -> ET._Element:
    """Parse a storage-format fragment under a root declaring ``ac`` and ``ri``."""
    wrapped = f'<root xmlns:ac="{AC_NS}" xmlns:ri="{RI_NS}">{_replace_entities(fragment)}</root>'
    parser = ET.XMLParser(resolve_entities=False, strip_cdata=True)
    try:
        return ET.fromstring(wrapped.encode("utf-8"), parser)
    except ET.XMLSyntaxError as exc:
        raise WalkerError(f"Malformed storage-format fragment: {exc}") from exc


# ---------------------------------------------------------------------------
# Walk output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReferenceEvent:
    """A structured reference inserted into the document."""

    link: LinkReference


@dataclass(frozen=True)
class MentionEvent:
    """A user reference, converted into a mention."""

    user: str


@dataclass(frozen=True)
class MacroEvent:
    """A macro with its converted parameters."""

    macro: ConvertedMacro


WalkEvent = ReferenceEvent | MentionEvent | MacroEvent

_E = TypeVar("_E")


@dataclass
class WalkResult:
    """Events in document order, plus non-fatal warnings."""

    events: list[WalkEvent] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def _of_type(self, cls: type[_E]) -> list[_E]:
        return [e for e in self.events if isinstance(e, cls)]

    @property
    def references(self) -> list[ReferenceEvent]:
        return self._of_type(ReferenceEvent)

    @property
    def mentions(self) -> list[MentionEvent]:
        return self._of_type(MentionEvent)

    @property
    def macros(self) -> list[MacroEvent]:
        return self._of_type(MacroEvent)


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------


@dataclass
class _LinkFrame:
    link: LinkReference


@dataclass
class _MacroFrame:
    macro_id: str
    view_file: bool
    inline: bool
    parameters: dict[str, str] = field(default_factory=dict)
    content: str | None = None


@dataclass
class _ParameterFrame:
    name: str
    buffer: ContentBuffer = field(default_factory=ContentBuffer)


_Frame = _LinkFrame | _MacroFrame | _ParameterFrame
_F = TypeVar("_F", _LinkFrame, _MacroFrame, _ParameterFrame)


@dataclass
class _WalkState:
    stack: list[_Frame] = field(default_factory=list)
    result: WalkResult = field(default_factory=WalkResult)

    @property
    def top(self) -> _Frame | None:
        return self.stack[-1] if self.stack else None

    def nearest(self, cls: type[_F]) -> _F | None:
        for frame in reversed(self.stack):
            if isinstance(frame, cls):
                return frame
        return None


# ---------------------------------------------------------------------------
# Walker
# ---------------------------------------------------------------------------


class LinkWalker:
    """Walks storage-format fragments and resolves every link construct in them."""

    def __init__(
        self,
        resolver: LinkResolver,
        *,
        view_file_ids: Iterable[str] = ("view-file",),
        macro_converter_for: Callable[[str], MacroConverter] | None = None,
        preserve_original: bool = True,
        on_resolved: Callable[[LinkReference, EmissionDecision], None] | None = None,
    ) -> None:
        self._resolver = resolver
        self._view_file_ids = frozenset(view_file_ids)
        default = DefaultMacroConverter()
        self._macro_converter_for = macro_converter_for or (lambda _macro_id: default)
        self._preserve_original = preserve_original
        self._on_resolved = on_resolved

    def walk(self, fragment: str) -> WalkResult:
        root = parse_fragment(fragment)
        state = _WalkState()
        self._visit_children(root, state)
        return state.result

    def _visit(self, elem: ET._Element, state: _WalkState) -> None:
        tag = elem.tag
        if not isinstance(tag, str):
            return  # comments and processing instructions

        top = state.top
        if tag == AC("link"):
            self._visit_link(elem, state)
        elif tag in (AC("structured-macro"), AC("macro")):
            self._visit_macro(elem, state)
        elif tag == AC("parameter") and isinstance(top, _MacroFrame):
            self._visit_parameter(elem, top, state)
        elif tag == AC("plain-text-body") and isinstance(top, _MacroFrame):
            top.content = elem.text or ""
        elif tag == RI("user"):
            self._visit_user(elem, state)
        elif tag == RI("page"):
            link_frame = state.nearest(_LinkFrame)
            if link_frame is not None:
                link_frame.link.set_page(elem.get(RI("content-title")))
                if elem.get(RI("space-key")) is not None:
                    link_frame.link.set_space(elem.get(RI("space-key")))
        elif tag == RI("space"):
            link_frame = state.nearest(_LinkFrame)
            if link_frame is not None:
                link_frame.link.set_space(elem.get(RI("space-key")))
        elif tag == RI("attachment"):
            link_frame = state.nearest(_LinkFrame)
            if link_frame is not None:
                link_frame.link.attachment = elem.get(RI("filename")) or None
            self._visit_children(elem, state)
        elif tag == AC("plain-text-link-body"):
            link_frame = state.nearest(_LinkFrame)
            if link_frame is not None:
                link_frame.link.label = elem.text or None
        elif tag == AC("link-body"):
            link_frame = state.nearest(_LinkFrame)
            if link_frame is not None:
                link_frame.link.label_text = [t for t in elem.itertext() if t]
        else:
            self._visit_children(elem, state)

    def _visit_children(self, elem: ET._Element, state: _WalkState) -> None:
        top = state.top
        buffer = top.buffer if isinstance(top, _ParameterFrame) else None
        if buffer is not None:
            buffer.append(elem.text)
        for child in elem:
            self._visit(child, state)
            if buffer is not None:
                buffer.append(child.tail)

    # -- links -------------------------------------------------------------

    def _visit_link(self, elem: ET._Element, state: _WalkState) -> None:
        if state.nearest(_LinkFrame) is not None:
            raise WalkerError("Nested ac:link constructs are not supported")

        link = LinkReference(anchor=elem.get(AC("anchor")) or None)
        state.stack.append(_LinkFrame(link))
        self._visit_children(elem, state)
        state.stack.pop()
        self._close_link(link, state)

    def _close_link(self, link: LinkReference, state: _WalkState) -> None:
        param = state.nearest(_ParameterFrame)
        macro = state.nearest(_MacroFrame)
        context = EmissionContext(
            inside_macro_parameter=param is not None,
            inside_view_file_macro=param is not None and macro is not None and macro.view_file,
            parent_content=param.buffer.content if param is not None else "",
        )

        try:
            decision = self._resolver.resolve(link, context)
        except CfxlinkError:
            raise
        except Exception as exc:
            raise ReferenceConversionError(f"Could not resolve link {link.to_dict()}: {exc}") from exc

        if isinstance(decision, InlineText) and param is not None:
            decision.apply(param.buffer)
        elif isinstance(decision, StructuredReference):
            state.result.events.append(ReferenceEvent(decision.link))

        if self._on_resolved is not None:
            self._on_resolved(link, decision)

    def _visit_user(self, elem: ET._Element, state: _WalkState) -> None:
        user = elem.get(RI("username")) or elem.get(RI("userkey")) or elem.get(RI("account-id"))
        if not user:
            return
        # Inside a macro parameter the user belongs to the parameter, not the document.
        if state.nearest(_ParameterFrame) is None:
            state.result.events.append(MentionEvent(user))
        link_frame = state.nearest(_LinkFrame)
        if link_frame is not None:
            link_frame.link.user = user

    # -- macros ------------------------------------------------------------

    def _visit_macro(self, elem: ET._Element, state: _WalkState) -> None:
        macro_id = elem.get(AC("name")) or ""
        parent = elem.getparent()
        frame = _MacroFrame(
            macro_id=macro_id,
            view_file=macro_id in self._view_file_ids,
            inline=parent is not None and ET.QName(parent).localname in _INLINE_PARENTS,
        )
        state.stack.append(frame)
        self._visit_children(elem, state)
        state.stack.pop()

        converter = self._macro_converter_for(macro_id)
        try:
            converted = convert_macro(
                converter,
                macro_id,
                frame.parameters,
                frame.content,
                inline=frame.inline,
                preserve_original=self._preserve_original,
            )
        except Exception as exc:
            raise MacroConversionError(
                macro_id, f"Failed to convert macro {macro_id!r}: {exc}"
            ) from exc

        state.result.warnings.extend(converted.warnings)
        state.result.events.append(MacroEvent(converted))

    def _visit_parameter(self, elem: ET._Element, macro: _MacroFrame, state: _WalkState) -> None:
        frame = _ParameterFrame(name=elem.get(AC("name")) or "")
        state.stack.append(frame)
        self._visit_children(elem, state)
        state.stack.pop()
        macro.parameters[frame.name] = frame.buffer.content
