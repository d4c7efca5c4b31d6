"""Link resolution: classify a closed link, label it, pick its emission mode.

Pure apart from the reference converter it is given. Exceptions raised by
the converter propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Protocol

from cfxlink.domain.emission import (
    EmissionContext,
    EmissionDecision,
    InlineText,
    StructuredReference,
    Suppressed,
)
from cfxlink.domain.reference import LinkReference
from cfxlink.domain.types import NamedSpace, PageSentinel, PageTarget, SpaceSentinel, SpaceTarget

logger = logging.getLogger(__name__)

PARAMETER_SEPARATOR = "\n"


class ReferenceConverter(Protocol):
    """Turns Confluence space/page targets into target-wiki reference strings.

    Both methods return ``""`` when resolution is impossible.
    """

    def convert_space_reference(self, space: SpaceTarget, insert_as_link: bool = False) -> str: ...

    def convert_document_reference(
        self, space: SpaceTarget | None, page: PageTarget | None
    ) -> str: ...


class LinkResolver:
    """Runs once per link construct, when the walker closes it."""

    def __init__(self, converter: ReferenceConverter) -> None:
        self._converter = converter

    def resolve(self, link: LinkReference, context: EmissionContext) -> EmissionDecision:
        """Decide what, if anything, a closed link construct emits.

        Label and self-page defaults are written onto *link* before the
        emission mode is chosen, so a structured reference carries them.
        """
        # A user inside the link was already turned into a mention.
        if link.user:
            logger.debug("Link to user %s suppressed", link.user)
            return Suppressed(reason="user-mention")

        if link.anchor:
            if not link.has_explicit_label:
                link.label = self.pretty_label(link)
        elif not link.has_target:
            link.page = PageSentinel.SELF

        if context.inside_macro_parameter:
            separator = PARAMETER_SEPARATOR if context.parent_content else ""
            text = self._parameter_text(link, inside_view_file=context.inside_view_file_macro)
            logger.debug("Link flattened into macro parameter: %r", text)
            return InlineText(text=text, separator=separator)

        logger.debug("Link emitted as %s reference", link.kind)
        return StructuredReference(link=link)

    def pretty_label(self, link: LinkReference) -> str:
        """Synthesize ``[prefix]#anchor`` for an anchor link without a label."""
        label = f"#{link.anchor}"
        page = link.page
        if page is None or page is PageSentinel.SELF:
            return label
        if page is PageSentinel.HOME:
            return self.convert_space_for_label(link.space) + label
        return f"{page}{label}"

    def convert_space_for_label(self, space: SpaceTarget | str | None) -> str:
        """Short display name of *space*; the current space is resolved first.

        A concrete key is returned verbatim. For the current space the
        resolved reference is cut after its last ``.``.
        """
        if isinstance(space, NamedSpace):
            return space.key
        if space and space != SpaceSentinel.CURRENT:
            return str(space)

        space_ref = self._converter.convert_space_reference(SpaceSentinel.CURRENT, False)
        if not space_ref:
            return ""
        return space_ref.rpartition(".")[2]

    def _parameter_text(self, link: LinkReference, *, inside_view_file: bool) -> str:
        if inside_view_file:
            # view-file gets page and space as separate parameters.
            if not link.space and link.page:
                return str(link.page)
            if not link.page and link.space:
                return str(link.space)
        return self._converter.convert_document_reference(link.space, link.page)
