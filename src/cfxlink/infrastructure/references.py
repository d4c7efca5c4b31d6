"""Default reference converter: Confluence space/page targets to wiki references.

References use dotted space paths: ``Root.SPACE.Page``. Dots, colons and
backslashes inside a name are escaped with a backslash.
"""

from __future__ import annotations

import logging
import re

from cfxlink.config.models import ReferencesConfig
from cfxlink.domain.types import (
    NamedPage,
    NamedSpace,
    PageSentinel,
    PageTarget,
    SpaceSentinel,
    SpaceTarget,
)

logger = logging.getLogger(__name__)

_ESCAPE_PATTERN = re.compile(r"([\\.:])")


def escape_name(name: str) -> str:
    """Escape reference separators in a single space or page name."""
    return _ESCAPE_PATTERN.sub(r"\\\1", name)


class WikiReferenceConverter:
    """Resolves targets against a configured current space and root space."""

    def __init__(self, config: ReferencesConfig | None = None) -> None:
        self._config = config or ReferencesConfig()

    def convert_space_reference(self, space: SpaceTarget | str, insert_as_link: bool = False) -> str:
        """Fully-qualified reference of *space*, or ``""`` if unknown.

        With *insert_as_link* the space home page is wrapped as ``[[...]]``.
        """
        if space == SpaceSentinel.CURRENT:
            space_ref = self._config.current_space
        else:
            key = space.key if isinstance(space, NamedSpace) else str(space)
            space_ref = self._qualify(key) if key else ""

        if not space_ref:
            logger.debug("Space %r does not resolve to a reference", str(space))
            return ""
        if insert_as_link:
            return f"[[{space_ref}.{self._config.home_page}]]"
        return space_ref

    def convert_document_reference(
        self, space: SpaceTarget | None, page: PageTarget | None
    ) -> str:
        """Reference of *page* in *space*; a missing space means the current one."""
        if page is PageSentinel.SELF:
            return self._config.current_page

        space_ref = self.convert_space_reference(space or SpaceSentinel.CURRENT)
        if not space_ref:
            return ""
        if isinstance(page, NamedPage):
            return f"{space_ref}.{escape_name(page.title)}"
        return f"{space_ref}.{self._config.home_page}"

    def _qualify(self, key: str) -> str:
        if self._config.root_space:
            return f"{self._config.root_space}.{escape_name(key)}"
        return escape_name(key)
