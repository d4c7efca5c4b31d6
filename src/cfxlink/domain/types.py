"""Link target variants and their sentinel spellings.

Confluence storage format spells "current page", "space home page" and
"current space" with reserved strings. They are parsed into tagged
variants at the boundary so classification never string-compares.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class PageSentinel(StrEnum):
    """Reserved page titles."""

    SELF = "@self"
    HOME = "@home"


class SpaceSentinel(StrEnum):
    """Reserved space keys."""

    CURRENT = "currentSpace()"


class ReferenceKind(StrEnum):
    """What a link construct points at."""

    USER = "user"
    ATTACHMENT = "attachment"
    PAGE = "page"
    SPACE = "space"
    NONE = "none"


@dataclass(frozen=True)
class NamedPage:
    """A page addressed by its title."""

    title: str

    def __str__(self) -> str:
        return self.title


@dataclass(frozen=True)
class NamedSpace:
    """A space addressed by its key."""

    key: str

    def __str__(self) -> str:
        return self.key


PageTarget = NamedPage | PageSentinel
SpaceTarget = NamedSpace | SpaceSentinel

_PAGE_SENTINELS = {s.value: s for s in PageSentinel}
_SPACE_SENTINELS = {s.value: s for s in SpaceSentinel}


def parse_page_target(raw: str | None) -> PageTarget | None:
    """Parse a raw ``ri:content-title`` value. Empty values yield None."""
    if not raw:
        return None
    return _PAGE_SENTINELS.get(raw) or NamedPage(raw)


def parse_space_target(raw: str | None) -> SpaceTarget | None:
    """Parse a raw ``ri:space-key`` value. Empty values yield None."""
    if not raw:
        return None
    return _SPACE_SENTINELS.get(raw) or NamedSpace(raw)
