"""LinkReference: the accumulator filled in while an ``ac:link`` is open.

Passive value holder. Child-tag handlers set fields; the resolver reads
them once when the construct closes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cfxlink.domain.types import (
    PageTarget,
    ReferenceKind,
    SpaceTarget,
    parse_page_target,
    parse_space_target,
)


@dataclass
class LinkReference:
    """Fields collected from one link construct."""

    anchor: str | None = None
    page: PageTarget | None = None
    space: SpaceTarget | None = None
    user: str | None = None
    attachment: str | None = None
    label: str | None = None
    # None when there is no rich link body; [] for a body without text (an image).
    label_text: list[str] | None = None

    def set_page(self, raw: str | None) -> None:
        self.page = parse_page_target(raw)

    def set_space(self, raw: str | None) -> None:
        self.space = parse_space_target(raw)

    @property
    def has_explicit_label(self) -> bool:
        """True if a child construct supplied a plain or rich label."""
        return bool(self.label) or self.label_text is not None

    @property
    def has_target(self) -> bool:
        """True if any of page, space, user or attachment is set."""
        return any((self.page, self.space, self.user, self.attachment))

    @property
    def kind(self) -> ReferenceKind:
        """Classify the link from the fields that are present."""
        if self.user:
            return ReferenceKind.USER
        if self.attachment:
            return ReferenceKind.ATTACHMENT
        if self.page:
            return ReferenceKind.PAGE
        if self.space:
            return ReferenceKind.SPACE
        return ReferenceKind.NONE

    def to_dict(self) -> dict[str, Any]:
        """Serialize for output, rendering targets back to their raw spelling."""
        data: dict[str, Any] = {"kind": str(self.kind)}
        for name in ("anchor", "page", "space", "user", "attachment", "label"):
            value = getattr(self, name)
            if value is not None:
                data[name] = str(value)
        if self.label_text is not None:
            data["label_text"] = list(self.label_text)
        return data
