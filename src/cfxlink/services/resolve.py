"""ResolveService: resolve every link construct in a storage-format fragment."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from cfxlink.config.logging import bind_run
from cfxlink.domain.emission import EmissionContext, EmissionDecision, InlineText, Suppressed
from cfxlink.domain.reference import LinkReference
from cfxlink.errors import MacroConversionError, ReferenceConversionError, WalkerError
from cfxlink.parser.walker import LinkWalker, WalkResult
from cfxlink.services.base import BaseService
from cfxlink.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _emitted(decision: EmissionDecision) -> str:
    if isinstance(decision, Suppressed):
        return "suppressed"
    if isinstance(decision, InlineText):
        return "text"
    return "reference"


def _payload(result: WalkResult) -> dict[str, Any]:
    references = [event.link.to_dict() for event in result.references]
    return {
        "count": len(references),
        "references": references,
        "mentions": [event.user for event in result.mentions],
        "macros": [
            {
                "id": event.macro.source_id,
                "target": event.macro.target_id,
                "inline": event.macro.inline,
                "parameters": event.macro.parameters,
            }
            for event in result.macros
        ],
    }


class ResolveService(BaseService):
    """Walks fragments and resolves their links with the configured collaborators."""

    def resolve_fragment(self, fragment: str, *, source: str = "<fragment>") -> ServiceResult:
        """Resolve all links in *fragment*.

        Log records emitted meanwhile carry *source* (a path or ``<stdin>``).

        Failures while walking are reported as a failed result, never
        swallowed: parse errors, macro converter errors and reference
        converter errors each get their own code.
        """
        warnings: list[str] = []
        walker = LinkWalker(
            self._resolver(),
            view_file_ids=self._settings.macros.view_file_ids,
            macro_converter_for=self._macro_converter,
            preserve_original=self._settings.macros.preserve_original,
            on_resolved=lambda link, decision: self._notify(link, decision, warnings),
        )

        with bind_run(source=source):
            return self._walk(walker, fragment, warnings)

    def _walk(self, walker: LinkWalker, fragment: str, warnings: list[str]) -> ServiceResult:
        op = "resolve"
        try:
            result = walker.walk(fragment)
        except WalkerError as exc:
            logger.warning("Fragment could not be walked: %s", exc)
            return ServiceResult.failure(op, "PARSE_ERROR", str(exc))
        except MacroConversionError as exc:
            logger.error("Macro conversion failed for %s", exc.macro_id, exc_info=True)
            return ServiceResult.failure(
                op,
                "MACRO_CONVERSION_FAILED",
                str(exc),
                {"macro": exc.macro_id, "cause": repr(exc.__cause__)},
            )
        except ReferenceConversionError as exc:
            logger.error("Reference conversion failed", exc_info=True)
            return ServiceResult.failure(
                op, "REFERENCE_CONVERSION_FAILED", str(exc), {"cause": repr(exc.__cause__)}
            )

        logger.debug("Resolved %d references", len(result.references))
        return ServiceResult(
            ok=True,
            op=op,
            data=_payload(result),
            warnings=[*warnings, *result.warnings],
        )

    def resolve_file(self, path: Path) -> ServiceResult:
        """Resolve all links in the fragment stored at *path*."""
        if not path.is_file():
            return ServiceResult.failure(
                "resolve", "NOT_FOUND", f"No such file: {path}", {"path": str(path)}
            )
        return self.resolve_fragment(path.read_text(encoding="utf-8"), source=str(path))

    def label(self, anchor: str, page: str | None = None, space: str | None = None) -> ServiceResult:
        """Label the resolver gives an anchor link to *page* in *space*."""
        op = "label"
        link = LinkReference(anchor=anchor or None)
        link.set_page(page)
        link.set_space(space)
        try:
            self._resolver().resolve(link, EmissionContext())
        except Exception as exc:
            logger.error("Reference conversion failed", exc_info=True)
            return ServiceResult.failure(
                op, "REFERENCE_CONVERSION_FAILED", str(exc), {"cause": repr(exc)}
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"label": link.label or "", "reference": link.to_dict()},
        )

    def _notify(self, link: LinkReference, decision: EmissionDecision, warnings: list[str]) -> None:
        if self._plugins is None:
            return
        self._plugins.notify_resolved(str(link.kind), _emitted(decision), link.to_dict(), warnings)
