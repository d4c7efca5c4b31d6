"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables) or machines
(--json). The formatter layer picks the mode from OutputSettings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cfxlink.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from cfxlink.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the CLI settings."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    separator: str = " | "


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, separator=settings.separator, verbose=settings.verbose)
