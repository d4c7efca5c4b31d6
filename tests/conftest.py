"""Shared pytest fixtures and fake collaborators for cfxlink tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cfxlink.config.settings import CfxSettings
from cfxlink.domain.resolver import LinkResolver
from cfxlink.domain.types import PageTarget, SpaceSentinel, SpaceTarget
from cfxlink.plugins.hookspecs import hookimpl

# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class RecordingConverter:
    """Reference converter that records its calls.

    Document references come back as ``ref(<space>,<page>)`` so tests can
    tell resolved text from verbatim text.
    """

    def __init__(self, current_space: str = "Main.Sub") -> None:
        self.current_space = current_space
        self.space_calls: list[tuple[str, bool]] = []
        self.document_calls: list[tuple[str | None, str | None]] = []

    def convert_space_reference(self, space: SpaceTarget | str, insert_as_link: bool = False) -> str:
        self.space_calls.append((str(space), insert_as_link))
        if space == SpaceSentinel.CURRENT:
            return self.current_space
        return str(space)

    def convert_document_reference(
        self, space: SpaceTarget | None, page: PageTarget | None
    ) -> str:
        self.document_calls.append(
            (None if space is None else str(space), None if page is None else str(page))
        )
        return f"ref({space or ''},{page or ''})"


class FailingConverter:
    """Reference converter whose every call raises."""

    def convert_space_reference(self, space: SpaceTarget | str, insert_as_link: bool = False) -> str:
        raise RuntimeError("converter down")

    def convert_document_reference(
        self, space: SpaceTarget | None, page: PageTarget | None
    ) -> str:
        raise RuntimeError("converter down")


class FaultInjectingMacroConverter:
    """Converts every macro to ``view-file``.

    ``pleasecrash`` makes it raise; ``pleasecollide`` makes it produce a
    key that collides with a preserved original parameter.
    """

    def to_target_id(
        self, macro_id: str, parameters: dict[str, str], content: str | None, inline: bool
    ) -> str:
        if "pleasecrash" in parameters:
            raise RuntimeError("Crash requested, happy to oblige")
        return "view-file"

    def to_target_parameters(
        self, macro_id: str, parameters: dict[str, str], content: str | None
    ) -> dict[str, str]:
        if "pleasecollide" in parameters:
            return {"origpleasecollide": "fromConverter", "randomParam": "42"}
        return dict(parameters)


class RecordingPlugin:
    """Plugin collecting post_resolve notifications."""

    def __init__(self) -> None:
        self.resolved: list[tuple[str, str, dict[str, Any]]] = []

    @hookimpl
    def post_resolve(self, kind: str, emitted: str, link: dict[str, Any]) -> None:
        self.resolved.append((kind, emitted, link))


class ConverterPlugin:
    """Plugin supplying reference and macro converters."""

    def __init__(self, converter: RecordingConverter) -> None:
        self.converter = converter

    @hookimpl
    def cfxlink_reference_converter(self, settings: CfxSettings) -> RecordingConverter:
        return self.converter

    @hookimpl
    def cfxlink_macro_converter(self, macro_id: str) -> FaultInjectingMacroConverter | None:
        if macro_id == "convertedtoblock":
            return FaultInjectingMacroConverter()
        return None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def converter() -> RecordingConverter:
    return RecordingConverter()


@pytest.fixture
def resolver(converter: RecordingConverter) -> LinkResolver:
    return LinkResolver(converter)


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CfxSettings:
    """Default settings, isolated from any cfxlink.toml or CFXLINK_* env var."""
    monkeypatch.delenv("CFXLINK_CONFIG", raising=False)
    return CfxSettings.from_cli(start=tmp_path)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from an empty temp directory."""
    monkeypatch.delenv("CFXLINK_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
