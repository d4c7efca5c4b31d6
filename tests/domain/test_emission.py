"""Tests for emission decisions and the parameter content buffer."""

from __future__ import annotations

from cfxlink.domain.emission import ContentBuffer, EmissionContext, InlineText


class TestContentBuffer:
    def test_starts_empty(self) -> None:
        assert ContentBuffer().content == ""

    def test_ignores_empty_appends(self) -> None:
        buffer = ContentBuffer()
        buffer.append(None)
        buffer.append("")
        buffer.append("a")
        assert buffer.parts == ["a"]
        assert str(buffer) == "a"


class TestInlineText:
    def test_apply_writes_separator_first(self) -> None:
        buffer = ContentBuffer(["first"])
        InlineText(text="second", separator="\n").apply(buffer)
        assert buffer.content == "first\nsecond"

    def test_apply_without_separator(self) -> None:
        buffer = ContentBuffer()
        InlineText(text="only").apply(buffer)
        assert buffer.content == "only"


class TestEmissionContext:
    def test_defaults_to_document_context(self) -> None:
        context = EmissionContext()
        assert context.inside_macro_parameter is False
        assert context.inside_view_file_macro is False
        assert context.parent_content == ""
