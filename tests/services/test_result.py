"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from cfxlink.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="resolve", data={"count": 2})
        assert result.ok is True
        assert result.op == "resolve"
        assert result.data == {"count": 2}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="PARSE_ERROR", message="Malformed")
        result = ServiceResult(ok=False, op="resolve", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "PARSE_ERROR"
        assert result.error.message == "Malformed"

    def test_with_warnings(self) -> None:
        result = ServiceResult(ok=True, op="resolve", warnings=["post_resolve dispatch failed"])
        assert len(result.warnings) == 1

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="label", data={"label": "Intro#top"})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["op"] == "label"
        assert parsed["data"]["label"] == "Intro#top"
        assert parsed["error"] is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestFailure:
    def test_builds_error_result(self) -> None:
        result = ServiceResult.failure("resolve", "NOT_FOUND", "No such file", {"path": "x"})
        assert result.ok is False
        assert result.data == {}
        assert result.error == ServiceError(
            code="NOT_FOUND", message="No such file", detail={"path": "x"}
        )

    def test_detail_defaults_to_empty(self) -> None:
        result = ServiceResult.failure("label", "REFERENCE_CONVERSION_FAILED", "boom")
        assert result.error is not None
        assert result.error.detail == {}


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(
            code="MACRO_CONVERSION_FAILED",
            message="Failed to convert macro 'x'",
            detail={"macro": "x"},
        )
        assert error.detail["macro"] == "x"

    def test_frozen(self) -> None:
        error = ServiceError(code="E", message="m")
        with pytest.raises(Exception):
            error.code = "F"  # type: ignore[misc]
