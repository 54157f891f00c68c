"""Tests for ServiceResult and ErrorCode."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from folio.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="build")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_carries_code_and_detail(self) -> None:
        result = ServiceResult.failure(
            "create_post", ErrorCode.ALREADY_EXISTS, "exists", warnings=["w"], path="_posts/x.md"
        )
        assert result.ok is False
        assert result.error == ServiceError(
            code="ALREADY_EXISTS", message="exists", detail={"path": "_posts/x.md"}
        )
        assert result.warnings == ["w"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="build")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_shape(self) -> None:
        payload = json.loads(ServiceResult.failure("check", ErrorCode.NO_SITE, "none").model_dump_json())
        assert payload == {
            "ok": False,
            "op": "check",
            "data": {},
            "warnings": [],
            "error": {"code": "NO_SITE", "message": "none", "detail": {}},
            "meta": None,
        }

    def test_error_codes_are_strings(self) -> None:
        assert ErrorCode.LAYOUT_NOT_FOUND == "LAYOUT_NOT_FOUND"
        assert {code.value for code in ErrorCode} >= {"NO_SITE", "BUILD_FAILED", "CSS_FAILED"}
