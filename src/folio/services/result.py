"""ServiceResult and ServiceError: the contract between services and the CLI.

INVARIANT: All service-layer methods return ServiceResult.
Per-file authoring problems travel as ``warnings``; anything that stops an
operation travels as ``error`` with one of the :class:`ErrorCode` values.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Machine-readable failure codes shared by every service."""

    NO_SITE = "NO_SITE"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_FRONTMATTER = "INVALID_FRONTMATTER"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
    LAYOUT_NOT_FOUND = "LAYOUT_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    BUILD_FAILED = "BUILD_FAILED"
    CSS_FAILED = "CSS_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"build"``, ``"create_post"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues (skipped files, plugin failures).
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry span tree).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Build a failed result carrying *code* and *message*."""
        return cls(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=str(code), message=message, detail=detail),
        )
