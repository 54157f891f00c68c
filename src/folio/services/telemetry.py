"""Telemetry primitives: Span, @traced, trace_span.

A single ContextVar lookup per call while disabled. With ``--verbose``,
service calls build a span tree (timing plus annotations such as file
counts) that lands in ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from folio.services.result import ServiceResult

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

log = structlog.get_logger("folio.telemetry")


@dataclass
class Span:
    """Timing span with child spans and free-form annotations."""

    name: str
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.annotations:
            result["annotations"] = self.annotations
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a child span under the current one.

    Yields None when telemetry is off or no parent span is active, so
    callers guard annotations with ``if span:``.
    """
    parent = _current_span.get() if _verbose_enabled.get() else None
    if parent is None:
        yield None
        return

    child = Span(name=name)
    parent.children.append(child)
    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _current_span.reset(token)


P = ParamSpec("P")
R = TypeVar("R")


def traced(func: Callable[P, R]) -> Callable[P, R]:
    """Time a service method and merge its span tree into ``result.meta``."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        parent = _current_span.get()
        if parent is not None:
            parent.children.append(span)
        token = _current_span.set(span)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = not isinstance(result, ServiceResult) or result.ok
        finally:
            span.end()
            _current_span.reset(token)
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 2),
                ok=ok,
                children=len(span.children),
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Enable span collection (called by AppContext with ``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)


def get_current_span() -> Span | None:
    """Return the active span, or None when telemetry is off."""
    if not _verbose_enabled.get():
        return None
    return _current_span.get()
