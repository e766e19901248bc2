"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar, Token
from typing import Mapping
from uuid import uuid4


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Ids that follow one HTTP request into logs and broker messages."""

    correlation_id: str
    trace_id: str | None = None

    @classmethod
    def new(cls) -> "RequestContext":
        return cls(correlation_id=str(uuid4()))


_current: ContextVar[RequestContext | None] = ContextVar("todos_request_context", default=None)


class CorrelationContext:
    """Access to the :class:`RequestContext` of the running task.

    Backed by a ``ContextVar``, so concurrent requests never see each
    other's ids. Code outside a request (startup, tests) sees ``None``.
    """

    @staticmethod
    def set(ctx: RequestContext) -> Token[RequestContext | None]:
        return _current.set(ctx)

    @staticmethod
    def reset(token: Token[RequestContext | None]) -> None:
        _current.reset(token)

    @staticmethod
    def get() -> RequestContext | None:
        return _current.get()

    @staticmethod
    def current_id() -> str | None:
        ctx = _current.get()
        return None if ctx is None else ctx.correlation_id

    @staticmethod
    def clear() -> None:
        _current.set(None)

    @staticmethod
    def from_headers(headers: Mapping[str, str]) -> RequestContext:
        """Context for an incoming request; header names are case-insensitive.

        The correlation id is the first of ``X-Correlation-ID``,
        ``X-Request-ID`` and the trace-id field of a W3C ``traceparent``
        that is present, or a new UUID.
        """
        lowered = {k.lower(): v.strip() for k, v in headers.items()}

        trace_id: str | None = None
        # version-traceid-parentid-flags
        fields = lowered.get("traceparent", "").split("-")
        if len(fields) >= 2 and fields[1]:
            trace_id = fields[1]

        correlation_id = (
            lowered.get("x-correlation-id")
            or lowered.get("x-request-id")
            or trace_id
            or str(uuid4())
        )
        return RequestContext(correlation_id=correlation_id, trace_id=trace_id)


__all__ = ["CorrelationContext", "RequestContext"]
