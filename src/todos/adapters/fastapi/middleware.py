"""FastAPI adapter – FastAPICorrelationIdMiddleware."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from todos.observability.correlation import CorrelationContext

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


class FastAPICorrelationIdMiddleware:
    """Give every request a correlation id and echo it back.

    The id comes from the request headers when the caller sent one (see
    :meth:`CorrelationContext.from_headers`), otherwise it is generated. It
    is visible to everything running inside the request: log records via
    structlog contextvars and broker messages via their ``CorrelationId``
    header. Both are reset when the request ends.
    """

    def __init__(self, app: "ASGIApp", header_name: str = "X-Correlation-ID") -> None:
        self.app = app
        self._header = header_name.lower().encode("latin-1")

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        ctx = CorrelationContext.from_headers(
            {k.decode("latin-1"): v.decode("latin-1") for k, v in scope.get("headers", [])}
        )
        echoed = (self._header, ctx.correlation_id.encode("latin-1"))

        async def send_with_id(message: "Message") -> None:
            if message["type"] == "http.response.start":
                message = {**message, "headers": [*message.get("headers", []), echoed]}
            await send(message)

        token = CorrelationContext.set(ctx)
        try:
            with structlog.contextvars.bound_contextvars(
                correlation_id=ctx.correlation_id,
                method=scope.get("method"),
                path=scope.get("path"),
            ):
                await self.app(scope, receive, send_with_id)
        finally:
            CorrelationContext.reset(token)


__all__ = ["FastAPICorrelationIdMiddleware"]
