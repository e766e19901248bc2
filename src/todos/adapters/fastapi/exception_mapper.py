"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todos.kernel.errors import (
    BaseError,
    DomainError,
    InfrastructureError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from todos.observability.correlation import CorrelationContext
from todos.observability.logging import get_logger

logger = get_logger(__name__)


class FastAPIExceptionMapper:
    """Register error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "not_found", "message": "...", "detail": {}, "correlation_id": "..."}

    Mappings
    --------
    ``ValidationError``        → 400
    ``RequestValidationError`` → 400
    ``NotFoundError``          → 404
    ``DomainError``            → 422
    ``InvalidStateError``      → 503
    ``InfrastructureError``    → 503
    anything else              → 500
    """

    def __init__(self) -> None:
        self._map: list[tuple[type[Exception], int]] = [
            (ValidationError, 400),
            (NotFoundError, 404),
            (InvalidStateError, 503),
            (InfrastructureError, 503),
            (DomainError, 422),
        ]

    def register(self, app: FastAPI) -> None:
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, self._make_handler(status))
        app.add_exception_handler(RequestValidationError, self._request_validation_handler)
        app.add_exception_handler(Exception, self._unhandled_handler)

    @staticmethod
    def _make_handler(status: int) -> Callable[[Request, Any], Awaitable[JSONResponse]]:
        async def handler(request: Request, exc: BaseError) -> JSONResponse:
            body = exc.to_dict(include_cause=False)
            body["correlation_id"] = CorrelationContext.current_id()
            log = logger.warning if status < 500 else logger.error
            log(
                "request_failed",
                path=request.url.path,
                status=status,
                code=exc.code,
                error=str(exc),
            )
            return JSONResponse(status_code=status, content=body)

        return handler

    @staticmethod
    async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())[1:]) or None,
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        logger.warning("request_invalid", path=request.url.path, errors=len(errors))
        return JSONResponse(
            status_code=400,
            content={
                "code": ValidationError.default_code,
                "message": "Request validation failed",
                "errors": errors,
                "details": [e["message"] for e in errors],
                "correlation_id": CorrelationContext.current_id(),
            },
        )

    @staticmethod
    async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_unhandled_error", path=request.url.path, error=repr(exc))
        return JSONResponse(
            status_code=500,
            content={
                "code": "internal_error",
                "message": "An unexpected error occurred",
                "correlation_id": (
                    CorrelationContext.current_id() or request.headers.get("x-correlation-id")
                ),
            },
        )


__all__ = ["FastAPIExceptionMapper"]
