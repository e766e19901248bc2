"""Kernel errors – failures of application components rather than of data."""

from __future__ import annotations

from typing import Any

from todos.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    default_code = "application_error"


class InvalidStateError(ApplicationError):
    """A component was used after it reached a state it cannot leave.

    The RabbitMQ connection manager and publisher raise this once closed,
    so callers fail fast instead of waiting on a reconnect that will never
    happen. The HTTP layer maps it to 503.
    """

    default_code = "invalid_state"

    def __init__(self, message: str, *, component: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.component = component
        if component is not None:
            self.detail.setdefault("component", component)


__all__ = ["ApplicationError", "InvalidStateError"]
