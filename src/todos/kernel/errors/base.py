"""Kernel errors – BaseError, the root of every error the service raises."""

from __future__ import annotations

from typing import Any, ClassVar


class BaseError(Exception):
    """An expected failure with a stable machine-readable ``code``.

    The exception mapper turns these into HTTP bodies and the adapters log
    them; both read :meth:`to_dict`. ``cause`` is chained as ``__cause__``
    so tracebacks keep the original driver or broker exception.
    """

    default_code: ClassVar[str] = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message if self.cause is None else f"{self.message}: {self.cause}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"

    def to_dict(self, *, include_cause: bool = True) -> dict[str, Any]:
        """Plain-dict view; pass ``include_cause=False`` for client-facing bodies."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if include_cause and self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
