"""Kernel errors – rule violations and missing aggregates."""

from __future__ import annotations

from typing import Any

from todos.kernel.errors.base import BaseError


class DomainError(BaseError):
    """A business rule rejected the operation (HTTP 422 unless refined)."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input failed validation; ``errors`` lists ``{"field", "message"}`` pairs."""

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = list(errors or [])

    @property
    def details(self) -> list[str]:
        return [str(item.get("message", "")) for item in self.errors]

    def to_dict(self, *, include_cause: bool = True) -> dict[str, Any]:
        payload = super().to_dict(include_cause=include_cause)
        payload.update(errors=self.errors, details=self.details)
        return payload


class NotFoundError(DomainError):
    """No aggregate of kind *resource* exists under *identifier*."""

    default_code = "not_found"

    def __init__(self, resource: str, identifier: Any = None, **kwargs: Any) -> None:
        where = "" if identifier is None else f" with id {identifier}"
        super().__init__(f"{resource}{where} not found", **kwargs)
        self.resource = resource
        self.identifier = identifier


__all__ = ["DomainError", "NotFoundError", "ValidationError"]
