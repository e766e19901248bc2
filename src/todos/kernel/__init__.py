"""Kernel – framework-agnostic building blocks."""

from todos.kernel.errors import (
    ApplicationError,
    BaseError,
    ConnectionError,
    DomainError,
    InfrastructureError,
    InvalidStateError,
    NotFoundError,
    PublishError,
    StorageError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConnectionError",
    "DomainError",
    "InfrastructureError",
    "InvalidStateError",
    "NotFoundError",
    "PublishError",
    "StorageError",
    "ValidationError",
]
