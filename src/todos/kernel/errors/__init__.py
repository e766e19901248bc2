"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   └── NotFoundError
    ├── ApplicationError     (application.py)
    │   └── InvalidStateError
    └── InfrastructureError  (infrastructure.py)
        ├── ConnectionError
        ├── StorageError
        ├── SerializationError
        └── PublishError
"""

from todos.kernel.errors.application import ApplicationError, InvalidStateError
from todos.kernel.errors.base import BaseError
from todos.kernel.errors.domain import DomainError, NotFoundError, ValidationError
from todos.kernel.errors.infrastructure import (
    ConnectionError,
    InfrastructureError,
    PublishError,
    SerializationError,
    StorageError,
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
    "SerializationError",
    "StorageError",
    "ValidationError",
]
