"""Infrastructure errors – I/O failures against the database and the broker."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from todos.kernel.errors.base import BaseError

if TYPE_CHECKING:
    from todos.kernel.ddd.domain_event import DomainEvent


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class ConnectionError(InfrastructureError):  # noqa: A001
    """Failed to connect to an external resource (DB, broker, …)."""

    default_code = "connection_error"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Could not connect to '{resource}'", **kwargs)
        self.resource = resource


class StorageError(InfrastructureError):
    """A persistence operation failed."""

    default_code = "storage_error"

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Storage operation '{operation}' failed", **kwargs)
        self.operation = operation


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class PublishError(InfrastructureError):
    """Every publish attempt for an event was exhausted.

    ``pending_events`` holds the events that were not delivered, starting
    with the one that failed.
    """

    default_code = "publish_error"

    def __init__(
        self,
        event_type: str,
        message: str | None = None,
        *,
        attempts: int = 0,
        pending_events: Sequence[DomainEvent] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or f"Failed to publish event {event_type} after {attempts} attempts",
            **kwargs,
        )
        self.event_type = event_type
        self.attempts = attempts
        self.pending_events: tuple[DomainEvent, ...] = tuple(pending_events)


__all__ = [
    "ConnectionError",
    "InfrastructureError",
    "PublishError",
    "SerializationError",
    "StorageError",
]
