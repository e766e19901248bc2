"""AggregateRoot – owns the buffer of domain events raised by its mutations."""

from __future__ import annotations

from typing import TypeVar

from todos.kernel.ddd.domain_event import DomainEvent
from todos.kernel.types.ids import EntityId

TEvent = TypeVar("TEvent", bound=DomainEvent)


class AggregateRoot:
    """Aggregate root with identity-based equality and an append-only event buffer.

    The buffer belongs to a single unit of work and is not safe to share
    across concurrent tasks. Events are appended in mutation order and stay
    there until :meth:`clear_events` (or :meth:`pull_events`) is called by
    whoever dispatches them.
    """

    _version: int
    _events: list[DomainEvent]

    def __init__(self, id: EntityId) -> None:  # noqa: A002
        self._id = id
        self._version = 0
        self._events = []

    @property
    def id(self) -> EntityId:
        return self._id

    def _raise_event(self, event: TEvent) -> TEvent:
        """Record a domain event and bump the version."""
        self._events.append(event)
        self._version += 1
        return event

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        """Read-only snapshot of the pending events, oldest first."""
        return tuple(self._events)

    def clear_events(self) -> None:
        self._events.clear()

    def pull_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = list(self._events)
        self._events.clear()
        return events

    @property
    def version(self) -> int:
        return self._version

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:  # pragma: no cover
        return f"{type(self).__name__}(id={self._id!r})"


__all__ = ["AggregateRoot"]
