"""Domain events – immutable facts about aggregate state transitions."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any
from uuid import uuid4

from todos.kernel.time import utc_now


@dataclasses.dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for domain events.

    ``event_id`` and ``occurred_at`` are fixed at construction. Subclasses
    add their payload fields::

        @dataclasses.dataclass(frozen=True, kw_only=True)
        class TodoReopenedEvent(DomainEvent):
            todo_id: str
            title: str
    """

    event_id: str = dataclasses.field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = dataclasses.field(default_factory=utc_now)

    @property
    def event_type(self) -> str:
        """Runtime type name, used as the ``EventType`` message header."""
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Shallow field mapping, payload fields first then metadata."""
        fields = dataclasses.fields(self)
        meta = {"event_id", "occurred_at"}
        data = {f.name: getattr(self, f.name) for f in fields if f.name not in meta}
        data["event_id"] = self.event_id
        data["occurred_at"] = self.occurred_at
        return data


__all__ = ["DomainEvent"]
