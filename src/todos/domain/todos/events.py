"""Domain events raised by the Todo aggregate."""
from __future__ import annotations

import dataclasses
from datetime import datetime

from todos.domain.todos.priority import Priority
from todos.kernel.ddd import DomainEvent


@dataclasses.dataclass(frozen=True, kw_only=True)
class TodoCreatedEvent(DomainEvent):
    todo_id: str
    title: str
    description: str | None
    priority: Priority


@dataclasses.dataclass(frozen=True, kw_only=True)
class TodoUpdatedEvent(DomainEvent):
    """Title or description changed; carries the before and after values."""

    todo_id: str
    old_value: str | None
    new_value: str | None


@dataclasses.dataclass(frozen=True, kw_only=True)
class TodoPriorityChangedEvent(DomainEvent):
    todo_id: str
    new_priority: Priority


@dataclasses.dataclass(frozen=True, kw_only=True)
class TodoCompletedEvent(DomainEvent):
    todo_id: str
    title: str
    completed_at: datetime


@dataclasses.dataclass(frozen=True, kw_only=True)
class TodoReopenedEvent(DomainEvent):
    todo_id: str
    title: str


__all__ = [
    "TodoCompletedEvent",
    "TodoCreatedEvent",
    "TodoPriorityChangedEvent",
    "TodoReopenedEvent",
    "TodoUpdatedEvent",
]
