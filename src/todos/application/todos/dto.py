"""Read model returned by the todo use cases."""
from __future__ import annotations

import dataclasses
from datetime import datetime

from todos.domain.todos import Priority, Todo


@dataclasses.dataclass(frozen=True)
class TodoDto:
    id: str
    title: str
    description: str | None
    priority: Priority
    is_completed: bool
    created_at: datetime
    completed_at: datetime | None

    @classmethod
    def from_aggregate(cls, todo: Todo) -> "TodoDto":
        return cls(
            id=str(todo.id),
            title=todo.title,
            description=todo.description,
            priority=todo.priority,
            is_completed=todo.is_completed,
            created_at=todo.created_at,
            completed_at=todo.completed_at,
        )


__all__ = ["TodoDto"]
