"""The Todo aggregate."""
from __future__ import annotations

from datetime import datetime

from todos.domain.todos.events import (
    TodoCompletedEvent,
    TodoCreatedEvent,
    TodoPriorityChangedEvent,
    TodoReopenedEvent,
    TodoUpdatedEvent,
)
from todos.domain.todos.priority import Priority
from todos.kernel.ddd import AggregateRoot
from todos.kernel.errors import ValidationError
from todos.kernel.time import Clock, SystemClock
from todos.kernel.types import EntityId

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000

_system_clock = SystemClock()


def _check_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise ValidationError(
            "Title cannot be empty",
            errors=[{"field": "title", "message": "Title is required"}],
        )
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            "Title is too long",
            errors=[{
                "field": "title",
                "message": f"Title must not exceed {TITLE_MAX_LENGTH} characters",
            }],
        )
    return title


def _check_description(description: str | None) -> str | None:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            "Description is too long",
            errors=[{
                "field": "description",
                "message": f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
            }],
        )
    return description


class Todo(AggregateRoot):
    """A task that can be edited, completed and reopened.

    Every mutator records exactly one event and returns it. ``complete`` and
    ``reopen`` return ``None`` without touching state when the todo is
    already in the target state.
    """

    def __init__(
        self,
        id: EntityId,  # noqa: A002
        title: str,
        description: str | None,
        priority: Priority,
        created_at: datetime,
        is_completed: bool = False,
        completed_at: datetime | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(id)
        self._title = title
        self._description = description
        self._priority = Priority(priority)
        self._created_at = created_at
        self._is_completed = is_completed
        self._completed_at = completed_at
        self._clock: Clock = clock or _system_clock

    @classmethod
    def create(
        cls,
        title: str,
        description: str | None = None,
        priority: Priority = Priority.MEDIUM,
        *,
        clock: Clock | None = None,
    ) -> "Todo":
        """New todo with a :class:`TodoCreatedEvent` in its buffer."""
        clock = clock or _system_clock
        todo = cls(
            id=EntityId.generate(),
            title=_check_title(title),
            description=_check_description(description),
            priority=priority,
            created_at=clock.now(),
            clock=clock,
        )
        todo._raise_event(
            TodoCreatedEvent(
                todo_id=str(todo.id),
                title=todo.title,
                description=todo.description,
                priority=todo.priority,
            )
        )
        return todo

    @classmethod
    def restore(
        cls,
        id: EntityId,  # noqa: A002
        title: str,
        description: str | None,
        priority: Priority,
        created_at: datetime,
        is_completed: bool,
        completed_at: datetime | None,
        *,
        clock: Clock | None = None,
    ) -> "Todo":
        """Rehydrate from storage; the event buffer starts empty."""
        return cls(
            id=id,
            title=title,
            description=description,
            priority=priority,
            created_at=created_at,
            is_completed=is_completed,
            completed_at=completed_at,
            clock=clock,
        )

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def priority(self) -> Priority:
        return self._priority

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_completed(self) -> bool:
        return self._is_completed

    @property
    def completed_at(self) -> datetime | None:
        return self._completed_at

    def update_title(self, title: str) -> TodoUpdatedEvent:
        old_title = self._title
        self._title = _check_title(title)
        return self._raise_event(
            TodoUpdatedEvent(todo_id=str(self.id), old_value=old_title, new_value=self._title)
        )

    def update_description(self, description: str | None) -> TodoUpdatedEvent:
        old_description = self._description
        self._description = _check_description(description)
        return self._raise_event(
            TodoUpdatedEvent(
                todo_id=str(self.id), old_value=old_description, new_value=self._description
            )
        )

    def set_priority(self, priority: Priority) -> TodoPriorityChangedEvent:
        try:
            self._priority = Priority(priority)
        except ValueError as exc:
            raise ValidationError(
                "Invalid priority",
                errors=[{"field": "priority", "message": "Priority must be a valid value"}],
            ) from exc
        return self._raise_event(
            TodoPriorityChangedEvent(todo_id=str(self.id), new_priority=self._priority)
        )

    def complete(self) -> TodoCompletedEvent | None:
        if self._is_completed:
            return None
        self._is_completed = True
        self._completed_at = self._clock.now()
        return self._raise_event(
            TodoCompletedEvent(
                todo_id=str(self.id), title=self._title, completed_at=self._completed_at
            )
        )

    def reopen(self) -> TodoReopenedEvent | None:
        if not self._is_completed:
            return None
        self._is_completed = False
        self._completed_at = None
        return self._raise_event(TodoReopenedEvent(todo_id=str(self.id), title=self._title))


__all__ = ["DESCRIPTION_MAX_LENGTH", "TITLE_MAX_LENGTH", "Todo"]
