"""Todo aggregate – public re-export surface."""
from todos.domain.todos.events import (
    TodoCompletedEvent,
    TodoCreatedEvent,
    TodoPriorityChangedEvent,
    TodoReopenedEvent,
    TodoUpdatedEvent,
)
from todos.domain.todos.repository import TodoRepository
from todos.domain.todos.priority import Priority
from todos.domain.todos.todo import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Todo

__all__ = [
    "DESCRIPTION_MAX_LENGTH",
    "Priority",
    "TITLE_MAX_LENGTH",
    "Todo",
    "TodoCompletedEvent",
    "TodoCreatedEvent",
    "TodoPriorityChangedEvent",
    "TodoReopenedEvent",
    "TodoRepository",
    "TodoUpdatedEvent",
]
