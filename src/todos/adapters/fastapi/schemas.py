"""FastAPI adapter – request and response bodies."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from todos.application.todos import TodoDto
from todos.domain.todos import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Priority


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateTodoRequest(_CamelModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    priority: Priority = Priority.MEDIUM


class UpdateTodoRequest(_CamelModel):
    """Every field is optional; an empty ``title`` leaves the title unchanged."""

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    priority: Priority | None = None


class TodoResponse(_CamelModel):
    id: str
    title: str
    description: str | None
    priority: Priority
    is_completed: bool
    created_at: datetime
    completed_at: datetime | None

    @classmethod
    def from_dto(cls, dto: TodoDto) -> "TodoResponse":
        return cls(
            id=dto.id,
            title=dto.title,
            description=dto.description,
            priority=dto.priority,
            is_completed=dto.is_completed,
            created_at=dto.created_at,
            completed_at=dto.completed_at,
        )


__all__ = ["CreateTodoRequest", "TodoResponse", "UpdateTodoRequest"]
