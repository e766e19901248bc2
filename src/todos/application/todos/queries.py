"""Todo queries and their handlers."""
from __future__ import annotations

import dataclasses

from todos.application.cqrs import Query, QueryHandler
from todos.application.todos.dto import TodoDto
from todos.domain.todos import Priority, TodoRepository
from todos.kernel.types import EntityId, Option


@dataclasses.dataclass(frozen=True)
class GetTodos(Query):
    pass


@dataclasses.dataclass(frozen=True)
class GetTodoById(Query):
    id: EntityId


@dataclasses.dataclass(frozen=True)
class GetTodosByPriority(Query):
    priority: Priority


@dataclasses.dataclass(frozen=True)
class GetCompletedTodos(Query):
    pass


@dataclasses.dataclass(frozen=True)
class GetPendingTodos(Query):
    pass


class _TodoQueryHandler:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository


class GetTodosHandler(_TodoQueryHandler, QueryHandler[GetTodos, list[TodoDto]]):
    async def handle(self, query: GetTodos) -> list[TodoDto]:  # noqa: ARG002
        return [TodoDto.from_aggregate(t) for t in await self._repository.list_all()]


class GetTodoByIdHandler(_TodoQueryHandler, QueryHandler[GetTodoById, Option[TodoDto]]):
    async def handle(self, query: GetTodoById) -> Option[TodoDto]:
        found = await self._repository.get(query.id)
        return found.map(TodoDto.from_aggregate)


class GetTodosByPriorityHandler(_TodoQueryHandler, QueryHandler[GetTodosByPriority, list[TodoDto]]):
    async def handle(self, query: GetTodosByPriority) -> list[TodoDto]:
        todos = await self._repository.list_by_priority(query.priority)
        return [TodoDto.from_aggregate(t) for t in todos]


class GetCompletedTodosHandler(_TodoQueryHandler, QueryHandler[GetCompletedTodos, list[TodoDto]]):
    async def handle(self, query: GetCompletedTodos) -> list[TodoDto]:  # noqa: ARG002
        return [TodoDto.from_aggregate(t) for t in await self._repository.list_completed()]


class GetPendingTodosHandler(_TodoQueryHandler, QueryHandler[GetPendingTodos, list[TodoDto]]):
    async def handle(self, query: GetPendingTodos) -> list[TodoDto]:  # noqa: ARG002
        return [TodoDto.from_aggregate(t) for t in await self._repository.list_pending()]


__all__ = [
    "GetCompletedTodos",
    "GetCompletedTodosHandler",
    "GetPendingTodos",
    "GetPendingTodosHandler",
    "GetTodoById",
    "GetTodoByIdHandler",
    "GetTodos",
    "GetTodosByPriority",
    "GetTodosByPriorityHandler",
    "GetTodosHandler",
]
