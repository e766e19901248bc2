"""Todo commands and their handlers.

Every mutating handler follows the same sequence: load, mutate, persist,
then hand the recorded events to :class:`DomainEventDispatcher`. A storage
failure propagates before anything is published.
"""
from __future__ import annotations

import dataclasses

from todos.application.cqrs import Command, CommandHandler
from todos.application.todos.dispatch import DomainEventDispatcher
from todos.application.todos.dto import TodoDto
from todos.domain.todos import Priority, Todo, TodoRepository
from todos.kernel.errors import NotFoundError
from todos.kernel.time import Clock
from todos.kernel.types import EntityId, Err, Ok, Result
from todos.observability.logging import get_logger

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class CreateTodo(Command):
    title: str
    description: str | None = None
    priority: Priority = Priority.MEDIUM


@dataclasses.dataclass(frozen=True)
class UpdateTodo(Command):
    """Only supplied fields are applied; an empty title counts as not supplied."""

    id: EntityId
    title: str | None = None
    description: str | None = None
    priority: Priority | None = None


@dataclasses.dataclass(frozen=True)
class CompleteTodo(Command):
    id: EntityId


@dataclasses.dataclass(frozen=True)
class ReopenTodo(Command):
    id: EntityId


@dataclasses.dataclass(frozen=True)
class DeleteTodo(Command):
    id: EntityId


class _TodoCommandHandler:
    def __init__(self, repository: TodoRepository, dispatcher: DomainEventDispatcher) -> None:
        self._repository = repository
        self._dispatcher = dispatcher

    async def _load(self, todo_id: EntityId) -> Result[Todo, NotFoundError]:
        found = await self._repository.get(todo_id)
        return found.ok_or(NotFoundError("Todo", todo_id))

    async def _save_and_dispatch(self, todo: Todo) -> TodoDto:
        await self._repository.update(todo)
        await self._dispatcher.dispatch(todo)
        return TodoDto.from_aggregate(todo)


class CreateTodoHandler(_TodoCommandHandler, CommandHandler[CreateTodo, Result[TodoDto, NotFoundError]]):
    def __init__(
        self,
        repository: TodoRepository,
        dispatcher: DomainEventDispatcher,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(repository, dispatcher)
        self._clock = clock

    async def handle(self, command: CreateTodo) -> Result[TodoDto, NotFoundError]:
        todo = Todo.create(command.title, command.description, command.priority, clock=self._clock)
        await self._repository.add(todo)
        await self._dispatcher.dispatch(todo)
        logger.info("todo_created", todo_id=str(todo.id), priority=todo.priority.name)
        return Ok(TodoDto.from_aggregate(todo))


class UpdateTodoHandler(_TodoCommandHandler, CommandHandler[UpdateTodo, Result[TodoDto, NotFoundError]]):
    async def handle(self, command: UpdateTodo) -> Result[TodoDto, NotFoundError]:
        loaded = await self._load(command.id)
        if loaded.is_err():
            return loaded
        todo = loaded.unwrap()

        if command.title:
            todo.update_title(command.title)
        if command.description is not None:
            todo.update_description(command.description)
        if command.priority is not None:
            todo.set_priority(command.priority)

        return Ok(await self._save_and_dispatch(todo))


class CompleteTodoHandler(_TodoCommandHandler, CommandHandler[CompleteTodo, Result[TodoDto, NotFoundError]]):
    async def handle(self, command: CompleteTodo) -> Result[TodoDto, NotFoundError]:
        loaded = await self._load(command.id)
        if loaded.is_err():
            return loaded
        todo = loaded.unwrap()
        if todo.complete() is None:
            logger.debug("todo_already_completed", todo_id=str(todo.id))
        return Ok(await self._save_and_dispatch(todo))


class ReopenTodoHandler(_TodoCommandHandler, CommandHandler[ReopenTodo, Result[TodoDto, NotFoundError]]):
    async def handle(self, command: ReopenTodo) -> Result[TodoDto, NotFoundError]:
        loaded = await self._load(command.id)
        if loaded.is_err():
            return loaded
        todo = loaded.unwrap()
        if todo.reopen() is None:
            logger.debug("todo_not_completed", todo_id=str(todo.id))
        return Ok(await self._save_and_dispatch(todo))


class DeleteTodoHandler(_TodoCommandHandler, CommandHandler[DeleteTodo, Result[None, NotFoundError]]):
    """Deletes without emitting an event."""

    async def handle(self, command: DeleteTodo) -> Result[None, NotFoundError]:
        loaded = await self._load(command.id)
        if loaded.is_err():
            return loaded
        await self._repository.delete(command.id)
        logger.info("todo_deleted", todo_id=str(command.id))
        return Ok(None)


__all__ = [
    "CompleteTodo",
    "CompleteTodoHandler",
    "CreateTodo",
    "CreateTodoHandler",
    "DeleteTodo",
    "DeleteTodoHandler",
    "ReopenTodo",
    "ReopenTodoHandler",
    "UpdateTodo",
    "UpdateTodoHandler",
]
