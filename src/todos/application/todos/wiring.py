"""Register the todo handlers on a pair of in-process buses."""
from __future__ import annotations

from todos.application.cqrs import InProcessCommandBus, InProcessQueryBus
from todos.application.todos.commands import (
    CompleteTodo,
    CompleteTodoHandler,
    CreateTodo,
    CreateTodoHandler,
    DeleteTodo,
    DeleteTodoHandler,
    ReopenTodo,
    ReopenTodoHandler,
    UpdateTodo,
    UpdateTodoHandler,
)
from todos.application.todos.dispatch import DomainEventDispatcher
from todos.application.todos.queries import (
    GetCompletedTodos,
    GetCompletedTodosHandler,
    GetPendingTodos,
    GetPendingTodosHandler,
    GetTodoById,
    GetTodoByIdHandler,
    GetTodos,
    GetTodosByPriority,
    GetTodosByPriorityHandler,
    GetTodosHandler,
)
from todos.domain.todos import TodoRepository
from todos.kernel.messaging import EventPublisher
from todos.kernel.time import Clock


def build_buses(
    repository: TodoRepository,
    publisher: EventPublisher,
    clock: Clock | None = None,
) -> tuple[InProcessCommandBus, InProcessQueryBus]:
    dispatcher = DomainEventDispatcher(publisher)

    commands = InProcessCommandBus()
    commands.register(CreateTodo, CreateTodoHandler(repository, dispatcher, clock))
    commands.register(UpdateTodo, UpdateTodoHandler(repository, dispatcher))
    commands.register(CompleteTodo, CompleteTodoHandler(repository, dispatcher))
    commands.register(ReopenTodo, ReopenTodoHandler(repository, dispatcher))
    commands.register(DeleteTodo, DeleteTodoHandler(repository, dispatcher))

    queries = InProcessQueryBus()
    queries.register(GetTodos, GetTodosHandler(repository))
    queries.register(GetTodoById, GetTodoByIdHandler(repository))
    queries.register(GetTodosByPriority, GetTodosByPriorityHandler(repository))
    queries.register(GetCompletedTodos, GetCompletedTodosHandler(repository))
    queries.register(GetPendingTodos, GetPendingTodosHandler(repository))
    return commands, queries


__all__ = ["build_buses"]
