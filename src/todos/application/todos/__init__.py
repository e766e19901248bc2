"""Todo use cases – commands, queries and domain-event dispatch."""
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
from todos.application.todos.dto import TodoDto
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
from todos.application.todos.wiring import build_buses

__all__ = [
    "CompleteTodo",
    "CompleteTodoHandler",
    "CreateTodo",
    "CreateTodoHandler",
    "DeleteTodo",
    "DeleteTodoHandler",
    "DomainEventDispatcher",
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
    "ReopenTodo",
    "ReopenTodoHandler",
    "TodoDto",
    "UpdateTodo",
    "UpdateTodoHandler",
    "build_buses",
]
