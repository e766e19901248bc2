"""FastAPI adapter – app factory, routers, middleware and exception mapper."""
from todos.adapters.fastapi.app import app_factory, create_app
from todos.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from todos.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from todos.adapters.fastapi.routers import FastAPIHealthRouter, FastAPITodosRouter
from todos.adapters.fastapi.schemas import CreateTodoRequest, TodoResponse, UpdateTodoRequest

__all__ = [
    "CreateTodoRequest",
    "FastAPICorrelationIdMiddleware",
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "FastAPITodosRouter",
    "TodoResponse",
    "UpdateTodoRequest",
    "app_factory",
    "create_app",
]
