"""FastAPI adapter – todos and health routers."""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Depends, Path, Request, Response, status
from fastapi.responses import JSONResponse

from todos.adapters.fastapi.schemas import CreateTodoRequest, TodoResponse, UpdateTodoRequest
from todos.application.cqrs import CommandBus, QueryBus
from todos.application.todos import (
    CompleteTodo,
    CreateTodo,
    DeleteTodo,
    GetCompletedTodos,
    GetPendingTodos,
    GetTodoById,
    GetTodos,
    GetTodosByPriority,
    ReopenTodo,
    TodoDto,
    UpdateTodo,
)
from todos.domain.todos import Priority
from todos.kernel.errors import NotFoundError
from todos.kernel.types import EntityId

ReadinessCheck = Callable[[], Awaitable[bool]]


def get_command_bus(request: Request) -> CommandBus:
    return request.app.state.container.command_bus


def get_query_bus(request: Request) -> QueryBus:
    return request.app.state.container.query_bus


def _many(dtos: list[TodoDto]) -> list[TodoResponse]:
    return [TodoResponse.from_dto(dto) for dto in dtos]


def FastAPITodosRouter(prefix: str = "/api/todos", tags: list[str] | None = None) -> APIRouter:
    """Return the CRUD router for todos.

    Command results arrive as ``Result``; ``unwrap()`` re-raises the
    ``NotFoundError`` of an ``Err`` so the exception mapper answers 404.
    """
    router = APIRouter(prefix=prefix, tags=tags or ["todos"])

    @router.get("", response_model=list[TodoResponse])
    @router.get("/", response_model=list[TodoResponse], include_in_schema=False)
    async def list_todos(queries: QueryBus = Depends(get_query_bus)) -> Any:
        return _many(await queries.ask(GetTodos()))

    @router.get("/completed", response_model=list[TodoResponse])
    async def list_completed(queries: QueryBus = Depends(get_query_bus)) -> Any:
        return _many(await queries.ask(GetCompletedTodos()))

    @router.get("/pending", response_model=list[TodoResponse])
    async def list_pending(queries: QueryBus = Depends(get_query_bus)) -> Any:
        return _many(await queries.ask(GetPendingTodos()))

    @router.get("/priority/{priority}", response_model=list[TodoResponse])
    async def list_by_priority(
        priority: int = Path(ge=Priority.LOW.value, le=Priority.CRITICAL.value),
        queries: QueryBus = Depends(get_query_bus),
    ) -> Any:
        return _many(await queries.ask(GetTodosByPriority(Priority(priority))))

    @router.get("/{todo_id}", response_model=TodoResponse)
    async def get_todo(todo_id: str, queries: QueryBus = Depends(get_query_bus)) -> Any:
        id_ = EntityId(todo_id)
        found = await queries.ask(GetTodoById(id_))
        return TodoResponse.from_dto(found.ok_or(NotFoundError("Todo", id_)).unwrap())

    @router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
    @router.post(
        "/", response_model=TodoResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False
    )
    async def create_todo(
        body: CreateTodoRequest,
        response: Response,
        commands: CommandBus = Depends(get_command_bus),
    ) -> Any:
        result = await commands.dispatch(CreateTodo(body.title, body.description, body.priority))
        dto = result.unwrap()
        response.headers["Location"] = f"{prefix}/{dto.id}"
        return TodoResponse.from_dto(dto)

    @router.put("/{todo_id}", response_model=TodoResponse)
    async def update_todo(
        todo_id: str,
        body: UpdateTodoRequest,
        commands: CommandBus = Depends(get_command_bus),
    ) -> Any:
        command = UpdateTodo(
            id=EntityId(todo_id),
            title=body.title,
            description=body.description,
            priority=body.priority,
        )
        return TodoResponse.from_dto((await commands.dispatch(command)).unwrap())

    @router.patch("/{todo_id}/complete", response_model=TodoResponse)
    async def complete_todo(todo_id: str, commands: CommandBus = Depends(get_command_bus)) -> Any:
        result = await commands.dispatch(CompleteTodo(EntityId(todo_id)))
        return TodoResponse.from_dto(result.unwrap())

    @router.patch("/{todo_id}/reopen", response_model=TodoResponse)
    async def reopen_todo(todo_id: str, commands: CommandBus = Depends(get_command_bus)) -> Any:
        result = await commands.dispatch(ReopenTodo(EntityId(todo_id)))
        return TodoResponse.from_dto(result.unwrap())

    @router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_todo(todo_id: str, commands: CommandBus = Depends(get_command_bus)) -> Response:
        (await commands.dispatch(DeleteTodo(EntityId(todo_id)))).unwrap()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def FastAPIHealthRouter(
    path: str = "/health",
    readiness_checks: list[ReadinessCheck] | None = None,
    tags: list[str] | None = None,
) -> APIRouter:
    """Return a liveness + readiness health-check router.

    Liveness is at ``{path}/live``, readiness at ``{path}/ready``. Every
    readiness check must return ``True`` for a 200; otherwise 503.
    """
    router = APIRouter(tags=tags or ["ops"])
    checks = readiness_checks or []

    @router.get(f"{path}/live")
    async def liveness() -> dict[str, str]:
        return {"status": "ok"}

    @router.get(f"{path}/ready")
    async def readiness() -> Any:
        results: dict[str, bool] = {}
        for check in checks:
            results[getattr(check, "__name__", repr(check))] = await check()
        all_ok = all(results.values())
        return JSONResponse(
            status_code=200 if all_ok else 503,
            content={"status": "ok" if all_ok else "degraded", "checks": results},
        )

    return router


__all__ = ["FastAPIHealthRouter", "FastAPITodosRouter", "ReadinessCheck", "get_command_bus", "get_query_bus"]
