"""SQLAlchemy adapter – SqlAlchemyTodoRepository."""
from __future__ import annotations

import contextlib
from datetime import UTC, datetime
from typing import Any, AsyncIterator

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todos.adapters.sqlalchemy.models import TodoRecord
from todos.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from todos.domain.todos import Priority, Todo, TodoRepository
from todos.kernel.errors import StorageError
from todos.kernel.types import EntityId, Nothing, Option, Some
from todos.observability.logging import get_logger

logger = get_logger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _to_aggregate(row: TodoRecord) -> Todo:
    return Todo.restore(
        id=EntityId(row.id),
        title=row.title,
        description=row.description,
        priority=Priority(row.priority),
        created_at=_as_utc(row.created_at),  # type: ignore[arg-type]
        is_completed=row.is_completed,
        completed_at=_as_utc(row.completed_at),
    )


def _to_columns(todo: Todo) -> dict[str, Any]:
    return {
        "title": todo.title,
        "description": todo.description,
        "priority": int(todo.priority),
        "is_completed": todo.is_completed,
        "created_at": todo.created_at,
        "completed_at": todo.completed_at,
    }


class SqlAlchemyTodoRepository(TodoRepository):
    """Todo persistence on an async SQLAlchemy engine.

    Each call runs in its own short-lived session and commits before
    returning. Any ``SQLAlchemyError`` surfaces as :class:`StorageError`.
    """

    def __init__(self, session_factory: SqlAlchemySessionFactory) -> None:
        self._sessions = session_factory

    @contextlib.asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._sessions() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("storage_operation_failed", operation=operation, error=repr(exc))
            raise StorageError(operation, cause=exc) from exc

    async def _select(self, operation: str, stmt: Any) -> list[Todo]:
        async with self._session(operation) as session:
            result = await session.execute(stmt)
            return [_to_aggregate(row) for row in result.scalars().all()]

    async def get(self, id: EntityId) -> Option[Todo]:  # noqa: A002
        async with self._session("get") as session:
            row = await session.get(TodoRecord, id.value)
            if row is None:
                return Nothing()
            return Some(_to_aggregate(row))

    async def list_all(self) -> list[Todo]:
        return await self._select(
            "list_all", select(TodoRecord).order_by(TodoRecord.created_at.desc())
        )

    async def list_by_priority(self, priority: Priority) -> list[Todo]:
        return await self._select(
            "list_by_priority",
            select(TodoRecord)
            .where(TodoRecord.priority == int(priority))
            .order_by(TodoRecord.created_at.desc()),
        )

    async def list_completed(self) -> list[Todo]:
        return await self._select(
            "list_completed",
            select(TodoRecord)
            .where(TodoRecord.is_completed.is_(True))
            .order_by(TodoRecord.completed_at.desc()),
        )

    async def list_pending(self) -> list[Todo]:
        return await self._select(
            "list_pending",
            select(TodoRecord)
            .where(TodoRecord.is_completed.is_(False))
            .order_by(TodoRecord.created_at.desc()),
        )

    async def add(self, todo: Todo) -> None:
        async with self._session("add") as session:
            session.add(TodoRecord(id=todo.id.value, **_to_columns(todo)))
            await session.commit()

    async def update(self, todo: Todo) -> None:
        async with self._session("update") as session:
            row = await session.get(TodoRecord, todo.id.value)
            if row is None:
                raise StorageError("update", f"Todo with id {todo.id} no longer exists")
            for column, value in _to_columns(todo).items():
                setattr(row, column, value)
            await session.commit()

    async def delete(self, id: EntityId) -> None:  # noqa: A002
        async with self._session("delete") as session:
            await session.execute(delete(TodoRecord).where(TodoRecord.id == id.value))
            await session.commit()


__all__ = ["SqlAlchemyTodoRepository"]
