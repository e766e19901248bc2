"""Repository port for the Todo aggregate."""
from __future__ import annotations

import abc

from todos.domain.todos.priority import Priority
from todos.domain.todos.todo import Todo
from todos.kernel.types import EntityId, Option


class TodoRepository(abc.ABC):
    """Port: persistence for todos.

    A missing row is reported as ``Nothing``, never as an exception. Every
    write is committed before the method returns; failures raise
    :class:`~todos.kernel.errors.StorageError`.
    """

    @abc.abstractmethod
    async def get(self, id: EntityId) -> Option[Todo]: ...  # noqa: A002

    @abc.abstractmethod
    async def list_all(self) -> list[Todo]:
        """All todos, newest first."""

    @abc.abstractmethod
    async def list_by_priority(self, priority: Priority) -> list[Todo]: ...

    @abc.abstractmethod
    async def list_completed(self) -> list[Todo]:
        """Completed todos, most recently completed first."""

    @abc.abstractmethod
    async def list_pending(self) -> list[Todo]: ...

    @abc.abstractmethod
    async def add(self, todo: Todo) -> None: ...

    @abc.abstractmethod
    async def update(self, todo: Todo) -> None: ...

    @abc.abstractmethod
    async def delete(self, id: EntityId) -> None: ...  # noqa: A002


__all__ = ["TodoRepository"]
