"""Application CQRS – in-process command and query buses.

Each message type maps to one handler; routing is by exact type, so a
subclass of a registered command is not picked up by its parent's handler.
"""
from __future__ import annotations

import abc
from typing import Any, Generic, TypeVar

from todos.application.cqrs.messages import Command, CommandHandler, Query, QueryHandler
from todos.observability.logging import get_logger

M = TypeVar("M")

logger = get_logger(__name__)


class _HandlerRegistry(Generic[M]):
    def __init__(self, kind: str) -> None:
        self._kind = kind
        self._handlers: dict[type[M], Any] = {}

    def add(self, message_type: type[M], handler: Any) -> None:
        if message_type in self._handlers:
            raise ValueError(
                f"Handler already registered for {self._kind} {message_type.__name__!r}"
            )
        self._handlers[message_type] = handler

    async def route(self, message: M) -> Any:
        name = type(message).__name__
        handler = self._handlers.get(type(message))
        if handler is None:
            raise KeyError(f"No handler registered for {self._kind} {name!r}")
        logger.debug("cqrs_dispatch", kind=self._kind, message=name)
        return await handler.handle(message)


class CommandBus(abc.ABC):
    @abc.abstractmethod
    def register(self, command_type: type[Command], handler: CommandHandler[Any, Any]) -> None: ...

    @abc.abstractmethod
    async def dispatch(self, command: Command) -> Any: ...


class QueryBus(abc.ABC):
    @abc.abstractmethod
    def register(self, query_type: type[Query], handler: QueryHandler[Any, Any]) -> None: ...

    @abc.abstractmethod
    async def ask(self, query: Query) -> Any: ...


class InProcessCommandBus(CommandBus):
    def __init__(self) -> None:
        self._registry: _HandlerRegistry[Command] = _HandlerRegistry("command")

    def register(self, command_type: type[Command], handler: CommandHandler[Any, Any]) -> None:
        self._registry.add(command_type, handler)

    async def dispatch(self, command: Command) -> Any:
        return await self._registry.route(command)


class InProcessQueryBus(QueryBus):
    def __init__(self) -> None:
        self._registry: _HandlerRegistry[Query] = _HandlerRegistry("query")

    def register(self, query_type: type[Query], handler: QueryHandler[Any, Any]) -> None:
        self._registry.add(query_type, handler)

    async def ask(self, query: Query) -> Any:
        return await self._registry.route(query)


__all__ = ["CommandBus", "InProcessCommandBus", "InProcessQueryBus", "QueryBus"]
