"""Application CQRS – command and query messages and their handlers."""
from __future__ import annotations

import abc
from typing import Generic, TypeVar

M = TypeVar("M")
R = TypeVar("R")


class Command:
    """Marker base for messages that change todos."""


class Query:
    """Marker base for read-only messages."""


class _Handler(abc.ABC, Generic[M, R]):
    @abc.abstractmethod
    async def handle(self, message: M) -> R: ...


class CommandHandler(_Handler[M, R]):
    """Handles exactly one command type; results are ``Result`` values."""


class QueryHandler(_Handler[M, R]):
    """Handles exactly one query type without side effects."""


__all__ = ["Command", "CommandHandler", "Query", "QueryHandler"]
