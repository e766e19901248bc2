"""RabbitMQ adapter – RabbitMQConnectionManager."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import aio_pika
from aio_pika.abc import AbstractRobustConnection

from todos.config import RabbitMQSettings
from todos.kernel.errors import ConnectionError, InvalidStateError
from todos.observability.logging import get_logger

logger = get_logger(__name__)

Connect = Callable[..., Awaitable[AbstractRobustConnection]]


class RabbitMQConnectionManager:
    """Owns the single process-wide broker connection.

    The connection is opened lazily by the first :meth:`get_connection` and
    reopened there whenever it is found closed. aio-pika's robust connection
    heals transient network drops on its own every ``recovery_interval``
    seconds; the manager only steps in when the connection object itself has
    been closed.

    Reconnects are serialized by an ``asyncio.Lock`` with a re-check inside
    it, so any number of tasks that notice a dead connection at the same
    time trigger exactly one physical connect and all receive its result.
    """

    def __init__(self, settings: RabbitMQSettings, connect: Connect | None = None) -> None:
        self._settings = settings
        self._connect: Connect = connect or aio_pika.connect_robust
        self._connection: AbstractRobustConnection | None = None
        self._lock = asyncio.Lock()
        self._closed = False

    @staticmethod
    def _is_open(connection: AbstractRobustConnection | None) -> bool:
        return connection is not None and not connection.is_closed

    @property
    def closed(self) -> bool:
        """``True`` once :meth:`close` was called; the manager cannot be reused."""
        return self._closed

    def is_connected(self) -> bool:
        return self._is_open(self._connection)

    async def get_connection(self) -> AbstractRobustConnection:
        if self._closed:
            raise InvalidStateError(
                "RabbitMQ connection manager has been closed", component="connection_manager"
            )
        connection = self._connection
        if self._is_open(connection):
            return connection  # type: ignore[return-value]

        async with self._lock:
            if not self._is_open(self._connection):
                self._connection = await self._open()
            return self._connection  # type: ignore[return-value]

    async def _open(self) -> AbstractRobustConnection:
        s = self._settings
        logger.info(
            "rabbitmq_connecting",
            host=s.host,
            port=s.port,
            virtual_host=s.virtual_host,
            recovery_interval=s.recovery_interval,
        )
        try:
            connection = await self._connect(
                host=s.host,
                port=s.port,
                login=s.username,
                password=s.password,
                virtualhost=s.virtual_host,
                reconnect_interval=s.recovery_interval,
            )
        except Exception as exc:
            logger.error("rabbitmq_connect_failed", host=s.host, port=s.port, error=repr(exc))
            raise ConnectionError(
                "rabbitmq",
                f"Could not connect to RabbitMQ at {s.host}:{s.port}{s.virtual_host}",
                cause=exc,
            ) from exc
        logger.info("rabbitmq_connected", host=s.host, port=s.port)
        return connection

    async def close(self) -> None:
        async with self._lock:
            self._closed = True
            connection, self._connection = self._connection, None
            if self._is_open(connection):
                await connection.close()  # type: ignore[union-attr]
                logger.info("rabbitmq_connection_closed")

    async def __aenter__(self) -> "RabbitMQConnectionManager":
        await self.get_connection()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()


__all__ = ["RabbitMQConnectionManager"]
