"""Composition root – wires settings, adapters and buses together."""
from __future__ import annotations

import dataclasses

from todos.adapters.rabbitmq import RabbitMQConnectionManager, RabbitMQEventPublisher
from todos.adapters.sqlalchemy import SqlAlchemySessionFactory, SqlAlchemyTodoRepository
from todos.application.cqrs import CommandBus, QueryBus
from todos.application.todos import build_buses
from todos.config import AppSettings
from todos.domain.todos import TodoRepository
from todos.kernel.errors import ConnectionError
from todos.kernel.messaging import EventPublisher
from todos.kernel.time import Clock
from todos.observability.logging import JsonLoggerFactory, get_logger

logger = get_logger(__name__)


@dataclasses.dataclass
class Container:
    """Long-lived components shared by every request.

    ``session_factory`` and ``connection_manager`` are ``None`` when the
    repository and publisher were supplied directly (tests, alternative
    backends); lifecycle hooks skip whatever is absent.
    """

    settings: AppSettings
    repository: TodoRepository
    publisher: EventPublisher
    command_bus: CommandBus
    query_bus: QueryBus
    session_factory: SqlAlchemySessionFactory | None = None
    connection_manager: RabbitMQConnectionManager | None = None

    @classmethod
    def build(cls, settings: AppSettings, clock: Clock | None = None) -> "Container":
        """Production wiring: SQLAlchemy repository plus RabbitMQ publisher."""
        session_factory = SqlAlchemySessionFactory.from_settings(settings.database)
        repository = SqlAlchemyTodoRepository(session_factory)
        connection_manager = RabbitMQConnectionManager(settings.rabbitmq)
        publisher = RabbitMQEventPublisher(connection_manager, settings.rabbitmq, clock=clock)
        command_bus, query_bus = build_buses(repository, publisher, clock)
        return cls(
            settings=settings,
            repository=repository,
            publisher=publisher,
            command_bus=command_bus,
            query_bus=query_bus,
            session_factory=session_factory,
            connection_manager=connection_manager,
        )

    @classmethod
    def from_components(
        cls,
        settings: AppSettings,
        repository: TodoRepository,
        publisher: EventPublisher,
        clock: Clock | None = None,
    ) -> "Container":
        command_bus, query_bus = build_buses(repository, publisher, clock)
        return cls(
            settings=settings,
            repository=repository,
            publisher=publisher,
            command_bus=command_bus,
            query_bus=query_bus,
        )

    async def startup(self) -> None:
        JsonLoggerFactory.configure(self.settings.log_level, json_logs=self.settings.json_logs)
        if self.session_factory is not None:
            await self.session_factory.create_schema()
        if self.connection_manager is not None:
            try:
                await self.connection_manager.get_connection()
            except ConnectionError as exc:
                # the first publish retries the connect
                logger.warning("rabbitmq_unavailable_at_startup", error=str(exc))
        logger.info("app_started", title=self.settings.title)

    async def shutdown(self) -> None:
        if isinstance(self.publisher, RabbitMQEventPublisher):
            await self.publisher.close()
        if self.connection_manager is not None:
            await self.connection_manager.close()
        if self.session_factory is not None:
            await self.session_factory.dispose()
        logger.info("app_stopped")

    async def broker_ready(self) -> bool:
        return self.connection_manager is None or self.connection_manager.is_connected()


__all__ = ["Container"]
