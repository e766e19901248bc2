"""Integration tests for the RabbitMQ publisher against a real broker.

Uses testcontainers to spawn RabbitMQ.
Run with: pytest tests/integration -m integration -v
"""
from __future__ import annotations

import asyncio
import json

import aio_pika
import pytest
from testcontainers.rabbitmq import RabbitMqContainer

from todos.adapters.rabbitmq import RabbitMQConnectionManager, RabbitMQEventPublisher
from todos.application.todos import CompleteTodo, CreateTodo, build_buses
from todos.config import RabbitMQSettings
from todos.kernel.types import EntityId
from todos.testing.fakes import InMemoryTodoRepository


def _settings(container: RabbitMqContainer) -> RabbitMQSettings:
    return RabbitMQSettings(
        host=container.get_container_host_ip(),
        port=int(container.get_exposed_port(5672)),
    )


async def _drain(settings: RabbitMQSettings) -> list[aio_pika.abc.AbstractIncomingMessage]:
    connection = await aio_pika.connect_robust(
        host=settings.host, port=settings.port, login=settings.username, password=settings.password
    )
    messages = []
    async with connection:
        channel = await connection.channel()
        queue = await channel.declare_queue(settings.queue_name, durable=True)
        while (message := await queue.get(fail=False, timeout=5)) is not None:
            await message.ack()
            messages.append(message)
    return messages


@pytest.mark.integration
class TestRabbitMQPublisherIntegration:
    def test_create_and_complete_reach_the_queue(self) -> None:
        with RabbitMqContainer() as container:
            settings = _settings(container)

            async def run():
                manager = RabbitMQConnectionManager(settings)
                publisher = RabbitMQEventPublisher(manager, settings)
                commands, _ = build_buses(InMemoryTodoRepository(), publisher)
                try:
                    dto = (await commands.dispatch(CreateTodo("Buy milk"))).unwrap()
                    await commands.dispatch(CompleteTodo(EntityId(dto.id)))
                    await commands.dispatch(CompleteTodo(EntityId(dto.id)))
                finally:
                    await publisher.close()
                    await manager.close()
                return dto, await _drain(settings)

            dto, messages = asyncio.run(run())

        assert [m.headers["EventType"] for m in messages] == [
            "TodoCreatedEvent",
            "TodoCompletedEvent",
        ]
        created = messages[0]
        assert created.content_type == "application/json"
        assert created.delivery_mode == aio_pika.DeliveryMode.PERSISTENT
        assert created.headers["Source"] == "TodoApi"
        assert created.headers["Version"] == "1.0"
        body = json.loads(created.body)
        assert body["todoId"] == dto.id
        assert body["eventId"] == created.message_id

    def test_connection_manager_connects_once(self) -> None:
        with RabbitMqContainer() as container:
            settings = _settings(container)

            async def run():
                async with RabbitMQConnectionManager(settings) as manager:
                    connections = await asyncio.gather(
                        *(manager.get_connection() for _ in range(10))
                    )
                    assert manager.is_connected()
                return connections

            connections = asyncio.run(run())

        assert all(c is connections[0] for c in connections)
