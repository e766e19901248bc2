"""Unit tests for the RabbitMQ adapter (mocked broker, no server needed)."""
from __future__ import annotations

import asyncio
import dataclasses
import json
import uuid
from unittest.mock import AsyncMock, MagicMock

import aio_pika
import pytest

from todos.adapters.rabbitmq import RabbitMQConnectionManager, RabbitMQEventPublisher
from todos.config import RabbitMQSettings
from todos.domain.todos import Priority, TodoCreatedEvent, TodoReopenedEvent
from todos.kernel.ddd import DomainEvent
from todos.kernel.errors import (
    ConnectionError,
    InvalidStateError,
    PublishError,
    SerializationError,
)
from todos.observability.correlation import CorrelationContext, RequestContext
from todos.resilience.retry import ExponentialBackoff, NoJitter, RetryPolicy
from todos.testing.fakes import FakeClock


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_mock_broker():
    mock_exchange = MagicMock()
    mock_exchange.publish = AsyncMock()

    mock_queue = MagicMock()
    mock_queue.bind = AsyncMock()

    mock_channel = MagicMock()
    mock_channel.is_closed = False
    mock_channel.set_qos = AsyncMock()
    mock_channel.declare_exchange = AsyncMock(return_value=mock_exchange)
    mock_channel.declare_queue = AsyncMock(return_value=mock_queue)
    mock_channel.close = AsyncMock()

    mock_connection = MagicMock()
    mock_connection.is_closed = False
    mock_connection.channel = AsyncMock(return_value=mock_channel)
    mock_connection.close = AsyncMock()
    return mock_connection, mock_channel, mock_exchange, mock_queue


def _event() -> TodoCreatedEvent:
    return TodoCreatedEvent(
        todo_id=str(uuid.uuid4()), title="Buy milk", description=None, priority=Priority.MEDIUM
    )


def _channel_rejecting_topology(close_error: Exception | None = None):
    channel = MagicMock()
    channel.is_closed = False
    channel.set_qos = AsyncMock()
    channel.declare_exchange = AsyncMock(side_effect=RuntimeError("ACCESS_REFUSED"))
    channel.declare_queue = AsyncMock()
    channel.close = AsyncMock(side_effect=close_error)
    return channel


class _Unprintable:
    def __str__(self) -> str:
        raise ValueError("no text form")


@dataclasses.dataclass(frozen=True, kw_only=True)
class _AttachmentAddedEvent(DomainEvent):
    todo_id: str
    attachment: object


class _RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# ===========================================================================
# RabbitMQConnectionManager
# ===========================================================================

class TestRabbitMQConnectionManager:
    def setup_method(self):
        self.conn, *_ = _make_mock_broker()
        self.connect = AsyncMock(return_value=self.conn)
        self.settings = RabbitMQSettings()
        self.manager = RabbitMQConnectionManager(self.settings, connect=self.connect)

    def test_does_not_connect_until_asked(self):
        assert self.manager.is_connected() is False
        self.connect.assert_not_called()

    def test_connects_with_settings(self):
        result = asyncio.run(self.manager.get_connection())
        assert result is self.conn
        self.connect.assert_awaited_once_with(
            host="localhost",
            port=5672,
            login="guest",
            password="guest",
            virtualhost="/",
            reconnect_interval=10.0,
        )

    def test_connection_is_reused(self):
        async def run():
            first = await self.manager.get_connection()
            second = await self.manager.get_connection()
            return first, second

        first, second = asyncio.run(run())
        assert first is second
        assert self.connect.await_count == 1

    def test_is_connected_has_no_side_effects(self):
        asyncio.run(self.manager.get_connection())
        assert self.manager.is_connected() is True
        assert self.manager.is_connected() is True
        assert self.connect.await_count == 1

    def test_concurrent_callers_share_one_physical_connect(self):
        calls = 0

        async def slow_connect(**kwargs):
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return self.conn

        manager = RabbitMQConnectionManager(self.settings, connect=slow_connect)

        async def run():
            return await asyncio.gather(*(manager.get_connection() for _ in range(20)))

        results = asyncio.run(run())
        assert calls == 1
        assert all(r is self.conn for r in results)

    def test_closed_connection_is_replaced(self):
        replacement, *_ = _make_mock_broker()
        self.connect.side_effect = [self.conn, replacement]

        async def run():
            await self.manager.get_connection()
            self.conn.is_closed = True
            return await self.manager.get_connection()

        assert asyncio.run(run()) is replacement
        assert self.connect.await_count == 2

    def test_concurrent_reconnect_after_close_connects_once(self):
        replacement, *_ = _make_mock_broker()
        calls: list[int] = []

        async def connect(**kwargs):
            calls.append(1)
            await asyncio.sleep(0.01)
            return self.conn if len(calls) == 1 else replacement

        manager = RabbitMQConnectionManager(self.settings, connect=connect)

        async def run():
            await manager.get_connection()
            self.conn.is_closed = True
            return await asyncio.gather(*(manager.get_connection() for _ in range(10)))

        results = asyncio.run(run())
        assert len(calls) == 2
        assert all(r is replacement for r in results)

    def test_connect_failure_raises_connection_error(self):
        boom = OSError("connection refused")
        self.connect.side_effect = boom
        with pytest.raises(ConnectionError) as info:
            asyncio.run(self.manager.get_connection())
        assert info.value.resource == "rabbitmq"
        assert info.value.__cause__ is boom
        assert "localhost:5672" in info.value.message

    def test_close_closes_connection(self):
        async def run():
            await self.manager.get_connection()
            await self.manager.close()

        asyncio.run(run())
        self.conn.close.assert_awaited_once()
        assert self.manager.is_connected() is False
        assert self.manager.closed is True

    def test_close_without_connect_is_noop(self):
        asyncio.run(self.manager.close())
        self.conn.close.assert_not_called()

    def test_get_connection_after_close_raises(self):
        asyncio.run(self.manager.close())
        with pytest.raises(InvalidStateError):
            asyncio.run(self.manager.get_connection())
        self.connect.assert_not_called()

    def test_context_manager_connects_and_closes(self):
        async def run():
            async with self.manager:
                assert self.manager.is_connected()

        asyncio.run(run())
        self.connect.assert_awaited_once()
        self.conn.close.assert_awaited_once()


# ===========================================================================
# RabbitMQEventPublisher – topology + message shape
# ===========================================================================

class TestRabbitMQEventPublisherTopology:
    def setup_method(self):
        self.conn, self.channel, self.exchange, self.queue = _make_mock_broker()
        self.settings = RabbitMQSettings()
        self.manager = RabbitMQConnectionManager(
            self.settings, connect=AsyncMock(return_value=self.conn)
        )
        self.publisher = RabbitMQEventPublisher(self.manager, self.settings, clock=FakeClock())

    def test_declares_topology_on_first_publish(self):
        asyncio.run(self.publisher.publish(_event()))
        self.channel.set_qos.assert_awaited_once_with(prefetch_count=1)
        self.channel.declare_exchange.assert_awaited_once_with(
            "notifications.exchange",
            aio_pika.ExchangeType.TOPIC,
            durable=True,
            auto_delete=False,
        )
        self.channel.declare_queue.assert_awaited_once_with(
            "notification.send.notify",
            durable=True,
            exclusive=False,
            auto_delete=False,
        )
        self.queue.bind.assert_awaited_once_with(
            self.exchange, routing_key="notification.send.notify"
        )

    def test_topology_declared_once_per_channel(self):
        async def run():
            await self.publisher.publish(_event())
            await self.publisher.publish(_event())

        asyncio.run(run())
        assert self.conn.channel.await_count == 1
        assert self.channel.declare_exchange.await_count == 1
        assert self.exchange.publish.await_count == 2

    def test_closed_channel_is_reopened(self):
        second_channel = MagicMock()
        second_channel.is_closed = False
        second_channel.set_qos = AsyncMock()
        second_channel.declare_exchange = AsyncMock(return_value=self.exchange)
        second_channel.declare_queue = AsyncMock(return_value=self.queue)
        self.conn.channel.side_effect = [self.channel, second_channel]

        async def run():
            await self.publisher.publish(_event())
            self.channel.is_closed = True
            await self.publisher.publish(_event())

        asyncio.run(run())
        assert self.conn.channel.await_count == 2
        second_channel.declare_exchange.assert_awaited_once()

    def test_publishes_persistent_json_with_routing_key(self):
        event = _event()
        asyncio.run(self.publisher.publish(event))

        self.exchange.publish.assert_awaited_once()
        message = self.exchange.publish.call_args.args[0]
        assert self.exchange.publish.call_args.kwargs["routing_key"] == "notification.send.notify"
        assert isinstance(message, aio_pika.Message)
        assert message.content_type == "application/json"
        assert message.delivery_mode == aio_pika.DeliveryMode.PERSISTENT
        assert message.message_id == event.event_id
        assert message.headers["EventType"] == "TodoCreatedEvent"
        body = json.loads(message.body)
        assert body["title"] == "Buy milk"
        assert body["todoId"] == event.todo_id
        assert body["eventId"] == event.event_id


class TestRabbitMQEventPublisherEnvelope:
    def setup_method(self):
        self.settings = RabbitMQSettings()
        self.clock = FakeClock()
        self.publisher = RabbitMQEventPublisher(
            MagicMock(closed=False), self.settings, clock=self.clock
        )

    def teardown_method(self):
        CorrelationContext.clear()

    def test_headers(self):
        envelope = self.publisher.build_envelope(_event())
        assert envelope.event_type == "TodoCreatedEvent"
        assert envelope.headers["Source"] == "TodoApi"
        assert envelope.headers["Version"] == "1.0"
        assert envelope.content_type == "application/json"
        assert envelope.persistent is True

    def test_timestamp_is_unix_seconds_from_clock(self):
        envelope = self.publisher.build_envelope(_event())
        assert envelope.timestamp == int(self.clock.now().timestamp())

    def test_correlation_id_taken_from_request_context(self):
        CorrelationContext.set(RequestContext(correlation_id="req-42"))
        envelope = self.publisher.build_envelope(_event())
        assert envelope.correlation_id == "req-42"

    def test_correlation_id_generated_without_context(self):
        CorrelationContext.clear()
        envelope = self.publisher.build_envelope(_event())
        uuid.UUID(envelope.correlation_id)

    def test_event_type_header_follows_runtime_type(self):
        event = TodoReopenedEvent(todo_id=str(uuid.uuid4()), title="x")
        assert self.publisher.build_envelope(event).event_type == "TodoReopenedEvent"

    def test_message_id_is_event_id_by_default(self):
        event = _event()
        assert self.publisher.build_envelope(event).message_id == event.event_id

    def test_fresh_message_id_when_not_stable(self):
        publisher = RabbitMQEventPublisher(
            MagicMock(closed=False), RabbitMQSettings(stable_message_id=False)
        )
        event = _event()
        first = publisher.build_envelope(event).message_id
        second = publisher.build_envelope(event).message_id
        assert first != second
        assert event.event_id not in (first, second)


# ===========================================================================
# RabbitMQEventPublisher – retry
# ===========================================================================

class TestRabbitMQEventPublisherRetry:
    def setup_method(self):
        self.conn, self.channel, self.exchange, self.queue = _make_mock_broker()
        self.settings = RabbitMQSettings()
        self.manager = RabbitMQConnectionManager(
            self.settings, connect=AsyncMock(return_value=self.conn)
        )
        self.sleep = _RecordingSleep()
        self.policy = RetryPolicy(
            max_attempts=4,
            backoff=ExponentialBackoff(base_delay=0.1),
            jitter=NoJitter(),
            sleep=self.sleep,
        )
        self.publisher = RabbitMQEventPublisher(
            self.manager, self.settings, retry_policy=self.policy
        )

    def test_default_policy_from_settings(self):
        publisher = RabbitMQEventPublisher(self.manager, self.settings)
        assert publisher.retry_policy.max_attempts == 4
        assert publisher.retry_policy.delays() == pytest.approx([0.2, 0.4, 0.8])

    def test_succeeds_after_three_failures(self):
        self.exchange.publish.side_effect = [
            RuntimeError("nack"),
            RuntimeError("nack"),
            RuntimeError("nack"),
            None,
        ]
        asyncio.run(self.publisher.publish(_event()))
        assert self.exchange.publish.await_count == 4
        assert self.sleep.delays == pytest.approx([0.2, 0.4, 0.8])

    def test_exhausted_retries_raise_publish_error(self):
        last = RuntimeError("broker down 4")
        self.exchange.publish.side_effect = [
            RuntimeError("broker down 1"),
            RuntimeError("broker down 2"),
            RuntimeError("broker down 3"),
            last,
        ]
        event = _event()
        with pytest.raises(PublishError) as info:
            asyncio.run(self.publisher.publish(event))
        assert self.exchange.publish.await_count == 4
        assert info.value.attempts == 4
        assert info.value.event_type == "TodoCreatedEvent"
        assert info.value.__cause__ is last
        assert info.value.pending_events == (event,)
        assert "TodoCreatedEvent" in info.value.message

    def test_message_id_stable_across_attempts(self):
        self.exchange.publish.side_effect = [RuntimeError("nack"), None]
        event = _event()
        asyncio.run(self.publisher.publish(event))
        ids = {c.args[0].message_id for c in self.exchange.publish.call_args_list}
        assert ids == {event.event_id}

    def test_connection_failure_is_retried(self):
        self.manager._connect = AsyncMock(side_effect=[OSError("refused"), self.conn])
        asyncio.run(self.publisher.publish(_event()))
        assert self.manager._connect.await_count == 2
        assert self.exchange.publish.await_count == 1
        assert self.sleep.delays == pytest.approx([0.2])

    def test_serialization_failure_is_retried_then_wrapped(self):
        event = _AttachmentAddedEvent(todo_id="t-1", attachment=_Unprintable())
        with pytest.raises(PublishError) as info:
            asyncio.run(self.publisher.publish(event))
        assert info.value.attempts == 4
        assert isinstance(info.value.__cause__, SerializationError)
        assert info.value.pending_events == (event,)
        assert self.sleep.delays == pytest.approx([0.2, 0.4, 0.8])
        self.exchange.publish.assert_not_awaited()

    def test_failed_topology_setup_closes_each_channel(self):
        channels = [_channel_rejecting_topology() for _ in range(4)]
        self.conn.channel = AsyncMock(side_effect=channels)
        with pytest.raises(PublishError) as info:
            asyncio.run(self.publisher.publish(_event()))
        assert str(info.value.__cause__) == "ACCESS_REFUSED"
        assert self.conn.channel.await_count == 4
        for channel in channels:
            channel.close.assert_awaited_once()
        assert self.publisher._channel is None

    def test_channel_close_failure_keeps_setup_error(self):
        channels = [_channel_rejecting_topology(OSError("socket gone")) for _ in range(4)]
        self.conn.channel = AsyncMock(side_effect=channels)
        with pytest.raises(PublishError) as info:
            asyncio.run(self.publisher.publish(_event()))
        assert isinstance(info.value.__cause__, RuntimeError)
        assert str(info.value.__cause__) == "ACCESS_REFUSED"

    def test_manager_closed_mid_retry_is_not_retried(self):
        settings = RabbitMQSettings(publish_base_delay=0.0)
        publisher = RabbitMQEventPublisher(self.manager, settings)

        async def close_then_fail(*args, **kwargs):
            await self.manager.close()
            raise RuntimeError("connection reset")

        self.exchange.publish.side_effect = close_then_fail
        with pytest.raises(InvalidStateError):
            asyncio.run(publisher.publish(_event()))
        assert self.exchange.publish.await_count == 1

    def test_cancelled_during_backoff_propagates(self):
        self.exchange.publish.side_effect = RuntimeError("nack")
        policy = RetryPolicy(max_attempts=4, backoff=ExponentialBackoff(base_delay=5.0))
        publisher = RabbitMQEventPublisher(self.manager, self.settings, retry_policy=policy)

        async def run():
            task = asyncio.create_task(publisher.publish(_event()))
            await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run())
        assert self.exchange.publish.await_count == 1


class TestRabbitMQEventPublisherClose:
    def setup_method(self):
        self.conn, self.channel, self.exchange, _ = _make_mock_broker()
        self.connect = AsyncMock(return_value=self.conn)
        self.settings = RabbitMQSettings()
        self.manager = RabbitMQConnectionManager(self.settings, connect=self.connect)
        self.publisher = RabbitMQEventPublisher(self.manager, self.settings)

    def test_close_closes_channel(self):
        async def run():
            await self.publisher.publish(_event())
            await self.publisher.close()

        asyncio.run(run())
        self.channel.close.assert_awaited_once()

    def test_publish_after_close_fails_fast(self):
        asyncio.run(self.publisher.close())
        with pytest.raises(InvalidStateError):
            asyncio.run(self.publisher.publish(_event()))
        self.connect.assert_not_called()

    def test_publish_after_manager_closed_fails_fast(self):
        asyncio.run(self.manager.close())
        with pytest.raises(InvalidStateError):
            asyncio.run(self.publisher.publish(_event()))
        self.exchange.publish.assert_not_called()
