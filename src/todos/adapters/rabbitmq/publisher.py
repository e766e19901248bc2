"""RabbitMQ adapter – RabbitMQEventPublisher."""
from __future__ import annotations

import asyncio
from uuid import uuid4

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractConnection, AbstractExchange

from todos.adapters.rabbitmq.connection import RabbitMQConnectionManager
from todos.config import RabbitMQSettings
from todos.kernel.ddd import DomainEvent
from todos.kernel.errors import InvalidStateError, PublishError
from todos.kernel.messaging import (
    HEADER_CORRELATION_ID,
    HEADER_EVENT_TYPE,
    HEADER_SOURCE,
    HEADER_VERSION,
    EventPublisher,
    EventSerializer,
    MessageEnvelope,
)
from todos.kernel.time import Clock, SystemClock
from todos.observability.correlation import CorrelationContext
from todos.observability.logging import get_logger
from todos.resilience.retry import ExponentialBackoff, NoJitter, RetryPolicy

logger = get_logger(__name__)


class RabbitMQEventPublisher(EventPublisher):
    """Publish domain events to a durable topic exchange.

    The channel is opened and the topology (exchange, queue, binding) is
    declared once per channel lifetime; if the channel is found closed or
    the manager handed out a different connection, both are redone on the
    next publish. Every message is persistent JSON routed with
    ``settings.routing_key``.

    Each publish is wrapped in a :class:`RetryPolicy` built from the
    settings (four attempts, waits of 0.2 s, 0.4 s and 0.8 s by default).
    Exhausting it raises :class:`PublishError` with the last failure
    chained as its cause.
    :class:`InvalidStateError` is never retried; it means the connection
    manager was closed and propagates as is.
    """

    def __init__(
        self,
        connection_manager: RabbitMQConnectionManager,
        settings: RabbitMQSettings,
        serializer: EventSerializer | None = None,
        clock: Clock | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._connections = connection_manager
        self._settings = settings
        self._serializer = serializer or EventSerializer()
        self._clock: Clock = clock or SystemClock()
        self._retry = retry_policy or RetryPolicy(
            max_attempts=settings.publish_max_attempts,
            backoff=ExponentialBackoff(base_delay=settings.publish_base_delay),
            jitter=NoJitter(),
            fatal_exceptions=(InvalidStateError,),
        )
        self._channel: AbstractChannel | None = None
        self._channel_connection: AbstractConnection | None = None
        self._exchange: AbstractExchange | None = None
        self._setup_lock = asyncio.Lock()
        self._closed = False

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry

    @property
    def closed(self) -> bool:
        return self._closed or self._connections.closed

    # ------------------------------------------------------------------
    # Envelope
    # ------------------------------------------------------------------

    def build_envelope(self, event: DomainEvent) -> MessageEnvelope:
        """Serialize *event* and wrap it with the transport headers."""
        s = self._settings
        message_id = event.event_id if s.stable_message_id else str(uuid4())
        return MessageEnvelope(
            body=self._serializer.serialize(event),
            message_id=message_id,
            timestamp=self._clock.timestamp(),
            headers={
                HEADER_EVENT_TYPE: event.event_type,
                HEADER_SOURCE: s.source,
                HEADER_VERSION: s.schema_version,
                HEADER_CORRELATION_ID: CorrelationContext.current_id() or str(uuid4()),
            },
        )

    @staticmethod
    def to_message(envelope: MessageEnvelope) -> aio_pika.Message:
        return aio_pika.Message(
            body=envelope.body,
            content_type=envelope.content_type,
            delivery_mode=(
                aio_pika.DeliveryMode.PERSISTENT
                if envelope.persistent
                else aio_pika.DeliveryMode.NOT_PERSISTENT
            ),
            message_id=envelope.message_id,
            timestamp=envelope.timestamp,
            headers=envelope.headers,
        )

    # ------------------------------------------------------------------
    # Channel + topology
    # ------------------------------------------------------------------

    def _topology_ready(self, connection: AbstractConnection) -> bool:
        return (
            self._exchange is not None
            and self._channel is not None
            and not self._channel.is_closed
            and self._channel_connection is connection
        )

    async def _ensure_exchange(self) -> AbstractExchange:
        connection = await self._connections.get_connection()
        if self._topology_ready(connection):
            return self._exchange  # type: ignore[return-value]

        async with self._setup_lock:
            if self._topology_ready(connection):
                return self._exchange  # type: ignore[return-value]

            s = self._settings
            channel = await connection.channel()
            try:
                await channel.set_qos(prefetch_count=s.prefetch_count)
                exchange = await channel.declare_exchange(
                    s.exchange_name,
                    aio_pika.ExchangeType.TOPIC,
                    durable=True,
                    auto_delete=False,
                )
                queue = await channel.declare_queue(
                    s.queue_name,
                    durable=True,
                    exclusive=False,
                    auto_delete=False,
                )
                await queue.bind(exchange, routing_key=s.routing_key)
            except BaseException:
                await self._discard_channel(channel)
                raise

            self._channel, self._channel_connection, self._exchange = channel, connection, exchange
            logger.info(
                "rabbitmq_topology_declared",
                exchange=s.exchange_name,
                queue=s.queue_name,
                routing_key=s.routing_key,
            )
            return exchange

    @staticmethod
    async def _discard_channel(channel: AbstractChannel) -> None:
        """Close a channel whose topology setup failed; the setup error wins."""
        if channel.is_closed:
            return
        try:
            await channel.close()
        except Exception as exc:
            logger.warning("rabbitmq_channel_discard_failed", error=repr(exc))

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    async def publish(self, event: DomainEvent) -> None:
        if self.closed:
            raise InvalidStateError(
                "RabbitMQ publisher is closed; no channel is available", component="publisher"
            )

        event_type = event.event_type
        routing_key = self._settings.routing_key
        attempts = 0

        async def _attempt() -> None:
            nonlocal attempts
            attempts += 1
            envelope = self.build_envelope(event)
            logger.debug(
                "event_publishing",
                event_type=event_type,
                event_id=event.event_id,
                message_id=envelope.message_id,
                routing_key=routing_key,
                attempt=attempts,
            )
            exchange = await self._ensure_exchange()
            await exchange.publish(self.to_message(envelope), routing_key=routing_key)
            logger.info(
                "event_published",
                event_type=event_type,
                message_id=envelope.message_id,
                correlation_id=envelope.correlation_id,
                routing_key=routing_key,
                attempt=attempts,
            )

        def _on_retry(attempt: int, exc: Exception, delay: float) -> None:
            logger.warning(
                "event_publish_retry",
                event_type=event_type,
                attempt=attempt,
                max_attempts=self._retry.max_attempts,
                retry_in=round(delay, 3),
                error=repr(exc),
            )

        try:
            await self._retry.execute_async(_attempt, on_retry=_on_retry)
        except InvalidStateError:
            logger.error("event_publish_aborted", event_type=event_type, attempts=attempts)
            raise
        except Exception as exc:
            logger.error(
                "event_publish_failed",
                event_type=event_type,
                event_id=event.event_id,
                attempts=attempts,
                error=repr(exc),
            )
            raise PublishError(
                event_type,
                attempts=attempts,
                pending_events=(event,),
                cause=exc,
            ) from exc

    async def close(self) -> None:
        """Close the channel; later publishes raise :class:`InvalidStateError`."""
        async with self._setup_lock:
            self._closed = True
            channel, self._channel = self._channel, None
            self._exchange = None
            self._channel_connection = None
            if channel is not None and not channel.is_closed:
                await channel.close()
                logger.info("rabbitmq_channel_closed")


__all__ = ["RabbitMQEventPublisher"]
