"""Flush an aggregate's recorded events to the publisher after it was persisted."""
from __future__ import annotations

from todos.kernel.ddd import AggregateRoot
from todos.kernel.errors import PublishError
from todos.kernel.messaging import EventPublisher
from todos.observability.logging import get_logger

logger = get_logger(__name__)


class DomainEventDispatcher:
    """Publish an aggregate's buffered events one at a time, in buffer order.

    Must only be called once the aggregate's state change is committed. Each
    publish is awaited before the next one starts. The buffer is cleared only
    when every event went out.

    If event *k* fails, events ``1..k-1`` have already been delivered and
    there is no rollback. The raised :class:`PublishError` carries events
    ``k..n`` in ``pending_events``, and the aggregate's buffer is left as it
    was. Delivery is therefore at-least-once: replaying the same request can
    emit the earlier events again.
    """

    def __init__(self, publisher: EventPublisher) -> None:
        self._publisher = publisher

    async def dispatch(self, aggregate: AggregateRoot) -> int:
        """Publish and clear the aggregate's events; return how many were sent."""
        events = aggregate.domain_events
        for index, event in enumerate(events):
            try:
                await self._publisher.publish(event)
            except PublishError as exc:
                logger.error(
                    "event_dispatch_aborted",
                    aggregate_id=str(aggregate.id),
                    event_type=event.event_type,
                    delivered=index,
                    pending=len(events) - index,
                )
                raise PublishError(
                    event.event_type,
                    exc.message,
                    attempts=exc.attempts,
                    pending_events=events[index:],
                    cause=exc.cause,
                ) from exc
        aggregate.clear_events()
        if events:
            logger.debug("events_dispatched", aggregate_id=str(aggregate.id), count=len(events))
        return len(events)


__all__ = ["DomainEventDispatcher"]
