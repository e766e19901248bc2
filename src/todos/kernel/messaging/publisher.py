"""Kernel messaging – EventPublisher port."""
from __future__ import annotations

import abc

from todos.kernel.ddd.domain_event import DomainEvent


class EventPublisher(abc.ABC):
    """Port: deliver one domain event to the outside world.

    Implementations either return normally (delivered) or raise. Callers are
    responsible for sequencing calls and for deciding what to do with the
    aggregate's buffer after a failure.
    """

    @abc.abstractmethod
    async def publish(self, event: DomainEvent) -> None: ...


__all__ = ["EventPublisher"]
