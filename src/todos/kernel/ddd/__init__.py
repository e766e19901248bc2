"""DDD building blocks – public re-export surface."""

from todos.kernel.ddd.aggregate import AggregateRoot
from todos.kernel.ddd.domain_event import DomainEvent

__all__ = ["AggregateRoot", "DomainEvent"]
