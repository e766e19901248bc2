"""Kernel messaging – envelope, serializer and publisher port."""
from todos.kernel.messaging.envelope import (
    HEADER_CORRELATION_ID,
    HEADER_EVENT_TYPE,
    HEADER_SOURCE,
    HEADER_VERSION,
    MessageEnvelope,
)
from todos.kernel.messaging.publisher import EventPublisher
from todos.kernel.messaging.serializer import EventSerializer, to_camel_case

__all__ = [
    "EventPublisher",
    "EventSerializer",
    "HEADER_CORRELATION_ID",
    "HEADER_EVENT_TYPE",
    "HEADER_SOURCE",
    "HEADER_VERSION",
    "MessageEnvelope",
    "to_camel_case",
]
