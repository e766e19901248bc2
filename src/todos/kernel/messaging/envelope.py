"""Kernel messaging – transport-agnostic message envelope."""
from __future__ import annotations

import dataclasses
from typing import Any, Final

HEADER_EVENT_TYPE: Final = "EventType"
HEADER_SOURCE: Final = "Source"
HEADER_VERSION: Final = "Version"
HEADER_CORRELATION_ID: Final = "CorrelationId"


@dataclasses.dataclass(frozen=True)
class MessageEnvelope:
    """Serialized event plus the transport metadata sent with it."""

    body: bytes
    message_id: str
    timestamp: int
    headers: dict[str, Any] = dataclasses.field(default_factory=dict)
    content_type: str = "application/json"
    persistent: bool = True

    @property
    def event_type(self) -> str | None:
        return self.headers.get(HEADER_EVENT_TYPE)

    @property
    def correlation_id(self) -> str | None:
        return self.headers.get(HEADER_CORRELATION_ID)


__all__ = [
    "HEADER_CORRELATION_ID",
    "HEADER_EVENT_TYPE",
    "HEADER_SOURCE",
    "HEADER_VERSION",
    "MessageEnvelope",
]
