"""Kernel messaging – camelCase JSON serializer for domain events."""
from __future__ import annotations

import dataclasses
import enum
import json
import types
import typing
from datetime import datetime
from typing import Any, TypeVar

from todos.kernel.ddd.domain_event import DomainEvent
from todos.kernel.errors import SerializationError

TEvent = TypeVar("TEvent", bound=DomainEvent)


def to_camel_case(name: str) -> str:
    """``todo_id`` -> ``todoId``."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _fold(name: str) -> str:
    return name.replace("_", "").lower()


def _encode_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class EventSerializer:
    """Compact JSON with camelCase keys.

    Decoding matches keys case-insensitively, so ``todoId``, ``TodoId`` and
    ``todo_id`` all land on the ``todo_id`` field.
    """

    def serialize(self, event: DomainEvent) -> bytes:
        try:
            payload = {to_camel_case(k): _encode_value(v) for k, v in event.to_dict().items()}
            return json.dumps(payload, separators=(",", ":"), default=str).encode()
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Could not serialize {event.event_type}",
                payload_type=event.event_type,
                cause=exc,
            ) from exc

    def deserialize(self, data: bytes | str, event_type: type[TEvent]) -> TEvent:
        try:
            raw = json.loads(data)
        except ValueError as exc:
            raise SerializationError(
                "Payload is not valid JSON", payload_type=event_type.__name__, cause=exc
            ) from exc
        if not isinstance(raw, dict):
            raise SerializationError(
                "Payload must be a JSON object", payload_type=event_type.__name__
            )

        folded = {_fold(k): v for k, v in raw.items()}
        hints = typing.get_type_hints(event_type)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(event_type):
            key = _fold(field.name)
            if key in folded:
                kwargs[field.name] = self._decode_value(folded[key], hints.get(field.name))
        try:
            return event_type(**kwargs)
        except TypeError as exc:
            raise SerializationError(
                f"Payload does not match {event_type.__name__}",
                payload_type=event_type.__name__,
                cause=exc,
            ) from exc

    def _decode_value(self, value: Any, hint: Any) -> Any:
        if value is None or hint is None:
            return value
        candidates = typing.get_args(hint) if isinstance(hint, types.UnionType) else (hint,)
        for candidate in candidates:
            if candidate is datetime and isinstance(value, str):
                return datetime.fromisoformat(value)
            if isinstance(candidate, type) and issubclass(candidate, enum.Enum):
                return candidate(value)
        return value


__all__ = ["EventSerializer", "to_camel_case"]
