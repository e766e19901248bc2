"""UUID-backed identifier value object."""

from __future__ import annotations

import dataclasses
import uuid

from todos.kernel.errors.domain import ValidationError


@dataclasses.dataclass(frozen=True, slots=True)
class EntityId:
    """Aggregate identifier, stored as a canonical UUID string.

    Examples::

        eid = EntityId.generate()
        eid = EntityId.from_str("7d1e0a8c-7a3b-4b55-9d0e-0f6b3c1f2a11")
        eid = EntityId.from_uuid(some_uuid)
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValidationError("EntityId must not be empty")
        try:
            canonical = str(uuid.UUID(self.value))
        except ValueError as exc:
            raise ValidationError(
                f"EntityId must be a UUID, got {self.value!r}",
                errors=[{"field": "id", "message": "Id must be a valid UUID"}],
            ) from exc
        object.__setattr__(self, "value", canonical)

    @classmethod
    def generate(cls) -> "EntityId":
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_str(cls, value: str) -> "EntityId":
        return cls(value)

    @classmethod
    def from_uuid(cls, value: uuid.UUID) -> "EntityId":
        return cls(str(value))

    def as_uuid(self) -> uuid.UUID:
        return uuid.UUID(self.value)

    def __str__(self) -> str:
        return self.value


__all__ = ["EntityId"]
