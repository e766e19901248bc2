"""Testing fakes – FakeClock."""
from __future__ import annotations

from datetime import UTC, datetime

from todos.kernel.time import FrozenClock

EPOCH = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock(FrozenClock):
    """Frozen clock starting at :data:`EPOCH` that counts how often it is read."""

    def __init__(self, at: datetime = EPOCH) -> None:
        super().__init__(at)
        self.reads = 0

    def now(self) -> datetime:
        self.reads += 1
        return super().now()

    def tick(self, seconds: float = 1.0) -> datetime:
        return self.advance(seconds=seconds)


__all__ = ["EPOCH", "FakeClock"]
