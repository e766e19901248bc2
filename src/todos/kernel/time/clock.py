"""Kernel time – the Clock port and its two implementations.

Aggregates stamp ``created_at``/``completed_at`` and the publisher stamps
envelope timestamps through a :class:`Clock`, never through ``datetime``
directly, so both can be pinned in tests.
"""
from __future__ import annotations

import abc
from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    return datetime.now(UTC)


class Clock(abc.ABC):
    """Port: source of the current UTC time."""

    @abc.abstractmethod
    def now(self) -> datetime: ...

    def timestamp(self) -> int:
        """Whole Unix seconds of :meth:`now`, as carried in AMQP properties."""
        return int(self.now().timestamp())


class SystemClock(Clock):
    def now(self) -> datetime:
        return utc_now()


class FrozenClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, at: datetime) -> None:
        if at.tzinfo is None:
            raise ValueError("FrozenClock needs a timezone-aware datetime")
        self._at = at

    def now(self) -> datetime:
        return self._at

    def set(self, at: datetime) -> None:
        self._at = at

    def advance(self, delta: timedelta | None = None, **kwargs: float) -> datetime:
        """Move forward by *delta* or by ``timedelta(**kwargs)``; returns the new time."""
        self._at += delta if delta is not None else timedelta(**kwargs)
        return self._at


__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now"]
