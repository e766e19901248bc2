"""Unit tests for the clock implementations."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from todos.kernel.time import Clock, FrozenClock, SystemClock, utc_now


class TestSystemClock:
    def test_is_utc(self):
        now = SystemClock().now()
        assert now.tzinfo is UTC
        assert abs(SystemClock().timestamp() - int(now.timestamp())) <= 1

    def test_is_a_clock(self):
        assert isinstance(SystemClock(), Clock)

    def test_utc_now(self):
        assert utc_now().tzinfo is UTC


class TestFrozenClock:
    def setup_method(self):
        self.clock = FrozenClock(datetime(2026, 1, 1, tzinfo=UTC))

    def test_does_not_move(self):
        assert self.clock.now() == self.clock.now()
        assert self.clock.timestamp() == 1767225600

    def test_advance_by_kwargs(self):
        assert self.clock.advance(seconds=30) == datetime(2026, 1, 1, 0, 0, 30, tzinfo=UTC)
        assert self.clock.timestamp() == 1767225630

    def test_advance_by_delta(self):
        self.clock.advance(timedelta(hours=2))
        assert self.clock.now().hour == 2

    def test_set(self):
        target = datetime(2030, 5, 1, tzinfo=UTC)
        self.clock.set(target)
        assert self.clock.now() == target

    def test_naive_datetime_rejected(self):
        with pytest.raises(ValueError):
            FrozenClock(datetime(2026, 1, 1))
