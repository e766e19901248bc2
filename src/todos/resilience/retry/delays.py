"""Resilience – how long to wait between publish attempts.

A :class:`BackoffStrategy` turns the number of failures so far into a base
delay and a :class:`JitterStrategy` may then spread it out. The broker
publisher uses exponential backoff without jitter so that its schedule
(200 ms, 400 ms, 800 ms by default) is predictable in logs and tests.
"""
from __future__ import annotations

import abc
import dataclasses


class BackoffStrategy(abc.ABC):
    @abc.abstractmethod
    def compute(self, attempt: int) -> float:
        """Seconds to wait after the *attempt*-th failure, counted from 1."""


@dataclasses.dataclass(frozen=True)
class ExponentialBackoff(BackoffStrategy):
    """``base_delay * multiplier ** attempt``, capped at ``max_delay``."""

    base_delay: float = 0.1
    max_delay: float = 30.0
    multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1")

    def compute(self, attempt: int) -> float:
        return min(self.base_delay * self.multiplier ** attempt, self.max_delay)


class JitterStrategy(abc.ABC):
    @abc.abstractmethod
    def apply(self, delay: float) -> float: ...


class NoJitter(JitterStrategy):
    def apply(self, delay: float) -> float:
        return delay


__all__ = [
    "BackoffStrategy",
    "ExponentialBackoff",
    "JitterStrategy",
    "NoJitter",
]
