"""Resilience – retry with configurable backoff and jitter strategies."""
from todos.resilience.retry.delays import (
    BackoffStrategy,
    ExponentialBackoff,
    JitterStrategy,
    NoJitter,
)
from todos.resilience.retry.policy import RetryPolicy

__all__ = [
    "BackoffStrategy",
    "ExponentialBackoff",
    "JitterStrategy",
    "NoJitter",
    "RetryPolicy",
]
