"""Resilience – RetryPolicy."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from todos.observability.logging import get_logger
from todos.resilience.retry.delays import (
    BackoffStrategy,
    ExponentialBackoff,
    JitterStrategy,
    NoJitter,
)

T = TypeVar("T")
logger = get_logger(__name__)

OnRetry = Callable[[int, Exception, float], None]
Sleep = Callable[[float], Awaitable[None]]


class RetryPolicy:
    """Bounded retry for a single asynchronous operation.

    ``max_attempts`` counts the first call, so ``max_attempts=4`` means one
    call plus three retries. When every attempt fails the last exception is
    re-raised unchanged.

    Exceptions matching ``fatal_exceptions`` are re-raised on the spot even
    when they are also retryable, e.g. a component that was shut down while
    the operation was in flight.

    The wait between attempts goes through ``sleep`` (``asyncio.sleep`` by
    default). Cancelling the surrounding task during that wait raises
    ``asyncio.CancelledError``, which is not an ``Exception`` and therefore
    ends the loop immediately.
    """

    def __init__(
        self,
        max_attempts: int = 4,
        backoff: BackoffStrategy | None = None,
        jitter: JitterStrategy | None = None,
        retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
        fatal_exceptions: tuple[type[Exception], ...] = (),
        sleep: Sleep | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.backoff = backoff or ExponentialBackoff()
        self.jitter = jitter or NoJitter()
        self.retryable_exceptions = retryable_exceptions
        self.fatal_exceptions = fatal_exceptions
        self._sleep: Sleep = sleep or asyncio.sleep

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, self.fatal_exceptions):
            return False
        return isinstance(exc, self.retryable_exceptions)

    def delays(self) -> list[float]:
        """The waits this policy would use between attempts, before jitter."""
        return [self.backoff.compute(attempt) for attempt in range(1, self.max_attempts)]

    async def execute_async(
        self,
        func: Callable[[], Awaitable[T]],
        on_retry: OnRetry | None = None,
    ) -> T:
        """Execute *func* with retry; *on_retry* sees ``(attempt, exc, delay)``."""
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await func()
            except Exception as exc:
                if not self._should_retry(exc) or attempt == self.max_attempts:
                    raise
                delay = self.jitter.apply(self.backoff.compute(attempt))
                if on_retry is not None:
                    on_retry(attempt, exc, delay)
                logger.debug("retry_scheduled", attempt=attempt, delay=round(delay, 3), exc=repr(exc))
                await self._sleep(delay)
        raise AssertionError("unreachable")  # pragma: no cover


__all__ = ["RetryPolicy"]
