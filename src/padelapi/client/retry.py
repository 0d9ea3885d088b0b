"""Exponential-backoff retry policy.

:class:`RetryPolicy` wraps any zero-argument coroutine function, so it is
usable for work other than HTTP calls.  Whether a failure is worth another
attempt is decided by a predicate over the raised exception; the default,
:func:`is_retryable`, accepts only transient failures (no response, an
attempt-level timeout, or a 5xx status) and lets 4xx errors propagate
immediately.

Cancellation (for instance the caller's deadline firing) interrupts the
pending sleep and stops any further attempts.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from padelapi.exceptions import HttpStatusError, NetworkError, TimeoutError_
from padelapi.models import RetryConfig
from padelapi.output import get_output

T = TypeVar("T")

RetryPredicate = Callable[[BaseException], bool]


def is_retryable(exc: BaseException) -> bool:
    """Default retry predicate: network errors, timeouts and 5xx statuses."""
    if isinstance(exc, (NetworkError, TimeoutError_)):
        return True
    if isinstance(exc, HttpStatusError):
        return exc.status_code >= 500
    return False


class RetryPolicy:
    """Retry a failing async operation with exponentially growing delays.

    Args:
        max_attempts: Total number of attempts, the first one included.
        initial_delay: Seconds to wait before the second attempt.
        max_delay: Upper bound for any single delay.
        backoff_factor: Multiplier applied to the delay per attempt.
        should_retry: Predicate deciding if an exception is worth another
            attempt.  Defaults to :func:`is_retryable`.
        sleep: Coroutine function used to wait between attempts.

    Example::

        policy = RetryPolicy(max_attempts=3, initial_delay=1.0)
        result = await policy.run(lambda: fetch_standings(club_id))
    """

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 5.0,
        backoff_factor: float = 2.0,
        should_retry: Optional[RetryPredicate] = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.backoff_factor = backoff_factor
        self.should_retry = should_retry or is_retryable
        self._sleep = sleep

    @classmethod
    def from_config(
        cls,
        config: RetryConfig,
        should_retry: Optional[RetryPredicate] = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> RetryPolicy:
        """Build a policy from a :class:`~padelapi.models.RetryConfig`."""
        return cls(
            max_attempts=config.max_attempts,
            initial_delay=config.initial_delay,
            max_delay=config.max_delay,
            backoff_factor=config.backoff_factor,
            should_retry=should_retry,
            sleep=sleep,
        )

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number *attempt* (1-based)."""
        delay = self.initial_delay * self.backoff_factor ** (attempt - 1)
        return min(delay, self.max_delay)

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run *operation* until it succeeds or retrying stops.

        Returns:
            The operation's result.

        Raises:
            Exception: The last attempt's exception, unchanged, once
                ``max_attempts`` is reached or the predicate rejects it.
        """
        output = get_output()
        attempt = 1
        while True:
            try:
                return await operation()
            except Exception as exc:
                if attempt >= self.max_attempts or not self.should_retry(exc):
                    raise
                delay = self.delay_for(attempt)
                output.debug(
                    f"{type(exc).__name__}: {exc}, retrying in {delay:g}s "
                    f"(attempt {attempt + 1}/{self.max_attempts})"
                )
                await self._sleep(delay)
                attempt += 1
