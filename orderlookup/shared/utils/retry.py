"""Async retry with exponential backoff for transient backend failures.

Only the exception types passed in are retried; anything else (including
cancellation) propagates on the first occurrence.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Attempts and delays for with_retry (delays in milliseconds)."""

    max_attempts: int = 3
    initial_delay_ms: int = 100
    max_delay_ms: int = 5000
    backoff_multiplier: float = 2.0

    def delay_ms(self, attempt: int) -> float:
        """Delay before retry number attempt (1-indexed), capped at max_delay_ms."""
        exp = self.initial_delay_ms * (self.backoff_multiplier ** (max(attempt, 1) - 1))
        return min(exp, self.max_delay_ms)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    retry_on: tuple[type[Exception], ...],
    operation_name: str = "operation",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run operation, retrying on retry_on with exponential backoff.

    Args:
        operation: Zero-argument coroutine factory; called once per attempt.
        policy: Attempts and delays.
        retry_on: Exception types that trigger a retry.
        operation_name: Used in log messages.
        sleep: Awaitable sleep (injectable for tests).

    Returns:
        The operation's result.

    Raises:
        The last retry_on exception once attempts are exhausted, or any other
        exception immediately.
    """
    attempts = max(policy.max_attempts, 1)
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except retry_on as e:
            if attempt == attempts:
                logger.warning(
                    "%s failed after %s attempts: %s", operation_name, attempts, e
                )
                raise
            delay_ms = policy.delay_ms(attempt)
            logger.debug(
                "%s attempt %s failed (%s); retrying in %.0f ms",
                operation_name,
                attempt,
                e,
                delay_ms,
            )
            await sleep(delay_ms / 1000.0)
    raise AssertionError("unreachable")
