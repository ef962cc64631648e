"""
Huawei Dongle Client - Retry Mechanism

This module provides retry functionality with exponential backoff and jitter for
transient failures. Whether an error is worth retrying is read from the error's
``retryable`` flag, which the taxonomy sets when the error is classified.
"""

import asyncio
import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .exceptions import ConfigurationError, DongleError

logger = logging.getLogger("huawei-dongle")

T = TypeVar("T")

JITTER_MIN = 0.75
JITTER_MAX = 1.25


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry mechanism with exponential backoff.

    Attributes:
        max_attempts: Total number of attempts, including the first one
        initial_delay: Delay in seconds before the first retry
        max_delay: Upper bound in seconds for any single delay
        backoff_multiplier: Growth factor applied per attempt
        jitter: Whether to randomize delays to avoid synchronized retries
    """

    max_attempts: int = 3
    initial_delay: float = 0.5
    max_delay: float = 30.0
    backoff_multiplier: float = 2.0
    jitter: bool = True

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ConfigurationError("Retry delays must not be negative")
        if self.backoff_multiplier <= 1.0:
            raise ConfigurationError("backoff_multiplier must be greater than 1.0")

    def base_delay(self, attempt: int) -> float:
        """Delay in seconds before jitter, truncated to whole milliseconds."""
        initial_ms = round(self.initial_delay * 1000)
        max_ms = self._max_delay_ms
        if initial_ms == 0:
            return 0.0
        if initial_ms >= max_ms or attempt >= math.log(max_ms / initial_ms, self.backoff_multiplier):
            # Growth already reached the cap; skip the power so large attempts cannot overflow.
            return max_ms / 1000
        delay_ms = int(initial_ms * (self.backoff_multiplier ** attempt))
        return min(delay_ms, max_ms) / 1000

    def compute_delay(self, attempt: int) -> float:
        """Delay in seconds to wait after the given (zero-based) attempt failed."""
        delay = self.base_delay(attempt)
        if not self.jitter:
            return delay

        jittered_ms = int(delay * 1000 * random.uniform(JITTER_MIN, JITTER_MAX))
        # max_delay also bounds the jittered delay
        return min(jittered_ms, self._max_delay_ms) / 1000

    @property
    def _max_delay_ms(self) -> int:
        return round(self.max_delay * 1000)


class RetryEngine:
    """Runs an async operation under a ``RetryPolicy``."""

    def __init__(self, policy: Optional[RetryPolicy] = None):
        self.policy = policy or RetryPolicy()

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` until it succeeds, fails terminally or attempts run out.

        Args:
            operation: Zero-argument coroutine function

        Returns:
            Result of the first successful invocation

        Raises:
            Exception: The error raised by the last invocation, unchanged
        """
        policy = self.policy

        for attempt in range(policy.max_attempts):
            try:
                result = await operation()
            except DongleError as e:
                if not e.retryable:
                    logger.debug(f"Error is not retryable, failing immediately: {e}")
                    raise

                # Don't retry on last attempt
                if attempt == policy.max_attempts - 1:
                    raise

                delay = policy.compute_delay(attempt)
                logger.info(f"Attempt {attempt + 1} failed, retrying in {delay}s: {e}")
                await asyncio.sleep(delay)
            else:
                if attempt > 0:
                    logger.debug(f"Operation succeeded after {attempt} retries")
                return result

        raise AssertionError("unreachable")  # pragma: no cover


async def retry_with_backoff(
    func: Callable[..., Awaitable[Any]],
    *args,
    retry_policy: Optional[RetryPolicy] = None,
    **kwargs
) -> Any:
    """Retry function with exponential backoff for transient failures.

    Args:
        func: Async function to retry
        *args: Positional arguments to pass to the function
        retry_policy: Policy for the retry mechanism
        **kwargs: Keyword arguments to pass to the function

    Returns:
        Result from the function call

    Raises:
        Exception: Re-raises the last exception if all retry attempts fail
    """
    engine = RetryEngine(retry_policy)
    return await engine.execute(lambda: func(*args, **kwargs))
