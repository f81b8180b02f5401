"""Retry with exponential backoff and jitter for upstream calls."""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

from chat_orchestrator.config import settings
from chat_orchestrator.errors import ProviderTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Unauthorized / forbidden: retrying cannot fix bad credentials.
NON_RETRYABLE_STATUSES = frozenset({401, 403})


def error_status(error: BaseException) -> int | None:
    """Extract an HTTP-like status code from an error, if it carries one."""
    status = getattr(error, "status_code", None)
    if status is None:
        status = getattr(error, "status", None)
    return status if isinstance(status, int) else None


def is_retryable(error: BaseException) -> bool:
    """Check whether an error is worth another attempt."""
    return error_status(error) not in NON_RETRYABLE_STATUSES


class RetryExecutor:
    """Runs an async operation with bounded retries.

    The delay before retry n (1-indexed) is
    ``base_delay * 2 ** (n - 1) + uniform(0, max_jitter)`` seconds.
    Cancellation is never retried: asyncio.CancelledError is not an
    Exception subclass and passes straight through.

    Example:
        ```python
        retry = RetryExecutor(max_retries=3, base_delay=1.0)
        completion = await retry.execute(lambda: provider.complete(messages, config))
        ```
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_jitter: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        """Initialize the executor.

        Args:
            max_retries: Additional attempts after the first one
            base_delay: Backoff base in seconds
            max_jitter: Upper bound of the random delay added to each backoff
            sleep: Awaitable sleep; injectable for tests
            rng: Returns a float in [0, 1); injectable for tests
        """
        if max_retries < 0:
            raise ValueError("max_retries must not be negative")

        self._max_retries = max_retries
        self._base_delay = base_delay
        self._max_jitter = max_jitter
        self._sleep = sleep
        self._rng = rng

    @classmethod
    def create(cls) -> "RetryExecutor":
        """Factory method to create RetryExecutor from settings."""
        return cls(
            max_retries=settings.retry_max_retries,
            base_delay=settings.retry_base_delay,
        )

    def backoff_delay(self, attempt: int) -> float:
        """Delay in seconds before the retry following failed attempt ``attempt``."""
        return self._base_delay * 2 ** (attempt - 1) + self._rng() * self._max_jitter

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        timeout: float | None = None,
    ) -> T:
        """Run ``operation`` until it succeeds or retries are exhausted.

        Args:
            operation: Zero-argument callable returning a fresh awaitable per attempt
            timeout: Overall deadline in seconds for all attempts and backoff

        Returns:
            The operation's result

        Raises:
            ProviderTimeoutError: If ``timeout`` elapses; no further attempts are made
            Exception: The last error raised by ``operation``
        """
        if timeout is None:
            return await self._run(operation)

        try:
            return await asyncio.wait_for(self._run(operation), timeout)
        except asyncio.TimeoutError as e:
            raise ProviderTimeoutError(timeout) from e

    async def _run(self, operation: Callable[[], Awaitable[T]]) -> T:
        attempt = 0
        while True:
            try:
                return await operation()
            except Exception as e:
                attempt += 1

                if not is_retryable(e):
                    raise

                if attempt > self._max_retries:
                    raise

                delay = self.backoff_delay(attempt)
                logger.warning(
                    "Request failed (attempt %d), retrying in %dms (status=%s, error=%s)",
                    attempt,
                    round(delay * 1000),
                    error_status(e),
                    str(e)[:100],
                )
                await self._sleep(delay)
