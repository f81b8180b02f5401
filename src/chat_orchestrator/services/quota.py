"""Fixed-window request quota.

One QuotaTracker is created at startup and shared by every request.
The window resets lazily: each operation first checks whether the
window has elapsed and, if so, starts a new one at the current time.
"""

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from chat_orchestrator.config import settings


@dataclass
class QuotaWindow:
    """Mutable counter state for the current window."""

    window_start: float
    count: int = 0


@dataclass(frozen=True)
class QuotaStatus:
    """Point-in-time view of the quota."""

    count: int
    capacity: int
    window_seconds: int
    minutes_left: int

    @property
    def remaining(self) -> int:
        return max(0, self.capacity - self.count)


class QuotaTracker:
    """Counts upstream calls in fixed windows and gates new ones.

    Every public method is a single read-modify-write under a lock,
    so concurrent callers never lose an increment. The lock is never
    held across an await.

    Example:
        ```python
        quota = QuotaTracker(capacity=8, window_seconds=3600)
        if quota.allow():
            quota.record()  # once per upstream attempt
        ```
    """

    def __init__(
        self,
        capacity: int = 8,
        window_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the tracker.

        Args:
            capacity: Requests allowed per window
            window_seconds: Window length in seconds
            clock: Returns the current time in seconds; injectable for tests
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self._capacity = capacity
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._window = QuotaWindow(window_start=clock())

    @classmethod
    def create(cls, capacity: int | None = None, window_seconds: int | None = None) -> "QuotaTracker":
        """Factory method to create a QuotaTracker from settings.

        Args:
            capacity: Requests per window. If None, uses settings.
            window_seconds: Window length. If None, uses settings.

        Returns:
            Configured QuotaTracker
        """
        return cls(
            capacity=capacity or settings.quota_capacity,
            window_seconds=window_seconds or settings.quota_window_seconds,
        )

    def _reset_if_elapsed(self, now: float) -> None:
        # Caller holds the lock.
        if now - self._window.window_start >= self._window_seconds:
            self._window.count = 0
            self._window.window_start = now

    def _minutes_left(self, now: float) -> int:
        seconds_left = self._window.window_start + self._window_seconds - now
        return max(1, math.ceil(seconds_left / 60))

    def allow(self) -> bool:
        """Check whether another upstream call fits in the current window."""
        with self._lock:
            self._reset_if_elapsed(self._clock())
            return self._window.count < self._capacity

    def record(self) -> int:
        """Charge one upstream attempt.

        Returns:
            The count for the current window after charging
        """
        with self._lock:
            self._reset_if_elapsed(self._clock())
            self._window.count += 1
            return self._window.count

    def minutes_left(self) -> int:
        """Minutes until the current window resets, rounded up."""
        with self._lock:
            now = self._clock()
            self._reset_if_elapsed(now)
            return self._minutes_left(now)

    def snapshot(self) -> QuotaStatus:
        """Get the current quota status."""
        with self._lock:
            now = self._clock()
            self._reset_if_elapsed(now)
            return QuotaStatus(
                count=self._window.count,
                capacity=self._capacity,
                window_seconds=self._window_seconds,
                minutes_left=self._minutes_left(now),
            )

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def window(self) -> QuotaWindow:
        """Get the underlying window state (for testing)."""
        return self._window
