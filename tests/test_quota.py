"""
Tests for the fixed-window quota tracker.
"""

import threading

import pytest

from chat_orchestrator.services import QuotaTracker
from conftest import CAPACITY, WINDOW


def test_fresh_window_allows(quota):
    """A new tracker allows calls and starts at zero."""
    assert quota.allow() is True
    assert quota.window.count == 0


def test_blocks_at_capacity(quota):
    """After capacity attempts the window is closed."""
    for expected in range(1, CAPACITY + 1):
        assert quota.allow() is True
        assert quota.record() == expected

    assert quota.allow() is False
    assert quota.minutes_left() > 0


def test_allow_does_not_charge(quota):
    """Checking the quota never consumes it."""
    for _ in range(20):
        quota.allow()
    assert quota.window.count == 0


def test_window_resets_after_elapsing(quota, clock):
    """A full window older than the window size resets before the check."""
    quota.window.count = CAPACITY
    quota.window.window_start = clock() - WINDOW - 1

    assert quota.allow() is True
    assert quota.window.count == 0
    assert quota.window.window_start == clock()


def test_window_resets_exactly_at_boundary(quota, clock):
    for _ in range(CAPACITY):
        quota.record()

    clock.advance(WINDOW - 1)
    assert quota.allow() is False

    clock.advance(1)
    assert quota.allow() is True


def test_record_after_reset_starts_new_window(quota, clock):
    for _ in range(CAPACITY):
        quota.record()

    clock.advance(WINDOW + 10)
    assert quota.record() == 1
    assert quota.window.window_start == clock()


def test_minutes_left_rounds_up(quota, clock):
    """Remaining time is reported in whole minutes, rounded up."""
    assert quota.minutes_left() == 60

    clock.advance(90)
    assert quota.minutes_left() == 59

    clock.advance(WINDOW - 90 - 30)
    assert quota.minutes_left() == 1


def test_snapshot(quota):
    quota.record()
    quota.record()

    snapshot = quota.snapshot()
    assert snapshot.count == 2
    assert snapshot.capacity == CAPACITY
    assert snapshot.remaining == CAPACITY - 2
    assert snapshot.window_seconds == WINDOW
    assert 1 <= snapshot.minutes_left <= 60


def test_concurrent_records_are_not_lost():
    """Increments from many threads are all counted."""
    tracker = QuotaTracker(capacity=10_000, window_seconds=WINDOW)

    def worker():
        for _ in range(200):
            tracker.record()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert tracker.window.count == 1600


@pytest.mark.parametrize("capacity, window", [(0, 3600), (8, 0)])
def test_rejects_invalid_limits(capacity, window):
    with pytest.raises(ValueError):
        QuotaTracker(capacity=capacity, window_seconds=window)
