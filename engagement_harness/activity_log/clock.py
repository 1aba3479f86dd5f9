# engagement_harness/activity_log/clock.py
import time
from typing import Callable


class MonotonicClock:
    """
    Elapsed-time clock anchored at construction.

    Readings come from a monotonic counter, so they never go backwards even if
    the wall clock is adjusted. Values are rounded to millisecond precision.
    """

    def __init__(self, counter: Callable[[], float] = time.perf_counter):
        self._counter = counter
        self._origin = counter()
        self._last = 0.0

    def now(self) -> float:
        elapsed = round(self._counter() - self._origin, 3)
        # Rounding can land a reading just below the previous one
        if elapsed < self._last:
            elapsed = self._last
        self._last = elapsed
        return elapsed
