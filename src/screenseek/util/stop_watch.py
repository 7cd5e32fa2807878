"""Accumulating stop watch with an injectable clock."""

import time
from collections.abc import Callable


class StopWatch:
    """Measures elapsed nanoseconds over one or more start/pause intervals.

    Example:
        watch = StopWatch()
        watch.start()
        work()
        watch.pause()
        watch.start()
        more_work()
        watch.pause()
        watch.duration()  # nanoseconds spent in both calls

    Attributes:
        clock: Zero-argument callable returning a nanosecond timestamp
    """

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns) -> None:
        self.clock = clock
        self._accumulated = 0
        self._started_at: int | None = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        """Start or resume measuring; no-op while running."""
        if self._started_at is None:
            self._started_at = self.clock()

    def pause(self) -> None:
        """Stop measuring and add the interval to the total; no-op while paused."""
        if self._started_at is not None:
            self._accumulated += self.clock() - self._started_at
            self._started_at = None

    def reset(self) -> None:
        self._accumulated = 0
        self._started_at = None

    def duration(self) -> int:
        """Total measured nanoseconds, including a running interval."""
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + self.clock() - self._started_at
