"""Clock sources for polling waits.

Observers never read the wall clock directly. They hold a Clock, which is
either the SystemClock or a VirtualClock whose sleeps return instantly and
only advance simulated time. The virtual clock makes waits deterministic
in tests:

    clock = VirtualClock()
    clock.sleep(5.0)      # returns immediately
    clock.now()           # 5.0
"""

import logging
import threading
import time
from typing import Protocol

logger = logging.getLogger(__name__)


class Clock(Protocol):
    """Time source used by observers."""

    def now(self) -> float:
        """Current time in seconds."""
        ...

    def sleep(self, seconds: float, interrupt: threading.Event | None = None) -> None:
        """Suspend for seconds, returning early once interrupt is set."""
        ...


class SystemClock:
    """Real monotonic time."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, interrupt: threading.Event | None = None) -> None:
        if interrupt is None:
            time.sleep(seconds)
        else:
            interrupt.wait(seconds)


class VirtualClock:
    """Simulated clock; sleeping advances virtual time without waiting.

    Attributes:
        sleeps: Durations of all sleeps performed, in order
    """

    def __init__(self, start: float = 0.0) -> None:
        """Initialize VirtualClock.

        Args:
            start: Initial virtual time in seconds
        """
        self._time = start
        self._lock = threading.Lock()
        self.sleeps: list[float] = []

    def now(self) -> float:
        with self._lock:
            return self._time

    def sleep(self, seconds: float, interrupt: threading.Event | None = None) -> None:
        if interrupt is not None and interrupt.is_set():
            return
        with self._lock:
            self._time += seconds
            self.sleeps.append(seconds)
        logger.debug(f"VirtualClock.sleep: {seconds}s, now {self._time}s")

    def advance(self, seconds: float) -> None:
        """Move virtual time forward without recording a sleep."""
        with self._lock:
            self._time += seconds

    def set_time(self, value: float) -> None:
        with self._lock:
            self._time = value
