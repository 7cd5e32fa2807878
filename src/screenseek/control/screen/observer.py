"""Polling primitives turning a one-shot lookup into a bounded wait.

A wait repeatedly calls a lookup function, one call per tick, sleeping
refresh_interval seconds on the observer's clock between ticks until the
lookup succeeds or the timeout elapses. Running out of time is not an
error; the wait returns None.

Asynchronous waits run on a thread pool and are controlled through a
WaitHandle. Cancelling a handle stops the polling loop at the next check:
no further lookups start, and the result of a lookup that was in flight
is discarded.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Any, Generic, TypeVar

from ...config import get_settings
from ...exceptions import InvalidArgumentError
from ...util.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_set(event: threading.Event | None) -> bool:
    return event is not None and event.is_set()


class WaitHandle(Generic[T]):
    """Handle of a wait running on the observer's worker pool."""

    def __init__(self, future: "Future[T | None]", cancel_event: threading.Event) -> None:
        self._future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Stop polling; no lookup starts after this call."""
        self._cancel_event.set()
        self._future.cancel()

    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> T | None:
        """Block until the wait has finished and return its outcome.

        Args:
            timeout: Seconds to block at most, None blocks until done

        Returns:
            The wait's result, or None if the handle was cancelled

        Raises:
            concurrent.futures.TimeoutError: If the wait did not finish in time
        """
        try:
            value = self._future.result(timeout)
        except CancelledError:
            return None
        return None if self.cancelled() else value


class Observer:
    """Bounded, interval based polling on an explicit clock.

    Each wait call is independent: it holds its own lookup functions and
    deadline, and its lookups run strictly one after another.

    Attributes:
        clock: Time source for deadlines and sleeps
        max_workers: Size of the worker pool for asynchronous waits
    """

    def __init__(self, clock: Clock | None = None, max_workers: int | None = None) -> None:
        """Initialize the observer.

        Args:
            clock: Time source, defaults to the SystemClock
            max_workers: Worker threads, defaults to the settings
        """
        self.clock: Clock = clock or SystemClock()
        self.max_workers = max_workers or get_settings().max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    @property
    def executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="screenseek-wait"
                )
                logger.info(f"Observer worker pool started with {self.max_workers} workers")
            return self._executor

    def wait_until_present(
        self,
        lookup: Callable[[], T | None],
        timeout: float,
        refresh_interval: float,
        cancel_event: threading.Event | None = None,
    ) -> T | None:
        """Poll lookup until it returns a value other than None.

        A timeout of 0 performs exactly one lookup and never sleeps.

        Args:
            lookup: Zero-argument function returning a value or None
            timeout: Seconds to keep polling, measured on the clock
            refresh_interval: Seconds between two lookups
            cancel_event: Set to stop polling early

        Returns:
            The first value returned by lookup, or None on timeout

        Raises:
            InvalidArgumentError: If timeout < 0 or refresh_interval <= 0
        """
        self.ensure_timing(timeout, refresh_interval)
        deadline = self.clock.now() + timeout
        ticks = 0

        while not _is_set(cancel_event):
            result = lookup()
            ticks += 1
            if _is_set(cancel_event):
                break
            if result is not None:
                logger.debug(f"wait_until_present satisfied after {ticks} lookups")
                return result

            remaining = deadline - self.clock.now()
            if remaining <= 0:
                logger.debug(f"wait_until_present timed out after {ticks} lookups")
                return None
            self.clock.sleep(min(refresh_interval, remaining), cancel_event)

        logger.debug("wait_until_present cancelled")
        return None

    def wait_while_present(
        self,
        lookup: Callable[[], T | None],
        presence_check: Callable[[T], bool],
        timeout: float,
        refresh_interval: float,
        cancel_event: threading.Event | None = None,
    ) -> T | None:
        """Wait until a found value is no longer valid.

        The lookup runs once. While its value passes presence_check the
        observer keeps polling; the first tick on which the check fails
        ends the wait.

        Returns:
            None once the value is gone (or was never there), otherwise the
            last known value when the timeout elapses

        Raises:
            InvalidArgumentError: If timeout < 0 or refresh_interval <= 0
        """
        last, vanished = self._watch(
            lookup, presence_check, timeout, refresh_interval, cancel_event
        )
        return None if vanished else last

    def wait_until_absent(
        self,
        lookup: Callable[[], T | None],
        presence_check: Callable[[T], bool],
        timeout: float,
        refresh_interval: float,
        cancel_event: threading.Event | None = None,
    ) -> T | None:
        """Counterpart of wait_while_present reporting what disappeared.

        Returns:
            The value found by the lookup once presence_check fails for it,
            None if the lookup found nothing or the timeout elapsed first

        Raises:
            InvalidArgumentError: If timeout < 0 or refresh_interval <= 0
        """
        last, vanished = self._watch(
            lookup, presence_check, timeout, refresh_interval, cancel_event
        )
        return last if vanished else None

    def _watch(
        self,
        lookup: Callable[[], T | None],
        presence_check: Callable[[T], bool],
        timeout: float,
        refresh_interval: float,
        cancel_event: threading.Event | None,
    ) -> tuple[T | None, bool]:
        """Run one lookup, then re-check its value every tick.

        Returns:
            The looked up value (None if absent or cancelled) and whether
            presence_check failed for it before the deadline
        """
        self.ensure_timing(timeout, refresh_interval)
        deadline = self.clock.now() + timeout

        if _is_set(cancel_event):
            return None, False
        last = lookup()
        if last is None or _is_set(cancel_event):
            return None, False

        while True:
            remaining = deadline - self.clock.now()
            if remaining <= 0:
                logger.debug("Watched value still present at timeout")
                return last, False
            self.clock.sleep(min(refresh_interval, remaining), cancel_event)
            if _is_set(cancel_event):
                logger.debug("Watch cancelled")
                return None, False
            present = presence_check(last)
            if _is_set(cancel_event):
                return None, False
            if not present:
                return last, True

    def submit(self, wait: Callable[..., T | None], *args: Any, **kwargs: Any) -> WaitHandle[T]:
        """Run a wait method on the worker pool.

        The wait receives a fresh ``cancel_event`` keyword argument bound to
        the returned handle.
        """
        cancel_event = threading.Event()
        future = self.executor.submit(wait, *args, cancel_event=cancel_event, **kwargs)
        return WaitHandle(future, cancel_event)

    @staticmethod
    def ensure_timing(timeout: float, refresh_interval: float) -> None:
        if timeout < 0:
            raise InvalidArgumentError(
                f"Timeout must not be negative, got {timeout}", timeout=timeout
            )
        if refresh_interval <= 0:
            raise InvalidArgumentError(
                f"Refresh interval must be positive, got {refresh_interval}",
                refresh_interval=refresh_interval,
            )

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool."""
        with self._executor_lock:
            if self._executor is not None:
                self._executor.shutdown(wait=wait, cancel_futures=not wait)
                self._executor = None

    def __enter__(self) -> "Observer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
