"""Wait for patterns to appear on or vanish from a live screen."""

import logging
import threading
from collections.abc import Collection, Sequence

from ...config import get_settings
from ...exceptions import InvalidArgumentError
from ...model.element import PixelImage, Position
from ...util.clock import Clock
from .observer import Observer, WaitHandle
from .screen import PatternSource, Screen

logger = logging.getLogger(__name__)


class ScreenObserver(Observer):
    """Polls a Screen until patterns appear or disappear.

    Every wait has a blocking form and an ``_async`` form returning a
    WaitHandle. Arguments are validated in the caller's thread before any
    lookup runs, for both forms.

    Example:
        observer = ScreenObserver(Screen(grab_screen), refresh_interval=0.25)
        position = observer.wait_until(ok_button, timeout=10)
        if position is None:
            ...  # not shown within 10 seconds

    Attributes:
        screen: Live screen the patterns are searched on
        refresh_interval: Default seconds between two lookups
    """

    def __init__(
        self,
        screen: Screen,
        clock: Clock | None = None,
        refresh_interval: float | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize the observer.

        Args:
            screen: Live screen
            clock: Time source, defaults to the SystemClock
            refresh_interval: Default polling interval, defaults to the settings
            max_workers: Worker threads for asynchronous waits

        Raises:
            InvalidArgumentError: If refresh_interval is not positive
        """
        super().__init__(clock, max_workers)
        if refresh_interval is None:
            refresh_interval = get_settings().refresh_interval
        self.ensure_timing(0, refresh_interval)
        self.screen = screen
        self.refresh_interval = refresh_interval

    # wait_until

    def wait_until(
        self,
        pattern: PatternSource,
        timeout: float,
        refresh_interval: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> Position | None:
        """Wait until the pattern is shown.

        Returns:
            Position of the pattern, or None if it did not appear in time
        """
        return self.wait_until_present(
            lambda: self.screen.position_of(pattern),
            timeout,
            self._interval(refresh_interval),
            cancel_event,
        )

    def wait_until_async(
        self, pattern: PatternSource, timeout: float, refresh_interval: float | None = None
    ) -> WaitHandle[Position]:
        self.ensure_timing(timeout, self._interval(refresh_interval))
        return self.submit(self.wait_until, pattern, timeout, refresh_interval)

    # wait_while

    def wait_while(
        self,
        pattern: PatternSource,
        timeout: float,
        refresh_interval: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> Position | None:
        """Wait while the pattern stays where it was first found.

        Returns:
            None once the pattern is gone from that position (or was never
            shown), otherwise its position when the timeout elapses
        """
        return self.wait_while_present(
            lambda: self.screen.position_of(pattern),
            lambda position: self.screen.image_at(pattern, position),
            timeout,
            self._interval(refresh_interval),
            cancel_event,
        )

    def wait_while_async(
        self, pattern: PatternSource, timeout: float, refresh_interval: float | None = None
    ) -> WaitHandle[Position]:
        self.ensure_timing(timeout, self._interval(refresh_interval))
        return self.submit(self.wait_while, pattern, timeout, refresh_interval)

    # wait_until_one

    def wait_until_one(
        self,
        patterns: Sequence[PatternSource],
        timeout: float,
        refresh_interval: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> Position | None:
        """Wait until any of the patterns is shown.

        When several patterns are present on the same tick, the first one
        in sequence order wins.

        Raises:
            InvalidArgumentError: If patterns is empty
        """
        self._ensure_patterns(patterns)
        return self.wait_until_present(
            lambda: self.screen.position_of_any(patterns),
            timeout,
            self._interval(refresh_interval),
            cancel_event,
        )

    def wait_until_one_async(
        self,
        patterns: Sequence[PatternSource],
        timeout: float,
        refresh_interval: float | None = None,
    ) -> WaitHandle[Position]:
        self._ensure_patterns(patterns)
        self.ensure_timing(timeout, self._interval(refresh_interval))
        return self.submit(self.wait_until_one, patterns, timeout, refresh_interval)

    # wait_while_one

    def wait_while_one(
        self,
        patterns: Collection[PatternSource],
        timeout: float,
        refresh_interval: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> dict[PixelImage, list[Position]] | None:
        """Wait until none of the patterns is shown where it was found.

        The positions of all patterns are looked up once. Each following
        tick checks whether any pattern is still at one of those positions;
        a pattern that moved elsewhere counts as gone.

        Returns:
            The position mapping of the initial lookup (every pattern is a
            key) once no pattern remains at its positions. None if no
            pattern was shown at all, or if one was still in place when the
            timeout elapsed

        Raises:
            InvalidArgumentError: If patterns is empty
        """
        self._ensure_patterns(patterns)

        def positions() -> dict[PixelImage, list[Position]] | None:
            found = self.screen.positions_of(patterns)
            return found if any(found.values()) else None

        def any_in_place(found: dict[PixelImage, list[Position]]) -> bool:
            return any(self.screen.images_at_one_position(found).values())

        return self.wait_until_absent(
            positions, any_in_place, timeout, self._interval(refresh_interval), cancel_event
        )

    def wait_while_one_async(
        self,
        patterns: Collection[PatternSource],
        timeout: float,
        refresh_interval: float | None = None,
    ) -> WaitHandle[dict[PixelImage, list[Position]]]:
        self._ensure_patterns(patterns)
        self.ensure_timing(timeout, self._interval(refresh_interval))
        return self.submit(self.wait_while_one, patterns, timeout, refresh_interval)

    def _interval(self, refresh_interval: float | None) -> float:
        return self.refresh_interval if refresh_interval is None else refresh_interval

    @staticmethod
    def _ensure_patterns(patterns: Collection[PatternSource]) -> None:
        if len(patterns) == 0:
            raise InvalidArgumentError("At least one pattern is required")
