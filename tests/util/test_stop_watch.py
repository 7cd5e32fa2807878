"""Tests for StopWatch."""

from screenseek.util import StopWatch


class FakeNanos:
    """Manually advanced nanosecond clock."""

    def __init__(self) -> None:
        self.value = 0

    def __call__(self) -> int:
        return self.value


class TestStopWatch:
    """Tests for StopWatch."""

    def test_new_watch_is_zero(self):
        watch = StopWatch(FakeNanos())
        assert watch.duration() == 0
        assert not watch.running

    def test_accumulates_intervals(self):
        clock = FakeNanos()
        watch = StopWatch(clock)

        watch.start()
        clock.value = 100
        watch.pause()
        clock.value = 1_000
        watch.start()
        clock.value = 1_050
        watch.pause()

        assert watch.duration() == 150

    def test_running_interval_counts(self):
        clock = FakeNanos()
        watch = StopWatch(clock)
        watch.start()
        clock.value = 40

        assert watch.running
        assert watch.duration() == 40

    def test_start_and_pause_are_idempotent(self):
        clock = FakeNanos()
        watch = StopWatch(clock)

        watch.start()
        clock.value = 10
        watch.start()
        clock.value = 30
        watch.pause()
        watch.pause()

        assert watch.duration() == 30

    def test_reset(self):
        clock = FakeNanos()
        watch = StopWatch(clock)
        watch.start()
        clock.value = 25
        watch.reset()

        assert watch.duration() == 0
        assert not watch.running
