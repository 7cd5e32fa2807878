"""Cross-validating benchmark over several finder engines.

ImagePositionFinderBenchmark is itself an ImagePositionFinder. Each call
runs the same operation on every wrapped engine, times it, and insists
that all engines return equal results. A disagreement points to a bug in
one engine; the screen is exported for postmortem and the call fails.

The per-engine stop watches are not synchronised. Callers sharing one
benchmark between threads must serialise their calls.
"""

import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from ..config import get_settings
from ..exceptions import ConsistencyViolationError, InvalidArgumentError
from ..logging import get_logger
from ..model.element import PixelImage, Position
from ..util.image_exporter import ImageExporter
from ..util.stop_watch import StopWatch
from .finders import ImagePositionFinder

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class BenchmarkUnit:
    """A wrapped finder and the time accumulated by its calls."""

    finder: ImagePositionFinder
    stop_watch: StopWatch = field(default_factory=StopWatch)

    @property
    def name(self) -> str:
        return type(self.finder).__name__


class ImagePositionFinderBenchmark(ImagePositionFinder):
    """Runs several finders on identical input and compares their answers.

    Example:
        benchmark = ImagePositionFinderBenchmark(BruteForceFinder(), BadCharacterFinder())
        benchmark.find(screen, pattern)
        print(benchmark.result())

    Attributes:
        export_path: Directory receiving the screen of a failed comparison
        exporter: Writes the diagnostic image
    """

    def __init__(
        self,
        *finders: ImagePositionFinder,
        export_path: str | Path | None = None,
        exporter: ImageExporter | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        """Initialize the benchmark.

        Args:
            finders: Engines to compare, in reporting order
            export_path: Diagnostic image directory, defaults to the settings
            exporter: Image exporter, defaults to ImageExporter()
            clock: Nanosecond clock for the stop watches

        Raises:
            InvalidArgumentError: If no finder is given
        """
        if not finders:
            raise InvalidArgumentError("At least one ImagePositionFinder is required")

        if export_path is None:
            export_path = get_settings().export_path
        self.export_path = Path(export_path)
        self.exporter = exporter or ImageExporter()
        self.units = [BenchmarkUnit(finder, StopWatch(clock)) for finder in finders]

    def _match_positions(self, screen: PixelImage, pattern: PixelImage) -> Iterator[Position]:
        """Every match, overlapping ones included, cross-validated across engines."""
        yield from self._run_on_each_finder(
            "match_positions", screen, lambda f: list(f._match_positions(screen, pattern))
        )

    def find(self, screen: PixelImage, pattern: PixelImage) -> Position | None:
        return self._run_on_each_finder("find", screen, lambda f: f.find(screen, pattern))

    def find_all(self, screen: PixelImage, pattern: PixelImage) -> list[Position]:
        return self._run_on_each_finder("find_all", screen, lambda f: f.find_all(screen, pattern))

    def find_all_of(
        self, screen: PixelImage, patterns: Iterable[PixelImage]
    ) -> dict[PixelImage, list[Position]]:
        patterns = list(patterns)
        return self._run_on_each_finder(
            "find_all_of", screen, lambda f: f.find_all_of(screen, patterns)
        )

    def at(self, screen: PixelImage, pattern: PixelImage, position: Position) -> bool:
        return self._run_on_each_finder("at", screen, lambda f: f.at(screen, pattern, position))

    def at_coordinates(self, screen: PixelImage, pattern: PixelImage, x: int, y: int) -> bool:
        return self._run_on_each_finder(
            "at_coordinates", screen, lambda f: f.at_coordinates(screen, pattern, x, y)
        )

    # Reporting

    def benchmark_result_nanoseconds(self) -> dict[str, int]:
        return {unit.name: unit.stop_watch.duration() for unit in self.units}

    def benchmark_result_milliseconds(self) -> dict[str, float]:
        return {unit.name: unit.stop_watch.duration() / 1_000_000 for unit in self.units}

    def result(self) -> str:
        """One line per finder, ``<name> - <milliseconds>``, in insertion order."""
        return "\n".join(
            f"{unit.name} - {unit.stop_watch.duration() / 1_000_000}" for unit in self.units
        )

    def __str__(self) -> str:
        return self.result()

    def _run_on_each_finder(
        self, operation: str, screen: PixelImage, method: Callable[[ImagePositionFinder], T]
    ) -> T:
        results: list[Any] = []
        for unit in self.units:
            unit.stop_watch.start()
            try:
                results.append(method(unit.finder))
            finally:
                unit.stop_watch.pause()

        first = results[0]
        if any(result != first for result in results[1:]):
            export_file = self.export_path / (
                f"ImagePositionFinderBenchmark_error_{time.time_ns() // 1_000_000}.png"
            )
            self.exporter.export(screen, export_file)
            exception = ConsistencyViolationError(
                operation,
                {unit.name: repr(result) for unit, result in zip(self.units, results)},
                export_file=str(export_file),
            )
            logger.error(
                "finder_results_differ",
                operation=operation,
                results=exception.context["results"],
                export_file=str(export_file),
                stack_info=True,
            )
            raise exception
        return first
