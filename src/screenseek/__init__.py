"""screenseek: exact pattern search on screen images and waits built on it.

Typical use:

    from screenseek import PixelImage, Screen, ScreenObserver

    screen = Screen(grab_screen)          # grab_screen() -> PixelImage
    observer = ScreenObserver(screen)
    position = observer.wait_until(pattern, timeout=5.0)
"""

from .control import Observer, Screen, ScreenObserver, WaitHandle
from .exceptions import (
    ConsistencyViolationError,
    ImageExportError,
    ImageProcessingError,
    InvalidArgumentError,
    OutOfBoundsError,
    ScreenSeekException,
)
from .find import (
    BadCharacterFinder,
    BadCharacterPattern,
    BruteForceFinder,
    ImagePositionFinder,
    ImagePositionFinderBenchmark,
    PatternRowAnalysis,
    TemplateMatchFinder,
    analyze_row,
    best_row,
)
from .model import PixelImage, Position, Section, argb
from .util import ImageExporter, StopWatch, SystemClock, VirtualClock

__version__ = "0.1.0"

__all__ = [
    # Model
    "PixelImage",
    "Position",
    "Section",
    "argb",
    # Find
    "ImagePositionFinder",
    "BruteForceFinder",
    "BadCharacterFinder",
    "TemplateMatchFinder",
    "ImagePositionFinderBenchmark",
    "BadCharacterPattern",
    "PatternRowAnalysis",
    "analyze_row",
    "best_row",
    # Control
    "Observer",
    "Screen",
    "ScreenObserver",
    "WaitHandle",
    # Util
    "ImageExporter",
    "StopWatch",
    "SystemClock",
    "VirtualClock",
    # Exceptions
    "ScreenSeekException",
    "InvalidArgumentError",
    "OutOfBoundsError",
    "ConsistencyViolationError",
    "ImageProcessingError",
    "ImageExportError",
]
