"""Live screen: a capture source combined with a finder.

The capture source is any zero-argument callable producing a fresh
PixelImage, for example a wrapper around a screenshot library. Patterns
may be given as PixelImage or as a zero-argument callable returning one
(a pattern supplier); suppliers are resolved on every call, so a
pattern can change between polling ticks.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence

from ...find.finders import BadCharacterFinder, ImagePositionFinder
from ...model.element import PixelImage, Position

PatternSource = PixelImage | Callable[[], PixelImage]


def resolve_pattern(source: PatternSource) -> PixelImage:
    """Return the pattern image of a PixelImage or pattern supplier."""
    if isinstance(source, PixelImage):
        return source
    return source()


class Screen:
    """Answers pattern queries against the current content of a capture source.

    Every query takes one fresh snapshot; queries over several patterns
    evaluate all of them on the same snapshot.

    Attributes:
        finder: Engine used for all searches
    """

    def __init__(
        self, capture: Callable[[], PixelImage], finder: ImagePositionFinder | None = None
    ) -> None:
        """Initialize the screen.

        Args:
            capture: Zero-argument callable returning the current screen image
            finder: Search engine, defaults to BadCharacterFinder()
        """
        self._capture = capture
        self.finder = finder or BadCharacterFinder()

    def capture(self) -> PixelImage:
        return self._capture()

    def position_of(self, pattern: PatternSource) -> Position | None:
        """Topmost-then-leftmost position of the pattern, or None."""
        return self.finder.find(self.capture(), resolve_pattern(pattern))

    def position_of_any(self, patterns: Iterable[PatternSource]) -> Position | None:
        """Position of the first pattern, in iteration order, that is present."""
        screen = self.capture()
        for pattern in patterns:
            position = self.finder.find(screen, resolve_pattern(pattern))
            if position is not None:
                return position
        return None

    def positions_of(self, patterns: Iterable[PatternSource]) -> dict[PixelImage, list[Position]]:
        """All non-overlapping positions of every pattern; absent patterns map to []."""
        images = [resolve_pattern(pattern) for pattern in patterns]
        return self.finder.find_all_of(self.capture(), images)

    def image_at(self, pattern: PatternSource, position: Position) -> bool:
        """Check whether the pattern is currently shown at position.

        A pattern that would not fit on the screen at position is not there.
        """
        return self._image_at(self.capture(), resolve_pattern(pattern), position)

    def images_at_one_position(
        self, positions: Mapping[PixelImage, Sequence[Position]]
    ) -> dict[PixelImage, bool]:
        """For each pattern, check whether it is still at any of its positions."""
        screen = self.capture()
        return {
            pattern: any(self._image_at(screen, pattern, position) for position in candidates)
            for pattern, candidates in positions.items()
        }

    def _image_at(self, screen: PixelImage, pattern: PixelImage, position: Position) -> bool:
        if not self.finder.fits(screen, pattern, position.x, position.y):
            return False
        return self.finder.at(screen, pattern, position)
