"""Abstract base interface for exact pattern finders.

Defines the contract that all finder engines implement.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

import numpy as np

from ...exceptions import InvalidArgumentError, OutOfBoundsError
from ...model.element import PixelImage, Position


class ImagePositionFinder(ABC):
    """Abstract base class for locating a pattern inside a screen image.

    A pattern matches at a position when each of its opaque pixels equals
    the screen pixel below it once the pattern's top-left corner is placed
    on that position. Fully transparent pattern pixels match anything.

    Concrete engines only implement _match_positions(); the public
    operations are derived from it so that every engine reports results in
    the same order:

    - find(): topmost, then leftmost match
    - find_all(): non-overlapping matches in row-major order
    - find_all_of(): find_all() for several patterns at once
    - at() / at_coordinates(): check a single placement

    Screen and pattern are never modified.
    """

    @abstractmethod
    def _match_positions(self, screen: PixelImage, pattern: PixelImage) -> Iterator[Position]:
        """Yield every position where the pattern matches, in row-major order.

        Matches may overlap. The pattern is guaranteed to be non-empty; it may
        be larger than the screen, in which case nothing is yielded.
        """

    def find(self, screen: PixelImage, pattern: PixelImage) -> Position | None:
        """Return the topmost-then-leftmost match, or None."""
        self._ensure_pattern(pattern)
        return next(iter(self._match_positions(screen, pattern)), None)

    def find_all(self, screen: PixelImage, pattern: PixelImage) -> list[Position]:
        """Return all non-overlapping matches in row-major order.

        Matches are taken greedily in scan order: a match is kept unless it
        overlaps a match kept before it.
        """
        self._ensure_pattern(pattern)
        return self._non_overlapping(
            self._match_positions(screen, pattern), pattern.width, pattern.height
        )

    def find_all_of(
        self, screen: PixelImage, patterns: Iterable[PixelImage]
    ) -> dict[PixelImage, list[Position]]:
        """Run find_all() for several patterns.

        Every pattern is a key of the result, also when it was not found.

        Raises:
            InvalidArgumentError: If no pattern is given
        """
        unique = list(dict.fromkeys(patterns))
        if not unique:
            raise InvalidArgumentError("At least one pattern is required")
        return {pattern: self.find_all(screen, pattern) for pattern in unique}

    def at(self, screen: PixelImage, pattern: PixelImage, position: Position) -> bool:
        """Check whether the pattern matches with its top-left corner at position.

        Raises:
            OutOfBoundsError: If the pattern placed at position exceeds the screen
        """
        return self.at_coordinates(screen, pattern, position.x, position.y)

    def at_coordinates(self, screen: PixelImage, pattern: PixelImage, x: int, y: int) -> bool:
        """Coordinate form of at()."""
        self._ensure_pattern(pattern)
        if not self.fits(screen, pattern, x, y):
            raise OutOfBoundsError(
                f"Pattern {pattern.width}x{pattern.height} at ({x}, {y})",
                screen.width,
                screen.height,
            )
        return self._matches_at(screen, pattern, x, y)

    # Helpers shared by the engines

    @staticmethod
    def fits(screen: PixelImage, pattern: PixelImage, x: int, y: int) -> bool:
        return (
            x >= 0
            and y >= 0
            and x + pattern.width <= screen.width
            and y + pattern.height <= screen.height
        )

    @staticmethod
    def _matches_at(
        screen: PixelImage,
        pattern: PixelImage,
        x: int,
        y: int,
        mask: np.ndarray | None = None,
    ) -> bool:
        """Compare a placement without bounds checks.

        Args:
            mask: Precomputed opaque mask of the pattern, if available
        """
        window = screen.pixels[y : y + pattern.height, x : x + pattern.width]
        if mask is None:
            if not pattern.has_transparency():
                return bool(np.array_equal(window, pattern.pixels))
            mask = pattern.opaque_mask()
        return bool(np.array_equal(window[mask], pattern.pixels[mask]))

    @staticmethod
    def _placements(screen: PixelImage, pattern: PixelImage) -> Iterator[Position]:
        """Every position where the pattern fits, row-major."""
        for y in range(screen.height - pattern.height + 1):
            for x in range(screen.width - pattern.width + 1):
                yield Position(x, y)

    @staticmethod
    def _non_overlapping(matches: Iterable[Position], width: int, height: int) -> list[Position]:
        kept: list[Position] = []
        for match in matches:
            overlapping = False
            for previous in reversed(kept):
                if match.y - previous.y >= height:
                    break
                if abs(match.x - previous.x) < width:
                    overlapping = True
                    break
            if not overlapping:
                kept.append(match)
        return kept

    @staticmethod
    def _ensure_pattern(pattern: PixelImage) -> None:
        if pattern.width == 0 or pattern.height == 0:
            raise InvalidArgumentError(
                f"Pattern must not be empty, got {pattern.width}x{pattern.height}",
                width=pattern.width,
                height=pattern.height,
            )

    def __str__(self) -> str:
        return type(self).__name__
