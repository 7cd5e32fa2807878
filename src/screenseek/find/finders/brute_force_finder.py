"""Reference finder comparing the pattern at every placement."""

from collections.abc import Iterator

from ...model.element import PixelImage, Position
from .image_position_finder import ImagePositionFinder


class BruteForceFinder(ImagePositionFinder):
    """Checks every placement of the pattern with a full comparison.

    Slow, but simple enough to serve as the reference engine when other
    finders are cross-validated against it.
    """

    def _match_positions(self, screen: PixelImage, pattern: PixelImage) -> Iterator[Position]:
        mask = pattern.opaque_mask()
        for position in self._placements(screen, pattern):
            if self._matches_at(screen, pattern, position.x, position.y, mask):
                yield position
