"""Finder scanning screen rows with the bad-character heuristic."""

import logging
import threading
from collections.abc import Iterator

from ...model.element import PixelImage, Position
from ..pattern_heuristic import BadCharacterPattern
from .image_position_finder import ImagePositionFinder

logger = logging.getLogger(__name__)


class BadCharacterFinder(ImagePositionFinder):
    """Horizontal bad-character search over the anchor row of a pattern.

    For every screen row that could hold the pattern's anchor row, the
    pattern slides from left to right. The screen pixel under the anchor
    column decides the jump: on a mismatch the scan skips ahead by the
    shift table of the BadCharacterPattern, otherwise the rest of the
    anchor row is compared and, if equal, the whole pattern is verified.

    Preprocessed patterns are cached per pattern image. The cache is shared
    by all threads using the finder and guarded by a lock.

    Attributes:
        cache_size: Maximum number of preprocessed patterns kept
    """

    def __init__(self, cache_size: int = 64) -> None:
        self.cache_size = cache_size
        self._prepared: dict[PixelImage, BadCharacterPattern] = {}
        self._lock = threading.Lock()

    def prepare(self, pattern: PixelImage) -> BadCharacterPattern:
        """Return the (cached) preprocessed form of a pattern."""
        with self._lock:
            prepared = self._prepared.get(pattern)
        if prepared is not None:
            return prepared

        prepared = BadCharacterPattern(pattern)
        with self._lock:
            while self._prepared and len(self._prepared) >= self.cache_size:
                self._prepared.pop(next(iter(self._prepared)))
            self._prepared[pattern] = prepared
            logger.debug(
                f"Prepared {pattern!r}: anchor row {prepared.line_index}, "
                f"anchor column {prepared.anchor_column}"
            )
        return prepared

    def _match_positions(self, screen: PixelImage, pattern: PixelImage) -> Iterator[Position]:
        if pattern.width > screen.width or pattern.height > screen.height:
            return

        prepared = self.prepare(pattern)
        mask = pattern.opaque_mask()

        if not prepared.has_anchor:
            # Anchor row is all wildcards, nothing to skip on
            for position in self._placements(screen, pattern):
                if self._matches_at(screen, pattern, position.x, position.y, mask):
                    yield position
            return

        anchor = prepared.anchor_column
        anchor_color = prepared.anchor_color
        checks = prepared.checks
        repeat_shift = prepared.repeat_shift
        last_x = screen.width - pattern.width
        first_row = prepared.line_index
        rows = screen.pixels[first_row : first_row + screen.height - pattern.height + 1]

        for y, line in enumerate(rows.tolist()):
            x = 0
            while x <= last_x:
                color = line[x + anchor]
                if color != anchor_color:
                    x += prepared.shift_for(color)
                    continue
                if all(line[x + column] == expected for column, expected in checks) and (
                    self._matches_at(screen, pattern, x, y, mask)
                ):
                    yield Position(x, y)
                x += repeat_shift
