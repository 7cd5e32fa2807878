"""OpenCV template matching finder.

OpenCV's matchTemplate computes the squared difference of the pattern at
every placement in one pass. The floating point result is only used to
shortlist candidates; each candidate is then compared exactly, so this
engine reports the same positions as the pixel-exact engines.
"""

import logging
from collections.abc import Iterator

import cv2
import numpy as np

from ...exceptions import ImageProcessingError
from ...model.element import PixelImage, Position
from .image_position_finder import ImagePositionFinder

logger = logging.getLogger(__name__)


class TemplateMatchFinder(ImagePositionFinder):
    """Candidate search with cv2.matchTemplate (TM_SQDIFF), exact verification.

    Transparent pattern pixels are excluded through a binary mask built from
    the alpha channel. Alpha values of opaque pixels are not part of the
    OpenCV comparison; the exact verification covers them.

    Attributes:
        relative_tolerance: Fraction of the largest possible squared
            difference below which a placement counts as candidate. Absorbs
            the rounding error of OpenCV's float accumulation.
    """

    def __init__(self, relative_tolerance: float = 1e-4) -> None:
        self.relative_tolerance = relative_tolerance

    def _match_positions(self, screen: PixelImage, pattern: PixelImage) -> Iterator[Position]:
        if pattern.width > screen.width or pattern.height > screen.height:
            return

        mask = pattern.opaque_mask()
        if not mask.any():
            # Nothing to compare, every placement matches
            yield from self._placements(screen, pattern)
            return

        result = self._match_template(screen, pattern, mask)
        tolerance = max(
            1.0, self.relative_tolerance * 3 * 255 * 255 * float(np.count_nonzero(mask))
        )

        # NaN results are kept as candidates as well
        candidates = np.argwhere(~(result > tolerance))
        logger.debug(f"TemplateMatchFinder: {len(candidates)} candidates for {pattern!r}")

        for y, x in candidates:
            if self._matches_at(screen, pattern, int(x), int(y), mask):
                yield Position(int(x), int(y))

    def _match_template(
        self, screen: PixelImage, pattern: PixelImage, mask: np.ndarray
    ) -> np.ndarray:
        screen_bgr = self._to_bgr(screen)
        template_bgr = self._to_bgr(pattern)
        try:
            if mask.all():
                return cv2.matchTemplate(screen_bgr, template_bgr, cv2.TM_SQDIFF)
            # CV_8U masks are binary; one value per template channel
            mask_bgr = np.repeat(mask.astype(np.uint8)[:, :, np.newaxis], 3, axis=2)
            return cv2.matchTemplate(screen_bgr, template_bgr, cv2.TM_SQDIFF, mask=mask_bgr)
        except cv2.error as e:
            raise ImageProcessingError(f"OpenCV error during matching: {e}") from e

    @staticmethod
    def _to_bgr(image: PixelImage) -> np.ndarray:
        """Convert to a contiguous OpenCV BGR array, dropping alpha."""
        rgba = image.to_rgba_array()
        return np.ascontiguousarray(rgba[:, :, 2::-1])
