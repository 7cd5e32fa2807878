"""Image and geometry value types."""

from .pixel_image import PixelImage, argb
from .position import Position, Section

__all__ = [
    "PixelImage",
    "Position",
    "Section",
    "argb",
]
