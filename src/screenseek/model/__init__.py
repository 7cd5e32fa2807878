"""Data model of screenseek."""

from .element import PixelImage, Position, Section, argb

__all__ = ["PixelImage", "Position", "Section", "argb"]
