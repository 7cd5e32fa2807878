"""Finder engines for exact pattern search.

This package provides various finder implementations:
- ImagePositionFinder: Abstract base interface for all finders
- BruteForceFinder: Reference engine comparing every placement
- BadCharacterFinder: Row scan with the bad-character heuristic
- TemplateMatchFinder: OpenCV candidate search with exact verification
"""

from .bad_character_finder import BadCharacterFinder
from .brute_force_finder import BruteForceFinder
from .image_position_finder import ImagePositionFinder
from .template_match_finder import TemplateMatchFinder

__all__ = [
    "ImagePositionFinder",
    "BruteForceFinder",
    "BadCharacterFinder",
    "TemplateMatchFinder",
]
