"""Pattern search: preprocessing, finder engines and cross-validation."""

from .finder_benchmark import BenchmarkUnit, ImagePositionFinderBenchmark
from .finders import (
    BadCharacterFinder,
    BruteForceFinder,
    ImagePositionFinder,
    TemplateMatchFinder,
)
from .pattern_heuristic import (
    BadCharacterPattern,
    PatternRowAnalysis,
    analyze_row,
    best_row,
)

__all__ = [
    "ImagePositionFinder",
    "BruteForceFinder",
    "BadCharacterFinder",
    "TemplateMatchFinder",
    "ImagePositionFinderBenchmark",
    "BenchmarkUnit",
    "BadCharacterPattern",
    "PatternRowAnalysis",
    "analyze_row",
    "best_row",
]
