"""Bad-character preprocessing of pattern images.

A horizontal scan over one row of the screen can reject most candidate
placements of a pattern in constant time. For one row of the pattern (the
anchor row) a color -> shift table records, for each opaque color, how far
that color sits from the right edge of the row. When the screen pixel under
the anchor column differs from the pattern, the scan jumps ahead by the
shift of the screen pixel's color, or by the full row width when the color
does not occur in the row at all.

Fully transparent pattern pixels are wildcards: they match any screen pixel
and therefore limit how far a scan may jump.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..exceptions import InvalidArgumentError
from ..model.element import PixelImage

_ALPHA_SHIFT = 24


def _is_opaque(color: int) -> bool:
    return (color >> _ALPHA_SHIFT) & 0xFF != 0


@dataclass(frozen=True)
class PatternRowAnalysis:
    """Scan statistics for a single row of a pattern.

    Attributes:
        row_index: Row of the pattern the analysis belongs to
        trailing_transparent_count: Transparent pixels counted contiguously
            from the right edge of the row
        distinct_opaque_color_count: Number of different opaque colors in the row
        color_to_shift: Opaque color -> distance of its rightmost occurrence to
            the right edge. Never holds the color of the last column.
    """

    row_index: int
    trailing_transparent_count: int
    distinct_opaque_color_count: int
    color_to_shift: Mapping[int, int] = field(hash=False)

    @property
    def has_transparency(self) -> bool:
        return self.trailing_transparent_count != 0

    @property
    def sort_key(self) -> tuple[bool, int]:
        """Ranking used to pick the anchor row, smaller is better.

        Fully opaque rows first (all equal), then rows with more trailing
        transparency before rows with less.
        """
        if not self.has_transparency:
            return (False, 0)
        return (True, -self.trailing_transparent_count)


def analyze_row(pattern: PixelImage, row_index: int) -> PatternRowAnalysis:
    """Compute the bad-character statistics of one pattern row.

    Args:
        pattern: Pattern image
        row_index: Row to analyze

    Returns:
        PatternRowAnalysis of that row

    Raises:
        InvalidArgumentError: If row_index is not a row of the pattern
    """
    if not 0 <= row_index < pattern.height:
        raise InvalidArgumentError(
            f"Row index {row_index} is outside of pattern with height {pattern.height}",
            row_index=row_index,
            height=pattern.height,
        )

    line = pattern.row(row_index)
    width = len(line)

    trailing = 0
    for color in reversed(line):
        if _is_opaque(color):
            break
        trailing += 1

    color_to_shift: dict[int, int] = {}
    for column, color in enumerate(line):
        if _is_opaque(color):
            color_to_shift[color] = width - column - 1
    distinct_colors = len(color_to_shift)

    # The last column must always fall back to the default shift.
    if line:
        color_to_shift.pop(line[-1], None)

    return PatternRowAnalysis(
        row_index=row_index,
        trailing_transparent_count=trailing,
        distinct_opaque_color_count=distinct_colors,
        color_to_shift=MappingProxyType(color_to_shift),
    )


def best_row(pattern: PixelImage) -> PatternRowAnalysis:
    """Analyze every row and return the best anchor row.

    Ties are resolved in favour of the lowest row index.

    Raises:
        InvalidArgumentError: If the pattern has no rows
    """
    if pattern.height == 0:
        raise InvalidArgumentError("Pattern has no rows", height=0)

    rows = (analyze_row(pattern, y) for y in range(pattern.height))
    return min(rows, key=lambda analysis: analysis.sort_key)


class BadCharacterPattern:
    """A pattern image together with the analysis of its anchor row.

    Besides the raw table the class derives the quantities a scan needs:
    the anchor column (rightmost opaque pixel of the anchor row) and the
    shifts to apply after a mismatch or a match at that column.

    Example:
        prepared = BadCharacterPattern(pattern)
        prepared.line_index            # chosen anchor row
        prepared.shift_for(0xFF000000) # jump for a black screen pixel
    """

    def __init__(self, image: PixelImage, row_index: int | None = None) -> None:
        """Preprocess a pattern.

        Args:
            image: Pattern image
            row_index: Anchor row; chosen with best_row() when omitted

        Raises:
            InvalidArgumentError: If row_index is outside the pattern or the
                pattern has no rows
        """
        self.image = image
        self.analysis = best_row(image) if row_index is None else analyze_row(image, row_index)

        line = image.row(self.analysis.row_index)
        self.line = line
        self.anchor_column = image.width - 1 - self.analysis.trailing_transparent_count
        self.anchor_color = line[self.anchor_column] if self.anchor_column >= 0 else None

        # Rightmost wildcard left of the anchor caps every jump.
        self.wildcard_limit = self.anchor_column + 1
        for column in range(self.anchor_column - 1, -1, -1):
            if not _is_opaque(line[column]):
                self.wildcard_limit = self.anchor_column - column
                break

        self.repeat_shift = self.anchor_column + 1
        for column in range(self.anchor_column - 1, -1, -1):
            if line[column] == self.anchor_color or not _is_opaque(line[column]):
                self.repeat_shift = self.anchor_column - column
                break

        trailing = self.analysis.trailing_transparent_count
        self.default_shift = min(image.width - trailing, self.wildcard_limit)
        self._shifts = {
            color: min(shift - trailing, self.wildcard_limit)
            for color, shift in self.analysis.color_to_shift.items()
            if color != self.anchor_color
        }

        # Opaque columns left of the anchor, compared right to left
        self.checks = [
            (column, line[column])
            for column in range(self.anchor_column - 1, -1, -1)
            if _is_opaque(line[column])
        ]

    @property
    def line_index(self) -> int:
        return self.analysis.row_index

    @property
    def transparent_offset(self) -> int:
        return self.analysis.trailing_transparent_count

    @property
    def contains_transparent(self) -> bool:
        return self.analysis.has_transparency

    @property
    def color_delta(self) -> Mapping[int, int]:
        return self.analysis.color_to_shift

    @property
    def has_anchor(self) -> bool:
        """False when the anchor row is fully transparent."""
        return self.anchor_column >= 0

    def shift_for(self, color: int) -> int:
        """Jump after the screen pixel under the anchor column mismatched.

        Only meaningful for colors different from the anchor color.
        """
        return self._shifts.get(color, self.default_shift)
