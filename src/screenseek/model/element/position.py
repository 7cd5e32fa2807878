"""Position and Section value types.

Coordinates are zero-based pixels with the origin at the top-left corner
of an image.
"""

from dataclasses import dataclass

from ...exceptions import InvalidArgumentError


@dataclass(frozen=True)
class Position:
    """Absolute pixel position inside an image.

    Positions order row-major (by ``y`` first, then ``x``), the order in
    which finders scan a screen.
    """

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        """Return the position moved by the given deltas."""
        return Position(self.x + dx, self.y + dy)

    def _key(self) -> tuple[int, int]:
        return (self.y, self.x)

    def __lt__(self, other: "Position") -> bool:
        return self._key() < other._key()

    def __le__(self, other: "Position") -> bool:
        return self._key() <= other._key()

    def __gt__(self, other: "Position") -> bool:
        return self._key() > other._key()

    def __ge__(self, other: "Position") -> bool:
        return self._key() >= other._key()

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Section:
    """Rectangular region of an image, anchored at its top-left position."""

    start: Position
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise InvalidArgumentError(
                f"Section size must not be negative, got {self.width}x{self.height}",
                width=self.width,
                height=self.height,
            )

    @classmethod
    def of(cls, x: int, y: int, width: int, height: int) -> "Section":
        """Create a section from raw coordinates."""
        return cls(Position(x, y), width, height)

    @property
    def x(self) -> int:
        return self.start.x

    @property
    def y(self) -> int:
        return self.start.y

    @property
    def end_x(self) -> int:
        """First column right of the section."""
        return self.start.x + self.width

    @property
    def end_y(self) -> int:
        """First row below the section."""
        return self.start.y + self.height

    def contains(self, position: Position) -> bool:
        return self.x <= position.x < self.end_x and self.y <= position.y < self.end_y

    def overlaps(self, other: "Section") -> bool:
        return (
            self.x < other.end_x
            and other.x < self.end_x
            and self.y < other.end_y
            and other.y < self.end_y
        )

    def __str__(self) -> str:
        return f"Section({self.x}, {self.y}, {self.width}x{self.height})"
