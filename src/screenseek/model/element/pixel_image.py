"""Immutable ARGB pixel image.

Screens and patterns are both represented by PixelImage. Unlike a PIL
image, a PixelImage compares by value: two instances holding the same
picture are equal and hash alike, so patterns can key result mappings.
"""

from collections.abc import Sequence

import numpy as np
from PIL import Image as PILImage

from ...exceptions import InvalidArgumentError, OutOfBoundsError
from .position import Position, Section

ALPHA_SHIFT = 24
RED_SHIFT = 16
GREEN_SHIFT = 8
CHANNEL_MASK = 0xFF


def argb(alpha: int, red: int, green: int, blue: int) -> int:
    """Pack four 8-bit channels into one ARGB integer."""
    return (
        (alpha & CHANNEL_MASK) << ALPHA_SHIFT
        | (red & CHANNEL_MASK) << RED_SHIFT
        | (green & CHANNEL_MASK) << GREEN_SHIFT
        | (blue & CHANNEL_MASK)
    )


class PixelImage:
    """Immutable two dimensional buffer of ARGB pixels.

    Pixels are stored row-major with the origin at the top-left corner.
    The input buffer is copied on construction and kept read-only; every
    accessor that hands out pixel data returns a copy or a read-only view.

    Example:
        image = PixelImage([argb(255, 0, 0, 0)] * 6, width=3, height=2)
        image.get(2, 1)
    """

    __slots__ = ("_pixels", "_width", "_height", "_hash")

    def __init__(self, data: Sequence[int] | np.ndarray, width: int, height: int) -> None:
        """Create an image from flat ARGB data.

        Args:
            data: ``width * height`` ARGB integers, row by row. Signed 32 bit
                values are accepted and reinterpreted as unsigned.
            width: Image width in pixels
            height: Image height in pixels

        Raises:
            InvalidArgumentError: If a dimension is negative or the buffer
                length does not equal ``width * height``
        """
        if width < 0 or height < 0:
            raise InvalidArgumentError(
                f"Image size must not be negative, got {width}x{height}",
                width=width,
                height=height,
            )

        pixels = (np.asarray(data, dtype=np.int64).ravel() & 0xFFFFFFFF).astype(np.uint32)
        if pixels.size != width * height:
            raise InvalidArgumentError(
                f"Buffer holds {pixels.size} pixels, expected {width * height}",
                width=width,
                height=height,
                length=int(pixels.size),
            )

        pixels.flags.writeable = False
        self._pixels = pixels.reshape(height, width)
        self._width = width
        self._height = height
        self._hash: int | None = None

    # Construction helpers

    @classmethod
    def from_rgba_array(cls, array: np.ndarray) -> "PixelImage":
        """Create an image from a ``(height, width, 4)`` uint8 RGBA array."""
        rgba = np.asarray(array)
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise InvalidArgumentError(
                f"Expected an array of shape (height, width, 4), got {rgba.shape}",
                shape=rgba.shape,
            )
        channels = rgba.astype(np.uint32)
        pixels = (
            channels[:, :, 3] << ALPHA_SHIFT
            | channels[:, :, 0] << RED_SHIFT
            | channels[:, :, 1] << GREEN_SHIFT
            | channels[:, :, 2]
        )
        height, width = pixels.shape
        return cls(pixels, width, height)

    @classmethod
    def from_pil(cls, image: PILImage.Image) -> "PixelImage":
        """Create an image from a PIL image; images without alpha become opaque."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls.from_rgba_array(np.asarray(image, dtype=np.uint8))

    def to_rgba_array(self) -> np.ndarray:
        """Return the pixels as a new ``(height, width, 4)`` uint8 RGBA array."""
        p = self._pixels
        return np.stack(
            [
                (p >> RED_SHIFT) & CHANNEL_MASK,
                (p >> GREEN_SHIFT) & CHANNEL_MASK,
                p & CHANNEL_MASK,
                (p >> ALPHA_SHIFT) & CHANNEL_MASK,
            ],
            axis=-1,
        ).astype(np.uint8)

    def to_pil(self) -> PILImage.Image:
        """Convert to an RGBA PIL image."""
        return PILImage.fromarray(self.to_rgba_array())

    # Geometry

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    @property
    def pixels(self) -> np.ndarray:
        """Read-only ``(height, width)`` uint32 view of the pixels."""
        return self._pixels.view()

    def center(self) -> Position:
        return Position(self._width // 2, self._height // 2)

    # Pixel access

    def get(self, x: int, y: int) -> int:
        """Return the ARGB value at ``(x, y)``."""
        self._ensure_coordinates(x, y)
        return int(self._pixels[y, x])

    def get_position(self, position: Position) -> int:
        return self.get(position.x, position.y)

    def alpha(self, x: int, y: int) -> int:
        return (self.get(x, y) >> ALPHA_SHIFT) & CHANNEL_MASK

    def red(self, x: int, y: int) -> int:
        return (self.get(x, y) >> RED_SHIFT) & CHANNEL_MASK

    def green(self, x: int, y: int) -> int:
        return (self.get(x, y) >> GREEN_SHIFT) & CHANNEL_MASK

    def blue(self, x: int, y: int) -> int:
        return self.get(x, y) & CHANNEL_MASK

    def rgba(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the ``(red, green, blue, alpha)`` channels at ``(x, y)``."""
        value = self.get(x, y)
        return (
            (value >> RED_SHIFT) & CHANNEL_MASK,
            (value >> GREEN_SHIFT) & CHANNEL_MASK,
            value & CHANNEL_MASK,
            (value >> ALPHA_SHIFT) & CHANNEL_MASK,
        )

    def is_transparent(self, x: int, y: int) -> bool:
        """Check if a pixel is fully transparent, identified by alpha 0."""
        return self.alpha(x, y) == 0

    def has_transparency(self) -> bool:
        return bool(np.any((self._pixels >> ALPHA_SHIFT) == 0))

    def opaque_mask(self) -> np.ndarray:
        """Return a new boolean ``(height, width)`` array, True where alpha != 0."""
        return (self._pixels >> ALPHA_SHIFT) != 0

    def row(self, y: int) -> list[int]:
        if not 0 <= y < self._height:
            raise OutOfBoundsError(f"Row {y}", self._width, self._height)
        return self._pixels[y].tolist()

    def column(self, x: int) -> list[int]:
        if not 0 <= x < self._width:
            raise OutOfBoundsError(f"Column {x}", self._width, self._height)
        return self._pixels[:, x].tolist()

    def data(self) -> list[int]:
        """Return a copy of the flat row-major buffer."""
        return self._pixels.ravel().tolist()

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the pixels."""
        return self._pixels.copy()

    # Regions

    def sub_image(self, section: Section) -> "PixelImage":
        """Return a new image holding the pixels of the given section.

        Raises:
            OutOfBoundsError: If the section exceeds this image
        """
        if (
            section.x < 0
            or section.y < 0
            or section.end_x > self._width
            or section.end_y > self._height
        ):
            raise OutOfBoundsError(str(section), self._width, self._height)
        region = self._pixels[section.y : section.end_y, section.x : section.end_x]
        return PixelImage(region, section.width, section.height)

    def crop(self, x: int, y: int, width: int, height: int) -> "PixelImage":
        return self.sub_image(Section.of(x, y, width, height))

    def _ensure_coordinates(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBoundsError(f"Coordinate ({x}, {y})", self._width, self._height)

    # Value semantics

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelImage):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and bool(np.array_equal(self._pixels, other._pixels))
        )

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((self._width, self._height, self._pixels.tobytes()))
        return self._hash

    def __repr__(self) -> str:
        return f"PixelImage({self._width}x{self._height})"
