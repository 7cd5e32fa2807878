"""Tests for PixelImage, Position and Section."""

import numpy as np
import pytest
from PIL import Image as PILImage

from screenseek.exceptions import InvalidArgumentError, OutOfBoundsError
from screenseek.model.element import PixelImage, Position, Section, argb

BLACK = argb(255, 0, 0, 0)
WHITE = argb(255, 255, 255, 255)
CLEAR = argb(0, 10, 20, 30)


@pytest.fixture
def numbered():
    """3x2 image whose pixels are opaque and numbered 0..5 in the blue channel."""
    return PixelImage([argb(255, 0, 0, value) for value in range(6)], 3, 2)


class TestConstruction:
    """Tests for building images."""

    def test_size(self, numbered):
        assert numbered.width == 3
        assert numbered.height == 2
        assert numbered.size == (3, 2)

    def test_negative_dimension_rejected(self):
        with pytest.raises(InvalidArgumentError):
            PixelImage([], -1, 0)

    def test_buffer_length_must_match(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            PixelImage([BLACK] * 5, 3, 2)
        assert exc_info.value.error_code == "INVALID_ARGUMENT"

    def test_empty_image(self):
        image = PixelImage([], 0, 0)
        assert image.size == (0, 0)
        assert image.data() == []

    def test_input_buffer_is_copied(self):
        data = [BLACK, BLACK]
        image = PixelImage(data, 2, 1)
        data[0] = WHITE
        assert image.get(0, 0) == BLACK

    def test_numpy_input_is_copied(self):
        data = np.array([BLACK, WHITE], dtype=np.uint32)
        image = PixelImage(data, 2, 1)
        data[1] = BLACK
        assert image.get(1, 0) == WHITE

    def test_signed_values_are_reinterpreted(self):
        # 0xFF000000 as a signed 32 bit integer
        image = PixelImage([-16777216], 1, 1)
        assert image.get(0, 0) == BLACK
        assert image.alpha(0, 0) == 255


class TestPixelAccess:
    """Tests for reading pixels back."""

    def test_round_trip_through_get_row_and_column(self, numbered):
        data = [argb(255, 0, 0, value) for value in range(6)]
        assert [numbered.get(x, y) for y in range(2) for x in range(3)] == data
        assert numbered.row(0) + numbered.row(1) == data
        assert numbered.column(1) == [data[1], data[4]]
        assert numbered.data() == data

    def test_get_is_stable(self, numbered):
        assert numbered.get(2, 1) == numbered.get(2, 1) == argb(255, 0, 0, 5)

    def test_get_position(self, numbered):
        assert numbered.get_position(Position(1, 1)) == argb(255, 0, 0, 4)

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 2)])
    def test_get_out_of_bounds(self, numbered, x, y):
        with pytest.raises(OutOfBoundsError):
            numbered.get(x, y)

    def test_row_and_column_out_of_bounds(self, numbered):
        with pytest.raises(OutOfBoundsError):
            numbered.row(2)
        with pytest.raises(OutOfBoundsError):
            numbered.column(-1)

    def test_channels(self):
        image = PixelImage([argb(128, 10, 20, 30)], 1, 1)
        assert image.alpha(0, 0) == 128
        assert image.red(0, 0) == 10
        assert image.green(0, 0) == 20
        assert image.blue(0, 0) == 30
        assert image.rgba(0, 0) == (10, 20, 30, 128)

    def test_transparency(self):
        image = PixelImage([BLACK, CLEAR], 2, 1)
        assert not image.is_transparent(0, 0)
        assert image.is_transparent(1, 0)
        assert image.has_transparency()
        assert image.opaque_mask().tolist() == [[True, False]]

    def test_center_uses_floor_division(self):
        assert PixelImage([BLACK] * 15, 5, 3).center() == Position(2, 1)

    def test_returned_buffers_are_copies(self, numbered):
        numbered.row(0)[0] = WHITE
        numbered.data()[0] = WHITE
        numbered.to_numpy()[0, 0] = WHITE
        assert numbered.get(0, 0) == argb(255, 0, 0, 0)

    def test_pixels_view_is_read_only(self, numbered):
        with pytest.raises(ValueError):
            numbered.pixels[0, 0] = WHITE


class TestSubImage:
    """Tests for carving sections out of an image."""

    def test_sub_image(self, numbered):
        sub = numbered.sub_image(Section.of(1, 0, 2, 2))
        assert sub.size == (2, 2)
        assert sub.data() == [argb(255, 0, 0, v) for v in (1, 2, 4, 5)]

    def test_crop_matches_sub_image(self, numbered):
        assert numbered.crop(0, 1, 3, 1) == numbered.sub_image(Section.of(0, 1, 3, 1))

    def test_section_exceeding_image(self, numbered):
        with pytest.raises(OutOfBoundsError):
            numbered.sub_image(Section.of(2, 0, 2, 1))

    def test_negative_section_size(self):
        with pytest.raises(InvalidArgumentError):
            Section.of(0, 0, -1, 1)


class TestValueSemantics:
    """Tests for equality and hashing."""

    def test_equal_images(self):
        assert PixelImage([BLACK, WHITE], 2, 1) == PixelImage([BLACK, WHITE], 2, 1)

    def test_different_pixels(self):
        assert PixelImage([BLACK, WHITE], 2, 1) != PixelImage([WHITE, BLACK], 2, 1)

    def test_same_buffer_different_shape(self):
        assert PixelImage([BLACK, WHITE], 2, 1) != PixelImage([BLACK, WHITE], 1, 2)

    def test_usable_as_mapping_key(self):
        mapping = {PixelImage([BLACK], 1, 1): "black"}
        assert mapping[PixelImage([BLACK], 1, 1)] == "black"


class TestPilInterop:
    """Tests for the PIL bridge."""

    def test_round_trip(self):
        image = PixelImage([BLACK, WHITE, CLEAR, argb(200, 1, 2, 3)], 2, 2)
        assert PixelImage.from_pil(image.to_pil()) == image

    def test_rgb_images_become_opaque(self):
        pil_image = PILImage.new("RGB", (2, 1), color=(255, 0, 0))
        image = PixelImage.from_pil(pil_image)
        assert image.row(0) == [argb(255, 255, 0, 0)] * 2

    def test_from_rgba_array_rejects_wrong_shape(self):
        with pytest.raises(InvalidArgumentError):
            PixelImage.from_rgba_array(np.zeros((2, 2, 3), dtype=np.uint8))


class TestPosition:
    """Tests for Position ordering."""

    def test_row_major_order(self):
        assert Position(5, 0) < Position(0, 1)
        assert Position(1, 1) < Position(2, 1)
        assert sorted([Position(0, 2), Position(3, 0), Position(1, 0)]) == [
            Position(1, 0),
            Position(3, 0),
            Position(0, 2),
        ]

    def test_section_overlap(self):
        first = Section.of(0, 0, 2, 2)
        assert first.overlaps(Section.of(1, 1, 2, 2))
        assert not first.overlaps(Section.of(2, 0, 2, 2))
        assert first.contains(Position(1, 1))
        assert not first.contains(Position(2, 1))
