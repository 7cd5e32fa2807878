"""Pytest configuration and fixtures."""

import pytest

from screenseek.config import reset_settings
from screenseek.model.element import PixelImage, argb

BLACK = argb(255, 0, 0, 0)
WHITE = argb(255, 255, 255, 255)
RED = argb(255, 255, 0, 0)
CLEAR = argb(0, 0, 0, 0)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Fresh settings per test, diagnostic images written to a temp dir."""
    monkeypatch.setenv("SCREENSEEK_EXPORT_PATH", str(tmp_path / "export"))
    monkeypatch.setenv("SCREENSEEK_REFRESH_INTERVAL", "1.0")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def image_from_rows():
    """Build a PixelImage from a list of rows of ARGB values."""

    def build(rows: list[list[int]]) -> PixelImage:
        height = len(rows)
        width = len(rows[0]) if rows else 0
        return PixelImage([pixel for row in rows for pixel in row], width, height)

    return build


@pytest.fixture
def black_screen():
    """Create a black screen of the given size."""

    def build(width: int, height: int) -> PixelImage:
        return PixelImage([BLACK] * (width * height), width, height)

    return build


@pytest.fixture
def paste():
    """Return a copy of screen with pattern drawn at (x, y); transparent pixels are skipped."""

    def build(screen: PixelImage, pattern: PixelImage, x: int, y: int) -> PixelImage:
        pixels = screen.to_numpy()
        mask = pattern.opaque_mask()
        window = pixels[y : y + pattern.height, x : x + pattern.width]
        window[mask] = pattern.pixels[mask]
        return PixelImage(pixels, screen.width, screen.height)

    return build
