#!/usr/bin/env python3
"""
Preview helpers for decoded palettes and textures
"""

from PIL import Image

from .constants import (
    DEFAULT_SWATCH_SIZE,
    PALETTE_ENTRIES,
    RGBA_CHANNELS,
    SWATCHES_PER_ROW,
)
from .palette import Palette, PaletteTransparency


def rgba_to_image(rgba: bytes, width: int, height: int) -> Image.Image:
    """
    Wrap a decoded RGBA buffer in a PIL image.

    Args:
        rgba: At least width * height * 4 bytes, row-major
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        RGBA image

    Raises:
        ValueError: If the dimensions are invalid or the buffer is too small
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}")

    expected = width * height * RGBA_CHANNELS
    if len(rgba) < expected:
        raise ValueError(
            f"RGBA buffer holds {len(rgba)} bytes, {expected} required for {width}x{height}"
        )
    return Image.frombytes("RGBA", (width, height), bytes(rgba[:expected]))


def palette_to_image(palette: Palette,
                     transparency: PaletteTransparency = PaletteTransparency.OPAQUE,
                     swatch_size: int = DEFAULT_SWATCH_SIZE) -> Image.Image:
    """Render the 256 palette entries as a 16x16 grid of swatches."""
    if swatch_size <= 0:
        raise ValueError(f"Invalid swatch size: {swatch_size}")

    rows = PALETTE_ENTRIES // SWATCHES_PER_ROW
    grid = Image.frombytes("RGBA", (SWATCHES_PER_ROW, rows), palette.table(transparency))
    return grid.resize(
        (SWATCHES_PER_ROW * swatch_size, rows * swatch_size), Image.Resampling.NEAREST
    )
