#!/usr/bin/env python3
"""
Bitmap decoding through Pillow
Used when a plain image file doubles as a palette asset
"""

import io
from enum import Enum

from PIL import Image, UnidentifiedImageError

from .constants import PALETTE_ENTRIES, PALETTE_SIZE_BYTES, RGB888_MAX_VALUE
from .exceptions import ImageLoaderError


class ImageFormat(Enum):
    """Image container formats the loader can decode"""

    BMP = "BMP"


class PixelFormat(Enum):
    """Pixel layouts load_pixels can produce"""

    RGB = "RGB"
    RGBA = "RGBA"


class ImageLoader:
    """Decodes an in-memory image and exposes its palette and pixels"""

    def __init__(self, image_format: ImageFormat, data: bytes) -> None:
        try:
            self._image = Image.open(io.BytesIO(bytes(data)),
                                     formats=[image_format.value])
            self._image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError,
                OSError, ValueError) as e:
            raise ImageLoaderError(
                f"Cannot decode {image_format.value} image: {e}"
            ) from e
        self.image_format = image_format

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def has_palette(self) -> bool:
        """
        Check whether the image carries a color table.

        Pillow decodes BMP files with a greyscale or black and white color
        table to the "L" and "1" modes, so those count as paletted too.
        """
        return self._image.mode in ("P", "L", "1")

    def load_palette(self) -> bytes:
        """
        Get the embedded palette as 256 RGB triples.

        Returns:
            768 bytes, palettes with fewer entries are padded with black

        Raises:
            ImageLoaderError: If the image has no palette
        """
        mode = self._image.mode
        if mode == "P":
            palette = self._image.getpalette("RGB") or []
        elif mode == "L":
            palette = [value for i in range(PALETTE_ENTRIES) for value in (i, i, i)]
        elif mode == "1":
            palette = [0, 0, 0] + [RGB888_MAX_VALUE] * 3
        else:
            raise ImageLoaderError(f"Image in mode {mode} has no palette")

        palette = palette[:PALETTE_SIZE_BYTES]
        palette.extend([0] * (PALETTE_SIZE_BYTES - len(palette)))
        return bytes(palette)

    def load_pixels(self, pixel_format: PixelFormat) -> bytes:
        """
        Get the pixel data converted to the given format.

        Returns:
            Row-major pixel bytes, top row first
        """
        try:
            return self._image.convert(pixel_format.value).tobytes()
        except (OSError, ValueError) as e:
            raise ImageLoaderError(
                f"Cannot convert image to {pixel_format.value}: {e}"
            ) from e
