#!/usr/bin/env python3
"""
256 color palettes for indexed game textures
Loads palettes from LMP, PCX and BMP files and converts indexed pixel
buffers to RGBA
"""

import pathlib
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import numpy as np

from .color import Color
from .constants import (
    ALPHA_OPAQUE,
    ALPHA_TRANSPARENT,
    BMP_EXTENSION,
    LMP_EXTENSION,
    PALETTE_ENTRIES,
    PALETTE_SIZE_BYTES,
    PCX_EXTENSION,
    PCX_PALETTE_MARKER,
    RGB_CHANNELS,
    RGBA_CHANNELS,
    RGB888_MAX_VALUE,
    TRANSPARENT_ALPHA_OFFSET,
)
from .exceptions import (
    BoundsViolation,
    FileSystemError,
    FormatError,
    ImageLoaderError,
    PaletteLoadError,
    SizeError,
)
from .file_system import FileSystem, PathLike
from .image_loader import ImageFormat, ImageLoader, PixelFormat
from .logging_config import get_logger
from .reader import BufferedReader

logger = get_logger(__name__)

RgbaBuffer = Union[bytearray, memoryview, np.ndarray]


class PaletteTransparency(Enum):
    """How palette index 255 is treated when decoding"""

    OPAQUE = "opaque"
    INDEX_255_TRANSPARENT = "index_255_transparent"


class PaletteFormat(Enum):
    """Palette file formats, keyed by file extension"""

    LMP = LMP_EXTENSION
    PCX = PCX_EXTENSION
    BMP = BMP_EXTENSION
    UNKNOWN = ""

    @classmethod
    def from_extension(cls, extension: str) -> "PaletteFormat":
        extension = extension.lower().lstrip(".")
        for member in cls:
            if member is not cls.UNKNOWN and member.value == extension:
                return member
        return cls.UNKNOWN

    @classmethod
    def from_path(cls, path: PathLike) -> "PaletteFormat":
        return cls.from_extension(pathlib.PurePath(str(path)).suffix)


@dataclass(frozen=True)
class PaletteData:
    """The two 1024 byte RGBA lookup tables of a palette"""

    opaque_data: bytes
    index255_transparent_data: bytes

    def table(self, transparency: PaletteTransparency) -> bytes:
        if transparency is PaletteTransparency.OPAQUE:
            return self.opaque_data
        return self.index255_transparent_data


def make_palette_data(data: bytes) -> PaletteData:
    """
    Build both RGBA tables from 256 RGB triples.

    Args:
        data: Exactly 768 bytes of RGB triples in palette order

    Returns:
        PaletteData where every entry has alpha 255, except entry 255 of the
        transparent table which has alpha 0

    Raises:
        SizeError: If data is not exactly 768 bytes
    """
    if len(data) != PALETTE_SIZE_BYTES:
        raise SizeError(
            f"Expected {PALETTE_SIZE_BYTES} bytes of palette data, got {len(data)}"
        )

    rgb = np.frombuffer(bytes(data), dtype=np.uint8).reshape(PALETTE_ENTRIES, RGB_CHANNELS)
    rgba = np.empty((PALETTE_ENTRIES, RGBA_CHANNELS), dtype=np.uint8)
    rgba[:, :RGB_CHANNELS] = rgb
    rgba[:, 3] = ALPHA_OPAQUE
    opaque_data = rgba.tobytes()

    # Only the alpha of the last entry differs
    transparent_data = bytearray(opaque_data)
    transparent_data[TRANSPARENT_ALPHA_OFFSET] = ALPHA_TRANSPARENT

    return PaletteData(opaque_data, bytes(transparent_data))


class Palette:
    """
    Shared, immutable handle to a 256 color palette.

    Copies of a Palette share the same tables, nothing can change them after
    construction, so one palette can be used by any number of decoders.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[bytes] = None) -> None:
        self._data: Optional[PaletteData] = (
            make_palette_data(data) if data is not None else None
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        state = "initialized" if self.initialized() else "uninitialized"
        return f"Palette({state})"

    @classmethod
    def load_file(cls, fs: FileSystem, path: PathLike) -> "Palette":
        """
        Load a palette file, picking the format from the file extension.

        Args:
            fs: File system to open the file through
            path: Path of an .lmp, .pcx or .bmp file

        Returns:
            Loaded palette

        Raises:
            FormatError: If the extension is not a known palette format
            PaletteLoadError: If the file cannot be opened, read or decoded
        """
        palette_format = PaletteFormat.from_path(path)
        if palette_format is PaletteFormat.UNKNOWN:
            extension = pathlib.PurePath(str(path)).suffix.lstrip(".").lower()
            raise FormatError(
                f"Could not load palette file '{path}': "
                f"Unknown palette format '{extension}'",
                path=str(path),
                extension=extension,
            )

        logger.debug(f"Loading {palette_format.name} palette from {path}")
        try:
            reader = fs.open_file(path).reader().buffer()
            if palette_format is PaletteFormat.LMP:
                palette = cls.load_lmp(reader)
            elif palette_format is PaletteFormat.PCX:
                palette = cls.load_pcx(reader)
            else:
                palette = cls.load_bmp(reader)
        except (FileSystemError, ImageLoaderError, SizeError, BoundsViolation) as e:
            raise PaletteLoadError(
                f"Could not load palette file '{path}': {e}", path=str(path)
            ) from e

        logger.info(f"Loaded palette {path}")
        return palette

    @classmethod
    def load_lmp(cls, reader: BufferedReader) -> "Palette":
        """The whole remaining content is the palette."""
        return cls(reader.read_remaining())

    @classmethod
    def load_pcx(cls, reader: BufferedReader) -> "Palette":
        """The palette occupies the last 768 bytes of the file."""
        marker_offset = PALETTE_SIZE_BYTES + 1
        if reader.size() >= marker_offset:
            reader.seek_from_end(marker_offset)
            marker = reader.read(1)[0]
            if marker != PCX_PALETTE_MARKER:
                logger.warning(
                    f"PCX palette marker is 0x{marker:02X}, expected "
                    f"0x{PCX_PALETTE_MARKER:02X}; using trailing "
                    f"{PALETTE_SIZE_BYTES} bytes anyway"
                )

        reader.seek_from_end(PALETTE_SIZE_BYTES)
        return cls(reader.read(PALETTE_SIZE_BYTES))

    @classmethod
    def load_bmp(cls, reader: BufferedReader) -> "Palette":
        """
        Use the color table of a bitmap, or its pixels if it has none.

        A 16x16 true color bitmap therefore works as a palette, one pixel per
        entry in row-major order.
        """
        image_loader = ImageLoader(ImageFormat.BMP, reader.buffer().read_remaining())
        if image_loader.has_palette():
            data = image_loader.load_palette()
        else:
            data = image_loader.load_pixels(PixelFormat.RGB)
        return cls(data)

    @classmethod
    def from_raw(cls, reader: BufferedReader) -> "Palette":
        """Build a palette from the remaining bytes of a reader."""
        return cls(reader.read_remaining())

    def initialized(self) -> bool:
        return self._data is not None

    def _require_data(self) -> PaletteData:
        if self._data is None:
            raise ValueError("Palette is not initialized")
        return self._data

    @property
    def opaque_data(self) -> bytes:
        """1024 bytes, RGBA order, every alpha 255."""
        return self._require_data().opaque_data

    @property
    def index255_transparent_data(self) -> bytes:
        """1024 bytes, RGBA order, entry 255 has alpha 0."""
        return self._require_data().index255_transparent_data

    def table(self, transparency: PaletteTransparency) -> bytes:
        return self._require_data().table(transparency)

    def color(self, index: int,
              transparency: PaletteTransparency = PaletteTransparency.OPAQUE
              ) -> tuple[int, int, int, int]:
        """Get the RGBA entry at index."""
        if not 0 <= index < PALETTE_ENTRIES:
            raise IndexError(f"Palette index {index} out of range")
        table = self.table(transparency)
        offset = index * RGBA_CHANNELS
        r, g, b, a = table[offset:offset + RGBA_CHANNELS]
        return r, g, b, a

    def indexed_to_rgba(self, reader: BufferedReader, pixel_count: int,
                        rgba_image: RgbaBuffer,
                        transparency: PaletteTransparency) -> tuple[bool, Color]:
        """
        Converts an index buffer to an RGBA image.

        Args:
            reader: Reader positioned at the index bytes, advanced by pixel_count
            pixel_count: Number of index bytes to convert
            rgba_image: Writable buffer of at least 4 * pixel_count bytes
            transparency: Whether index 255 is transparent

        Returns:
            Tuple of (has_transparency, average_color). has_transparency is
            True if the index buffer used index 255, and is always False for
            opaque palettes. An empty buffer averages to opaque black.

        Raises:
            BoundsViolation: If the reader or the output buffer is too small
            TypeError: If rgba_image is None
        """
        table = np.frombuffer(self.table(transparency), dtype=np.uint8).reshape(
            PALETTE_ENTRIES, RGBA_CHANNELS
        )

        if rgba_image is None:
            raise TypeError(
                "rgba_image must be a caller-allocated buffer, use decode_indexed to allocate one"
            )

        if not reader.can_read(pixel_count):
            raise BoundsViolation(
                f"Cannot read {pixel_count} index bytes, "
                f"{reader.remaining()} bytes remaining"
            )

        if pixel_count == 0:
            return False, Color.black()

        if isinstance(rgba_image, np.ndarray):
            if rgba_image.dtype != np.uint8 or not rgba_image.flags.c_contiguous:
                raise ValueError("RGBA buffer must be a contiguous uint8 array")
            dest = rgba_image.reshape(-1)
        else:
            dest = np.frombuffer(rgba_image, dtype=np.uint8)
        byte_count = pixel_count * RGBA_CHANNELS
        if dest.size < byte_count:
            raise BoundsViolation(
                f"RGBA buffer holds {dest.size} bytes, {byte_count} required"
            )

        indices = np.frombuffer(reader.view(pixel_count), dtype=np.uint8)
        reader.seek_forward(pixel_count)

        pixels = table[indices]
        dest[:byte_count] = pixels.reshape(-1)

        color_sum = pixels[:, :RGB_CHANNELS].sum(axis=0, dtype=np.uint64)
        divisor = float(RGB888_MAX_VALUE) * pixel_count
        average_color = Color(
            int(color_sum[0]) / divisor,
            int(color_sum[1]) / divisor,
            int(color_sum[2]) / divisor,
            1.0,
        )

        has_transparency = False
        if transparency is PaletteTransparency.INDEX_255_TRANSPARENT:
            # Bitwise AND of the alpha channel of all pixels
            and_alpha = np.bitwise_and.reduce(pixels[:, 3])
            has_transparency = int(and_alpha) != ALPHA_OPAQUE

        return has_transparency, average_color

    def decode_indexed(self, index_bytes: bytes,
                       transparency: PaletteTransparency
                       ) -> tuple[bytes, bool, Color]:
        """
        Convert a complete index buffer to a new RGBA buffer.

        Returns:
            Tuple of (rgba_bytes, has_transparency, average_color)
        """
        rgba_image = bytearray(len(index_bytes) * RGBA_CHANNELS)
        has_transparency, average_color = self.indexed_to_rgba(
            BufferedReader(index_bytes), len(index_bytes), rgba_image, transparency
        )
        return bytes(rgba_image), has_transparency, average_color
