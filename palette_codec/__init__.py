"""
Palette Codec
Loads 256 color palettes from legacy game asset formats and decodes
indexed textures to RGBA
"""

from .color import Color
from .exceptions import (
    BoundsViolation,
    FileSystemError,
    FormatError,
    ImageLoaderError,
    PaletteCodecError,
    PaletteLoadError,
    SizeError,
)
from .file_system import DiskFileSystem, File, MemoryFileSystem
from .palette import Palette, PaletteData, PaletteFormat, PaletteTransparency
from .palette_manager import PaletteManager
from .reader import BufferedReader

__version__ = "1.0.0"
__all__ = [
    "BoundsViolation",
    "BufferedReader",
    "Color",
    "DiskFileSystem",
    "File",
    "FileSystemError",
    "FormatError",
    "ImageLoaderError",
    "MemoryFileSystem",
    "Palette",
    "PaletteCodecError",
    "PaletteData",
    "PaletteFormat",
    "PaletteLoadError",
    "PaletteManager",
    "PaletteTransparency",
    "SizeError",
]
