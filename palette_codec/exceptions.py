"""Custom exceptions for the palette codec"""

from typing import Optional


class PaletteCodecError(Exception):
    """Base exception for all palette codec errors."""


class PaletteLoadError(PaletteCodecError):
    """Raised when a palette file cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class FormatError(PaletteLoadError):
    """Raised for unsupported palette file formats."""

    def __init__(self, message: str, path: Optional[str] = None,
                 extension: str = ""):
        super().__init__(message, path)
        self.extension = extension


class SizeError(PaletteCodecError, ValueError):
    """Raised when palette source data is not exactly 768 bytes."""


class FileSystemError(PaletteCodecError, OSError):
    """Raised when a file cannot be opened or read."""


class ImageLoaderError(PaletteCodecError):
    """Raised when the bitmap decoder fails."""


class BoundsViolation(PaletteCodecError, IndexError):
    """Raised when a read or write runs past the end of a buffer."""
