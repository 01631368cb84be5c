#!/usr/bin/env python3
"""
Constants for the palette codec
All magic numbers and format specifications in one place
"""

# Palette specifications
PALETTE_ENTRIES = 256  # Total palette entries
RGB_CHANNELS = 3
RGBA_CHANNELS = 4
PALETTE_SIZE_BYTES = 768  # 256 colors * 3 bytes (RGB)
RGBA_PALETTE_SIZE_BYTES = 1024  # 256 colors * 4 bytes (RGBA)

# Alpha values
ALPHA_OPAQUE = 0xFF
ALPHA_TRANSPARENT = 0x00

# Index 255 is reserved for transparency in some image types
TRANSPARENT_INDEX = 255
TRANSPARENT_ALPHA_OFFSET = TRANSPARENT_INDEX * RGBA_CHANNELS + 3  # byte 1023

# Color conversion
RGB888_MAX_VALUE = 255  # 8 bits per color component

# PCX trailing palette
PCX_PALETTE_MARKER = 0x0C

# File size limits for security
MAX_PALETTE_FILE_SIZE = 16 * 1024 * 1024  # 16MB, PCX and BMP carry image data

# Palette file extensions
LMP_EXTENSION = "lmp"
PCX_EXTENSION = "pcx"
BMP_EXTENSION = "bmp"

# Preview rendering
SWATCHES_PER_ROW = 16
DEFAULT_SWATCH_SIZE = 8  # pixels

# Settings
MAX_RECENT_FILES = 10
