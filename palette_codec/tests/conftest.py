"""
Shared pytest fixtures and configuration for palette codec tests
"""

import logging
import tempfile
from pathlib import Path

import pytest
from PIL import Image

from palette_codec.constants import PALETTE_SIZE_BYTES, PCX_PALETTE_MARKER
from palette_codec.file_system import DiskFileSystem
from palette_codec.logging_config import LOGGER_NAME
from palette_codec.settings_manager import SettingsManager


@pytest.fixture(autouse=True)
def reset_codec_logger():
    """Let caplog see codec log records even after setup_logging ran"""
    logger = logging.getLogger(LOGGER_NAME)
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def red_palette_data():
    """768 bytes of palette data, entry 0 is pure red, everything else black"""
    data = bytearray(PALETTE_SIZE_BYTES)
    data[0] = 255
    return bytes(data)


@pytest.fixture
def gradient_palette_data():
    """768 bytes where entry i is (i, 255 - i, i // 2)"""
    data = bytearray()
    for i in range(256):
        data.extend((i, 255 - i, i // 2))
    return bytes(data)


@pytest.fixture
def lmp_file(temp_dir, gradient_palette_data):
    """Create a palette.lmp file"""
    path = temp_dir / "palette.lmp"
    path.write_bytes(gradient_palette_data)
    return path


@pytest.fixture
def pcx_file(temp_dir, gradient_palette_data):
    """Create a PCX file with image data, marker byte and trailing palette"""
    path = temp_dir / "colormap.pcx"
    header = bytes([0x0A, 0x05, 0x01, 0x08]) + b"\x00" * 124
    pixels = b"\xC1\x07" * 32
    path.write_bytes(header + pixels + bytes([PCX_PALETTE_MARKER]) + gradient_palette_data)
    return path


@pytest.fixture
def paletted_bmp_file(temp_dir, gradient_palette_data):
    """Create an 8-bit BMP with an embedded color table"""
    path = temp_dir / "paletted.bmp"
    image = Image.new("P", (4, 4))
    image.putpalette(list(gradient_palette_data))
    image.save(path, format="BMP")
    return path


@pytest.fixture
def truecolor_bmp_file(temp_dir, gradient_palette_data):
    """Create a 16x16 24-bit BMP whose pixels are the palette entries"""
    path = temp_dir / "truecolor.bmp"
    image = Image.new("RGB", (16, 16))
    image.frombytes(gradient_palette_data)
    image.save(path, format="BMP")
    return path


@pytest.fixture
def disk_fs(temp_dir):
    """File system rooted at the temp directory"""
    return DiskFileSystem(temp_dir)


@pytest.fixture
def settings():
    """In-memory settings"""
    return SettingsManager()
