"""
Normalized RGBA color value
"""

from typing import NamedTuple

from .constants import RGB888_MAX_VALUE


class Color(NamedTuple):
    """RGBA color with float channels in the 0.0-1.0 range"""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def black(cls) -> "Color":
        """Opaque black."""
        return cls(0.0, 0.0, 0.0, 1.0)

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """
        Convert to 8-bit channels.

        Returns:
            Tuple of (r, g, b, a) values in 0-255 range
        """
        r, g, b, a = (
            max(0, min(RGB888_MAX_VALUE, round(c * RGB888_MAX_VALUE)))
            for c in self
        )
        return r, g, b, a
