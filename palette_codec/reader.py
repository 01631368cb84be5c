#!/usr/bin/env python3
"""
Bounds-checked reader over an in-memory byte buffer
"""

from .exceptions import BoundsViolation


class BufferedReader:
    """
    Cursor over a byte buffer.

    Every seek and read is checked against the buffer bounds and raises
    BoundsViolation instead of reading garbage.
    """

    def __init__(self, data: bytes) -> None:
        if not isinstance(data, memoryview):
            data = memoryview(bytes(data))
        self._data = data
        self._position = 0

    def size(self) -> int:
        """Total size of the underlying buffer."""
        return len(self._data)

    def position(self) -> int:
        """Current read position."""
        return self._position

    def remaining(self) -> int:
        """Number of bytes left to read."""
        return len(self._data) - self._position

    def can_read(self, count: int) -> bool:
        """Check whether count bytes can be read from the current position."""
        return 0 <= count <= self.remaining()

    def seek_from_begin(self, offset: int) -> None:
        if offset < 0 or offset > len(self._data):
            raise BoundsViolation(
                f"Cannot seek to offset {offset}, buffer size is {len(self._data)}"
            )
        self._position = offset

    def seek_forward(self, count: int) -> None:
        if not self.can_read(count):
            raise BoundsViolation(
                f"Cannot seek forward {count} bytes at position {self._position}, "
                f"{self.remaining()} bytes remaining"
            )
        self._position += count

    def seek_from_end(self, offset: int) -> None:
        """Move the cursor to offset bytes before the end of the buffer."""
        if offset < 0 or offset > len(self._data):
            raise BoundsViolation(
                f"Cannot seek {offset} bytes from end, buffer size is {len(self._data)}"
            )
        self._position = len(self._data) - offset

    def read(self, count: int) -> bytes:
        """
        Read count bytes and advance the cursor.

        Raises:
            BoundsViolation: If fewer than count bytes remain
        """
        if not self.can_read(count):
            raise BoundsViolation(
                f"Cannot read {count} bytes at position {self._position}, "
                f"{self.remaining()} bytes remaining"
            )
        start = self._position
        self._position += count
        return bytes(self._data[start:self._position])

    def read_remaining(self) -> bytes:
        """Read everything from the current position to the end."""
        return self.read(self.remaining())

    def buffer(self) -> "BufferedReader":
        """Independent reader over the bytes that have not been read yet."""
        return BufferedReader(self._data[self._position:])

    def sub_reader(self, count: int) -> "BufferedReader":
        """Reader over the next count bytes; this reader skips past them."""
        if not self.can_read(count):
            raise BoundsViolation(
                f"Cannot create sub reader of {count} bytes at position "
                f"{self._position}, {self.remaining()} bytes remaining"
            )
        start = self._position
        self._position += count
        return BufferedReader(self._data[start:self._position])

    def view(self, count: int) -> memoryview:
        """Zero-copy view of the next count bytes without advancing."""
        if not self.can_read(count):
            raise BoundsViolation(
                f"Cannot view {count} bytes at position {self._position}, "
                f"{self.remaining()} bytes remaining"
            )
        return self._data[self._position:self._position + count]
