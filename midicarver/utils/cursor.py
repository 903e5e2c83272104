"""
Bounds-checked read-only view over an input blob.

Every multi-byte read and every forward/backward signature search in the
carver goes through a ByteCursor, so a malformed length field can never
turn into an out-of-range access.
"""

import struct
from typing import Union

from midicarver.utils.validation import OutOfBoundsError

BytesLike = Union[bytes, bytearray, memoryview]


class ByteCursor:
    """
    Immutable byte buffer with explicit bounds checking.

    Strict reads (read, u16be, u32be) raise OutOfBoundsError when the
    requested window does not fit. Lenient helpers (matches, slice, find,
    rfind, count) clamp to the buffer and never raise.

    Example:
        cursor = ByteCursor(blob)
        if cursor.matches(0, b"MThd"):
            length = cursor.u32be(4)
    """

    def __init__(self, data: BytesLike):
        self._data: bytes = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        """Underlying immutable buffer."""
        return self._data

    def remaining(self, offset: int) -> int:
        """Number of bytes from offset to the end of the buffer."""
        return max(0, len(self._data) - offset)

    def fits(self, offset: int, size: int) -> bool:
        """Check that [offset, offset + size) lies inside the buffer."""
        return offset >= 0 and size >= 0 and offset + size <= len(self._data)

    def read(self, offset: int, size: int) -> bytes:
        """
        Read exactly size bytes starting at offset.

        Raises:
            OutOfBoundsError: If the window does not fit in the buffer
        """
        if not self.fits(offset, size):
            raise OutOfBoundsError(offset, size, len(self._data))
        return self._data[offset : offset + size]

    def u16be(self, offset: int) -> int:
        """Read a big-endian unsigned 16-bit integer."""
        return struct.unpack(">H", self.read(offset, 2))[0]

    def u32be(self, offset: int) -> int:
        """Read a big-endian unsigned 32-bit integer."""
        return struct.unpack(">I", self.read(offset, 4))[0]

    def slice(self, start: int, end: int) -> bytes:
        """Return bytes in [start, end) clamped to the buffer."""
        start = max(0, start)
        end = min(len(self._data), end)
        if end <= start:
            return b""
        return self._data[start:end]

    def matches(self, offset: int, pattern: bytes) -> bool:
        """True when pattern is present at offset and fits entirely."""
        if not self.fits(offset, len(pattern)):
            return False
        return self._data.startswith(pattern, offset)

    def find(self, pattern: bytes, start: int, end: int) -> int:
        """
        Find the first occurrence of pattern starting in [start, end).

        The match itself may extend past end but must fit in the buffer.

        Returns:
            Absolute offset of the match, or -1
        """
        start = max(0, start)
        stop = min(len(self._data), end + len(pattern) - 1)
        if start >= stop:
            return -1
        return self._data.find(pattern, start, stop)

    def rfind(self, pattern: bytes, start: int, end: int) -> int:
        """
        Find the last occurrence of pattern starting in [start, end].

        Both bounds are inclusive candidate positions, searched from end
        down to start.

        Returns:
            Absolute offset of the match, or -1
        """
        start = max(0, start)
        end = min(end, len(self._data) - len(pattern))
        if end < start:
            return -1
        return self._data.rfind(pattern, start, end + len(pattern))

    def count(self, pattern: bytes, start: int, end: int) -> int:
        """Count non-overlapping occurrences of pattern inside [start, end)."""
        return self.slice(start, end).count(pattern)
