"""
Error taxonomy and field checks for carved MIDI structures.
"""

from typing import Optional


class CarverError(Exception):
    """Base class for carver errors."""

    pass


class TagMismatchError(CarverError):
    """Raised when a chunk parser is invoked at a position without its tag."""

    def __init__(self, offset: int, expected: bytes, actual: bytes):
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected!r} at offset {offset}, found {actual!r}"
        )


class OutOfBoundsError(CarverError, IndexError):
    """Raised when a strict read would leave the input buffer."""

    def __init__(self, offset: int, size: int, length: int):
        self.offset = offset
        self.size = size
        self.length = length
        super().__init__(
            f"Read of {size} bytes at offset {offset} exceeds buffer of {length} bytes"
        )


class TruncatedChunkError(CarverError):
    """Raised when a tagged chunk's fixed-size fields run past the buffer end."""

    def __init__(self, offset: int, needed: int, available: int):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Chunk at offset {offset} needs {needed} bytes, only {available} available"
        )


class EmptyStructureError(CarverError):
    """Raised when a header with no tracks is handed to the serializer."""

    pass


def check_format_type(format_type: int) -> Optional[str]:
    """
    Check a header format type.

    Args:
        format_type: Value of the header's format field

    Returns:
        Warning text for values outside 0-2, otherwise None
    """
    if format_type > 2:
        return f"Format type {format_type} is unknown (should be 0-2)"
    return None


def check_header_length(length: int, expected: int = 6) -> Optional[str]:
    """
    Check a header chunk length field.

    Returns:
        Warning text when the length differs from expected, otherwise None
    """
    if length != expected:
        return f"Header length field says {length} bytes, should be {expected}"
    return None


def check_u16(value: int, name: str = "value") -> None:
    """
    Validate that a value fits in an unsigned 16-bit field.

    Raises:
        ValueError: If value is out of range
    """
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} must be 0-65535, got {value}")
