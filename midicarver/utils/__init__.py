"""Utility helpers for midicarver."""

from midicarver.utils.cursor import ByteCursor
from midicarver.utils.validation import (
    CarverError,
    EmptyStructureError,
    OutOfBoundsError,
    TagMismatchError,
    TruncatedChunkError,
)

__all__ = [
    "ByteCursor",
    "CarverError",
    "EmptyStructureError",
    "OutOfBoundsError",
    "TagMismatchError",
    "TruncatedChunkError",
]
