"""
Track model for carved MIDI track chunks.
"""

from dataclasses import dataclass


@dataclass
class Track:
    """
    One reconstructed track chunk.

    Attributes:
        declared_length: Length field as read from the blob
        data: Event data including its end-of-track marker
        repaired: True when a synthetic end-of-track marker was appended,
            so data holds bytes that do not exist in the source blob
        offset: Absolute offset of the MTrk tag in the source blob
    """

    declared_length: int
    data: bytes
    repaired: bool = False
    offset: int = 0

    @property
    def length(self) -> int:
        """Length written to the output length field."""
        return len(self.data)

    @property
    def source_length(self) -> int:
        """Number of payload bytes that came from the source blob."""
        if self.repaired:
            return len(self.data) - 4
        return len(self.data)
