"""
Standard MIDI File writer.

Serializes a reconstructed Header and its tracks to canonical SMF bytes
and hands them to disk under the carver's naming scheme.
"""

import logging
import struct
from pathlib import Path
from typing import Optional

from midicarver.config import CarverConfig
from midicarver.formats.smf.constants import HEADER_DATA_LENGTH, HEADER_TAG, TRACK_TAG
from midicarver.models.header import Classification, Header
from midicarver.utils.validation import EmptyStructureError

logger = logging.getLogger(__name__)


class SMFWriter:
    """
    Writer for carved MIDI files.

    Output names encode the absolute source offset and the classification,
    e.g. mc-00001234-OK.mid.

    Example:
        writer = SMFWriter(CarverConfig(output_dir=Path("out")))
        path = writer.write(header, header.offset, header.classification)
    """

    def __init__(self, config: Optional[CarverConfig] = None):
        self.config = config or CarverConfig()

    @staticmethod
    def to_bytes(header: Header) -> bytes:
        """
        Convert a Header and its tracks to SMF bytes.

        The track count field is taken from the actual track list.

        Raises:
            EmptyStructureError: If the header has no tracks
        """
        if not header.tracks:
            raise EmptyStructureError(
                f"Refusing to serialize trackless MIDI structure at offset {header.offset}"
            )

        out = bytearray()
        out += HEADER_TAG
        out += struct.pack(
            ">IHHH",
            HEADER_DATA_LENGTH,
            header.format_type & 0xFFFF,
            len(header.tracks),
            header.division & 0xFFFF,
        )

        for track in header.tracks:
            out += TRACK_TAG
            out += struct.pack(">I", track.length)
            out += track.data

        return bytes(out)

    def filename(self, offset: int, classification: Classification) -> str:
        return self.config.filename_template.format(
            offset=offset, status=classification.status
        )

    def path_for(self, offset: int, classification: Classification) -> Path:
        base = self.config.output_dir if self.config.output_dir is not None else Path(".")
        return base / self.filename(offset, classification)

    def write(self, header: Header, offset: int, classification: Classification) -> Path:
        """
        Write a header to its output file.

        In dry-run mode, or without an output directory, nothing touches
        the disk and the would-be path is returned.

        Args:
            header: Completed header with at least one track
            offset: Absolute start offset of the structure
            classification: Status encoded in the filename

        Returns:
            Output file path

        Raises:
            EmptyStructureError: If the header has no tracks
            OSError: If the file could not be written
        """
        data = self.to_bytes(header)
        path = self.path_for(offset, classification)

        if not self.config.writes_files:
            logger.info("Would write %s (%d bytes)", path.name, len(data))
            return path

        with open(path, "wb") as f:
            f.write(data)

        logger.info("Success! Wrote %s to disk.", path)
        return path
