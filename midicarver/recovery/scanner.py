"""
Top-level scanner: one forward pass over a blob carving MIDI structures.

MThd tags are parsed and their tracks reconstructed; MTrk tags met
outside any header form an orphan run and get a synthesized header.
Bytes consumed by a structure are never looked at again.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from midicarver.config import CarverConfig
from midicarver.formats.smf.constants import HEADER_CHUNK_SIZE, HEADER_TAG, TAG_SIZE, TRACK_TAG
from midicarver.formats.smf.header_parser import HeaderChunkParser
from midicarver.formats.smf.writer import SMFWriter
from midicarver.models.header import Header
from midicarver.recovery.reconstructor import Reconstructor
from midicarver.recovery.report import CarvedStructure, ScanReport
from midicarver.utils.cursor import ByteCursor, BytesLike
from midicarver.utils.validation import TruncatedChunkError

logger = logging.getLogger(__name__)


class Scanner:
    """
    Carves every MIDI structure out of a blob.

    Example:
        scanner = Scanner(CarverConfig(output_dir=Path("mcut-out")))
        report = scanner.scan(blob)
        for carved in report.emitted:
            print(carved.path, carved.status)
    """

    def __init__(self, config: Optional[CarverConfig] = None, writer: Optional[SMFWriter] = None):
        self.config = (config or CarverConfig()).validate()
        self.writer = writer or SMFWriter(self.config)

    def scan(self, data: BytesLike) -> ScanReport:
        """
        Scan a blob and collect every carved structure.

        Args:
            data: Input blob

        Returns:
            ScanReport for the whole pass
        """
        report = ScanReport(input_size=len(data), output_dir=self.config.output_dir)
        report.structures.extend(self.iter_structures(data))
        logger.info(
            "Scan finished: %d structure(s), %d output file(s)",
            len(report.structures),
            len(report.emitted),
        )
        return report

    def iter_structures(self, data: BytesLike) -> Iterator[CarvedStructure]:
        """Yield each carved structure as the pass reaches it."""
        cursor = ByteCursor(data)
        header_parser = HeaderChunkParser(cursor)
        reconstructor = Reconstructor(cursor, self.config, self.writer)
        size = len(cursor)

        # Next known position of each tag; -1 once none is left
        header_at = cursor.find(HEADER_TAG, 0, size)
        track_at = cursor.find(TRACK_TAG, 0, size)

        i = 0
        while i < size:
            if 0 <= header_at < i:
                header_at = cursor.find(HEADER_TAG, i, size)
            if 0 <= track_at < i:
                track_at = cursor.find(TRACK_TAG, i, size)

            # Bytes with neither tag are skipped one at a time; jump straight there
            hits = [pos for pos in (header_at, track_at) if pos >= 0]
            if not hits:
                break
            i = min(hits)

            if cursor.matches(i, TRACK_TAG):
                logger.info("Found an orphan MIDI track at %d, source may be fragmented.", i)
                boundary = header_at if header_at >= 0 else size
                header = self._orphan_header(cursor, i, boundary)
                carved = reconstructor.reconstruct(header, i)
                yield carved
                i += max(carved.consumed, 1)
            else:
                logger.info("Found a MIDI header starting at %d", i)
                try:
                    header = header_parser.parse(i)
                except TruncatedChunkError as e:
                    logger.warning("Header cut off by end of data: %s", e)
                    i += TAG_SIZE
                    continue
                carved = reconstructor.reconstruct(header, i + HEADER_CHUNK_SIZE)
                yield carved
                i += HEADER_CHUNK_SIZE + carved.consumed

    def _orphan_header(self, cursor: ByteCursor, offset: int, boundary: int) -> Header:
        """Synthesize a header sized by the MTrk tags between offset and boundary."""
        count = cursor.count(TRACK_TAG, offset, boundary)
        logger.info(
            "Generating a default type %d header; found %d MTrk tag(s) before next header.",
            self.config.orphan_format,
            count,
        )
        return Header.synthesize(
            offset,
            count,
            format_type=self.config.orphan_format,
            division=self.config.orphan_division,
        )


def carve_bytes(data: BytesLike, config: Optional[CarverConfig] = None) -> ScanReport:
    """
    Carve MIDI structures from an in-memory blob.

    Args:
        data: Input blob
        config: Carver configuration (default: report only, no files)

    Returns:
        ScanReport
    """
    return Scanner(config).scan(data)


def carve_file(
    filepath: Union[str, Path], config: Optional[CarverConfig] = None
) -> ScanReport:
    """
    Carve MIDI structures from a file on disk.

    Without a config, output goes to the mcut-out directory beside the
    input file.

    Args:
        filepath: Path to the disk image or dump

    Returns:
        ScanReport
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    config = config or CarverConfig.for_input(filepath)
    if config.writes_files:
        config.output_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Opened %s for reading", filepath)
    with open(filepath, "rb") as f:
        data = f.read()
    logger.info("File is %d bytes long", len(data))

    report = Scanner(config).scan(data)
    report.source = filepath
    return report
