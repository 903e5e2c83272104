"""
midicarver - Forensic carver for MIDI files hidden in raw binary blobs.

This library provides tools to:
- Scan disk images and memory dumps for MThd/MTrk chunks
- Rebuild damaged, truncated or overwritten MIDI structures
- Give orphaned track runs a synthetic header
- Write each result as a standalone .mid file tagged OK, BAD or ORPH

Example usage:
    from pathlib import Path
    from midicarver import CarverConfig, Scanner

    config = CarverConfig(output_dir=Path("mcut-out"))
    report = Scanner(config).scan(Path("disk.img").read_bytes())
    for carved in report.emitted:
        print(carved.path, carved.status)
"""

__version__ = "1.0.0"
__author__ = "midicarver Contributors"

from midicarver.config import CarverConfig
from midicarver.formats.smf.header_parser import HeaderChunkParser
from midicarver.formats.smf.track_parser import TrackChunkParser
from midicarver.formats.smf.writer import SMFWriter
from midicarver.models.header import Classification, Header
from midicarver.models.track import Track
from midicarver.recovery.scanner import Scanner, carve_bytes, carve_file

__all__ = [
    "CarverConfig",
    "Classification",
    "Header",
    "HeaderChunkParser",
    "SMFWriter",
    "Scanner",
    "Track",
    "TrackChunkParser",
    "carve_bytes",
    "carve_file",
]
