"""Reconstruction and scanning of MIDI structures in raw blobs."""

from midicarver.recovery.reconstructor import ExtractState, Reconstructor
from midicarver.recovery.report import CarvedStructure, DoneReason, ScanReport
from midicarver.recovery.scanner import Scanner, carve_bytes, carve_file

__all__ = [
    "CarvedStructure",
    "DoneReason",
    "ExtractState",
    "Reconstructor",
    "ScanReport",
    "Scanner",
    "carve_bytes",
    "carve_file",
]
