"""Format handlers for carved data."""

from midicarver.formats.smf import HeaderChunkParser, SMFWriter, TrackChunkParser

__all__ = ["HeaderChunkParser", "SMFWriter", "TrackChunkParser"]
