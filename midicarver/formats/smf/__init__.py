"""Standard MIDI File chunk handlers."""

from midicarver.formats.smf.header_parser import HeaderChunkParser
from midicarver.formats.smf.track_parser import TrackChunkParser, TrackParseResult
from midicarver.formats.smf.writer import SMFWriter

__all__ = ["HeaderChunkParser", "TrackChunkParser", "TrackParseResult", "SMFWriter"]
