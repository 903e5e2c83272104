"""Test configuration and fixtures."""

import struct

import pytest

END_OF_TRACK = b"\x00\xff\x2f\x00"

# Note on / note off for middle C, 96 ticks apart
NOTE_EVENTS = bytes([0x00, 0x90, 0x3C, 0x40, 0x60, 0x80, 0x3C, 0x40])


def build_header(format_type=1, tracks=1, division=96, length=6):
    return b"MThd" + struct.pack(">IHHH", length, format_type, tracks, division)


def build_track(events=NOTE_EVENTS, trailer=END_OF_TRACK, length=None):
    payload = events + trailer
    if length is None:
        length = len(payload)
    return b"MTrk" + struct.pack(">I", length) + payload


def build_midi(format_type=1, tracks=2, division=96):
    data = build_header(format_type, tracks, division)
    for n in range(tracks):
        events = bytes([0x00, 0x90, 0x3C + n, 0x40, 0x60, 0x80, 0x3C + n, 0x40])
        data += build_track(events)
    return data


@pytest.fixture
def header_bytes():
    """Return a builder for MThd chunks."""
    return build_header


@pytest.fixture
def track_bytes():
    """Return a builder for MTrk chunks."""
    return build_track


@pytest.fixture
def midi_bytes():
    """Return a builder for complete, well-formed MIDI files."""
    return build_midi


@pytest.fixture
def clean_midi():
    """Return a well-formed type 1 file with two tracks."""
    return build_midi(1, 2, 96)


@pytest.fixture
def note_events():
    return NOTE_EVENTS


@pytest.fixture
def end_of_track():
    return END_OF_TRACK
