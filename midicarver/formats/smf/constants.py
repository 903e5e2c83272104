"""
Standard MIDI File chunk constants.

Header chunk (14 bytes):
    Offset  Size    Description
    0       4       Tag "MThd"
    4       4       Length (always 6)
    8       2       Format type (0, 1, 2)
    10      2       Track count
    12      2       Division / timecode

Track chunk:
    Offset  Size    Description
    0       4       Tag "MTrk"
    4       4       Length L
    8       L       Event data, ending with 00 FF 2F 00
"""

HEADER_TAG = b"MThd"
TRACK_TAG = b"MTrk"

TAG_SIZE = 4
LENGTH_SIZE = 4

HEADER_DATA_LENGTH = 6
HEADER_CHUNK_SIZE = TAG_SIZE + LENGTH_SIZE + HEADER_DATA_LENGTH  # 14
TRACK_PREAMBLE_SIZE = TAG_SIZE + LENGTH_SIZE  # 8

END_OF_TRACK = b"\x00\xff\x2f\x00"
# Marker without its leading delta-time byte
END_OF_TRACK_PARTIAL = END_OF_TRACK[1:]

# Track count field is 16 bits wide
MAX_TRACKS = 0xFFFF
