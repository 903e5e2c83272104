"""Tests for the MThd header chunk parser."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from midicarver.formats.smf.header_parser import HeaderChunkParser
from midicarver.models.issues import IssueKind
from midicarver.utils.cursor import ByteCursor
from midicarver.utils.validation import TagMismatchError, TruncatedChunkError


def parse(data, offset=0):
    return HeaderChunkParser(ByteCursor(data)).parse(offset)


class TestHeaderChunkParser:
    """Test cases for HeaderChunkParser."""

    def test_parse_fields(self, header_bytes):
        header = parse(b"junk" + header_bytes(1, 3, 480), offset=4)

        assert header.format_type == 1
        assert header.track_count == 3
        assert header.declared_track_count == 3
        assert header.division == 480
        assert header.offset == 4
        assert not header.damaged
        assert not header.generated
        assert header.issues == []

    def test_format_zero_with_many_tracks_is_coerced(self, header_bytes):
        header = parse(header_bytes(0, 2, 96))

        assert header.format_type == 1
        assert header.track_count == 2
        assert not header.damaged
        assert [i.kind for i in header.issues] == [IssueKind.INCONSISTENT_FIELD]

    def test_format_zero_with_one_track_kept(self, header_bytes):
        header = parse(header_bytes(0, 1, 96))

        assert header.format_type == 0
        assert header.issues == []

    def test_unknown_format_accepted_with_warning(self, header_bytes):
        header = parse(header_bytes(7, 1, 96))

        assert header.format_type == 7
        assert len(header.issues) == 1
        assert header.issues[0].severity == "warning"
        assert header.issues[0].actual == "7"

    def test_bad_length_field_is_warning_only(self, header_bytes):
        header = parse(header_bytes(1, 2, 96, length=0x1000))

        assert header.track_count == 2
        assert header.division == 96
        assert header.issues[0].kind == IssueKind.INCONSISTENT_FIELD
        assert header.issues[0].expected == "6"

    def test_tag_mismatch(self):
        with pytest.raises(TagMismatchError):
            parse(b"MTrk" + bytes(10))

    def test_truncated_header(self, header_bytes):
        with pytest.raises(TruncatedChunkError):
            parse(header_bytes()[:10])
