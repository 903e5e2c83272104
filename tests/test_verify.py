"""Tests for mido-based verification of carved files."""

import struct

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from midicarver.analysis.verify import verify_midi_bytes, verify_midi_file
from midicarver.config import CarverConfig
from midicarver.recovery.scanner import Scanner


class TestVerify:
    """Test cases for verify_midi_bytes and verify_midi_file."""

    def test_clean_file_loads(self, clean_midi):
        result = verify_midi_bytes(clean_midi)

        assert result.ok
        assert result.midi_type == 1
        assert result.tracks == 2
        # Note on, note off and end of track per track
        assert result.messages == 6
        assert result.length_seconds is not None

    def test_garbage_does_not_load(self):
        result = verify_midi_bytes(b"not a midi file at all")

        assert not result.ok
        assert result.error

    def test_repaired_output_loads(self, tmp_path, header_bytes, track_bytes, note_events):
        later = header_bytes(1, 1, 96) + track_bytes()
        blob = header_bytes(1, 1, 96) + b"MTrk" + struct.pack(">I", 200) + note_events + later + bytes(300)
        report = Scanner(CarverConfig(output_dir=tmp_path)).scan(blob)

        for carved in report.written:
            result = verify_midi_file(carved.path)
            assert result.ok, result.error
            assert result.tracks == 1
            assert result.path == carved.path

    def test_orphan_output_loads(self, tmp_path, track_bytes):
        report = Scanner(CarverConfig(output_dir=tmp_path)).scan(track_bytes() * 3)

        result = verify_midi_file(report.written[0].path)
        assert result.ok
        assert result.tracks == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            verify_midi_file(tmp_path / "missing.mid")
