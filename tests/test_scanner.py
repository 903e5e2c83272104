"""Tests for the top-level scanner."""

import struct

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from midicarver.config import CarverConfig
from midicarver.models.header import Classification
from midicarver.models.issues import IssueKind
from midicarver.recovery.report import DoneReason
from midicarver.recovery.scanner import Scanner, carve_bytes, carve_file


def scan(data, tmp_path, **kwargs):
    return Scanner(CarverConfig(output_dir=tmp_path, **kwargs)).scan(data)


class TestScanner:
    """Test cases for Scanner."""

    def test_embedded_clean_file_is_identical(self, tmp_path, clean_midi):
        blob = b"\x00" * 100 + clean_midi + b"\xaa" * 50
        report = scan(blob, tmp_path)

        assert len(report.structures) == 1
        carved = report.structures[0]
        assert carved.offset == 100
        assert carved.classification == Classification.CLEAN
        assert (tmp_path / "mc-00000100-OK.mid").read_bytes() == clean_midi

    def test_several_files(self, tmp_path, midi_bytes):
        first = midi_bytes(1, 2, 96)
        second = midi_bytes(0, 1, 480)
        blob = first + b"\x10" * 7 + second
        report = scan(blob, tmp_path)

        assert [s.offset for s in report.structures] == [0, len(first) + 7]
        assert [s.status for s in report.structures] == ["OK", "OK"]
        assert (tmp_path / f"mc-{len(first) + 7:08d}-OK.mid").read_bytes() == second

    def test_format_zero_coercion_is_not_damage(self, tmp_path, header_bytes, track_bytes):
        blob = header_bytes(0, 2, 96) + track_bytes() + track_bytes()
        report = scan(blob, tmp_path)

        carved = report.structures[0]
        assert carved.classification == Classification.CLEAN
        assert carved.format_type == 1
        assert any(i.kind == IssueKind.INCONSISTENT_FIELD for i in carved.issues)
        written = (tmp_path / "mc-00000000-OK.mid").read_bytes()
        assert written[8:10] == b"\x00\x01"

    def test_overwritten_track_splits_into_two_files(
        self, tmp_path, header_bytes, track_bytes, note_events, end_of_track
    ):
        later = header_bytes(1, 1, 96) + track_bytes()
        first = header_bytes(1, 1, 96) + b"MTrk" + struct.pack(">I", 200) + note_events
        blob = first + later + bytes(300)
        report = scan(blob, tmp_path)

        assert [s.offset for s in report.structures] == [0, len(first)]
        damaged, clean = report.structures
        assert damaged.classification == Classification.DAMAGED
        assert damaged.repaired_tracks == 1
        assert clean.classification == Classification.CLEAN

        repaired = (tmp_path / "mc-00000000-BAD.mid").read_bytes()
        assert repaired.endswith(note_events + end_of_track)
        assert (tmp_path / f"mc-{len(first):08d}-OK.mid").read_bytes() == later

    def test_orphan_tracks_get_generated_header(self, tmp_path, track_bytes):
        tracks = track_bytes() + track_bytes()
        blob = b"\x11" * 10 + tracks + b"\x22" * 10
        report = scan(blob, tmp_path)

        assert len(report.structures) == 1
        carved = report.structures[0]
        assert carved.classification == Classification.GENERATED
        assert carved.declared_tracks == 2
        assert carved.tracks == 2
        data = (tmp_path / "mc-00000010-ORPH.mid").read_bytes()
        assert data == b"MThd" + struct.pack(">IHHH", 6, 1, 2, 120) + tracks

    def test_orphan_run_with_gap(self, tmp_path, track_bytes):
        blob = track_bytes() + b"\x33" * 9 + track_bytes() + track_bytes()
        report = scan(blob, tmp_path)

        assert len(report.structures) == 1
        assert report.structures[0].tracks == 3
        assert report.structures[0].status == "ORPH"

    def test_orphan_run_stops_at_header(self, tmp_path, track_bytes, clean_midi):
        blob = track_bytes() + clean_midi
        report = scan(blob, tmp_path)

        assert [s.status for s in report.structures] == ["ORPH", "OK"]
        assert report.structures[0].declared_tracks == 1

    def test_missing_tracks_truncated(self, tmp_path, header_bytes, track_bytes):
        blob = header_bytes(1, 5, 96) + track_bytes() * 3 + b"\x01" * 64
        report = scan(blob, tmp_path)

        assert len(report.structures) == 1
        carved = report.structures[0]
        assert carved.classification == Classification.DAMAGED
        assert carved.tracks == 3
        assert carved.reason == DoneReason.LOST_SYNC
        data = (tmp_path / "mc-00000000-BAD.mid").read_bytes()
        assert data[10:12] == b"\x00\x03"
        assert data.count(b"MTrk") == 3

    def test_track_beyond_search_distance_becomes_orphan(self, tmp_path, header_bytes, track_bytes):
        head = header_bytes(1, 2, 96) + track_bytes()
        blob = head + b"\x01" * 100 + track_bytes()
        report = scan(blob, tmp_path, max_search_distance=50)

        assert [s.status for s in report.structures] == ["BAD", "ORPH"]
        assert report.structures[1].offset == len(head) + 100

    def test_header_without_tracks_is_skipped(self, tmp_path, header_bytes, clean_midi):
        blob = header_bytes(1, 1, 96) + clean_midi
        report = scan(blob, tmp_path)

        assert len(report.structures) == 2
        assert report.structures[0].path is None
        assert len(report.skipped) == 1
        assert [p.name for p in tmp_path.iterdir()] == ["mc-00000014-OK.mid"]

    def test_truncated_header_at_end(self, tmp_path, header_bytes):
        report = scan(b"\x00" * 5 + header_bytes()[:9], tmp_path)

        assert report.structures == []

    def test_bad_header_length_still_takes_14_bytes(self, tmp_path, header_bytes, track_bytes):
        blob = header_bytes(1, 1, 96, length=0x1000) + track_bytes()
        report = scan(blob, tmp_path)

        assert len(report.structures) == 1
        carved = report.structures[0]
        assert carved.classification == Classification.CLEAN
        assert carved.tracks == 1
        data = (tmp_path / "mc-00000000-OK.mid").read_bytes()
        assert data == header_bytes(1, 1, 96) + track_bytes()
        assert data[4:8] == b"\x00\x00\x00\x06"

    def test_truncated_track_preamble_reported_once(self, tmp_path, header_bytes, track_bytes):
        blob = header_bytes(1, 2, 96) + track_bytes() + b"MTrk\x00"
        report = scan(blob, tmp_path)

        assert len(report.structures) == 1
        assert report.structures[0].status == "BAD"
        assert report.structures[0].tracks == 1
        assert report.skipped == []

    def test_many_structures_in_one_pass(self, tmp_path, clean_midi, track_bytes):
        blob = (clean_midi + b"\x07" * 3) * 40 + track_bytes() * 2 + clean_midi
        report = scan(blob, tmp_path)

        step = len(clean_midi) + 3
        statuses = [s.status for s in report.structures]
        assert statuses == ["OK"] * 40 + ["ORPH", "OK"]
        assert [s.offset for s in report.structures[:40]] == [n * step for n in range(40)]
        assert report.structures[40].offset == 40 * step
        assert report.structures[40].declared_tracks == 2

    def test_truncated_track_at_end(self, tmp_path, header_bytes, note_events):
        blob = header_bytes(1, 1, 96) + b"MTrk" + struct.pack(">I", 100) + note_events
        report = scan(blob, tmp_path)

        carved = report.structures[0]
        assert carved.status == "BAD"
        assert carved.repaired_tracks == 1

    def test_rescan_of_clean_output_is_identical(self, tmp_path, clean_midi):
        first_dir = tmp_path / "first"
        second_dir = tmp_path / "second"
        first_dir.mkdir()
        second_dir.mkdir()

        scan(b"\xff" * 33 + clean_midi, first_dir)
        output = (first_dir / "mc-00000033-OK.mid").read_bytes()
        scan(output, second_dir)

        assert (second_dir / "mc-00000000-OK.mid").read_bytes() == output

    def test_count_by_status(self, tmp_path, clean_midi, track_bytes):
        report = scan(clean_midi + track_bytes(), tmp_path)

        assert report.count_by_status == {"OK": 1, "BAD": 0, "ORPH": 1}

    def test_empty_input(self, tmp_path):
        report = scan(b"", tmp_path)

        assert report.structures == []
        assert report.input_size == 0


class TestCarveHelpers:
    """Test cases for carve_bytes and carve_file."""

    def test_carve_bytes_without_output(self, clean_midi):
        report = carve_bytes(clean_midi)

        assert report.structures[0].path.name == "mc-00000000-OK.mid"
        assert not report.structures[0].written

    def test_carve_file_default_output_dir(self, tmp_path, clean_midi):
        image = tmp_path / "disk.img"
        image.write_bytes(b"\x00" * 16 + clean_midi)

        report = carve_file(image)

        assert report.source == image
        out = tmp_path / "mcut-out" / "mc-00000016-OK.mid"
        assert out.read_bytes() == clean_midi

    def test_carve_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            carve_file(tmp_path / "nope.img")
