#!/usr/bin/env python3
"""
Example: Carving a synthetic damaged image

Builds a blob holding a clean MIDI file, a file whose last track was saved
over by another file, and a run of orphaned tracks, then carves it in
dry-run mode and prints what would be written.
"""

import struct
import sys

sys.path.insert(0, "..")

from midicarver import CarverConfig, Scanner

END_OF_TRACK = b"\x00\xff\x2f\x00"
EVENTS = bytes([0x00, 0x90, 0x3C, 0x40, 0x60, 0x80, 0x3C, 0x40])


def header(format_type: int, tracks: int, division: int = 96) -> bytes:
    return b"MThd" + struct.pack(">IHHH", 6, format_type, tracks, division)


def track(payload: bytes = EVENTS + END_OF_TRACK, length: int = None) -> bytes:
    return b"MTrk" + struct.pack(">I", len(payload) if length is None else length) + payload


def build_image() -> bytes:
    clean = header(1, 2) + track() + track()
    victim = header(1, 2) + track() + track(EVENTS, length=400)
    survivor = header(0, 1) + track()
    orphans = track() + b"\x00" * 11 + track()

    return (
        b"\x00" * 512
        + clean
        + b"\xe5" * 100
        + victim
        + survivor
        + b"\x00" * 600
        + orphans
        + b"\x00" * 64
    )


def main():
    data = build_image()
    print(f"=== Carving {len(data)} byte synthetic image ===")
    print()

    report = Scanner(CarverConfig(dry_run=True)).scan(data)

    for carved in report.structures:
        name = carved.path.name if carved.path else "(not written)"
        print(
            f"{carved.offset:8d}  {carved.status:4}  "
            f"{carved.tracks}/{carved.declared_tracks} tracks  "
            f"{carved.reason.value:10}  {name}"
        )
        for issue in carved.issues:
            print(f"          {issue}")

    print()
    print("Totals:", report.count_by_status)


if __name__ == "__main__":
    main()
