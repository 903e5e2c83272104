"""
Playability check for carved MIDI files using mido.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import mido


@dataclass
class VerificationResult:
    """Outcome of loading a carved file with mido."""

    ok: bool
    midi_type: Optional[int] = None
    tracks: int = 0
    messages: int = 0
    length_seconds: Optional[float] = None
    error: str = ""
    path: Optional[Path] = None


def verify_midi_bytes(data: bytes) -> VerificationResult:
    """
    Parse SMF bytes with mido.

    Args:
        data: Complete MIDI file contents

    Returns:
        VerificationResult; ok is False when mido cannot load the data
    """
    try:
        midi = mido.MidiFile(file=io.BytesIO(data), clip=True)
    except Exception as e:
        return VerificationResult(ok=False, error=f"{type(e).__name__}: {e}")

    result = VerificationResult(
        ok=True,
        midi_type=midi.type,
        tracks=len(midi.tracks),
        messages=sum(len(track) for track in midi.tracks),
    )

    # Type 2 files have no single playback length
    if midi.type != 2:
        try:
            result.length_seconds = midi.length
        except (ValueError, ZeroDivisionError) as e:
            result.error = f"length unavailable: {e}"

    return result


def verify_midi_file(filepath: Union[str, Path]) -> VerificationResult:
    """
    Read and verify a MIDI file.

    Args:
        filepath: Path to a .mid file
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, "rb") as f:
        result = verify_midi_bytes(f.read())
    result.path = filepath
    return result
