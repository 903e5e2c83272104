"""Analysis helpers for carved files."""

from midicarver.analysis.verify import VerificationResult, verify_midi_bytes, verify_midi_file

__all__ = ["VerificationResult", "verify_midi_bytes", "verify_midi_file"]
