"""Data models for carved MIDI structures."""

from midicarver.models.header import Classification, Header
from midicarver.models.issues import Issue, IssueKind
from midicarver.models.track import Track

__all__ = [
    "Classification",
    "Header",
    "Issue",
    "IssueKind",
    "Track",
]
