"""
Header model for carved MIDI structures.

A Header owns its ordered track list and the diagnostics collected while
it was reconstructed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from midicarver.models.issues import Issue, IssueKind
from midicarver.models.track import Track


class Classification(Enum):
    """Outcome of a reconstruction, used as the output filename suffix."""

    CLEAN = "OK"
    DAMAGED = "BAD"
    GENERATED = "ORPH"

    @property
    def status(self) -> str:
        return self.value


@dataclass
class Header:
    """
    MIDI header chunk plus its reconstructed tracks.

    track_count starts as the declared value and is lowered to the number
    of tracks actually recovered when a structure ends early.
    """

    format_type: int = 1
    track_count: int = 0
    division: int = 120
    damaged: bool = False
    generated: bool = False
    offset: int = 0
    declared_track_count: int = 0
    tracks: List[Track] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)

    @classmethod
    def synthesize(
        cls, offset: int, track_count: int, format_type: int = 1, division: int = 120
    ) -> "Header":
        """Create a default header for an orphan track run."""
        return cls(
            format_type=format_type,
            track_count=track_count,
            division=division,
            damaged=True,
            generated=True,
            offset=offset,
            declared_track_count=track_count,
        )

    @property
    def classification(self) -> Classification:
        if self.generated:
            return Classification.GENERATED
        if not self.damaged:
            return Classification.CLEAN
        return Classification.DAMAGED

    @property
    def repaired_tracks(self) -> int:
        return sum(1 for t in self.tracks if t.repaired)

    def add_track(self, track: Track) -> None:
        self.tracks.append(track)

    def add_issue(
        self,
        severity: str,
        kind: IssueKind,
        offset: int,
        message: str,
        expected: str = "",
        actual: str = "",
    ) -> Issue:
        """Record a diagnostic on this header."""
        issue = Issue(
            severity=severity,
            kind=kind,
            offset=offset,
            message=message,
            expected=expected,
            actual=actual,
        )
        self.issues.append(issue)
        return issue

    def mark_damaged(self) -> None:
        self.damaged = True
