"""
Result records produced by a carving run.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from midicarver.models.header import Classification
from midicarver.models.issues import Issue


class DoneReason(Enum):
    """Why reconstruction of a structure stopped."""

    COMPLETE = "complete"
    COLLISION = "collision"
    LOST_SYNC = "lost_sync"


@dataclass
class CarvedStructure:
    """One MIDI structure found in the blob and what became of it."""

    offset: int  # Absolute offset of the MThd tag, or of the first orphan MTrk
    classification: Classification
    reason: DoneReason
    format_type: int
    division: int
    declared_tracks: int
    tracks: int
    repaired_tracks: int
    consumed: int  # Bytes consumed after the header chunk (or from the orphan run start)
    path: Optional[Path] = None
    written: bool = False
    issues: List[Issue] = field(default_factory=list)

    @property
    def status(self) -> str:
        return self.classification.status

    @property
    def emitted(self) -> bool:
        """True when the structure produced (or would produce) an output file."""
        return self.path is not None


@dataclass
class ScanReport:
    """Result of scanning one input blob."""

    input_size: int
    structures: List[CarvedStructure] = field(default_factory=list)
    source: Optional[Path] = None
    output_dir: Optional[Path] = None

    @property
    def written(self) -> List[CarvedStructure]:
        return [s for s in self.structures if s.written]

    @property
    def emitted(self) -> List[CarvedStructure]:
        return [s for s in self.structures if s.emitted]

    @property
    def skipped(self) -> List[CarvedStructure]:
        return [s for s in self.structures if not s.emitted]

    @property
    def count_by_status(self) -> Dict[str, int]:
        counts = Counter(s.status for s in self.emitted)
        return {c.status: counts.get(c.status, 0) for c in Classification}
