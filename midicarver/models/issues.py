"""
Diagnostic records attached to carved structures.
"""

from dataclasses import dataclass
from enum import Enum


class IssueKind(Enum):
    """Category of a carving problem."""

    INCONSISTENT_FIELD = "inconsistent_field"
    DESYNC_DAMAGE = "desync_damage"
    EMPTY_STRUCTURE = "empty_structure"
    IO_FAILURE = "io_failure"


@dataclass
class Issue:
    """A single problem found while carving one structure."""

    severity: str  # "error", "warning", "info"
    kind: IssueKind
    offset: int  # Absolute offset in the input blob
    message: str
    expected: str = ""
    actual: str = ""

    def __str__(self) -> str:
        text = f"[{self.severity}] @{self.offset}: {self.message}"
        if self.expected or self.actual:
            text += f" (expected {self.expected or '?'}, got {self.actual or '?'})"
        return text
