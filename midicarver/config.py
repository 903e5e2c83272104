"""
Carver configuration.

A CarverConfig is built once (usually by the CLI) and passed explicitly to
the scanner, the reconstructor and the writer.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from midicarver.utils.validation import check_u16

# Default output subdirectory, created next to the input image
OUTPUT_SUBDIR = "mcut-out"

DEFAULT_MAX_SEARCH_DISTANCE = 32768
DEFAULT_FILENAME_TEMPLATE = "mc-{offset:08d}-{status}.mid"


@dataclass
class CarverConfig:
    """
    Tunables for one carving run.

    Attributes:
        max_search_distance: Upper bound in bytes for the forward
            resynchronization search
        orphan_format: Format type given to synthesized headers
        orphan_division: Division given to synthesized headers
        output_dir: Directory receiving carved files (None = don't write)
        dry_run: Report what would be written without touching the disk
        filename_template: Output name, formatted with offset and status
    """

    max_search_distance: int = DEFAULT_MAX_SEARCH_DISTANCE
    orphan_format: int = 1
    orphan_division: int = 120
    output_dir: Optional[Path] = None
    dry_run: bool = False
    filename_template: str = DEFAULT_FILENAME_TEMPLATE

    def __post_init__(self):
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)

    @property
    def writes_files(self) -> bool:
        return self.output_dir is not None and not self.dry_run

    def validate(self) -> "CarverConfig":
        """
        Check the configuration values.

        Raises:
            ValueError: If a value is out of range
        """
        if self.max_search_distance <= 0:
            raise ValueError(
                f"max_search_distance must be positive, got {self.max_search_distance}"
            )
        check_u16(self.orphan_format, "orphan_format")
        check_u16(self.orphan_division, "orphan_division")
        return self

    @classmethod
    def for_input(cls, input_path, **kwargs) -> "CarverConfig":
        """Build a config writing into the default subdirectory beside input_path."""
        kwargs.setdefault("output_dir", Path(input_path).resolve().parent / OUTPUT_SUBDIR)
        return cls(**kwargs)
