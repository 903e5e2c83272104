"""
CLI display modules.
"""

from cli.display.tables import display_scan_report, display_verification
from cli.display.hex_view import display_hex_dump

__all__ = [
    "display_scan_report",
    "display_verification",
    "display_hex_dump",
]
