"""
Hex dump display utilities.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from midicarver.formats.smf.constants import HEADER_TAG, TRACK_TAG

console = Console()


def format_hex_lines(data: bytes, start_offset: int = 0, bytes_per_line: int = 16) -> list:
    """
    Format bytes as hex dump lines with Rich markup.

    MThd/MTrk tags are highlighted.

    Returns:
        List of markup strings, one per line
    """
    highlight = set()
    for tag in (HEADER_TAG, TRACK_TAG):
        pos = data.find(tag)
        while pos >= 0:
            highlight.update(range(pos, pos + len(tag)))
            pos = data.find(tag, pos + 1)

    lines = []
    for offset in range(0, len(data), bytes_per_line):
        chunk = data[offset : offset + bytes_per_line]

        hex_parts = []
        for i, b in enumerate(chunk):
            if i == 8:
                hex_parts.append(" ")  # Extra space at midpoint
            if offset + i in highlight:
                hex_parts.append(f"[bold yellow]{b:02X}[/bold yellow]")
            else:
                hex_parts.append(f"{b:02X}")
        # Pad short final line so the ASCII column stays aligned
        pad = (bytes_per_line - len(chunk)) * 3 + (1 if len(chunk) <= 8 < bytes_per_line else 0)
        hex_str = " ".join(hex_parts) + " " * pad

        ascii_str = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        ascii_str = escape(ascii_str)

        addr = start_offset + offset
        lines.append(f"[dim]{addr:08X}[/dim]  {hex_str}  [cyan]{ascii_str}[/cyan]")

    return lines


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = 16,
    out: Console = None,
) -> None:
    """Display formatted hex dump with Rich."""
    lines = format_hex_lines(data, start_offset, bytes_per_line)
    if not lines:
        lines = ["[dim](no data)[/dim]"]
    (out or console).print(Panel("\n".join(lines), title=title, border_style="blue", expand=False))
