"""
Dump command - annotated hex view of a region of the input blob.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.hex_view import display_hex_dump

console = Console()
app = typer.Typer()

MAX_DUMP_LENGTH = 4096


@app.command()
def dump(
    image: Path = typer.Argument(..., help="Binary blob to inspect"),
    offset: int = typer.Option(0, "--offset", "-s", help="Start offset in bytes"),
    length: int = typer.Option(256, "--length", "-l", help="Number of bytes to show"),
) -> None:
    """
    Show a hex dump of part of a blob, highlighting MThd/MTrk tags.

    Useful for checking a carved file against its source location.

    Examples:

        midicarver dump disk.img --offset 1234 --length 64
    """
    from midicarver.utils.cursor import ByteCursor

    if not image.exists():
        console.print(f"[red]Error: File not found: {image}[/red]")
        raise typer.Exit(1)

    if offset < 0 or length <= 0:
        console.print("[red]Error: offset must be >= 0 and length > 0[/red]")
        raise typer.Exit(1)

    length = min(length, MAX_DUMP_LENGTH)

    with open(image, "rb") as f:
        cursor = ByteCursor(f.read())

    if offset >= len(cursor):
        console.print(f"[red]Error: offset {offset} is past end of file ({len(cursor)} bytes)[/red]")
        raise typer.Exit(1)

    data = cursor.slice(offset, offset + length)
    display_hex_dump(
        data,
        title=f"{image.name} @ {offset} ({len(data)} bytes)",
        start_offset=offset,
        out=console,
    )
