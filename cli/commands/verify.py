"""
Verify command - check that carved files load as MIDI.
"""

from pathlib import Path
from typing import List

import typer
from rich.console import Console

from cli.display.tables import display_verification

console = Console()
app = typer.Typer()


@app.command()
def verify(
    files: List[Path] = typer.Argument(..., help="MIDI files to check"),
) -> None:
    """
    Load MIDI files with mido and report whether they parse.

    Exits with code 1 when any file fails to load.

    Examples:

        midicarver verify mcut-out/*.mid
    """
    from midicarver.analysis.verify import verify_midi_file

    missing = [f for f in files if not f.exists()]
    if missing:
        for f in missing:
            console.print(f"[red]Error: File not found: {f}[/red]")
        raise typer.Exit(1)

    results = [verify_midi_file(f) for f in files]
    display_verification(results, out=console)

    if not all(r.ok for r in results):
        raise typer.Exit(1)
