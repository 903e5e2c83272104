"""
Carve command - extract MIDI files from a disk image or memory dump.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.display.tables import display_scan_report, display_verification
from cli.logs import configure_logging
from midicarver.config import DEFAULT_MAX_SEARCH_DISTANCE, OUTPUT_SUBDIR, CarverConfig

console = Console()
app = typer.Typer()


@app.command()
def carve(
    image: Path = typer.Argument(..., help="Binary blob to scan (disk image, memory dump)"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=f"Output directory (default: <image dir>/{OUTPUT_SUBDIR})"
    ),
    max_search: int = typer.Option(
        DEFAULT_MAX_SEARCH_DISTANCE,
        "--max-search",
        "-m",
        help="Maximum bytes to search forward for a lost MTrk tag",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Report only, write nothing"),
    verify: bool = typer.Option(False, "--verify", help="Load each written file with mido"),
    issues: bool = typer.Option(False, "--issues", "-i", help="List diagnostics per structure"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every carving decision"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
) -> None:
    """
    Scan a binary blob and rebuild every MIDI file found in it.

    Output files are named mc-<offset>-<status>.mid, where status is:

    - [green]OK[/green]   clean structure
    - [yellow]BAD[/yellow]  damaged and repaired
    - [magenta]ORPH[/magenta] orphan tracks given a generated header

    Examples:

        midicarver carve disk.img

        midicarver carve dump.bin -o carved/ --verify

        midicarver carve disk.img --dry-run -v
    """
    from midicarver.recovery.scanner import carve_file

    if not image.exists():
        console.print(f"[red]Error: File not found: {image}[/red]")
        raise typer.Exit(1)

    configure_logging(verbose=verbose, quiet=quiet)

    settings = {"max_search_distance": max_search, "dry_run": dry_run}
    if output is not None:
        settings["output_dir"] = output

    try:
        config = CarverConfig.for_input(image, **settings).validate()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    try:
        report = carve_file(image, config)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    display_scan_report(report, show_issues=issues, out=console)

    if config.writes_files:
        console.print(f"[dim]Output directory: {config.output_dir}[/dim]")

    if verify and report.written:
        from midicarver.analysis.verify import verify_midi_file

        results = [verify_midi_file(carved.path) for carved in report.written]
        console.print()
        display_verification(results, out=console)
