"""
midicarver - Forensic carver for MIDI files in raw binary blobs.

A CLI tool for recovering MIDI files from disk images and memory dumps.
"""

import typer
from rich.console import Console

from cli.commands.carve import carve
from cli.commands.dump import dump
from cli.commands.verify import verify
from midicarver import __version__

console = Console()

# Main app
app = typer.Typer(
    name="midicarver",
    help="Carve and rebuild MIDI files from disk images and memory dumps.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="carve")(carve)
app.command(name="verify")(verify)
app.command(name="dump")(dump)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]midicarver[/bold] version {__version__}")
    console.print("[dim]Forensic MIDI file carver[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
) -> None:
    """
    midicarver - Recover MIDI files from raw binary data.

    Finds MThd/MTrk chunks anywhere in a blob and writes each structure
    as a standalone file. Damaged files are repaired where possible:

    - orphaned runs of MTrk get a generated header
    - missing tracks after a header are searched for
    - tracks without an end-of-track marker are terminated
    - tracks saved over by another file are split at the new header

    [bold]Commands:[/bold]

        midicarver carve disk.img            # Carve into disk.img's mcut-out/
        midicarver carve disk.img --dry-run  # Report only
        midicarver verify mcut-out/*.mid     # Check files load
        midicarver dump disk.img -s 1234     # Hex view at an offset

    Use --help with any command for more details.
    """
    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
