"""
Table displays for carve and verify results.
"""

from typing import List

from rich import box
from rich.console import Console
from rich.table import Table

from midicarver.analysis.verify import VerificationResult
from midicarver.recovery.report import ScanReport

console = Console()

STATUS_STYLES = {
    "OK": "green",
    "BAD": "yellow",
    "ORPH": "magenta",
}


def status_text(status: str) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status}[/{style}]"


def display_scan_report(report: ScanReport, show_issues: bool = False, out: Console = None) -> None:
    """Display one row per carved structure plus totals."""
    out = out or console

    table = Table(title="Carved MIDI Structures", box=box.ROUNDED)
    table.add_column("Offset", justify="right", style="cyan")
    table.add_column("Status")
    table.add_column("Type", justify="right")
    table.add_column("Tracks", justify="right")
    table.add_column("Repaired", justify="right")
    table.add_column("Stop", style="dim")
    table.add_column("File")

    for carved in report.structures:
        if carved.path is None:
            target = "[red]not written[/red]"
        else:
            target = carved.path.name if carved.written else f"[dim]{carved.path.name}[/dim]"
        table.add_row(
            f"{carved.offset:08d}",
            status_text(carved.status),
            str(carved.format_type),
            f"{carved.tracks}/{carved.declared_tracks}",
            str(carved.repaired_tracks) if carved.repaired_tracks else "-",
            carved.reason.value,
            target,
        )

    out.print(table)

    counts = report.count_by_status
    summary = "  ".join(f"{status_text(k)}: {v}" for k, v in counts.items())
    out.print(f"[bold]Input:[/bold] {report.input_size} bytes   {summary}")
    if report.skipped:
        out.print(f"[red]{len(report.skipped)} structure(s) had no tracks and were skipped[/red]")

    if show_issues:
        for carved in report.structures:
            if not carved.issues:
                continue
            out.print(f"\n[bold]{carved.offset:08d}[/bold] {status_text(carved.status)}")
            for issue in carved.issues:
                color = "red" if issue.severity == "error" else "yellow"
                out.print(f"  [{color}]{issue.severity:7}[/{color}] @{issue.offset}: {issue.message}")


def display_verification(results: List[VerificationResult], out: Console = None) -> None:
    """Display mido verification results."""
    out = out or console

    table = Table(title="MIDI Verification", box=box.ROUNDED)
    table.add_column("File")
    table.add_column("Loads")
    table.add_column("Type", justify="right")
    table.add_column("Tracks", justify="right")
    table.add_column("Messages", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Note", style="dim")

    for result in results:
        name = result.path.name if result.path else "-"
        length = f"{result.length_seconds:.1f}s" if result.length_seconds is not None else "-"
        table.add_row(
            name,
            "[green]yes[/green]" if result.ok else "[red]no[/red]",
            str(result.midi_type) if result.midi_type is not None else "-",
            str(result.tracks),
            str(result.messages),
            length,
            result.error,
        )

    out.print(table)
