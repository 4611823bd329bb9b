"""Rich output formatting helpers for the TrackGuard CLI.

Status Color Mapping:
    PASSED = bold green, WARNING = yellow, FAILED = bold red, SKIPPED = dim
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from trackguard.core.analyzer import Result, Severity, Status

_STATUS_STYLES: dict[Status, str] = {
    Status.PASSED: "bold green",
    Status.WARNING: "yellow",
    Status.FAILED: "bold red",
    Status.SKIPPED: "dim",
}

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

console = Console()


def status_style(status: Status) -> str:
    """Return the Rich style string for a given status."""
    return _STATUS_STYLES.get(status, "white")


def print_result(result: Result, analyzer_name: str) -> None:
    """Print a single analyzer result with its issues and evidence.

    Args:
        result: The analyzer result.
        analyzer_name: Human-readable analyzer name for the panel header.
    """
    header = Text.assemble(
        ("Analyzer: ", "bold"), (analyzer_name, ""),
        ("  Status: ", "bold"),
        (result.status.name, status_style(result.status)),
    )
    console.print(Panel(header, title="TrackGuard"))
    console.print(Text(result.message))

    for evidence in result.evidence:
        console.print(f"  [green]✓[/green] {escape(evidence)}")

    if result.issues:
        table = Table(title="Issues", show_header=True, header_style="bold")
        table.add_column("Severity", justify="center")
        table.add_column("Location", style="dim")
        table.add_column("Message")
        table.add_column("Recommendation")
        for issue in result.issues:
            table.add_row(
                Text(issue.severity.name, style=_SEVERITY_STYLES.get(issue.severity, "white")),
                str(issue.location) if issue.location else "-",
                Text(issue.message),
                Text(issue.recommendation),
            )
        console.print(table)
