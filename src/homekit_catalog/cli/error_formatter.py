"""Diagnostics formatting with Rich."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from homekit_catalog.diagnostics import Diagnostic, DiagnosticsReport

SEVERITY_COLORS = {"warning": "yellow", "info": "cyan"}


def _color(issue: Diagnostic) -> str:
    return SEVERITY_COLORS.get(issue.severity.value, "white")


class DiagnosticsFormatter:
    """Formats a diagnostics report for terminal display."""

    def __init__(self, console: Console | None = None, max_issues: int = 20) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.
            max_issues: Issues listed before the rest is summarized.

        """
        self.console = console or Console(stderr=True)
        self.max_issues = max_issues

    def format_report(self, report: DiagnosticsReport, source_path: Path | None = None) -> None:
        """Print a summary panel followed by the individual issues."""
        if not report.issues:
            return

        self.console.print(self._build_summary(report, source_path))
        for issue in report.issues[: self.max_issues]:
            self._print_issue(issue)

        hidden = len(report.issues) - self.max_issues
        if hidden > 0:
            self.console.print(f"  [dim]... and {hidden} more[/dim]")
        self.console.print()

    def print_counts(self, report: DiagnosticsReport) -> None:
        """Print a one-line count of warnings and notes."""
        warnings = len(report.warnings)
        infos = len(report.infos)
        if not warnings and not infos:
            return
        parts = []
        if warnings:
            parts.append(f"[yellow]{warnings} warning(s)[/yellow]")
        if infos:
            parts.append(f"[cyan]{infos} note(s)[/cyan]")
        self.console.print(", ".join(parts) + " [dim](use --verbose for details)[/dim]")

    def _build_summary(self, report: DiagnosticsReport, source_path: Path | None) -> Panel:
        """Build summary panel."""
        warnings = len(report.warnings)
        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")
        content.append(f"Warnings: {warnings}", style="yellow bold" if warnings else "dim")
        content.append("  ")
        content.append(f"Notes: {len(report.infos)}", style="cyan")

        return Panel(
            content,
            title="Diagnostics",
            border_style="yellow" if warnings else "cyan",
        )

    def _print_issue(self, issue: Diagnostic) -> None:
        """Print a single issue."""
        color = _color(issue)
        severity = issue.severity.value.upper()
        self.console.print(
            f"[{color} bold]{severity}[/{color} bold] "
            f"[{color}]\\[{issue.code}][/{color}] "
            f"{issue.message}",
            highlight=False,
        )


class DiagnosticsTable:
    """Display diagnostics as a table."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize diagnostics table formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_report(self, report: DiagnosticsReport) -> None:
        """Print diagnostics as table."""
        table = Table(title="Diagnostics")

        table.add_column("Code", style="cyan", width=6)
        table.add_column("Severity", width=8)
        table.add_column("Message")

        for issue in report.issues:
            color = _color(issue)
            severity = f"[{color}]{issue.severity.value.upper()}[/{color}]"
            table.add_row(issue.code, severity, Text(issue.message))

        self.console.print(table)
