#!/usr/bin/env python3
"""
PIPELINT FORMATTER
------------------
Renders lint reports for humans using 'rich'.

Author: Pipelint Team
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pipelint.analyzers.base import BaseRule
from pipelint.models import ERROR, Report

console = Console()


class PipelintFormatter:
    """
    Console presenter: one block per file, then a PASS / WARN / FAIL summary.
    """

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def display_header(self, file_count: int):
        self.console.print(
            f"\n[bold cyan]  pipelint[/bold cyan] [dim]Validating {file_count} workflow file(s)[/dim]"
        )

    def display_report(self, report: Report):
        """Renders the findings of a single file."""
        if report.errors:
            icon = "[red]✗[/red]"
        elif report.warnings:
            icon = "[yellow]⚠[/yellow]"
        else:
            icon = "[green]✓[/green]"

        self.console.print(f"\n{icon} [bold]{escape(report.file_path)}[/bold]")

        if report.fixed:
            self.console.print("  [green](auto-fixed)[/green]")

        if report.is_clean:
            self.console.print("  [green]No issues found[/green]")
            return

        table = Table(show_header=False, box=None, padding=(0, 1, 0, 2))
        table.add_column("Line", style="dim", justify="right", no_wrap=True)
        table.add_column("Level", no_wrap=True)
        table.add_column("Message")

        for diag in report.diagnostics:
            line = f"L{diag.line}" if diag.line else ""
            level = "[red]error[/red]" if diag.severity == ERROR else "[yellow]warn[/yellow]"
            message = escape(diag.message)
            if diag.fix is not None and not report.fixed:
                message += f"\n[dim]fix: {escape(diag.fix)}[/dim]"
            table.add_row(line, level, message)

        self.console.print(table)

    def display_failure(self, file_path: str, error: str):
        """An I/O failure is not a finding: it is shown outside the tables."""
        self.console.print(f"\n[red]✗[/red] [bold]{escape(file_path)}[/bold]")
        self.console.print(f"  [bold red]Could not process file:[/bold red] {escape(error)}")

    def display_no_files(self, target: str):
        self.console.print(f"\n[yellow]  No workflow files found at: {escape(target)}[/yellow]")
        self.console.print("[dim]  Looking for .yml/.yaml files in .github/workflows/ or the given path[/dim]\n")

    def print_summary(self, total_errors: int, total_warnings: int):
        self.console.print()
        if total_errors > 0:
            self.console.print(
                f"  [bold white on red] FAIL [/bold white on red] "
                f"{total_errors} error(s), {total_warnings} warning(s)"
            )
        elif total_warnings > 0:
            self.console.print(f"  [bold white on yellow] WARN [/bold white on yellow] {total_warnings} warning(s)")
        else:
            self.console.print("  [bold white on green] PASS [/bold white on green] All workflows valid")
        self.console.print()

    def display_rules(self, rules: List[BaseRule]):
        """Lists the active rules (rule id, stage, description)."""
        table = Table(title="[bold cyan]Active Rules[/bold cyan]", header_style="bold white", box=None)
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("Stage", style="magenta", no_wrap=True)
        table.add_column("Checks")
        for rule in rules:
            table.add_row(rule.rule_id, rule.stage, escape(rule.description))
        self.console.print(table)
