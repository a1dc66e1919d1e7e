"""
CLI SHARED UTILITIES
--------------------
Common console helpers used by the CLI entry point and commands.
"""

import platform

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pipelint import __version__

# Global UI Controller
console = Console()


def get_console():
    return console


def print_custom_header():
    """
    Displays the top-level application banner.
    """
    console.print("")
    banner_content = (
        "[bold]   pipelint[/bold]\n"
        "[dim italic]Offline GitHub Actions workflow linter[/dim italic]"
    )
    console.print(Panel(
        banner_content,
        border_style="cyan",
        box=box.ROUNDED,
        padding=(0, 2),
        expand=False
    ))


def print_version():
    """
    Displays system information panel.
    """
    info_table = Table(box=None, show_header=False, padding=(0, 1))
    info_table.add_column(width=16, justify="left")
    info_table.add_column(justify="left")

    info_table.add_row("Client Version:", f"[bold white]{__version__}[/bold white]")
    info_table.add_row("Platform:", f"{platform.system()} {platform.release()} ({platform.machine()})")
    info_table.add_row("Runtime:", f"Python {platform.python_version()}")

    console.print(Panel.fit(
        info_table,
        title="[bold]pipelint[/bold]",
        border_style="cyan",
        padding=(0, 2)
    ))
