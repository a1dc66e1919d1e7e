#!/usr/bin/env python3
"""
PIPELINT CLI
------------
Offline linting for GitHub Actions workflow files.

    pipelint [PATH] [--fix] [--strict] [--json] [--list-rules] [--verbose]
"""

import sys
import argparse
import logging

from rich.table import Table

from pipelint.analyzers.registry import RuleRegistry
from pipelint.core.engine import PipelintEngine
from pipelint.ui.formatter import PipelintFormatter
from pipelint.cli.commands.base import get_console, print_custom_header, print_version
from pipelint.cli.commands.lint import handle_lint_command

# Global setup
console = get_console()
logger = logging.getLogger("pipelint.cli")


def print_help():
    """
    Displays the help menu.
    """
    print_custom_header()
    console.print("\n[bold green]USAGE:[/bold green] [bold white]pipelint [path][/bold white] [options]")
    console.print("[dim]  path defaults to '.', searching .github/workflows/ and the directory itself[/dim]")

    console.print("\n[bold cyan]┌─ OPTIONS[/bold cyan]")
    opt_table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
    opt_table.add_column(style="yellow", width=18)
    opt_table.add_column(style="dim white")
    opt_table.add_row("--fix", "Auto-fix common issues (deprecated actions, tabs, whitespace)")
    opt_table.add_row("--strict", "Treat warnings as errors, check trailing whitespace")
    opt_table.add_row("--json", "Output results as JSON")
    opt_table.add_row("--list-rules", "List the active rules and exit")
    opt_table.add_row("--verbose", "Show discovery and pipeline logs")
    opt_table.add_row("-v, --version", "Display version information")
    opt_table.add_row("-h, --help", "Display usage information")
    console.print(opt_table)

    console.print("\n[bold cyan]┌─ EXAMPLES[/bold cyan]")
    console.print("  [cyan]pipelint[/cyan]                          [dim]# lint .github/workflows/[/dim]")
    console.print("  [cyan]pipelint .github/workflows/ci.yml[/cyan] [dim]# lint one file[/dim]")
    console.print("  [cyan]pipelint . --fix[/cyan]                  [dim]# fix in place[/dim]")
    console.print("  [cyan]pipelint . --strict --json[/cyan]        [dim]# CI gate[/dim]\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pipelint", add_help=False)
    parser.add_argument("path", nargs="?", default=".", metavar="PATH")
    parser.add_argument("--fix", action="store_true")
    parser.add_argument("--strict", action="store_true")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--list-rules", action="store_true", dest="list_rules")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def main():
    """
    Primary orchestration logic for the CLI.
    """
    # 0. Setup Logging (Default: WARNING, Verbose: INFO)
    log_level = logging.INFO if "--verbose" in sys.argv else logging.WARNING
    logging.basicConfig(level=log_level, format="%(message)s")

    # 1. Parse Args
    parser = build_parser()
    args, unknown = parser.parse_known_args()

    if unknown:
        console.print(f"[red]Error: Unrecognized arguments: {unknown}[/red]")
        print_help()
        sys.exit(1)

    if args.json:
        # Keep stdout clean for machine consumers
        logging.getLogger().setLevel(logging.ERROR)

    # 2. Info commands
    if args.version:
        print_version()
        sys.exit(0)

    if args.help:
        print_help()
        sys.exit(0)

    if args.list_rules:
        PipelintFormatter().display_rules(RuleRegistry.get_rules())
        sys.exit(0)

    # 3. Dispatch
    try:
        engine = PipelintEngine(".", strict=True if args.strict else None)
        exit_code = handle_lint_command(args, engine, PipelintFormatter())
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[bold red]Fatal Error:[/bold red] {e}")
        logger.debug("Unhandled exception", exc_info=True)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
