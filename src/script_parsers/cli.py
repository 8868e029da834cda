"""
Command-line front end: validate a SQL script file or an inline query.

Usage:
        sqlscript-validate schema.sql
        sqlscript-validate schema.sql --json
        sqlscript-validate -q "SELECT 1; SELECT 2;"
        sqlscript-validate routines.sql --dialect mysql --log-file logs/run.log
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from script_parsers.config import DEFAULT_DIALECT
from script_parsers.errors import READ_FAILURE_PREFIX
from script_parsers.grammar import SqlglotGrammar
from script_parsers.logger_config import setup_logger
from script_parsers.orchestrator import ValidationOrchestrator
from script_parsers.result import ValidationReport, read_failure

console = Console()

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_READ_FAILURE = 2


def read_script(path: Path) -> str:
    """Read a script as UTF-8 text."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def display_report(report: ValidationReport, source: str) -> None:
    """Render per-statement results in a table, followed by a summary panel."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Status", width=6)
    table.add_column("Query", overflow="fold")
    table.add_column("Error", overflow="fold")

    for result in report.results:
        status = "[bold green]✓[/bold green]" if result.valid else "[bold red]✗[/bold red]"
        table.add_row(
            str(result.line_number),
            status,
            Text(result.query),
            Text(result.error or ""),
        )

    console.print(table)

    border = "green" if report.success else "red"
    summary = (
        f"[bold]{escape(source)}[/bold]\n"
        f"Valid statements: [cyan]{report.valid_queries}[/cyan] / "
        f"[cyan]{report.total_queries}[/cyan]"
    )
    if report.failures:
        lines = ", ".join(str(r.line_number) for r in report.failures)
        summary += f"\nFailed at line(s): [red]{lines}[/red]"
    console.print(Panel(summary, border_style=border))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split a SQL script into statements and validate each one",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sqlscript-validate schema.sql              # Table output
  sqlscript-validate schema.sql --json       # JSON output
  sqlscript-validate -q "SELECT 1;"          # Inline query
		""",
    )
    parser.add_argument("file", nargs="?", type=Path, help="SQL script to validate")
    parser.add_argument("-q", "--query", type=str, help="Inline SQL to validate")
    parser.add_argument(
        "--dialect",
        type=str,
        default=DEFAULT_DIALECT,
        help=f"sqlglot dialect (default: {DEFAULT_DIALECT})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of a table",
    )
    parser.add_argument("--log-file", type=Path, help="Also write DEBUG logs here")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging on the console",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.  Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.file is None) == (args.query is None):
        parser.error("provide exactly one of FILE or --query")

    setup_logger(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    orchestrator = ValidationOrchestrator(SqlglotGrammar(dialect=args.dialect))

    if args.query is not None:
        source = "inline query"
        report = orchestrator.validate_query(args.query)
    else:
        source = str(args.file)
        try:
            script = read_script(args.file)
        except (OSError, UnicodeDecodeError) as e:
            message = f"{READ_FAILURE_PREFIX}{e}"
            if args.json:
                print(json.dumps(read_failure(message), indent=2))
            else:
                console.print(f"[bold red]✗[/bold red] {escape(message)}")
            return EXIT_READ_FAILURE
        report = orchestrator.validate_script(script)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        display_report(report, source)

    return EXIT_OK if report.success else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
