"""
Command-line interface for enforcer.

This module wires the core together: it loads the project config, resolves
the run options, runs the audit and turns the report into console output
and an exit code.
"""

import sys
import json
import click
import logging
from pathlib import Path
from typing import Optional, Tuple
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.panel import Panel

from .. import __version__
from ..core.aggregator import AuditReport
from ..core.config import CONFIG_FILENAME, load_config
from ..core.errors import ConfigReadError, StartupError
from ..core.runner import RunOptions, resolve_thread_count, run_audit
from ..core.scanner import find_illegal_characters
from ..core.walker import endings_to_globs

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2

# Configure logging
logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="enforcer")
@click.argument('path', type=click.Path(exists=True, file_okay=False, path_type=Path), default='.')
@click.option('--glob', '-g', 'globs', multiple=True, metavar='GLOB',
              help='Use these glob patterns (e.g. "**/*.h"); overrides the config globs')
@click.option('--endings', '-e', multiple=True, metavar='EXT',
              help='Check files with this ending (shorthand for "**/*.EXT")')
@click.option('--clean', '-c', is_flag=True, help='Clean up trailing whitespace')
@click.option('--threads', '-j', type=click.IntRange(min=0), default=0, show_default=True,
              help='Number of worker threads, 0 picks one per CPU (at most 12)')
@click.option('--quiet', '-q', is_flag=True, help='Only print the summary line')
@click.option('--status', '-s', is_flag=True, help='Print a status line for every flagged file')
@click.option('--color/--no-color', default=True, help='Colorize the output')
@click.option('--tabs', '-t', 'tabs_allowed', is_flag=True, help='Tabs are allowed')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help=f'Config file to use instead of PATH/{CONFIG_FILENAME}')
@click.option('--json', 'json_output', is_flag=True, help='Print the report as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(path, globs, endings, clean, threads, quiet, status, color, tabs_allowed,
         config_path, json_output, verbose):
    """Check files below PATH for tabs, illegal characters and trailing whitespace."""
    console = Console(no_color=not color, highlight=color)

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        console.print("[dim]Verbose mode enabled[/dim]")

    try:
        config = load_config(config_path or path / CONFIG_FILENAME)
    except ConfigReadError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(EXIT_FATAL)

    options = RunOptions(
        root=path,
        patterns=resolve_patterns(globs, endings, config.globs),
        ignore=config.ignore,
        clean=clean,
        threads=resolve_thread_count(threads),
        status=status,
        tabs_allowed=tabs_allowed,
    )

    try:
        if quiet or json_output:
            report = run_audit(options)
        else:
            report = run_with_progress(options, console)
    except StartupError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(EXIT_FATAL)

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2))
    elif quiet:
        click.echo(report.summary_line())
    else:
        display_report(report, options, console)

    sys.exit(EXIT_OK if report.is_successful(tabs_allowed) else EXIT_FINDINGS)


def resolve_patterns(globs: Tuple[str, ...], endings: Tuple[str, ...],
                     config_globs: Tuple[str, ...]) -> Tuple[str, ...]:
    """Command-line patterns win over the configured ones."""
    patterns = tuple(globs) + tuple(endings_to_globs(endings))
    return patterns or tuple(config_globs)


def run_with_progress(options: RunOptions, console: Console) -> AuditReport:
    """Run the audit behind a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Checking files...", total=None)

        def advance(path, result):
            progress.update(task, description=f"Checked {path.name}")

        return run_audit(options, on_result=advance)


def describe_illegal(path: Path) -> str:
    """Location of the first illegal byte in ``path``."""
    try:
        hits = find_illegal_characters(path.read_bytes(), limit=1)
    except OSError:
        return "?"
    if not hits:
        return "-"
    line, column, value = hits[0]
    return f"{line}:{column} (0x{value:02X})"


def display_report(report: AuditReport, options: RunOptions, console: Optional[Console] = None):
    """Display the run results."""
    console = console or Console()

    if options.status and report.flagged_files:
        table = Table(title="Flagged Files")
        table.add_column("File", style="cyan")
        table.add_column("Tabs", justify="center")
        table.add_column("Illegal", justify="center")
        table.add_column("First illegal byte", style="dim")
        table.add_column("Cleaned", justify="center")

        tab_style = "yellow" if options.tabs_allowed else "red"
        for result in report.flagged_files:
            try:
                name = str(result.path.relative_to(options.root))
            except ValueError:
                name = str(result.path)
            table.add_row(
                name,
                f"[{tab_style}]yes[/{tab_style}]" if result.scan.has_tabs else "no",
                "[red]yes[/red]" if result.scan.has_illegal_characters else "no",
                describe_illegal(result.path) if result.scan.has_illegal_characters else "-",
                "[green]yes[/green]" if result.cleaned else "no",
            )
        console.print(table)

    for _, message in report.errors:
        console.print(f"[red]✗[/red] {message}")

    border_style = "green" if report.is_successful(options.tabs_allowed) else "red"
    console.print(Panel(report.summary_line(), title="Summary", border_style=border_style))


if __name__ == '__main__':
    main()
