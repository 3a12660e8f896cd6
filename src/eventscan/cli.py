"""CLI interface for eventscan using Typer framework."""

import json as jsonlib
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from eventscan import __description__, __version__
from eventscan.config import ScannerConfig, load_config
from eventscan.parser import EventParseError, parse_event
from eventscan.samples import EXAMPLES
from eventscan.validation import EVENT_FIELD, Category, ValidationResult, validate

app = typer.Typer(
    name="eventscan",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

VALID_FORMATS = ["table", "json", "markdown"]

CATEGORY_TITLES = {
    Category.REQUIRED: "Required fields",
    Category.TYPE: "Types",
    Category.NAMING: "Naming",
    Category.DOMAIN: "Domain rules",
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"eventscan version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """eventscan - Rule-based data-quality scanner for pipeline events."""


def _configure_logging(config: ScannerConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else config.logging.numeric_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)


def _load_config_or_exit(config_path: Path | None) -> ScannerConfig:
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _read_input(source: Path | None) -> str:
    if source is None or str(source) == "-":
        return sys.stdin.read()
    try:
        return source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(str(source))}: {escape(str(e))}")
        raise typer.Exit(1)


def _output_table(result: ValidationResult) -> None:
    status_color = "green" if result.passed else "red"
    console.print(f"[{status_color}]{result.summary()}[/{status_color}]")

    if not result.issues:
        console.print("\n[green]No issues - event meets all configured rules.[/green]")
        return

    for category, title in CATEGORY_TITLES.items():
        issues = result.by_category(category)
        console.print(f"\n[blue]{title}:[/blue]")
        if not issues:
            console.print("[dim]  none[/dim]")
            continue

        table = Table()
        table.add_column("Field", style="cyan")
        table.add_column("Severity", style="white")
        table.add_column("Message", style="white")

        for issue in issues:
            severity_color = "red" if issue.severity.value == "error" else "yellow"
            table.add_row(
                escape(issue.field or EVENT_FIELD),
                f"[{severity_color}]{issue.severity.value.upper()}[/{severity_color}]",
                escape(issue.message),
            )

        console.print(table)


def _output_markdown(result: ValidationResult) -> None:
    console.print("# Event Scan Report")
    console.print(f"**Passed:** {'yes' if result.passed else 'no'}")
    console.print(f"**Summary:** {result.summary()}")
    console.print()

    if not result.issues:
        console.print("No issues - event meets all configured rules.")
        return

    console.print("## Issues")
    for issue in result.issues:
        console.print(
            f"- **{issue.severity.value.upper()}** \\[{issue.category.value}] "
            f"`{escape(issue.field or EVENT_FIELD)}`: {escape(issue.message)}"
        )


@app.command()
def scan(
    source: Annotated[
        Optional[Path],
        typer.Argument(help="Event JSON file; '-' or omitted reads stdin")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: table)")
    ] = "table",
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .eventscan.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Scan one event against the configured rules."""
    if format not in VALID_FORMATS:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(VALID_FORMATS)}")
        raise typer.Exit(1)

    scanner_config = _load_config_or_exit(config)
    _configure_logging(scanner_config, verbose)

    text = _read_input(source)
    if not text.strip():
        console.print("[yellow]No event provided.[/yellow] Paste or pipe a JSON event to scan.")
        raise typer.Exit(1)

    try:
        event = parse_event(text)
    except EventParseError as e:
        console.print(f"[red]JSON error:[/red] {escape(str(e))}")
        console.print("[red]Cannot scan: invalid JSON.[/red]")
        raise typer.Exit(1)

    result = validate(event, scanner_config)

    if format == "json":
        typer.echo(jsonlib.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif format == "markdown":
        _output_markdown(result)
    else:
        _output_table(result)

    raise typer.Exit(result.exit_code)


@app.command()
def example(
    name: Annotated[
        str,
        typer.Argument(help="Example to print: valid, broken")
    ] = "broken",
) -> None:
    """Print a canned example event as JSON."""
    if name not in EXAMPLES:
        console.print(f"[red]Error:[/red] Unknown example '{name}'. Must be one of: {', '.join(EXAMPLES)}")
        raise typer.Exit(1)

    typer.echo(jsonlib.dumps(EXAMPLES[name], indent=2))


@app.command(name="config")
def show_config(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .eventscan.json)")
    ] = None,
) -> None:
    """Show the effective configuration."""
    scanner_config = _load_config_or_exit(config)
    typer.echo(jsonlib.dumps(scanner_config.to_dict(), indent=2))


if __name__ == "__main__":
    app()
