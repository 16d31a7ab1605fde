"""CLI entry point.

Provides the main CLI application with commands for:
- validate: Check every register document
- build: Generate Home Assistant and ESPHome configurations
- build-esphome: Generate ESPHome configurations only
"""

# Configure logging early before other imports
import regdb.logging_config  # noqa: F401

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from regdb import __version__
from regdb.build import (
    ALL_TARGETS,
    Target,
    build_all,
    check_layout,
    clean_builds,
    validate_all,
)
from regdb.cli.utils import console, print_document_report, print_validation
from regdb.exceptions import ConfigurationError, SourceDirectoryError
from regdb.settings import get_settings

app = typer.Typer(
    name="regdb",
    help="Modbus register database compiler for Home Assistant and ESPHome",
    add_completion=False,
    no_args_is_help=True,
)

SourceOption = Annotated[
    Optional[Path],  # noqa: UP007
    typer.Option("--source", "-s", help="Directory of manufacturer register documents"),
]
OutputOption = Annotated[
    Optional[Path],  # noqa: UP007
    typer.Option("--output", "-o", help="Directory to write generated configurations to"),
]
CleanOption = Annotated[
    bool,
    typer.Option("--clean", help="Remove previous builds before building"),
]


@app.command()
def validate(source: SourceOption = None) -> None:
    """Validate every register document.

    Prints all errors and warnings per file. Exits non-zero when any
    document has errors; warnings never fail validation.
    """
    source_dir = source or get_settings().source_dir

    console.print(
        Panel(
            f"[bold blue]Validating register documents[/bold blue]\nSource: {escape(str(source_dir))}",
            title="🔎 Validate",
            border_style="blue",
        )
    )

    try:
        results = validate_all(source_dir)
    except SourceDirectoryError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if not results:
        console.print(f"[yellow]No JSON files found in {escape(str(source_dir))}[/yellow]")
        return

    for result in results:
        print_validation(result)

    error_count = sum(len(r.errors) for r in results)
    warning_count = sum(len(r.warnings) for r in results)

    table = Table(title="Validation Results", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Files validated", str(len(results)))
    table.add_row("Errors found", str(error_count))
    table.add_row("Warnings found", str(warning_count))
    console.print(table)

    if error_count:
        console.print(f"[red]❌ Validation failed with {error_count} error(s)[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✅ All JSON files are valid![/green]")
    if warning_count:
        console.print("[dim]Consider addressing the warnings for better compatibility.[/dim]")


@app.command()
def build(
    source: SourceOption = None,
    output: OutputOption = None,
    clean: CleanOption = False,
) -> None:
    """Build Home Assistant and ESPHome configurations for every manufacturer."""
    _run_build(source, output, clean, ALL_TARGETS)


@app.command(name="build-esphome")
def build_esphome(
    source: SourceOption = None,
    output: OutputOption = None,
    clean: CleanOption = False,
) -> None:
    """Build ESPHome configurations only."""
    _run_build(source, output, clean, (Target.ESPHOME,))


def _run_build(
    source: Path | None,
    output: Path | None,
    clean: bool,
    targets: tuple[Target, ...],
) -> None:
    """Execute a build for the given targets and report the outcome."""
    settings = get_settings()
    source_dir = source or settings.source_dir
    builds_dir = output or settings.builds_dir

    console.print(
        Panel(
            "[bold green]Modbus Register Database Build[/bold green]\n"
            f"Source: {escape(str(source_dir))}\n"
            f"Output: {escape(str(builds_dir))}\n"
            f"Targets: {', '.join(t.value for t in targets)}",
            title="🏗️ Build",
            border_style="green",
        )
    )

    try:
        check_layout(source_dir, builds_dir)
        if clean:
            if clean_builds(builds_dir):
                console.print("[green]Previous builds cleaned[/green]")
            else:
                console.print("[dim]No previous builds to clean[/dim]")
        report = build_all(source_dir, builds_dir, targets)
    except (ConfigurationError, SourceDirectoryError) as e:
        console.print(f"[red]❌ Build failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    for document in report.documents:
        print_document_report(document)

    table = Table(title="Build Summary", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Documents", str(len(report.documents)))
    table.add_row("Failed", str(len(report.failed)))
    table.add_row("Files written", str(len(report.outputs)))
    console.print(table)

    if not report.ok:
        console.print(f"[red]❌ Build failed for {len(report.failed)} document(s)[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✅ All builds completed successfully![/green]")


@app.command()
def version() -> None:
    """Show regdb version information."""
    console.print(
        Panel(
            f"[bold]regdb[/bold] v{__version__}\n"
            "Modbus register database compiler",
            title="📦 Version",
            border_style="blue",
        )
    )


# Entry point for: python -m regdb.cli.main
if __name__ == "__main__":
    app()
