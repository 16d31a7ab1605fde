"""Shared console helpers for CLI commands."""

from rich.console import Console
from rich.markup import escape

from regdb.build import DocumentReport
from regdb.schema.diagnostics import Diagnostic, ValidationResult

console = Console()


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Render a diagnostic as a Rich markup line."""
    location = f"{escape(diagnostic.path)}: " if diagnostic.path else ""
    if diagnostic.severity == "error":
        return f"  [red]\\[ERROR][/red] {location}{escape(diagnostic.message)}"
    return f"  [yellow]\\[WARNING][/yellow] {location}{escape(diagnostic.message)}"


def print_validation(result: ValidationResult) -> None:
    """Print every diagnostic of a validated document."""
    console.print(f"Validating: [cyan]{escape(result.source)}[/cyan]")
    for diagnostic in result.errors + result.warnings:
        console.print(format_diagnostic(diagnostic))


def print_document_report(report: DocumentReport) -> None:
    """Print the outcome of building one document."""
    if report.error is not None:
        console.print(f"  [red]❌ {escape(report.source)}: {escape(report.error)}[/red]")
        return

    if report.validation is not None and not report.validation.buildable:
        console.print(f"  [red]❌ {escape(report.source)}: not buildable[/red]")
        for diagnostic in report.validation.errors:
            console.print(format_diagnostic(diagnostic))
        return

    console.print(f"  [green]✅ {escape(report.source)}[/green]")
    for path in report.outputs:
        console.print(f"    [dim]- {escape(str(path))}[/dim]")
