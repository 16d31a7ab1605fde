"""CLI application setup using Typer.

Provides the command-line interface for regdb operations.
"""

from regdb.cli.main import app

__all__ = ["app"]
