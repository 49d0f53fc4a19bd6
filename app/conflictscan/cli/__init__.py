"""CLI package for conflictscan.

This package contains the Typer application and all subcommands.
"""

from conflictscan.cli.main import app

__all__ = ["app"]
