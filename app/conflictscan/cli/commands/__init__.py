"""CLI commands for conflictscan.

This package contains all subcommand implementations.
"""

from conflictscan.cli.commands import config, scan

__all__ = ["config", "scan"]
