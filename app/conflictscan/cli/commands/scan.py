"""Scan command implementation.

Walks a directory tree and reports every file containing unresolved
merge-conflict markers.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from conflictscan.cli.display import (
    print_end_banner,
    print_finding,
    print_scan_warning,
    print_start_banner,
    print_summary,
    print_validation_error,
)
from conflictscan.core.config import ScanConfig, ScanConfigError, load_scan_config
from conflictscan.core.validation import USAGE_LINE, ValidationErrorKind, validate_scan_arguments
from conflictscan.scanner.models import Finding, ScanReport, display_path
from conflictscan.scanner.walker import ScanRootError, TreeWalker
from conflictscan.utils.formatting import console, print_error, print_info


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


def scan(
    ctx: typer.Context,
    roots: Annotated[
        list[str] | None,
        typer.Argument(
            metavar="ROOT",
            help="Directory to scan.",
            show_default=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: text or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
    show_lines: Annotated[
        bool,
        typer.Option(
            "--lines",
            "-n",
            help="Show each marker line under its file.",
        ),
    ] = False,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Glob pattern to skip (name or relative path). Repeatable.",
        ),
    ] = None,
    skip_hidden: Annotated[
        bool | None,
        typer.Option(
            "--skip-hidden/--no-skip-hidden",
            help="Skip dot-prefixed files and directories.",
            show_default=False,
        ),
    ] = None,
    skip_vcs: Annotated[
        bool | None,
        typer.Option(
            "--skip-vcs/--no-skip-vcs",
            help="Skip .git, .hg, .svn and .bzr directories.",
            show_default=False,
        ),
    ] = None,
    anywhere: Annotated[
        bool | None,
        typer.Option(
            "--anywhere/--line-start",
            help="Match markers anywhere in a line instead of only at line start.",
            show_default=False,
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Read scan defaults from this TOML file.",
        ),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export the scan report to a JSON file.",
        ),
    ] = None,
    fail_on_conflict: Annotated[
        bool,
        typer.Option(
            "--fail-on-conflict",
            help="Exit with status 1 if any conflicted file is found.",
        ),
    ] = False,
) -> None:
    """Scan a directory tree for unresolved merge-conflict markers.

    Reports every regular file containing a line that starts with
    <<<<<<<, ======= or >>>>>>>. Symlinks are never followed.
    Unreadable directories and files are skipped with a warning.

    Examples:
        conflictscan scan .                       # Scan current directory
        conflictscan scan repo --lines            # Show marker lines too
        conflictscan scan repo -x node_modules    # Skip a directory
        conflictscan scan repo --format json      # Output as JSON
        conflictscan scan repo --fail-on-conflict # Use as a CI gate
    """
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    args = roots or []
    validation = validate_scan_arguments(args)
    if not validation.ok or validation.root is None:
        usage = USAGE_LINE if validation.error == ValidationErrorKind.USAGE else None
        print_validation_error(validation.message or "", usage)
        raise typer.Exit(code=1)

    try:
        config = load_scan_config(config_path)
    except ScanConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    walker = _build_walker(
        validation.root,
        config,
        exclude=exclude,
        skip_hidden=skip_hidden,
        skip_vcs=skip_vcs,
        anywhere=anywhere,
        output_format=output_format,
        show_lines=show_lines,
    )

    if output_format == OutputFormat.TEXT:
        print_start_banner(args[0])

    try:
        report = walker.run()
    except ScanRootError as e:
        print_error(display_path(str(e)))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
    else:
        print_end_banner()
        if not quiet:
            print_summary(report)

    if export_path is not None:
        exported = _export_report(report, export_path)
        if output_format == OutputFormat.TEXT:
            print_info(f"Report exported to {display_path(str(exported))}")

    if fail_on_conflict and report.has_conflicts:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _build_walker(
    root: Path,
    config: ScanConfig,
    *,
    exclude: list[str] | None,
    skip_hidden: bool | None,
    skip_vcs: bool | None,
    anywhere: bool | None,
    output_format: OutputFormat,
    show_lines: bool,
) -> TreeWalker:
    """Create a TreeWalker from config defaults overridden by CLI flags."""

    def on_finding(finding: Finding) -> None:
        print_finding(finding, show_lines=show_lines)

    return TreeWalker(
        root,
        exclude=[*config.exclude, *(exclude or [])],
        skip_hidden=config.skip_hidden if skip_hidden is None else skip_hidden,
        skip_vcs=config.skip_vcs if skip_vcs is None else skip_vcs,
        match_anywhere=config.match_anywhere if anywhere is None else anywhere,
        # JSON mode keeps stdout machine-readable
        on_finding=on_finding if output_format == OutputFormat.TEXT else None,
        on_warning=print_scan_warning,
    )


def _export_report(report: ScanReport, export_path: Path) -> Path:
    """Export the scan report to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {display_path(str(export_path))}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(
            json.dumps(report.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as e:
        print_error(display_path(f"Failed to export: {e}"))
        raise typer.Exit(code=1) from e

    return export_path
