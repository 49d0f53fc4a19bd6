"""Config command implementation.

Shows and initializes the scan configuration file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer
from rich.markup import escape
from rich.table import Table

from conflictscan.core.config import (
    ScanConfig,
    ScanConfigError,
    config_to_dict,
    load_scan_config,
    save_scan_config,
)
from conflictscan.core.paths import ensure_config_dir, get_config_path
from conflictscan.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the scan configuration.",
    no_args_is_help=True,
)


@app.command()
def path() -> None:
    """Print the location of the configuration file."""
    console.print(str(get_config_path()), soft_wrap=True, highlight=False)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file to read instead of the default.",
        ),
    ] = None,
    as_toml: Annotated[
        bool,
        typer.Option("--toml", help="Print as TOML instead of a table."),
    ] = False,
) -> None:
    """Show the effective scan configuration."""
    try:
        config = load_scan_config(config_path)
    except ScanConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if as_toml:
        console.print(tomli_w.dumps(config_to_dict(config)), soft_wrap=True, highlight=False)
        return

    source = config_path or get_config_path()
    table = Table(
        title="Scan Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value", style="info")

    table.add_row("exclude", ", ".join(config.exclude) or "-")
    table.add_row("skip_hidden", str(config.skip_hidden))
    table.add_row("skip_vcs", str(config.skip_vcs))
    table.add_row("match_anywhere", str(config.match_anywhere))

    console.print(table)
    suffix = "" if source.exists() else " (not found, using defaults)"
    console.print(f"[dim]Source: {escape(str(source))}{suffix}[/dim]", soft_wrap=True)


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Write to this file instead of the default location.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file with default settings."""
    if config_path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
    target = config_path or get_config_path()

    if target.exists() and not force:
        print_error(f"Config file already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_scan_config(ScanConfig(), target)
    except ScanConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
    print_info("Edit it to set default exclude patterns and matching options.")
