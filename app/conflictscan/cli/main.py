"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from conflictscan import __version__
from conflictscan.cli.commands import config, scan

# Create main Typer app
app = typer.Typer(
    name="conflictscan",
    help="Find files with unresolved merge-conflict markers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"conflictscan version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """conflictscan - find unresolved merge-conflict markers in a directory tree.

    Walks the tree, reads every regular file and reports those that
    still contain <<<<<<<, ======= or >>>>>>> marker lines.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="scan")(scan.scan)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
