"""Shared Rich display functions for scan output.

The three scan messages keep their Portuguese wording so that scripts
grepping for them keep working.
"""

from rich.markup import escape

from conflictscan.scanner.models import Finding, ScanReport, ScanWarning, display_path
from conflictscan.utils.formatting import console, err_console, print_warning

START_BANNER = "Iniciando verificação no diretório: {root}"
FINDING_LINE = "Inconsistência encontrada no arquivo: {path}"
END_BANNER = "Verificação concluída."
ERROR_PREFIX = "Erro:"


def print_start_banner(root: str) -> None:
    """Print the scan start banner."""
    banner = START_BANNER.format(root=escape(display_path(root)))
    console.print(banner, soft_wrap=True, highlight=False)


def print_end_banner() -> None:
    """Print the scan completion banner."""
    console.print(END_BANNER, soft_wrap=True, highlight=False)


def print_finding(finding: Finding, show_lines: bool = False) -> None:
    """Print one Finding as soon as it is discovered.

    Args:
        finding: The conflicted file.
        show_lines: Also print every marker line with its line number.
    """
    console.print(
        FINDING_LINE.format(path=f"[finding]{escape(display_path(finding.path))}[/finding]"),
        soft_wrap=True,
        highlight=False,
    )
    if show_lines:
        for hit in finding.markers:
            console.print(
                f"  [muted]{hit.line_number}:[/muted] [marker]{escape(hit.line)}[/marker]",
                soft_wrap=True,
                highlight=False,
            )


def print_scan_warning(warning: ScanWarning) -> None:
    """Print a recoverable scan failure to stderr."""
    print_warning(f"{display_path(warning.path)}: {display_path(warning.message)}")


def print_validation_error(message: str, usage: str | None = None) -> None:
    """Print a fatal argument error (and usage line) to stderr."""
    err_console.print(f"[error]{ERROR_PREFIX}[/] {escape(display_path(message))}", soft_wrap=True)
    if usage:
        err_console.print(escape(usage), soft_wrap=True, highlight=False)


def print_summary(report: ScanReport) -> None:
    """Print a dim one-line summary of the scan."""
    console.print(
        f"[dim]{report.files_scanned} file(s) scanned, "
        f"{len(report.findings)} with conflict markers, "
        f"{len(report.warnings)} warning(s)[/dim]",
        soft_wrap=True,
    )
