"""Precondition checks for the scan entry point.

Validation returns a typed result instead of exiting the process, so the
CLI layer alone decides how failures map to exit codes.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

USAGE_LINE = "Uso: conflictscan scan <caminho_do_diretorio>"


class ValidationErrorKind(str, Enum):
    """Kind of fatal precondition violation.

    Attributes:
        USAGE: Wrong number of positional arguments.
        INVALID_ROOT: Argument does not name an existing directory.
    """

    USAGE = "usage"
    INVALID_ROOT = "invalid_root"


@dataclass(frozen=True, slots=True)
class ArgumentValidation:
    """Outcome of validating the scan command's arguments.

    Attributes:
        root: Validated scan root (None on failure).
        error: Kind of failure (None on success).
        message: Error message for the user (None on success).
    """

    root: Path | None = None
    error: ValidationErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        """True if the arguments are valid and scanning may start."""
        return self.error is None


def validate_scan_arguments(args: Sequence[str]) -> ArgumentValidation:
    """Validate the positional arguments of the scan command.

    The argument count is checked before anything touches the filesystem.

    Args:
        args: Positional arguments as given on the command line.

    Returns:
        ArgumentValidation with either the root directory or an error.
    """
    if len(args) != 1:
        return ArgumentValidation(
            error=ValidationErrorKind.USAGE,
            message="Número de argumentos inválido.",
        )

    # Path("") is the current directory; an empty argument names nothing
    root = Path(args[0])
    if not args[0] or not root.is_dir():
        return ArgumentValidation(
            error=ValidationErrorKind.INVALID_ROOT,
            message=f"O diretório '{args[0]}' não foi encontrado.",
        )

    return ArgumentValidation(root=root)
