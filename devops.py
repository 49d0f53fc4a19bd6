"""DevOps tasks for conflictscan.

Usage: uv run devops.py <task>
Tasks: fmt, test, check, clean
"""

import subprocess
import sys


def _run(commands: list[list[str]]) -> None:
    """Execute a sequence of shell commands, exiting on first failure."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format the codebase with Ruff."""
    _run(
        [
            ["echo", "🎨 [Native Task] Formatting with Ruff...\n"],
            ["ruff", "format", "."],
            ["ruff", "check", "--fix", "."],
        ]
    )


def test() -> None:
    """Run tests with PyTest."""
    _run(
        [
            ["echo", "🧪 [Native Task] Testing with PyTest...\n"],
            ["uv", "run", "pytest", "-q"],
        ]
    )


def check() -> None:
    """Scan the repository itself for leftover conflict markers."""
    _run(
        [
            ["echo", "🔍 [Native Task] Scanning for conflict markers...\n"],
            [
                "uv", "run", "conflictscan", "scan", ".",
                "--skip-vcs", "-x", ".venv", "-x", "*_cache", "--fail-on-conflict",
            ],
        ]
    )


def clean() -> None:
    """Clean up caches and build artifacts."""
    _run(
        [
            ["echo", "🧹 [Native Task] Cleaning the Project...\n"],
            ["find", ".", "-type", "d", "-name", "__pycache__", "-exec", "rm", "-rf", "{}", "+"],
            ["find", ".", "-type", "f", "-name", "*.pyc", "-delete"],
            ["rm", "-rf", ".pytest_cache", ".ruff_cache", "build", "dist"],
        ]
    )


TASKS = {
    "fmt": format_code,
    "test": test,
    "check": check,
    "clean": clean,
}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(1)
    TASKS[sys.argv[1]]()
