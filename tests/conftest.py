"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

# Markers are assembled so this file never contains a real marker line
OURS = b"<" * 7
SEPARATOR = b"=" * 7
THEIRS = b">" * 7

CONFLICTED = OURS + b" HEAD\nfoo\n" + SEPARATOR + b"\nbar\n" + THEIRS + b" feature\n"
CLEAN = b"just some text\nwith <<< short runs and == signs\n"


@pytest.fixture(params=[OURS, SEPARATOR, THEIRS], ids=["ours", "separator", "theirs"])
def marker(request: pytest.FixtureRequest) -> bytes:
    """Each of the three seven-character markers in turn."""
    return request.param


@pytest.fixture
def ours() -> bytes:
    return OURS


@pytest.fixture
def separator() -> bytes:
    return SEPARATOR


@pytest.fixture
def theirs() -> bytes:
    return THEIRS


@pytest.fixture
def conflicted_content() -> bytes:
    """A typical three-way conflict block."""
    return CONFLICTED


@pytest.fixture
def clean_content() -> bytes:
    """Content without any merge-conflict marker."""
    return CLEAN


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, bytes | None]], Path]:
    """Build a directory tree under tmp_path/root.

    Keys are POSIX relative paths; a value of None creates a directory,
    bytes create a file with that content.
    """

    def _make(entries: dict[str, bytes | None]) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        for relative, content in entries.items():
            target = root / relative
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(content)
        return root

    return _make
