"""Scanner domain models for merge-conflict detection.

This module defines the core data structures produced while walking a
directory tree: entry kinds, conflict marker kinds, findings, recoverable
warnings, and the aggregated scan report used for JSON export.
"""

import os
import socket
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from conflictscan import __version__


def display_path(path: str) -> str:
    """Render a filesystem path as text that any UTF-8 stream can carry.

    Bytes that are not valid UTF-8 (kept as surrogate escapes by
    ``os.fsdecode``) are shown as ``\\xNN`` sequences.
    """
    return os.fsencode(path).decode("utf-8", errors="backslashreplace")


class EntryKind(str, Enum):
    """Classification of a directory entry encountered during traversal.

    Attributes:
        REGULAR_FILE: Regular file, scanned for markers.
        DIRECTORY: Directory, descended into.
        OTHER: Symlink, device, socket, FIFO. Never followed or scanned.
    """

    REGULAR_FILE = "regular_file"
    DIRECTORY = "directory"
    OTHER = "other"


class MarkerKind(str, Enum):
    """Kind of merge-conflict marker found on a line.

    The enum value is the literal seven-character marker.
    """

    OURS = "<<<<<<<"
    SEPARATOR = "======="
    THEIRS = ">>>>>>>"

    @classmethod
    def from_bytes(cls, raw: bytes) -> "MarkerKind":
        """Map a matched seven-byte run to its marker kind."""
        return cls(raw.decode("ascii"))


class WarningKind(str, Enum):
    """Kind of recoverable failure encountered during a scan.

    Attributes:
        LISTING: A directory could not be enumerated (or an entry vanished).
        READ: A regular file could not be read.
    """

    LISTING = "listing"
    READ = "read"


@dataclass(frozen=True, slots=True)
class MarkerHit:
    """A single line that carries a merge-conflict marker.

    Attributes:
        line_number: 1-based line number within the file.
        kind: Which of the three markers was matched.
        line: Decoded line text without the trailing newline.
    """

    line_number: int
    kind: MarkerKind
    line: str

    def __post_init__(self) -> None:
        """Validate marker hit data after initialization."""
        if self.line_number < 1:
            msg = f"Line number must be >= 1, got {self.line_number}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "line_number": self.line_number,
            "marker": self.kind.value,
            "line": self.line,
        }


@dataclass(frozen=True, slots=True)
class Finding:
    """A conflicted file discovered during a scan.

    Attributes:
        path: Scan root joined with the relative path (absolute if the root was).
        relative_path: POSIX-style path relative to the scan root.
        markers: Marker lines found in the file (never empty).
    """

    path: str
    relative_path: str
    markers: tuple[MarkerHit, ...]

    def __post_init__(self) -> None:
        """Validate finding data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if not self.markers:
            msg = f"Finding for {self.path} must carry at least one marker"
            raise ValueError(msg)

    @property
    def detected(self) -> bool:
        """Whether conflict markers were detected (always True for a Finding)."""
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": display_path(self.path),
            "relative_path": display_path(self.relative_path),
            "detected": self.detected,
            "markers": [hit.to_dict() for hit in self.markers],
        }


@dataclass(frozen=True, slots=True)
class ScanWarning:
    """A recoverable failure confined to one filesystem node.

    Attributes:
        path: Path of the directory or file that failed.
        kind: Listing or read failure.
        message: Human-readable cause (usually the OSError text).
    """

    path: str
    kind: WarningKind
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": display_path(self.path),
            "kind": self.kind.value,
            "message": display_path(self.message),
        }


@dataclass(slots=True)
class ScanReport:
    """Aggregated result of one scan.

    Mutable while the walker fills it in; treat as read-only afterwards.

    Attributes:
        root: Scan root as given by the caller.
        findings: Conflicted files in visit order.
        warnings: Recoverable failures in the order they occurred.
        files_scanned: Regular files whose content was read and checked.
        directories_scanned: Directories successfully listed (root included).
        entries_skipped: Symlinks, special files and excluded entries.
        started_at: ISO 8601 timestamp of when the scan began.
    """

    root: str
    findings: list[Finding] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)
    files_scanned: int = 0
    directories_scanned: int = 0
    entries_skipped: int = 0
    started_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @property
    def has_conflicts(self) -> bool:
        """True if at least one conflicted file was found."""
        return bool(self.findings)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization, with metadata."""
        return {
            "metadata": {
                "root": display_path(self.root),
                "timestamp": self.started_at,
                "hostname": socket.gethostname(),
                "conflictscan_version": __version__,
            },
            "findings": [finding.to_dict() for finding in self.findings],
            "warnings": [warning.to_dict() for warning in self.warnings],
            "summary": {
                "files_scanned": self.files_scanned,
                "directories_scanned": self.directories_scanned,
                "entries_skipped": self.entries_skipped,
                "conflicted_files": len(self.findings),
                "warnings": len(self.warnings),
            },
        }
