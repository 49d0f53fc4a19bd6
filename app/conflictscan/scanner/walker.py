"""Recursive directory walker that reports files with conflict markers.

Walks a directory tree depth-first, reading every regular file and
passing its content to the conflict detector. Symlinks and special
files are never followed or scanned, which also rules out symlink
cycles. Directories and files that cannot be accessed are skipped
with a warning; only an unusable scan root aborts the scan.
"""

import logging
import stat
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from conflictscan.scanner.detector import find_markers
from conflictscan.scanner.excludes import is_excluded
from conflictscan.scanner.models import (
    EntryKind,
    Finding,
    ScanReport,
    ScanWarning,
    WarningKind,
    display_path,
)

logger = logging.getLogger(__name__)

FindingCallback = Callable[[Finding], None]
WarningCallback = Callable[[ScanWarning], None]


class ScanError(Exception):
    """Base exception for scan errors."""


class ScanRootError(ScanError):
    """Raised when the scan root is missing, not a directory, or unlistable."""


def classify_entry(path: Path) -> EntryKind:
    """Classify a directory entry without following symlinks.

    Args:
        path: Entry to classify.

    Returns:
        EntryKind for the entry. Symlinks are always OTHER.

    Raises:
        OSError: If the entry cannot be stat'ed (e.g. it vanished).
    """
    mode = path.lstat().st_mode
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.REGULAR_FILE
    return EntryKind.OTHER


def _list_directory(directory: Path) -> list[Path]:
    """List direct children sorted by name."""
    return sorted(directory.iterdir(), key=lambda p: p.name)


def _read_file(path: Path) -> bytes:
    return path.read_bytes()


class TreeWalker:
    """Depth-first merge-conflict scanner for a directory tree.

    Findings are streamed: each one is passed to ``on_finding`` and
    yielded from :meth:`walk` as soon as the file is checked. Traversal
    uses an explicit stack of directory iterators instead of recursion,
    so arbitrarily deep trees are fine, while the visit order is the
    same as a recursive pre-order walk over name-sorted children.

    Args:
        root: Directory to scan.
        exclude: Glob patterns for entries to skip (name or relative path).
        skip_hidden: Skip dot-prefixed entries.
        skip_vcs: Skip version-control metadata directories.
        match_anywhere: Detect markers anywhere in a line, not only at line start.
        on_finding: Called with each Finding at the moment it is discovered.
        on_warning: Called with each recoverable failure.

    Example:
        >>> walker = TreeWalker("/tmp/repo")
        >>> for finding in walker.walk():
        ...     print(finding.path)
    """

    def __init__(
        self,
        root: Path | str,
        *,
        exclude: Iterable[str] = (),
        skip_hidden: bool = False,
        skip_vcs: bool = False,
        match_anywhere: bool = False,
        on_finding: FindingCallback | None = None,
        on_warning: WarningCallback | None = None,
    ) -> None:
        self._root = Path(root)
        self._exclude = tuple(exclude)
        self._skip_hidden = skip_hidden
        self._skip_vcs = skip_vcs
        self._match_anywhere = match_anywhere
        self._on_finding = on_finding
        self._on_warning = on_warning
        self._report = ScanReport(root=str(self._root))

    @property
    def root(self) -> Path:
        """Directory being scanned."""
        return self._root

    @property
    def report(self) -> ScanReport:
        """Report of the current (or most recent) scan."""
        return self._report

    def walk(self) -> Iterator[Finding]:
        """Scan the tree and yield a Finding for every conflicted file.

        Each call starts a fresh scan and resets :attr:`report`.

        Yields:
            Finding instances in visit order.

        Raises:
            ScanRootError: If the root is not a directory or cannot be listed.
        """
        root = self._root
        self._report = ScanReport(root=str(root))

        if not root.is_dir():
            msg = f"Scan root is not a directory: {root}"
            raise ScanRootError(msg)

        try:
            children = _list_directory(root)
        except OSError as e:
            msg = f"Cannot list scan root {root}: {e}"
            raise ScanRootError(msg) from e

        self._report.directories_scanned += 1
        stack: list[Iterator[Path]] = [iter(children)]

        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            relative = entry.relative_to(root).as_posix()
            if is_excluded(
                entry.name,
                relative,
                patterns=self._exclude,
                skip_hidden=self._skip_hidden,
                skip_vcs=self._skip_vcs,
            ):
                logger.debug("Excluded: %s", entry)
                self._report.entries_skipped += 1
                continue

            try:
                kind = classify_entry(entry)
            except OSError as e:
                message = f"Cannot determine type: {e.strerror or e}"
                self._warn(entry, WarningKind.LISTING, message)
                continue

            if kind == EntryKind.DIRECTORY:
                try:
                    grandchildren = _list_directory(entry)
                except OSError as e:
                    message = f"Cannot list directory: {e.strerror or e}"
                    self._warn(entry, WarningKind.LISTING, message)
                    continue
                self._report.directories_scanned += 1
                stack.append(iter(grandchildren))
            elif kind == EntryKind.REGULAR_FILE:
                finding = self._check_file(entry, relative)
                if finding is not None:
                    self._report.findings.append(finding)
                    if self._on_finding is not None:
                        self._on_finding(finding)
                    yield finding
            else:
                logger.debug("Skipping non-regular entry: %s", entry)
                self._report.entries_skipped += 1

    def run(self) -> ScanReport:
        """Scan the whole tree and return the aggregated report.

        Raises:
            ScanRootError: If the root is not a directory or cannot be listed.
        """
        for _ in self.walk():
            pass
        return self._report

    def _check_file(self, path: Path, relative: str) -> Finding | None:
        """Read one regular file and build a Finding if it is conflicted."""
        try:
            content = _read_file(path)
        except OSError as e:
            self._warn(path, WarningKind.READ, f"Cannot read file: {e.strerror or e}")
            return None

        self._report.files_scanned += 1
        markers = find_markers(content, anywhere=self._match_anywhere)
        if not markers:
            return None
        return Finding(path=str(path), relative_path=relative, markers=tuple(markers))

    def _warn(self, path: Path, kind: WarningKind, message: str) -> None:
        logger.warning("%s: %s", display_path(str(path)), message)
        warning = ScanWarning(path=str(path), kind=kind, message=message)
        self._report.warnings.append(warning)
        if self._on_warning is not None:
            self._on_warning(warning)


def scan(
    root: Path | str,
    *,
    exclude: Iterable[str] = (),
    skip_hidden: bool = False,
    skip_vcs: bool = False,
    match_anywhere: bool = False,
) -> list[Finding]:
    """Scan a directory tree and return all conflicted files.

    Each Finding is logged at INFO level as it is discovered.

    Args:
        root: Directory to scan.
        exclude: Glob patterns for entries to skip.
        skip_hidden: Skip dot-prefixed entries.
        skip_vcs: Skip version-control metadata directories.
        match_anywhere: Detect markers anywhere in a line.

    Returns:
        Findings in visit order.

    Raises:
        ScanRootError: If the root is not a directory or cannot be listed.
    """
    walker = TreeWalker(
        root,
        exclude=exclude,
        skip_hidden=skip_hidden,
        skip_vcs=skip_vcs,
        match_anywhere=match_anywhere,
    )
    findings: list[Finding] = []
    for finding in walker.walk():
        logger.info("Conflict markers found in %s", display_path(finding.path))
        findings.append(finding)
    return findings
