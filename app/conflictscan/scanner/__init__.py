"""Merge-conflict scanning module.

This module provides the conflict detector, the directory tree walker,
exclusion rules, and the domain models produced by a scan.
"""

from conflictscan.scanner.detector import detect, find_markers
from conflictscan.scanner.excludes import VCS_DIRECTORY_NAMES, is_excluded
from conflictscan.scanner.models import (
    EntryKind,
    Finding,
    MarkerHit,
    MarkerKind,
    ScanReport,
    ScanWarning,
    WarningKind,
    display_path,
)
from conflictscan.scanner.walker import ScanError, ScanRootError, TreeWalker, classify_entry, scan

__all__ = [
    "VCS_DIRECTORY_NAMES",
    "EntryKind",
    "Finding",
    "MarkerHit",
    "MarkerKind",
    "ScanError",
    "ScanReport",
    "ScanRootError",
    "ScanWarning",
    "TreeWalker",
    "WarningKind",
    "classify_entry",
    "detect",
    "display_path",
    "find_markers",
    "is_excluded",
    "scan",
]
