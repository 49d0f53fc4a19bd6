"""Tests for scanner domain models."""

import os

import pytest
from conflictscan import __version__
from conflictscan.scanner.models import (
    Finding,
    MarkerHit,
    MarkerKind,
    ScanReport,
    ScanWarning,
    WarningKind,
    display_path,
)


def _hit(line_number: int = 1) -> MarkerHit:
    return MarkerHit(line_number=line_number, kind=MarkerKind.OURS, line="<<<<<<< HEAD")


class TestMarkerKind:
    """Tests for MarkerKind."""

    def test_from_bytes(self) -> None:
        """Each seven-byte run maps to its marker kind."""
        assert MarkerKind.from_bytes(b"<" * 7) == MarkerKind.OURS
        assert MarkerKind.from_bytes(b"=" * 7) == MarkerKind.SEPARATOR
        assert MarkerKind.from_bytes(b">" * 7) == MarkerKind.THEIRS

    def test_from_bytes_rejects_other_runs(self) -> None:
        """Anything other than a marker is rejected."""
        with pytest.raises(ValueError):
            MarkerKind.from_bytes(b"|" * 7)


class TestMarkerHit:
    """Tests for MarkerHit validation."""

    def test_rejects_zero_line_number(self) -> None:
        """Line numbers are 1-based."""
        with pytest.raises(ValueError, match="Line number"):
            MarkerHit(line_number=0, kind=MarkerKind.THEIRS, line="")

    def test_to_dict(self) -> None:
        """to_dict uses the literal marker value."""
        assert _hit(4).to_dict() == {"line_number": 4, "marker": "<<<<<<<", "line": "<<<<<<< HEAD"}


class TestFinding:
    """Tests for Finding validation and serialization."""

    def test_requires_path(self) -> None:
        """An empty path is rejected."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            Finding(path="", relative_path="", markers=(_hit(),))

    def test_requires_markers(self) -> None:
        """A Finding without markers is rejected."""
        with pytest.raises(ValueError, match="at least one marker"):
            Finding(path="/r/a.txt", relative_path="a.txt", markers=())

    def test_is_immutable(self) -> None:
        """Findings are frozen."""
        finding = Finding(path="/r/a.txt", relative_path="a.txt", markers=(_hit(),))
        with pytest.raises(AttributeError):
            finding.path = "/other"  # type: ignore[misc]

    def test_to_dict(self) -> None:
        """to_dict includes the detected flag and markers."""
        finding = Finding(path="/r/a.txt", relative_path="a.txt", markers=(_hit(2),))

        data = finding.to_dict()

        assert data["path"] == "/r/a.txt"
        assert data["relative_path"] == "a.txt"
        assert data["detected"] is True
        assert data["markers"][0]["line_number"] == 2


class TestDisplayPath:
    """Tests for display_path."""

    def test_plain_path_unchanged(self) -> None:
        """Valid UTF-8 names, accents included, pass through."""
        assert display_path("/repo/ação.txt") == "/repo/ação.txt"

    def test_undecodable_byte_is_escaped(self) -> None:
        """A surrogate-escaped byte becomes a \\xNN sequence."""
        raw = os.fsdecode(b"/repo/bad\xff.txt")

        shown = display_path(raw)

        assert shown == "/repo/bad\\xff.txt"
        shown.encode("utf-8")

    def test_finding_to_dict_is_encodable(self) -> None:
        """Finding.to_dict never carries surrogates."""
        raw = os.fsdecode(b"/repo/bad\xff.txt")
        finding = Finding(path=raw, relative_path=os.fsdecode(b"bad\xff.txt"), markers=(_hit(),))

        data = finding.to_dict()

        assert data["path"] == "/repo/bad\\xff.txt"
        assert data["relative_path"] == "bad\\xff.txt"


class TestScanReport:
    """Tests for ScanReport."""

    def test_defaults(self) -> None:
        """A fresh report is empty."""
        report = ScanReport(root="/r")

        assert report.findings == []
        assert report.warnings == []
        assert report.has_conflicts is False
        assert report.started_at

    def test_default_lists_not_shared(self) -> None:
        """Each report gets its own lists."""
        first = ScanReport(root="/a")
        first.findings.append(Finding(path="/a/x", relative_path="x", markers=(_hit(),)))

        assert ScanReport(root="/b").findings == []

    def test_to_dict(self) -> None:
        """to_dict includes metadata, findings, warnings and summary."""
        report = ScanReport(root="/r", files_scanned=3, directories_scanned=2, entries_skipped=1)
        report.findings.append(Finding(path="/r/a", relative_path="a", markers=(_hit(),)))
        report.warnings.append(ScanWarning(path="/r/x", kind=WarningKind.READ, message="denied"))

        data = report.to_dict()

        assert data["metadata"]["root"] == "/r"
        assert data["metadata"]["conflictscan_version"] == __version__
        assert data["findings"][0]["path"] == "/r/a"
        assert data["warnings"] == [{"path": "/r/x", "kind": "read", "message": "denied"}]
        assert data["summary"] == {
            "files_scanned": 3,
            "directories_scanned": 2,
            "entries_skipped": 1,
            "conflicted_files": 1,
            "warnings": 1,
        }
