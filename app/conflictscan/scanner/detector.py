"""Merge-conflict marker detection over raw file content.

Content is treated as opaque bytes split on ``\\n``. A line is conflicted
when it starts with a run of seven ``<``, ``=`` or ``>`` characters
(trailing text such as a branch name is allowed). With ``anywhere=True``
the run may appear at any position in the line, which matches the
behaviour of ``grep -E '<<<<<<<|=======|>>>>>>>'``.
"""

import re

from conflictscan.scanner.models import MarkerHit, MarkerKind

_LINE_START_PATTERN = re.compile(rb"^(<{7}|={7}|>{7})", re.MULTILINE)
_ANYWHERE_PATTERN = re.compile(rb"(<{7}|={7}|>{7})")


def _pattern(anywhere: bool) -> re.Pattern[bytes]:
    return _ANYWHERE_PATTERN if anywhere else _LINE_START_PATTERN


def detect(content: bytes, *, anywhere: bool = False) -> bool:
    """Check whether content contains at least one conflict marker line.

    Args:
        content: Full file content.
        anywhere: Match marker runs at any position, not only at line start.

    Returns:
        True if any line carries a marker, False otherwise.
    """
    return _pattern(anywhere).search(content) is not None


def find_markers(content: bytes, *, anywhere: bool = False) -> list[MarkerHit]:
    """Locate every line carrying a conflict marker.

    Only the first marker on a line is reported.

    Args:
        content: Full file content.
        anywhere: Match marker runs at any position, not only at line start.

    Returns:
        MarkerHit per matching line, in file order. Empty if the content is clean.
    """
    pattern = _pattern(anywhere)
    # Fast path: most files are clean
    if pattern.search(content) is None:
        return []

    hits: list[MarkerHit] = []
    for line_number, raw_line in enumerate(content.split(b"\n"), start=1):
        match = pattern.search(raw_line)
        if match is None:
            continue
        text = raw_line.rstrip(b"\r").decode("utf-8", errors="replace")
        hits.append(
            MarkerHit(
                line_number=line_number,
                kind=MarkerKind.from_bytes(match.group(1)),
                line=text,
            )
        )
    return hits
