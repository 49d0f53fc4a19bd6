"""Exclusion rules for directory traversal.

Entries can be excluded by glob pattern, by being hidden (dot-prefixed),
or by being version-control metadata directories. Nothing is excluded
unless the caller asks for it.
"""

import fnmatch
from collections.abc import Iterable

# Version-control metadata directories (matched by name)
VCS_DIRECTORY_NAMES: frozenset[str] = frozenset({".git", ".hg", ".svn", ".bzr"})


def matches_any_pattern(name: str, relative_path: str, patterns: Iterable[str]) -> bool:
    """Check if an entry matches any exclusion pattern.

    Patterns are glob-style (fnmatch) and are tested against both the
    entry's basename and its POSIX path relative to the scan root, so
    ``node_modules`` and ``build/*.log`` both work as expected.

    Args:
        name: Entry basename.
        relative_path: POSIX path of the entry relative to the scan root.
        patterns: Glob patterns to test.

    Returns:
        True if any pattern matches, False otherwise.
    """
    for pattern in patterns:
        # Trailing slash is accepted as a directory hint but not required
        pattern = pattern.rstrip("/")
        if not pattern:
            continue
        if fnmatch.fnmatchcase(name, pattern) or fnmatch.fnmatchcase(relative_path, pattern):
            return True
    return False


def is_hidden(name: str) -> bool:
    """Check if a name is hidden by shell-glob convention (dot-prefixed)."""
    return name.startswith(".")


def is_vcs_directory(name: str) -> bool:
    """Check if a name is a version-control metadata directory."""
    return name in VCS_DIRECTORY_NAMES


def is_excluded(
    name: str,
    relative_path: str,
    *,
    patterns: Iterable[str] = (),
    skip_hidden: bool = False,
    skip_vcs: bool = False,
) -> bool:
    """Decide whether a traversal entry should be skipped.

    Args:
        name: Entry basename.
        relative_path: POSIX path of the entry relative to the scan root.
        patterns: Glob patterns to exclude.
        skip_hidden: Exclude dot-prefixed names.
        skip_vcs: Exclude version-control metadata directories.

    Returns:
        True if the entry must not be visited.
    """
    if skip_hidden and is_hidden(name):
        return True
    if skip_vcs and is_vcs_directory(name):
        return True
    return matches_any_pattern(name, relative_path, patterns)
