"""Policies deciding which archive entries a replacement file stands for."""

import fnmatch
import os
from collections.abc import Callable
from pathlib import Path

# (entry name as stored in the archive, replacement file path) -> match
EntryMatcher = Callable[[str, Path], bool]


def _host_name(entry_name: str) -> str:
    return entry_name.rstrip("/").replace("/", os.sep)


def basename_matcher(entry_name: str, replacement: Path) -> bool:
    """Match when the entry's final path segment equals the file's name."""
    return os.path.basename(_host_name(entry_name)) == Path(replacement).name


def full_path_matcher(entry_name: str, replacement: Path) -> bool:
    """Match when the entry name equals the replacement path as given."""
    return Path(_host_name(entry_name)) == Path(replacement)


def glob_matcher(pattern: str) -> EntryMatcher:
    """Build a matcher selecting entries whose archive name fits a glob.

    Args:
        pattern: fnmatch-style pattern applied to the "/" separated entry name

    Returns:
        Matcher ignoring the replacement path
    """

    def matcher(entry_name: str, replacement: Path) -> bool:
        return fnmatch.fnmatchcase(entry_name, pattern)

    return matcher
