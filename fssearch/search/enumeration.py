#!/usr/bin/env python3
"""Filesystem enumeration primitive used by the matchers.

Both functions glob on the entry *name* with :func:`matches_name` semantics
and return paths joined onto ``directory``. Symlinked directories are
followed like regular directories. I/O errors propagate to the caller.
"""

import os
from typing import Iterator, List

from fssearch.core.constants import SearchTarget
from fssearch.search.patterns import compile_glob


def _is_kind(entry: os.DirEntry, target: SearchTarget) -> bool:
    if target == SearchTarget.FILE:
        return entry.is_file()
    return entry.is_dir()


def _walk_directories(directory: str) -> Iterator[os.DirEntry]:
    """Yield entries of directory and of every directory below it."""
    pending = [directory]
    while pending:
        current = pending.pop()
        with os.scandir(current) as it:
            entries = list(it)
        for entry in entries:
            yield entry
            if entry.is_dir():
                pending.append(entry.path)


def list_children(directory: str, name_pattern: str, target: SearchTarget) -> List[str]:
    """List immediate children of directory whose names match name_pattern.

    Args:
        directory: Directory to list
        name_pattern: Single-level glob applied to entry names
        target: Entry kind to return

    Returns:
        Paths of matching entries
    """
    regex = compile_glob(name_pattern)
    with os.scandir(directory) as it:
        return [
            entry.path
            for entry in it
            if _is_kind(entry, target) and regex.match(entry.name) is not None
        ]


def list_descendants(directory: str, name_pattern: str, target: SearchTarget) -> List[str]:
    """List entries at every depth below directory whose names match name_pattern.

    The directory itself is never included.

    Args:
        directory: Directory to walk
        name_pattern: Single-level glob applied to entry names
        target: Entry kind to return

    Returns:
        Paths of matching entries
    """
    regex = compile_glob(name_pattern)
    return [
        entry.path
        for entry in _walk_directories(directory)
        if _is_kind(entry, target) and regex.match(entry.name) is not None
    ]
