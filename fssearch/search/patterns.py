#!/usr/bin/env python3
"""Wildcard pattern splitting and single-level glob matching.

A wildcard pattern is a ``/``-separated list of segments. Each segment is
either a single-level glob (``?`` matches one character, ``*`` matches any
run of characters) or a multi-level marker: a segment made only of two or
more ``*`` characters, meaning "zero or more directory levels".

Example:
    >>> split_pattern("abc/**/***/de*f/*.png")
    ('abc', '**', 'de*f', '*.png')
    >>> compile_glob("A*B.TXT").match("a1b.txt") is not None
    True
"""

import re
from functools import lru_cache
from typing import List, Pattern, Tuple

from fssearch.core.constants import PATTERN_SEPARATOR

Segments = Tuple[str, ...]


def is_multi_level(segment: str) -> bool:
    """Return True if segment is a multi-level marker (``**``, ``***``, ...)."""
    return len(segment) >= 2 and all(c == "*" for c in segment)


def collapse_multi_level(segments: List[str]) -> Segments:
    """Collapse each run of consecutive multi-level markers into one.

    Example:
        >>> collapse_multi_level(["**", "**", "abc", "**", "***", "*.js"])
        ('**', 'abc', '**', '*.js')
    """
    result: List[str] = []
    last_multi = False

    for segment in segments:
        multi = is_multi_level(segment)
        if multi and last_multi:
            continue
        result.append(segment)
        last_multi = multi

    return tuple(result)


def split_pattern(pattern: str) -> Segments:
    """Split a wildcard pattern into clean segments.

    Pieces are trimmed, empty pieces are dropped (so ``a//b`` and leading or
    trailing slashes behave like ``a/b``) and runs of multi-level markers
    are collapsed.

    Args:
        pattern: Raw wildcard pattern

    Returns:
        Tuple of non-empty segments (empty for a blank pattern)
    """
    pieces = [piece.strip() for piece in pattern.split(PATTERN_SEPARATOR)]
    return collapse_multi_level([piece for piece in pieces if piece])


@lru_cache(maxsize=256)
def compile_glob(segment: str) -> Pattern[str]:
    """Compile a single-level glob into a case-insensitive anchored regex.

    Only ``?`` and ``*`` are special; every other character, including
    ``[`` and ``]``, matches literally.

    Args:
        segment: Glob for one path component

    Returns:
        Compiled regular expression matching whole entry names
    """
    parts = []
    for char in segment:
        if char == "*":
            # Consecutive stars behave like one
            if parts and parts[-1] == ".*":
                continue
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))

    return re.compile("".join(parts) + r"\Z", re.IGNORECASE | re.DOTALL)


def matches_name(name: str, segment: str) -> bool:
    """Check an entry name against a single-level glob."""
    return compile_glob(segment).match(name) is not None
