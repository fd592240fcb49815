#!/usr/bin/env python3
"""Case-insensitive path sets.

Search results and rule accumulators compare paths without regard to letter
case, on every platform. The first spelling added for a path is the one that
is kept and iterated.
"""

from collections.abc import MutableSet
from typing import Dict, Iterable, Iterator, Optional


def path_key(path: str) -> str:
    """Comparison key for a path."""
    return path.casefold()


class PathSet(MutableSet):
    """Mutable set of paths with case-insensitive membership.

    Example:
        >>> paths = PathSet(["/data/A.txt"])
        >>> "/DATA/a.TXT" in paths
        True
        >>> paths.add("/data/a.txt")
        >>> list(paths)
        ['/data/A.txt']
    """

    def __init__(self, paths: Optional[Iterable[str]] = None):
        self._paths: Dict[str, str] = {}
        if paths is not None:
            self.update(paths)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path_key(path) in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths.values())

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._paths.values())!r})"

    def add(self, path: str) -> None:
        """Add path unless a case-insensitively equal path is present."""
        self._paths.setdefault(path_key(path), path)

    def discard(self, path: str) -> None:
        """Remove path, ignoring case, if present."""
        self._paths.pop(path_key(path), None)

    def clear(self) -> None:
        """Remove every path."""
        self._paths.clear()

    def update(self, paths: Iterable[str]) -> None:
        """Add every path in paths."""
        for path in paths:
            self.add(path)

    def difference_update(self, paths: Iterable[str]) -> None:
        """Remove every path in paths."""
        for path in paths:
            self.discard(path)

    def snapshot(self) -> frozenset:
        """Immutable copy of the stored paths."""
        return frozenset(self._paths.values())

    @classmethod
    def _from_iterable(cls, it: Iterable[str]) -> "PathSet":
        return cls(it)
