#!/usr/bin/env python3
"""Wildcard search over a directory tree.

Patterns are split into segments by :func:`split_pattern` and resolved
recursively, one segment (or one multi-level marker plus the segment after
it) at a time:

- one segment left: match entries directly under the current directory.
  For directories a multi-level marker alone means "every directory at
  every depth"; for files ``**`` is an ordinary glob equivalent to ``*``.
- two segments left: ``**/name`` searches ``name`` at every depth in one
  pass; ``dir/name`` matches ``dir`` here and then ``name`` inside each hit.
- more segments: ``**/dir/...`` finds ``dir`` at every depth and continues
  below each hit; ``dir/...`` matches ``dir`` here and continues below it.

Example:
    >>> wildcard_search("/data", "**/a*b.t?t", SearchTarget.FILE)
    PathSet(['/data/a1b.txt', '/data/f1/a1b.txt'])
"""

from typing import Union

from fssearch.core.constants import SearchTarget
from fssearch.core.validators import validate_argument, validate_root
from fssearch.infrastructure.logger import get_logger
from fssearch.search.enumeration import list_children, list_descendants
from fssearch.search.patterns import Segments, is_multi_level, split_pattern
from fssearch.search.results import PathSet


class WildcardMatcher:
    """Resolve segment lists against a directory tree."""

    def search(self, root: str, pattern: str, target: Union[SearchTarget, str]) -> PathSet:
        """Search root for entries whose relative path matches pattern.

        Args:
            root: Existing directory to search
            pattern: ``/``-separated wildcard pattern
            target: Entry kind to return

        Returns:
            Matching paths, deduplicated case-insensitively

        Raises:
            MissingArgumentError: If root or pattern is None
            DirectoryNotFoundError: If root is not an existing directory
        """
        validate_argument(root, "root")
        validate_argument(pattern, "pattern")
        target = SearchTarget(validate_argument(target, "target"))
        root = validate_root(root)

        segments = split_pattern(pattern)
        result = self.match(root, segments, target)

        get_logger().debug(
            "Wildcard search complete",
            root=root,
            pattern=pattern,
            target=target.value,
            matches=len(result),
        )
        return result

    def match(self, root: str, segments: Segments, target: SearchTarget, start: int = 0) -> PathSet:
        """Resolve ``segments[start:]`` below root.

        The segment tuple is shared by every recursive call; only the start
        index moves.
        """
        result = PathSet()
        remaining = len(segments) - start

        if remaining <= 0:
            return result

        head = segments[start]

        if remaining == 1:
            if target == SearchTarget.FILE:
                result.update(list_children(root, head, SearchTarget.FILE))
            elif is_multi_level(head):
                result.update(list_descendants(root, "*", SearchTarget.DIRECTORY))
            else:
                result.update(list_children(root, head, SearchTarget.DIRECTORY))

        elif remaining == 2:
            if is_multi_level(head):
                result.update(list_descendants(root, segments[start + 1], target))
            else:
                for directory in list_children(root, head, SearchTarget.DIRECTORY):
                    result.update(self.match(directory, segments, target, start + 1))

        elif is_multi_level(head):
            for directory in list_descendants(root, segments[start + 1], SearchTarget.DIRECTORY):
                result.update(self.match(directory, segments, target, start + 2))

        else:
            for directory in list_children(root, head, SearchTarget.DIRECTORY):
                result.update(self.match(directory, segments, target, start + 1))

        return result


_default_matcher = WildcardMatcher()


def wildcard_search(root: str, pattern: str, target: Union[SearchTarget, str]) -> PathSet:
    """Search root with a wildcard pattern. See :meth:`WildcardMatcher.search`."""
    return _default_matcher.search(root, pattern, target)
