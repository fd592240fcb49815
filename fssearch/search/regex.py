#!/usr/bin/env python3
r"""Regular expression search over a directory tree.

Every file (or directory) at every depth below the root is tested by
``re.search`` against its path relative to the root. Matching is
case-insensitive and unanchored; callers anchor with ``^``/``$`` when they
need to. Patterns use ``/`` as the separator on every platform.

Example:
    >>> regex_search("/data", r"(f.+/)*a1b\.t.+t", SearchTarget.FILE)
    PathSet(['/data/a1b.txt', '/data/f1/a1b.txt'])
"""

import os
from typing import Pattern, Union

from fssearch.core.constants import SearchTarget
from fssearch.core.validators import compile_search_regex, validate_argument, validate_root
from fssearch.infrastructure.logger import get_logger
from fssearch.search.enumeration import list_descendants
from fssearch.search.results import PathSet

_SEPARATORS = "/\\"


def relative_path(path: str, root: str) -> str:
    """Strip root and any leading separators from path."""
    return path[len(root):].lstrip(_SEPARATORS)


class RegexMatcher:
    """Match relative paths below a root against a compiled regex."""

    def __init__(self, sep: str = os.sep):
        """Initialize matcher.

        Args:
            sep: Platform path separator used to translate ``/`` in patterns
        """
        self._sep = sep

    def search(self, root: str, pattern: str, target: Union[SearchTarget, str]) -> PathSet:
        """Search root for entries whose relative path matches pattern.

        Args:
            root: Existing directory to search
            pattern: Regular expression using ``/`` as separator
            target: Entry kind to return

        Returns:
            Matching paths, deduplicated case-insensitively

        Raises:
            MissingArgumentError: If root or pattern is None
            DirectoryNotFoundError: If root is not an existing directory
            InvalidPatternError: If pattern does not compile
        """
        validate_argument(root, "root")
        validate_argument(pattern, "pattern")
        target = SearchTarget(validate_argument(target, "target"))
        root = validate_root(root)

        regex = compile_search_regex(pattern, self._sep)
        result = self.match(root, regex, target)

        get_logger().debug(
            "Regex search complete",
            root=root,
            pattern=pattern,
            target=target.value,
            matches=len(result),
        )
        return result

    def match(self, root: str, regex: Pattern[str], target: SearchTarget) -> PathSet:
        """Collect entries below root whose relative path contains a match."""
        return PathSet(
            path
            for path in list_descendants(root, "*", target)
            if regex.search(relative_path(path, root)) is not None
        )


_default_matcher = RegexMatcher()


def regex_search(root: str, pattern: str, target: Union[SearchTarget, str]) -> PathSet:
    """Search root with a regular expression. See :meth:`RegexMatcher.search`."""
    return _default_matcher.search(root, pattern, target)
