"""FSSearch search layer.

- split_pattern: wildcard pattern segmentation
- WildcardMatcher / wildcard_search: segment-wise wildcard search
- RegexMatcher / regex_search: regular expression search
- PathSet: case-insensitive result set
"""

from .enumeration import list_children, list_descendants
from .patterns import compile_glob, is_multi_level, matches_name, split_pattern
from .regex import RegexMatcher, regex_search
from .results import PathSet
from .wildcard import WildcardMatcher, wildcard_search

__all__ = [
    "split_pattern",
    "is_multi_level",
    "compile_glob",
    "matches_name",
    "list_children",
    "list_descendants",
    "PathSet",
    "WildcardMatcher",
    "wildcard_search",
    "RegexMatcher",
    "regex_search",
]
