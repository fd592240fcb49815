"""FSSearch - wildcard, regex and rule-based filesystem search.

Example:
    >>> from fssearch import RuleEngine, SearchTarget, wildcard_search
    >>> wildcard_search("/data", "**/*.txt", SearchTarget.FILE)
"""

from fssearch.core.constants import FSSEARCH_VERSION as __version__
from fssearch.core.constants import SearchTarget
from fssearch.core.validators import (
    DirectoryNotFoundError,
    InvalidPatternError,
    MissingArgumentError,
    SearchError,
)
from fssearch.rules.engine import RuleEngine
from fssearch.search.regex import regex_search
from fssearch.search.results import PathSet
from fssearch.search.wildcard import wildcard_search

__all__ = [
    "__version__",
    "SearchTarget",
    "SearchError",
    "MissingArgumentError",
    "DirectoryNotFoundError",
    "InvalidPatternError",
    "PathSet",
    "wildcard_search",
    "regex_search",
    "RuleEngine",
]
