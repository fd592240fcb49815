"""
FSSearch Core: Errors and Input Validators.

This module defines the error taxonomy raised by the public search and rule
operations, plus the argument checks performed before any filesystem access.
"""
import os
import re
from typing import Any, Optional, Pattern, Union

from fssearch.core.constants import ErrorCode, Limits

# Runs of forward slashes in a regex pattern, rewritten on backslash platforms
_SEPARATOR_RUN = re.compile("/+")


class SearchError(Exception):
    """Base exception for search and rule errors."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        """Initialize SearchError.

        Args:
            message: Error message
            error_code: Associated error code (defaults to the class code)
        """
        super().__init__(message)
        self.error_code = error_code if error_code is not None else self.default_code


class MissingArgumentError(SearchError):
    """A required argument was None."""

    default_code = ErrorCode.INVALID_INPUT

    def __init__(self, name: str):
        super().__init__(f"Missing required argument: {name}")
        self.argument = name


class DirectoryNotFoundError(SearchError):
    """The search root does not exist or is not a directory."""

    default_code = ErrorCode.NOT_FOUND

    def __init__(self, path: str):
        super().__init__(f"Directory not found: {path}")
        self.path = path


class InvalidPatternError(SearchError):
    """A regular expression pattern failed to compile."""

    default_code = ErrorCode.INVALID_INPUT

    def __init__(self, pattern: str, reason: str = ""):
        message = f"Invalid regular expression: {pattern!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.pattern = pattern


def validate_argument(value: Any, name: str) -> Any:
    """Ensure a required argument is present.

    Args:
        value: Argument value
        name: Argument name used in the error message

    Returns:
        The value unchanged

    Raises:
        MissingArgumentError: If value is None
    """
    if value is None:
        raise MissingArgumentError(name)
    return value


def validate_root(root: Union[str, "os.PathLike[str]"]) -> str:
    """Validate that a search root exists and is a directory.

    Args:
        root: Directory to search, as a string or path-like object

    Returns:
        The root as a string

    Raises:
        DirectoryNotFoundError: If root is not an existing directory
    """
    root = os.fspath(root)
    if len(root) > Limits.MAX_PATH_LENGTH or "\0" in root:
        raise DirectoryNotFoundError(root)

    if not os.path.isdir(root):
        raise DirectoryNotFoundError(root)

    return root


def translate_separators(pattern: str, sep: str = os.sep) -> str:
    """Rewrite forward slashes in a regex pattern for the platform separator.

    On platforms whose separator is a backslash, every run of one or more
    ``/`` becomes an escaped literal backslash. Elsewhere the pattern is
    returned unchanged.

    Args:
        pattern: Regular expression using ``/`` as separator
        sep: Platform path separator

    Returns:
        Pattern suitable for matching platform-relative paths
    """
    if sep == "\\":
        return _SEPARATOR_RUN.sub(r"\\\\", pattern)
    return pattern


def compile_search_regex(pattern: str, sep: str = os.sep) -> Pattern[str]:
    """Translate separators and compile a case-insensitive regex.

    Args:
        pattern: Regex pattern string
        sep: Platform path separator

    Returns:
        Compiled regex pattern

    Raises:
        InvalidPatternError: If pattern is invalid
    """
    try:
        return re.compile(translate_separators(pattern, sep), re.IGNORECASE)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e
