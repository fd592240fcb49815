"""
FSSearch Core: Constants and Type Definitions

This module provides system-wide constants, error codes, and type definitions
shared by the search, rules and infrastructure layers.
"""
from enum import Enum, IntEnum

# Version information
FSSEARCH_VERSION = "1.0.0"

# Canonical separator used in wildcard patterns, regardless of platform
PATTERN_SEPARATOR = "/"


class ErrorCode(IntEnum):
    """Standardized error codes for FSSearch operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Missing argument, bad pattern
    NOT_FOUND = 2  # Directory or file doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    INTERNAL_ERROR = 6  # Bug in FSSearch


class SearchTarget(Enum):
    """Kind of filesystem entry a search or rule operates on."""

    FILE = "file"
    DIRECTORY = "directory"


class Limits:
    """Input limits applied before any filesystem access."""

    MAX_PATH_LENGTH = 4096
    MAX_RULE_FILE_SIZE = 10 * 1024 * 1024  # 10MB


class RulePrefix:
    """Rule line prefixes understood by the rule engine (case-insensitive)."""

    ADD = "+"
    REMOVE = "-"
    COMMENT = "#"

    WILDCARD_FILE = "wf:"
    REGEX_FILE = "rf:"
    WILDCARD_DIRECTORY = "wd:"
    REGEX_DIRECTORY = "rd:"

    # Length of "+wf:" and friends
    LENGTH = 4


class ConfigKey:
    """Configuration key constants (dot paths below the top-level key)."""

    ROOT = "fssearch"

    LOGGING_LEVEL = "fssearch.logging.level"
    LOGGING_FILE = "fssearch.logging.file"

    RULES_HALT_ON_BLANK_LINE = "fssearch.rules.halt_on_blank_line"
    RULES_ENCODING = "fssearch.rules.encoding"


# Default configuration values
DEFAULT_CONFIG = {
    "fssearch": {
        "logging": {
            "level": "WARNING",
            "file": None,
        },
        "rules": {
            "halt_on_blank_line": False,
            "encoding": "utf-8",
        },
    }
}
