#!/usr/bin/env python3
"""Reading rule lines from files.

Two formats are accepted:

- plain text (any extension but ``.yaml``/``.yml``): one rule per line
- YAML: a mapping with a ``rules`` list of strings, for example::

    rules:
      - "+wf:**/*.txt"
      - "-wf:*.txt"
"""

from pathlib import Path
from typing import List, Union

import yaml

from fssearch.core.constants import ErrorCode, Limits

YAML_SUFFIXES = {".yaml", ".yml"}


class RuleFileError(Exception):
    """Raised when a rule file cannot be read or has the wrong shape."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message)
        self.error_code = error_code


def read_rule_lines(path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """Read the rule lines stored in a file.

    Args:
        path: Rule file path
        encoding: Text encoding of the file

    Returns:
        Rule lines in file order (not trimmed, blank lines kept)

    Raises:
        RuleFileError: If the file is missing, too large, unreadable or
            malformed
    """
    rule_path = Path(path)

    if not rule_path.is_file():
        raise RuleFileError(f"Rule file not found: {path}", ErrorCode.NOT_FOUND)

    if rule_path.stat().st_size > Limits.MAX_RULE_FILE_SIZE:
        raise RuleFileError(f"Rule file exceeds maximum size ({Limits.MAX_RULE_FILE_SIZE}): {path}")

    try:
        text = rule_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise RuleFileError(f"Failed to read rule file: {path}\n{e}") from e

    if rule_path.suffix.lower() in YAML_SUFFIXES:
        return _parse_yaml_rules(text, str(path))

    return text.splitlines()


def _parse_yaml_rules(text: str, source: str) -> List[str]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RuleFileError(f"Failed to parse rule file: {source}\n{e}") from e

    if not isinstance(data, dict) or "rules" not in data:
        raise RuleFileError(f"Rule file must contain a 'rules' list: {source}")

    rules = data["rules"] or []
    if not isinstance(rules, list) or not all(isinstance(r, str) for r in rules):
        raise RuleFileError(f"'rules' must be a list of strings: {source}")

    return rules
