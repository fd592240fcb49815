#!/usr/bin/env python3
"""Rule engine building file and directory sets from rule lines.

Each rule line adds matched paths to, or removes them from, one of two
accumulating sets:

=========  ======================================
Prefix     Meaning
=========  ======================================
``+wf:``   add files matching a wildcard
``-wf:``   remove files matching a wildcard
``+rf:``   add files matching a regex
``-rf:``   remove files matching a regex
``+wd:``   add directories matching a wildcard
``-wd:``   remove directories matching a wildcard
``+rd:``   add directories matching a regex
``-rd:``   remove directories matching a regex
=========  ======================================

Prefixes are case-insensitive. Blank lines and lines starting with ``#``
are ignored. Any other line is handed to the custom rule hook.

Example:
    >>> engine = RuleEngine()
    >>> engine.parse_rules("/data", ["+wf:**/a*b.txt", "-wf:a*b.txt"])
    >>> sorted(engine.files)
    ['/data/f1/a1b.txt', '/data/f1/a2b.txt']
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from fssearch.core.constants import RulePrefix, SearchTarget
from fssearch.core.validators import validate_argument, validate_root
from fssearch.infrastructure.logger import get_logger
from fssearch.search.regex import regex_search
from fssearch.search.results import PathSet
from fssearch.search.wildcard import wildcard_search


class RuleAction(Enum):
    """Effect of a rule on its accumulator set."""

    ADD = "add"  # Union
    REMOVE = "remove"  # Difference


class PatternType(Enum):
    """How a rule's pattern is interpreted."""

    WILDCARD = "wildcard"
    REGEX = "regex"


@dataclass(frozen=True)
class Rule:
    """A parsed rule line."""

    action: RuleAction
    target: SearchTarget
    pattern_type: PatternType
    pattern: str
    line: str = ""


_ACTIONS = {
    RulePrefix.ADD: RuleAction.ADD,
    RulePrefix.REMOVE: RuleAction.REMOVE,
}

_KINDS = {
    RulePrefix.WILDCARD_FILE: (PatternType.WILDCARD, SearchTarget.FILE),
    RulePrefix.REGEX_FILE: (PatternType.REGEX, SearchTarget.FILE),
    RulePrefix.WILDCARD_DIRECTORY: (PatternType.WILDCARD, SearchTarget.DIRECTORY),
    RulePrefix.REGEX_DIRECTORY: (PatternType.REGEX, SearchTarget.DIRECTORY),
}

_SEARCHES = {
    PatternType.WILDCARD: wildcard_search,
    PatternType.REGEX: regex_search,
}

# handler(engine, root, rule_line)
CustomRuleHandler = Callable[["RuleEngine", str, str], None]


def is_ignorable(line: str) -> bool:
    """Return True for blank lines and ``#`` comments (line already trimmed)."""
    return not line or line.startswith(RulePrefix.COMMENT)


def parse_rule(line: str) -> Optional[Rule]:
    """Parse one rule line.

    Args:
        line: Raw rule line (surrounding whitespace is ignored)

    Returns:
        Parsed rule, or None if the line does not start with a known prefix
    """
    text = (line or "").strip()
    if len(text) < RulePrefix.LENGTH:
        return None

    action = _ACTIONS.get(text[0])
    kind = _KINDS.get(text[1:RulePrefix.LENGTH].lower())
    if action is None or kind is None:
        return None

    pattern_type, target = kind
    return Rule(
        action=action,
        target=target,
        pattern_type=pattern_type,
        pattern=text[RulePrefix.LENGTH:],
        line=text,
    )


class RuleEngine:
    """Fold rule lines into file and directory sets.

    The sets persist across :meth:`parse_rules` calls and are only cleared by
    :meth:`reset`. Instances are not thread-safe; callers sharing one across
    threads must serialize ``parse_rules`` and ``reset`` themselves.
    """

    def __init__(
        self,
        custom_rule_handler: Optional[CustomRuleHandler] = None,
        halt_on_blank_line: bool = False,
    ):
        """Initialize rule engine.

        Args:
            custom_rule_handler: Called as ``handler(engine, root, line)`` for
                lines that are not built-in rules
            halt_on_blank_line: Stop processing the remaining lines of a
                ``parse_rules`` call at the first blank or comment line
                instead of skipping it
        """
        self._files = PathSet()
        self._directories = PathSet()
        self._custom_rule_handler = custom_rule_handler
        self._halt_on_blank_line = halt_on_blank_line

    @property
    def files(self) -> frozenset:
        """Current file set."""
        return self._files.snapshot()

    @property
    def directories(self) -> frozenset:
        """Current directory set."""
        return self._directories.snapshot()

    def parse_rules(self, root: str, rules: Iterable[Optional[str]]) -> None:
        """Apply rule lines in order, searching below root.

        A failing rule aborts the call; sets changed by earlier lines keep
        their changes.

        Args:
            root: Existing directory to search
            rules: Rule lines, or one string holding several lines; None
                entries count as blank lines

        Raises:
            MissingArgumentError: If root or rules is None
            DirectoryNotFoundError: If root is not an existing directory
            InvalidPatternError: If a regex rule does not compile
        """
        validate_argument(root, "root")
        validate_argument(rules, "rules")
        root = validate_root(root)

        logger = get_logger()

        if isinstance(rules, str):
            rules = rules.splitlines()

        with logger.add_context(root=root):
            for raw in rules:
                line = (raw or "").strip()

                if is_ignorable(line):
                    if self._halt_on_blank_line:
                        logger.debug("Stopping at blank or comment line")
                        return
                    continue

                rule = parse_rule(line)
                if rule is None:
                    logger.debug("Delegating custom rule", rule=line)
                    self.parse_custom_rule(root, line)
                    continue

                self.apply_rule(root, rule)

    def apply_rule(self, root: str, rule: Rule) -> None:
        """Run a rule's search and fold the matches into its set."""
        matches = _SEARCHES[rule.pattern_type](root, rule.pattern, rule.target)

        if rule.target == SearchTarget.FILE:
            accumulator = self._files
        else:
            accumulator = self._directories

        if rule.action == RuleAction.ADD:
            accumulator.update(matches)
        else:
            accumulator.difference_update(matches)

        get_logger().debug(
            "Applied rule",
            rule=rule.line,
            matches=len(matches),
            total=len(accumulator),
        )

    def parse_custom_rule(self, root: str, rule: str) -> None:
        """Handle a line that is not a built-in rule.

        Calls the handler given at construction; without one the line is
        ignored. Subclasses may override this instead.
        """
        if self._custom_rule_handler is not None:
            self._custom_rule_handler(self, root, rule)

    def reset(self, target: Optional[SearchTarget] = None) -> None:
        """Clear both sets, or only the set for target."""
        if target is None or target == SearchTarget.FILE:
            self._files.clear()
        if target is None or target == SearchTarget.DIRECTORY:
            self._directories.clear()

    def add_files(self, *files: str) -> None:
        """Add paths to the file set."""
        self._files.update(files)

    def remove_files(self, *files: str) -> None:
        """Remove paths from the file set."""
        self._files.difference_update(files)

    def add_directories(self, *directories: str) -> None:
        """Add paths to the directory set."""
        self._directories.update(directories)

    def remove_directories(self, *directories: str) -> None:
        """Remove paths from the directory set."""
        self._directories.difference_update(directories)
