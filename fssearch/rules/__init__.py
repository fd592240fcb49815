"""FSSearch Rules System.

- RuleEngine: additive/subtractive rule evaluation into file and directory sets
- parse_rule: rule line parsing
- read_rule_lines: rule file loading (text or YAML)
"""

from .engine import PatternType, Rule, RuleAction, RuleEngine, is_ignorable, parse_rule
from .loader import RuleFileError, read_rule_lines

__all__ = [
    # Rule engine
    "RuleAction",
    "PatternType",
    "Rule",
    "RuleEngine",
    "parse_rule",
    "is_ignorable",
    # Rule files
    "RuleFileError",
    "read_rule_lines",
]
