#!/usr/bin/env python3
"""Command-line interface for FSSearch.

Subcommands:
- ``wildcard ROOT PATTERN``: segment-wise wildcard search
- ``regex ROOT PATTERN``: regular expression search on relative paths
- ``rules ROOT RULE_FILE...``: apply rule files and print the resulting sets

Example:
    >>> from fssearch.cli import main
    >>> main(["wildcard", "/data", "**/*.txt"])
"""

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from fssearch.core.constants import FSSEARCH_VERSION, ConfigKey, SearchTarget
from fssearch.core.validators import SearchError
from fssearch.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from fssearch.infrastructure.logger import Logger, get_logger, set_global_logger
from fssearch.rules.engine import RuleEngine
from fssearch.rules.loader import RuleFileError, read_rule_lines
from fssearch.search.regex import regex_search
from fssearch.search.wildcard import wildcard_search

DESCRIPTION = "FSSearch - wildcard, regex and rule-based filesystem search"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fssearch",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # All .txt files at any depth
  fssearch wildcard /data "**/*.txt"

  # Directories named like build* directly under any top-level dir
  fssearch wildcard /data "*/build*" --directories

  # Regex on root-relative paths
  fssearch regex /data "^src/.+\\.py$"

  # Apply a rule file
  fssearch rules /data rules.txt
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {FSSEARCH_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log records to FILE",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    for name, help_text in (
        ("wildcard", "Search with a wildcard pattern (?, *, **)"),
        ("regex", "Search with a regular expression"),
    ):
        search = subparsers.add_parser(name, help=help_text)
        search.add_argument("root", metavar="ROOT", help="Directory to search")
        search.add_argument("pattern", metavar="PATTERN", help="Search pattern")
        search.add_argument(
            "-d",
            "--directories",
            action="store_true",
            help="Match directories instead of files",
        )

    rules = subparsers.add_parser("rules", help="Apply rule files")
    rules.add_argument("root", metavar="ROOT", help="Directory to search")
    rules.add_argument(
        "rule_files",
        metavar="RULE_FILE",
        nargs="+",
        help="Rule files (text, or YAML with a 'rules' list)",
    )
    rules.add_argument(
        "--halt-on-blank",
        action="store_true",
        default=None,
        help="Stop reading a rule file at its first blank or comment line",
    )

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    return build_parser().parse_args(args)


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Build the layered configuration for this run.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration manager with file, environment and CLI layers

    Raises:
        CLIError: If the config file does not exist
        ConfigError: If the config file cannot be parsed
    """
    if args.config and not Path(args.config).is_file():
        raise CLIError(f"Configuration file does not exist: {args.config}")

    config = ConfigManager(args.config)

    if args.debug:
        config.set(ConfigKey.LOGGING_LEVEL, "DEBUG", ConfigSource.CLI_ARGS)
    if args.log_file:
        config.set(ConfigKey.LOGGING_FILE, args.log_file, ConfigSource.CLI_ARGS)
    if getattr(args, "halt_on_blank", None):
        config.set(ConfigKey.RULES_HALT_ON_BLANK_LINE, True, ConfigSource.CLI_ARGS)

    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Create the shared logger from configuration.

    Args:
        config: Configuration manager

    Returns:
        Configured logger instance
    """
    logger = Logger.from_config(config)
    set_global_logger(logger)
    return logger


def print_paths(paths: Iterable[str], out: TextIO) -> None:
    """Print paths one per line in sorted order."""
    for path in sorted(paths):
        print(path, file=out)


def run_search(args: argparse.Namespace, out: TextIO) -> int:
    """Run the wildcard or regex subcommand."""
    target = SearchTarget.DIRECTORY if args.directories else SearchTarget.FILE
    search = wildcard_search if args.command == "wildcard" else regex_search

    print_paths(search(args.root, args.pattern, target), out)
    return 0


def run_rules(args: argparse.Namespace, config: ConfigManager, out: TextIO) -> int:
    """Run the rules subcommand.

    Each rule file is applied with its own ``parse_rules`` call, so halting
    at a blank line only ends the current file.
    """
    engine = RuleEngine(
        halt_on_blank_line=bool(config.get(ConfigKey.RULES_HALT_ON_BLANK_LINE, False))
    )
    encoding = config.get(ConfigKey.RULES_ENCODING, "utf-8")

    for rule_file in args.rule_files:
        engine.parse_rules(args.root, read_rule_lines(rule_file, encoding))

    print("[files]", file=out)
    print_paths(engine.files, out)
    print("[directories]", file=out)
    print_paths(engine.directories, out)
    return 0


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Arguments (defaults to sys.argv[1:])
        out: Stream for results (defaults to stdout)

    Returns:
        Process exit code
    """
    out = out or sys.stdout
    args = parse_arguments(argv)

    try:
        config = load_configuration(args)
        logger = setup_logging(config)
        logger.info("Running command", command=args.command, root=args.root)

        if args.command == "rules":
            return run_rules(args, config, out)
        return run_search(args, out)

    except (CLIError, ConfigError, RuleFileError, SearchError) as e:
        get_logger().error("Command failed", error=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        get_logger().exception("Unexpected error", e, command=args.command)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
