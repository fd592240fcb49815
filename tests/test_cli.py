"""Tests for the command-line interface.

This module tests:
- Argument parsing
- Configuration layering
- The wildcard, regex and rules subcommands
- Error reporting and exit codes
"""

import io
import os

import pytest
import yaml

from fssearch.cli import CLIError, load_configuration, main, parse_arguments
from fssearch.core.constants import ConfigKey


def run(argv):
    out = io.StringIO()
    code = main(argv, out=out)
    return code, out.getvalue().splitlines()


class TestParseArguments:
    """Test argument parsing."""

    def test_wildcard_command(self):
        """Parses a wildcard search."""
        args = parse_arguments(["wildcard", "/data", "**/*.txt", "--directories"])
        assert args.command == "wildcard"
        assert args.root == "/data"
        assert args.pattern == "**/*.txt"
        assert args.directories is True

    def test_rules_command(self):
        """Parses a rules run with several files."""
        args = parse_arguments(["--debug", "rules", "/data", "a.txt", "b.yaml"])
        assert args.debug is True
        assert args.rule_files == ["a.txt", "b.yaml"]
        assert args.halt_on_blank is None

    def test_command_required(self):
        """A subcommand is mandatory."""
        with pytest.raises(SystemExit):
            parse_arguments([])

    def test_version(self, capsys):
        """--version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["--version"])
        assert exc_info.value.code == 0
        assert "1.0.0" in capsys.readouterr().out


class TestLoadConfiguration:
    """Test configuration layering from arguments."""

    def test_cli_flags_override_file(self, config_file, tmp_path):
        """--debug and --log-file override the config file."""
        log_file = tmp_path / "cli.log"
        args = parse_arguments(
            ["--config", str(config_file), "--debug", "--log-file", str(log_file), "rules", "/d", "r"]
        )
        config = load_configuration(args)
        assert config.get(ConfigKey.LOGGING_LEVEL) == "DEBUG"
        assert config.get(ConfigKey.LOGGING_FILE) == str(log_file)
        assert config.get(ConfigKey.RULES_HALT_ON_BLANK_LINE) is True

    def test_halt_flag(self):
        """--halt-on-blank enables halting."""
        args = parse_arguments(["rules", "/d", "r", "--halt-on-blank"])
        assert load_configuration(args).get(ConfigKey.RULES_HALT_ON_BLANK_LINE) is True

    def test_missing_config_file(self, tmp_path):
        """A missing config file is a CLIError."""
        args = parse_arguments(["--config", str(tmp_path / "none.yaml"), "wildcard", "/d", "*"])
        with pytest.raises(CLIError):
            load_configuration(args)


class TestSearchCommands:
    """Test the search subcommands."""

    def test_wildcard_files(self, search_root, path_in):
        """Matches are printed sorted, one per line."""
        code, lines = run(["wildcard", search_root, "a*b.t*t"])
        assert code == 0
        assert lines == sorted([path_in("a1b.txt"), path_in("a2b.txt"), path_in("a1b.tvt")])

    def test_wildcard_directories(self, search_root, path_in):
        """--directories switches the target."""
        code, lines = run(["wildcard", search_root, "**/f1", "--directories"])
        assert code == 0
        assert lines == sorted([path_in("f1"), path_in("f1", "f2", "f1")])

    def test_regex(self, search_root, path_in):
        """Regex searches run against relative paths."""
        code, lines = run(["regex", search_root, r"^f2/a1b\.txt$"])
        assert code == 0
        assert lines == [path_in("f2", "a1b.txt")]

    def test_missing_root(self, missing_dir, capsys):
        """A missing root exits with 1 and an error message."""
        code, lines = run(["wildcard", missing_dir, "*"])
        assert code == 1
        assert lines == []
        assert "Directory not found" in capsys.readouterr().err

    def test_invalid_regex(self, search_root, capsys):
        """An invalid regex exits with 1."""
        code, _ = run(["regex", search_root, "("])
        assert code == 1
        assert "Invalid regular expression" in capsys.readouterr().err

    def test_symlink_loop(self, tmp_path, capsys):
        """Enumeration errors exit with 1 and log the traceback."""
        root = tmp_path / "root"
        root.mkdir()
        try:
            os.symlink(root, root / "loop", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        code, lines = run(["wildcard", str(root), "**/x"])

        assert code == 1
        assert lines == []
        err = capsys.readouterr().err
        assert "Unexpected error" in err
        assert "Traceback" in err

    def test_permission_error(self, search_root, monkeypatch, capsys):
        """OSError from a search is reported with its type."""

        def denied(root, pattern, target):
            raise PermissionError(13, "Permission denied", root)

        monkeypatch.setattr("fssearch.cli.regex_search", denied)
        code, _ = run(["regex", search_root, "x"])

        assert code == 1
        err = capsys.readouterr().err
        assert "Unexpected error: [Errno 13] Permission denied" in err
        assert "exception_type=PermissionError" in err

    def test_errors_logged(self, missing_dir, capsys):
        """Known errors are logged at ERROR as well as printed."""
        code, _ = run(["wildcard", missing_dir, "*"])
        assert code == 1
        assert "ERROR - Command failed | error=DirectoryNotFoundError" in capsys.readouterr().err

    def test_debug_logging(self, search_root, capsys):
        """--debug logs search details to stderr."""
        code, _ = run(["--debug", "wildcard", search_root, "*"])
        assert code == 0
        assert "Wildcard search complete" in capsys.readouterr().err


class TestRulesCommand:
    """Test the rules subcommand."""

    def test_text_rules(self, search_root, path_in, tmp_path):
        """Rule files are applied and both sets printed."""
        rule_file = tmp_path / "rules.txt"
        rule_file.write_text("+wf:**/a*b.txt\n-wf:a*b.txt\n\n+wd:f1\n")

        code, lines = run(["rules", search_root, str(rule_file)])

        assert code == 0
        split = lines.index("[directories]")
        assert lines[0] == "[files]"
        assert len(lines[1:split]) == 6
        assert path_in("a1b.txt") not in lines
        assert lines[split + 1:] == [path_in("f1")]

    def test_halt_on_blank(self, search_root, path_in, tmp_path):
        """--halt-on-blank stops each file at its first blank line."""
        rule_file = tmp_path / "rules.txt"
        rule_file.write_text("+wf:a1b.txt\n\n+wd:f1\n")

        code, lines = run(["rules", search_root, str(rule_file), "--halt-on-blank"])

        assert code == 0
        assert lines == ["[files]", path_in("a1b.txt"), "[directories]"]

    def test_yaml_rules_accumulate(self, search_root, path_in, tmp_path):
        """Several rule files feed one engine."""
        first = tmp_path / "first.yaml"
        first.write_text(yaml.dump({"rules": ["+wf:a1b.txt", "+wf:a2b.txt"]}))
        second = tmp_path / "second.txt"
        second.write_text("-wf:A2B.TXT\n")

        code, lines = run(["rules", search_root, str(first), str(second)])

        assert code == 0
        assert lines == ["[files]", path_in("a1b.txt"), "[directories]"]

    def test_missing_rule_file(self, search_root, tmp_path, capsys):
        """A missing rule file exits with 1."""
        code, _ = run(["rules", search_root, str(tmp_path / "missing.txt")])
        assert code == 1
        assert "Rule file not found" in capsys.readouterr().err
