"""Tests for search errors and validators."""
import re

import pytest

from fssearch.core.constants import ErrorCode
from fssearch.core.validators import (
    DirectoryNotFoundError,
    InvalidPatternError,
    MissingArgumentError,
    SearchError,
    compile_search_regex,
    translate_separators,
    validate_argument,
    validate_root,
)


class TestErrors:
    """Tests for the error taxonomy."""

    def test_hierarchy(self):
        """All search errors share a base class."""
        for error in (
            MissingArgumentError("root"),
            DirectoryNotFoundError("/missing"),
            InvalidPatternError("("),
        ):
            assert isinstance(error, SearchError)

    def test_error_codes(self):
        """Each error carries its default code."""
        assert MissingArgumentError("root").error_code == ErrorCode.INVALID_INPUT
        assert DirectoryNotFoundError("/missing").error_code == ErrorCode.NOT_FOUND
        assert InvalidPatternError("(").error_code == ErrorCode.INVALID_INPUT

    def test_explicit_code(self):
        """A code passed to SearchError overrides the default."""
        error = SearchError("boom", ErrorCode.PERMISSION_DENIED)
        assert error.error_code == ErrorCode.PERMISSION_DENIED
        assert SearchError("boom").error_code == ErrorCode.INTERNAL_ERROR

    def test_messages(self):
        """Messages name the offending value."""
        assert "root" in str(MissingArgumentError("root"))
        assert "/missing" in str(DirectoryNotFoundError("/missing"))
        assert "bad" in str(InvalidPatternError("(", "bad"))


class TestValidateArgument:
    """Tests for validate_argument."""

    def test_none_rejected(self):
        """None raises MissingArgumentError."""
        with pytest.raises(MissingArgumentError):
            validate_argument(None, "pattern")

    @pytest.mark.parametrize("value", ["", [], "x"])
    def test_present_values_pass(self, value):
        """Empty but present values are accepted."""
        assert validate_argument(value, "pattern") is value


class TestValidateRoot:
    """Tests for validate_root."""

    def test_existing_directory(self, tmp_path):
        """An existing directory passes."""
        assert validate_root(str(tmp_path)) == str(tmp_path)

    def test_missing_directory(self, tmp_path):
        """A missing path raises DirectoryNotFoundError."""
        with pytest.raises(DirectoryNotFoundError):
            validate_root(str(tmp_path / "nope"))

    def test_file_rejected(self, tmp_path):
        """A regular file raises DirectoryNotFoundError."""
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(DirectoryNotFoundError):
            validate_root(str(target))

    def test_null_byte_rejected(self):
        """Paths with null bytes never exist."""
        with pytest.raises(DirectoryNotFoundError):
            validate_root("/tmp\0bad")

    def test_path_object(self, tmp_path):
        """Path objects are accepted and returned as strings."""
        assert validate_root(tmp_path) == str(tmp_path)

    def test_missing_path_object(self, tmp_path):
        """Missing Path roots raise DirectoryNotFoundError."""
        with pytest.raises(DirectoryNotFoundError):
            validate_root(tmp_path / "nope")


class TestRegexCompilation:
    """Tests for separator translation and regex compilation."""

    def test_translate_on_backslash_platform(self):
        """Runs of slashes become one escaped backslash."""
        assert translate_separators("a//b/c", "\\") == r"a\\b\\c"

    def test_translate_on_slash_platform(self):
        """Patterns are unchanged where the separator is a slash."""
        assert translate_separators("a//b/c", "/") == "a//b/c"

    def test_translated_pattern_matches_windows_path(self):
        """The translated pattern matches backslash-separated paths."""
        regex = compile_search_regex("f1/a1b", "\\")
        assert regex.search("f1\\a1b.txt")

    def test_case_insensitive(self):
        """Compiled patterns ignore case."""
        regex = compile_search_regex("abc", "/")
        assert regex.flags & re.IGNORECASE
        assert regex.search("xABCx")

    def test_invalid_pattern(self):
        """Compilation errors become InvalidPatternError."""
        with pytest.raises(InvalidPatternError) as exc_info:
            compile_search_regex("[unclosed", "/")
        assert exc_info.value.pattern == "[unclosed"
