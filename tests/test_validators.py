"""Tests for configuration field validators."""

import pytest

from postbuild_upload.validators import (
    FormValidation,
    ValidationKind,
    check_file_pattern,
    check_server_url,
)


class TestCheckFilePattern:
    """Tests for check_file_pattern."""

    @pytest.mark.parametrize("pattern", ["", "   ", None])
    def test_empty_is_error(self, pattern):
        result = check_file_pattern(pattern)
        assert result.kind is ValidationKind.ERROR
        assert result.message == "Please input correct pattern"

    @pytest.mark.parametrize("pattern", ["*", "a.x", "**/"])
    def test_short_is_warning(self, pattern):
        result = check_file_pattern(pattern)
        assert result.kind is ValidationKind.WARNING
        assert result.message == "Isn't the pattern too short?"

    @pytest.mark.parametrize("pattern", ["*.xml", "**/*.xml", "target/reports/"])
    def test_reasonable_is_ok(self, pattern):
        assert check_file_pattern(pattern).is_ok


class TestCheckServerUrl:
    """Tests for check_server_url."""

    def test_url_and_key_blank_is_error(self):
        result = check_server_url("", "")
        assert result.is_error
        assert result.message == "Please input valid server url and api key"

    def test_url_blank_without_key_is_error(self):
        assert check_server_url(None).is_error

    def test_short_url_is_warning(self):
        result = check_server_url("abc", "docs")
        assert result.kind is ValidationKind.WARNING
        assert result.message == "Isn't the url too short?"

    def test_blank_url_with_key_is_warning(self):
        assert check_server_url("", "docs").kind is ValidationKind.WARNING

    def test_valid_url_is_ok(self):
        assert check_server_url("https://example.com/upload", "docs").is_ok


class TestFormValidation:
    """Tests for the FormValidation value."""

    def test_factories(self):
        assert FormValidation.ok() == FormValidation(ValidationKind.OK, "")
        assert FormValidation.warning("w").kind is ValidationKind.WARNING
        assert FormValidation.error("e").is_error

    def test_kind_is_string_enum(self):
        assert ValidationKind.WARNING == "warning"

