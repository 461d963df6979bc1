"""Tests for ant-style glob pattern compilation and matching."""

import pytest

from postbuild_upload._scan import DOUBLE_STAR, MatchPattern
from postbuild_upload.exceptions import ConfigurationError


class TestCompile:
    """Tests for MatchPattern.compile."""

    def test_strips_whitespace(self):
        pattern = MatchPattern.compile("  **/*.xml \n")
        assert pattern.raw == "**/*.xml"

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
    def test_empty_pattern_raises(self, raw):
        with pytest.raises(ConfigurationError):
            MatchPattern.compile(raw)

    def test_consecutive_double_stars_collapse(self):
        pattern = MatchPattern.compile("**/**/*.xml")
        assert pattern.segments[0] == DOUBLE_STAR
        assert len(pattern.segments) == 2

    def test_trailing_separator_appends_double_star(self):
        pattern = MatchPattern.compile("build/")
        assert pattern.segments[-1] == DOUBLE_STAR
        assert pattern.matches("build/a.txt")
        assert pattern.matches("build/deep/b.txt")
        assert not pattern.matches("other/a.txt")

    def test_leading_separator_is_rooted(self):
        pattern = MatchPattern.compile("/reports/*.xml")
        assert pattern.rooted
        assert not pattern.matches("reports/a.xml")

    def test_str_returns_raw(self):
        assert str(MatchPattern.compile("*.xml")) == "*.xml"


class TestMatches:
    """Tests for MatchPattern.matches."""

    def test_star_stays_within_segment(self):
        pattern = MatchPattern.compile("*.xml")
        assert pattern.matches("a.xml")
        assert pattern.matches(".xml")
        assert not pattern.matches("sub/a.xml")

    def test_question_mark_matches_one_character(self):
        pattern = MatchPattern.compile("report?.xml")
        assert pattern.matches("report1.xml")
        assert not pattern.matches("report.xml")
        assert not pattern.matches("report12.xml")

    def test_question_mark_does_not_match_separator(self):
        pattern = MatchPattern.compile("a?b")
        assert not pattern.matches("a/b")

    def test_double_star_matches_zero_directories(self):
        pattern = MatchPattern.compile("**/*.xml")
        assert pattern.matches("a.xml")
        assert pattern.matches("sub/b.xml")
        assert pattern.matches("sub/deep/c.xml")
        assert not pattern.matches("sub/deep/c.txt")

    def test_double_star_in_middle(self):
        pattern = MatchPattern.compile("target/**/reports/*.xml")
        assert pattern.matches("target/reports/a.xml")
        assert pattern.matches("target/x/y/reports/a.xml")
        assert not pattern.matches("target/x/a.xml")
        assert not pattern.matches("other/reports/a.xml")

    def test_trailing_double_star_matches_everything_below(self):
        pattern = MatchPattern.compile("docs/**")
        assert pattern.matches("docs/a")
        assert pattern.matches("docs/x/y/z")

    def test_double_star_glued_to_text_stays_in_segment(self):
        pattern = MatchPattern.compile("a**b")
        assert pattern.matches("ab")
        assert pattern.matches("axxb")
        assert not pattern.matches("a/b")
        assert not pattern.matches("ax/yb")

    def test_backslash_is_a_separator(self):
        pattern = MatchPattern.compile("sub\\*.xml")
        assert pattern.matches("sub/a.xml")
        assert pattern.matches("sub\\a.xml")

    def test_case_sensitive_by_default(self):
        pattern = MatchPattern.compile("*.xml")
        assert not pattern.matches("A.XML")

    def test_case_insensitive(self):
        pattern = MatchPattern.compile("*.xml", case_sensitive=False)
        assert pattern.matches("A.XML")

    def test_regex_characters_are_literal(self):
        pattern = MatchPattern.compile("file[1]+.xml")
        assert pattern.matches("file[1]+.xml")
        assert not pattern.matches("file1.xml")

    def test_accepts_path_parts(self):
        pattern = MatchPattern.compile("sub/*.xml")
        assert pattern.matches(("sub", "a.xml"))

    def test_many_double_stars_do_not_blow_up(self):
        pattern = MatchPattern.compile("**/a/**/a/**/a/**/z")
        path = "/".join(["a"] * 30)
        assert not pattern.matches(path)


class TestCouldMatchBelow:
    """Tests for directory pruning."""

    def test_literal_prefix(self):
        pattern = MatchPattern.compile("target/reports/*.xml")
        assert pattern.could_match_below("target")
        assert pattern.could_match_below("target/reports")
        assert not pattern.could_match_below("src")
        assert not pattern.could_match_below("target/reports/old")

    def test_double_star_allows_everything_below(self):
        pattern = MatchPattern.compile("target/**/*.xml")
        assert pattern.could_match_below("target/a/b/c")
        assert not pattern.could_match_below("src/a")

    def test_no_directory_for_plain_file_pattern(self):
        pattern = MatchPattern.compile("*.xml")
        assert not pattern.could_match_below("sub")
