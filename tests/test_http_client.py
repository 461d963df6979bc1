"""Tests for http_client module."""

import re
import unittest

from postbuild_upload.http_client import USER_AGENT, get_default_headers


class TestUserAgent(unittest.TestCase):
    """Tests for USER_AGENT constant."""

    def test_user_agent_has_version(self):
        """Test USER_AGENT includes a version."""
        name, _, version_part = USER_AGENT.partition("/")
        self.assertEqual(name, "postbuild-upload")
        version_pattern = r"^\d+\.\d+(\.\d+)?(-[\w.]+)?$"
        self.assertTrue(
            re.match(version_pattern, version_part) is not None or version_part == "unknown",
            f"Version '{version_part}' is neither a valid version pattern nor 'unknown'",
        )


class TestGetDefaultHeaders(unittest.TestCase):
    """Tests for get_default_headers function."""

    def test_default_headers_minimal(self):
        """Test get_default_headers with no arguments."""
        headers = get_default_headers()
        self.assertEqual(headers, {"User-Agent": USER_AGENT})

    def test_default_headers_with_content_type(self):
        """Test get_default_headers with content_type."""
        headers = get_default_headers(content_type="multipart/form-data; boundary=abc")
        self.assertEqual(headers["Content-Type"], "multipart/form-data; boundary=abc")
        self.assertEqual(headers["User-Agent"], USER_AGENT)

    def test_never_adds_authorization(self):
        """Test no credentials are ever attached."""
        self.assertNotIn("Authorization", get_default_headers(content_type="text/plain"))

    def test_returns_new_dict_each_call(self):
        """Test callers can mutate the result safely."""
        first = get_default_headers()
        first["X-Test"] = "1"
        self.assertNotIn("X-Test", get_default_headers())


if __name__ == "__main__":
    unittest.main()
