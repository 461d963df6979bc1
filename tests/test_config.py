"""Tests for UploadConfig."""

import unittest

from postbuild_upload._upload import UPLOAD_TIMEOUT
from postbuild_upload.config import UploadConfig
from postbuild_upload.exceptions import ConfigurationError


class TestUploadConfigDefaults(unittest.TestCase):
    """Tests for UploadConfig defaults."""

    def test_defaults(self):
        config = UploadConfig()
        self.assertEqual(config.api_url, "")
        self.assertEqual(config.request_key, "")
        self.assertFalse(config.fail_if_no_files)
        self.assertEqual(config.excludes, ())
        self.assertTrue(config.case_sensitive)
        self.assertEqual(config.timeout, UPLOAD_TIMEOUT)
        self.assertFalse(config.fail_on_http_error)

    def test_is_immutable(self):
        config = UploadConfig()
        with self.assertRaises(AttributeError):
            config.api_url = "https://example.com"

    def test_has_destination(self):
        self.assertFalse(UploadConfig().has_destination)
        self.assertFalse(UploadConfig(api_url="   ").has_destination)
        self.assertTrue(UploadConfig(api_url="https://example.com/upload").has_destination)


class TestValidateDestination(unittest.TestCase):
    """Tests for UploadConfig.validate_destination."""

    def _config(self, **kwargs):
        values = {"api_url": "https://example.com/upload", "request_key": "docs", "file_pattern": "*.xml"}
        values.update(kwargs)
        return UploadConfig(**values)

    def test_valid_https(self):
        self._config().validate_destination()

    def test_missing_url(self):
        with self.assertRaises(ConfigurationError) as ctx:
            self._config(api_url="").validate_destination()
        self.assertEqual(str(ctx.exception), "No API URL set for sending the files")

    def test_missing_request_key(self):
        with self.assertRaises(ConfigurationError) as ctx:
            self._config(request_key=" ").validate_destination()
        self.assertEqual(str(ctx.exception), "No API request key set for sending the files")

    def test_invalid_scheme(self):
        with self.assertRaises(ConfigurationError) as ctx:
            self._config(api_url="ftp://example.com").validate_destination()
        self.assertIn("http:// or https://", str(ctx.exception))

    def test_missing_scheme(self):
        with self.assertRaises(ConfigurationError):
            self._config(api_url="example.com/upload").validate_destination()

    def test_missing_hostname(self):
        with self.assertRaises(ConfigurationError) as ctx:
            self._config(api_url="https:///upload").validate_destination()
        self.assertIn("hostname", str(ctx.exception))

    def test_plain_http_warns(self):
        with self.assertLogs("postbuild_upload", level="WARNING") as logs:
            self._config(api_url="http://example.com/upload").validate_destination()
        self.assertTrue(any("consider using HTTPS" in line for line in logs.output))

    def test_plain_http_localhost_allowed(self):
        for url in ("http://localhost:8000/upload", "http://127.0.0.1:8000/upload"):
            self._config(api_url=url).validate_destination()


if __name__ == "__main__":
    unittest.main()
