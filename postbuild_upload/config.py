"""Configuration for the post-build upload step.

The configuration is a plain value passed into every invocation. Where it
comes from (CLI options, environment variables, a CI settings page) is the
caller's business; nothing here reads or writes global state.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import urlparse

from ._upload.client import UPLOAD_TIMEOUT
from .exceptions import ConfigurationError
from .logging_config import logger

LOCALHOST_PATTERNS = ["127.0.0.1", "localhost", "0.0.0.0"]


@dataclass(frozen=True)
class UploadConfig:
    """
    Settings for one run of the upload step.

    Attributes:
        api_url: Upload endpoint; blank means no destination is configured
        request_key: Multipart field name used for every file part
        file_pattern: Include pattern, e.g. "**/*.xml"
        fail_if_no_files: Fail instead of marking the build unstable when nothing matches
        excludes: Patterns of files to leave out even if they match
        case_sensitive: Whether pattern matching honours case
        timeout: Connect/read timeout for the upload in seconds, None for no limit
        fail_on_http_error: Treat a 4xx/5xx response as a failed step
    """

    api_url: str = ""
    request_key: str = ""
    file_pattern: str = ""
    fail_if_no_files: bool = False
    excludes: Tuple[str, ...] = ()
    case_sensitive: bool = True
    timeout: Optional[float] = UPLOAD_TIMEOUT
    fail_on_http_error: bool = False

    @property
    def has_destination(self) -> bool:
        """True when an upload URL is set."""
        return bool(self.api_url and self.api_url.strip())

    def validate_destination(self) -> None:
        """
        Validate the settings needed to send files.

        Raises:
            ConfigurationError: If the URL or field name is unusable
        """
        if not self.has_destination:
            raise ConfigurationError("No API URL set for sending the files")
        if not self.request_key or not self.request_key.strip():
            raise ConfigurationError("No API request key set for sending the files")

        try:
            parsed = urlparse(self.api_url.strip())
        except ValueError as e:
            raise ConfigurationError(f"Invalid upload URL format: {e}")

        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError("Upload URL must start with http:// or https://")
        if not parsed.netloc:
            raise ConfigurationError("Upload URL must include a valid hostname")

        if parsed.scheme == "http" and not any(localhost in parsed.netloc for localhost in LOCALHOST_PATTERNS):
            logger.warning("Using HTTP (not HTTPS) for uploads - consider using HTTPS in production")
