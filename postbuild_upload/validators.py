"""Input validation for the step's configuration fields.

These checks mirror the form validation of the settings page: they grade a
value as OK, WARNING or ERROR and never raise.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Values shorter than this are accepted but flagged.
MIN_SUGGESTED_LENGTH = 4


class ValidationKind(str, Enum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class FormValidation:
    """Outcome of validating one configuration value."""

    kind: ValidationKind
    message: str = ""

    @classmethod
    def ok(cls) -> "FormValidation":
        return cls(ValidationKind.OK)

    @classmethod
    def warning(cls, message: str) -> "FormValidation":
        return cls(ValidationKind.WARNING, message)

    @classmethod
    def error(cls, message: str) -> "FormValidation":
        return cls(ValidationKind.ERROR, message)

    @property
    def is_ok(self) -> bool:
        return self.kind is ValidationKind.OK

    @property
    def is_error(self) -> bool:
        return self.kind is ValidationKind.ERROR


def check_file_pattern(pattern: Optional[str]) -> FormValidation:
    """Validate the file search pattern.

    Args:
        pattern: Glob pattern to validate

    Returns:
        ERROR when empty, WARNING when suspiciously short, OK otherwise
    """
    if not pattern or not pattern.strip():
        return FormValidation.error("Please input correct pattern")
    if len(pattern) < MIN_SUGGESTED_LENGTH:
        return FormValidation.warning("Isn't the pattern too short?")
    return FormValidation.ok()


def check_server_url(url: Optional[str], request_key: Optional[str] = None) -> FormValidation:
    """Validate the upload server URL together with its request key.

    Args:
        url: Upload endpoint URL
        request_key: Multipart field name sent with each file

    Returns:
        ERROR when both are blank, WARNING when the URL is suspiciously
        short, OK otherwise
    """
    if not (url or "").strip() and not (request_key or "").strip():
        return FormValidation.error("Please input valid server url and api key")
    if len(url or "") < MIN_SUGGESTED_LENGTH:
        return FormValidation.warning("Isn't the url too short?")
    return FormValidation.ok()

