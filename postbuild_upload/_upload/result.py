"""UploadResponse dataclass for upload output."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UploadResponse:
    """
    The response received for an upload request.

    The body is kept as opaque text. A non-2xx status is still a response,
    so callers decide what a given status means for them.

    Attributes:
        status_code: HTTP status code returned by the server
        text: Response body decoded as text
        url: Final URL of the response (after any redirects)
        encoding: Character encoding used to decode the body
        reason: HTTP reason phrase, if the server sent one
    """

    status_code: int
    text: str
    url: str
    encoding: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True for 2xx and 3xx statuses."""
        return self.status_code < 400
