"""Multipart file upload over HTTP."""

import os
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import requests
from urllib3.filepost import encode_multipart_formdata

from ..exceptions import ConfigurationError, FilesystemError, TransportError
from ..http_client import get_default_headers
from ..logging_config import logger
from .result import UploadResponse

# Every part is sent as opaque bytes; no sniffing from the file extension.
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Used when requests reports no encoding, which happens for non-text
# responses without a charset. requests itself picks ISO-8859-1 for text/*.
DEFAULT_RESPONSE_ENCODING = "utf-8"

# Upload timeout in seconds
UPLOAD_TIMEOUT = 120


@dataclass(frozen=True)
class FilePart:
    """A file registered for upload under a form field name."""

    field_name: str
    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


class UploadClient:
    """
    Builds and sends one multipart/form-data POST carrying several files.

    Files are registered with add_file() and only opened inside send(), where
    every handle and the HTTP session are released on all exit paths.

    Example:
        client = UploadClient("https://reports.example.com/upload")
        client.add_file("docs", "/workspace/a.xml")
        client.add_file("docs", "/workspace/sub/b.xml")
        response = client.send()
        print(response.text)
    """

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = UPLOAD_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            url: Destination URL for the POST request
            timeout: Connect/read timeout in seconds, None for no timeout
            session: Optional session to send through. The client closes
                sessions it creates itself, never one passed in here.

        Raises:
            ConfigurationError: If the URL is blank
        """
        if not url or not url.strip():
            raise ConfigurationError("Upload destination URL is not defined")
        self.url = url.strip()
        self.timeout = timeout
        self._session = session
        self._parts: List[FilePart] = []
        logger.debug(f"Building upload client for {self.url}")

    @property
    def parts(self) -> Tuple[FilePart, ...]:
        """Registered parts in the order they will be sent."""
        return tuple(self._parts)

    def add_file(self, field_name: str, file: Union[str, Path]) -> None:
        """
        Register a file as a new part of the multipart body.

        Args:
            field_name: Form field name for the part
            file: Path of the file to upload

        Raises:
            ConfigurationError: If the field name is blank
            FilesystemError: If the file does not exist or is not readable
        """
        if not field_name or not field_name.strip():
            raise ConfigurationError("Upload field name is not defined")

        path = Path(file)
        if not path.is_file():
            raise FilesystemError(f"File to upload not found: {path}")
        if not os.access(path, os.R_OK):
            raise FilesystemError(f"File to upload is not readable: {path}")

        self._parts.append(FilePart(field_name=field_name, path=path))

    def send(self) -> UploadResponse:
        """
        Send all registered files in a single POST request.

        Returns:
            UploadResponse with the status code and the body decoded with
            the encoding requests picks, or UTF-8 when it picks none. Error
            statuses are returned, not raised.

        Raises:
            FilesystemError: If a registered file can no longer be opened
            TransportError: If the request cannot be sent or the response read
        """
        logger.info(f"Sending {len(self._parts)} file(s) to {self.url}")

        with ExitStack() as stack:
            session = self._session
            if session is None:
                session = stack.enter_context(requests.Session())

            files = []
            for part in self._parts:
                try:
                    handle = stack.enter_context(part.path.open("rb"))
                except OSError as e:
                    raise FilesystemError(f"Failed to open {part.path} for upload: {e}") from e
                files.append((part.field_name, (part.filename, handle, DEFAULT_CONTENT_TYPE)))

            try:
                if files:
                    response = session.post(
                        self.url,
                        files=files,
                        headers=get_default_headers(),
                        timeout=self.timeout,
                    )
                else:
                    # requests skips multipart encoding for an empty file list.
                    body, content_type = encode_multipart_formdata([])
                    response = session.post(
                        self.url,
                        data=body,
                        headers=get_default_headers(content_type=content_type),
                        timeout=self.timeout,
                    )
                with response:
                    if response.encoding is None:
                        response.encoding = DEFAULT_RESPONSE_ENCODING
                    text = response.text
            except requests.exceptions.ConnectionError as e:
                raise TransportError(f"Failed to connect to {self.url}: {e}") from e
            except requests.exceptions.Timeout as e:
                raise TransportError(f"Upload to {self.url} timed out: {e}") from e
            except (requests.exceptions.RequestException, OSError) as e:
                raise TransportError(f"Upload to {self.url} failed: {e}") from e

        logger.debug(f"Upload response status: {response.status_code}")
        return UploadResponse(
            status_code=response.status_code,
            text=text,
            url=response.url or self.url,
            encoding=response.encoding,
            reason=response.reason,
        )
