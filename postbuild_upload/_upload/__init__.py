"""Multipart upload of build artifacts.

Usage:
    from postbuild_upload._upload import UploadClient

    client = UploadClient("https://reports.example.com/upload")
    client.add_file("docs", "/workspace/report.xml")
    response = client.send()
"""

from .client import DEFAULT_CONTENT_TYPE, UPLOAD_TIMEOUT, FilePart, UploadClient
from .result import UploadResponse

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "UPLOAD_TIMEOUT",
    "FilePart",
    "UploadClient",
    "UploadResponse",
]
