"""
Public API for post-build uploads.

Usage:
    from postbuild_upload.upload import upload_files, upload_workspace

    # Send explicit files in one multipart request
    response = upload_files(
        url="https://reports.example.com/upload",
        field_name="docs",
        files=["/ws/a.xml", "/ws/sub/b.xml"],
    )

    # Scan a workspace and upload whatever matches
    result = upload_workspace(
        workspace="/ws",
        config=UploadConfig(
            api_url="https://reports.example.com/upload",
            request_key="docs",
            file_pattern="**/*.xml",
        ),
    )
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from ._pipeline import BuildContext, FileUploadStep, ProgressListener, StepResult
from ._upload import UPLOAD_TIMEOUT, UploadClient, UploadResponse
from .config import UploadConfig


def upload_files(
    url: str,
    field_name: str,
    files: Iterable[Union[str, Path]],
    timeout: Optional[float] = UPLOAD_TIMEOUT,
) -> UploadResponse:
    """
    Upload files as parts of a single multipart POST.

    Args:
        url: Destination URL
        field_name: Form field name for every part
        files: Paths to upload, in part order
        timeout: Connect/read timeout in seconds

    Returns:
        UploadResponse, whatever its status code

    Raises:
        ConfigurationError: If url or field_name is blank
        FilesystemError: If a file is missing or unreadable
        TransportError: If the request cannot be completed
    """
    client = UploadClient(url, timeout=timeout)
    for file in files:
        client.add_file(field_name, file)
    return client.send()


def upload_workspace(
    workspace: Union[str, Path],
    config: UploadConfig,
    listener: Optional[ProgressListener] = None,
) -> StepResult:
    """
    Run the file upload step against a workspace.

    Args:
        workspace: Directory to scan
        config: Step settings
        listener: Optional callable receiving each progress line

    Returns:
        StepResult with the terminal status; never raises
    """
    step = FileUploadStep(config)
    return step.execute(BuildContext(workspace=Path(workspace), listener=listener))


__all__ = [
    "upload_files",
    "upload_workspace",
    "UploadConfig",
    "UploadResponse",
    "StepResult",
]
