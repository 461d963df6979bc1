"""Post-build step orchestration.

Usage:
    from postbuild_upload._pipeline import BuildContext, FileUploadStep
    from postbuild_upload.config import UploadConfig

    step = FileUploadStep(UploadConfig(
        api_url="https://reports.example.com/upload",
        request_key="docs",
        file_pattern="**/*.xml",
    ))
    result = step.execute(BuildContext(workspace=Path("/build/ws")))
"""

from .protocol import BuildContext, ConfigField, ConfigurationSchema, PostBuildStep, ProgressListener
from .result import StepResult, StepStatus
from .step import FileUploadStep, ProgressLog

__all__ = [
    # Core types
    "BuildContext",
    "StepResult",
    "StepStatus",
    "ProgressListener",
    # Protocol and configuration description
    "PostBuildStep",
    "ConfigField",
    "ConfigurationSchema",
    # Implementation
    "FileUploadStep",
    "ProgressLog",
]
