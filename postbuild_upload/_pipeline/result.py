"""StepStatus and StepResult for post-build step output."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .._upload.result import UploadResponse


class StepStatus(str, Enum):
    """Terminal status of one step invocation."""

    SUCCESS = "success"
    UNSTABLE = "unstable"
    FAILURE = "failure"


@dataclass
class StepResult:
    """
    Result of running a post-build step.

    Attributes:
        status: Terminal status
        messages: Progress lines emitted during the run, in order
        matched_files: Relative paths of the files found in the workspace
        response: Upload response, when a request round-tripped
        error_message: Description of what went wrong, for failed or unstable runs
        cause: Exception behind a failure, if any
    """

    status: StepStatus
    messages: List[str] = field(default_factory=list)
    matched_files: List[str] = field(default_factory=list)
    response: Optional[UploadResponse] = None
    error_message: Optional[str] = None
    cause: Optional[BaseException] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate result state."""
        if self.status is StepStatus.SUCCESS and self.error_message:
            raise ValueError("Successful result should not have error_message")
        if self.status is StepStatus.FAILURE and not self.error_message:
            raise ValueError("Failed result must have error_message")

    @property
    def succeeded(self) -> bool:
        """True unless the step failed. Unstable runs count as completed."""
        return self.status is not StepStatus.FAILURE

    @property
    def response_text(self) -> Optional[str]:
        """Body of the upload response, if there was one."""
        return self.response.text if self.response is not None else None
