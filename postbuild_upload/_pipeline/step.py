"""File upload post-build step."""

from pathlib import Path
from typing import Callable, List, Optional

from .._scan import FileMatcher
from .._upload import UploadClient
from ..config import UploadConfig
from ..exceptions import PostBuildUploadError
from ..logging_config import logger
from ..validators import check_file_pattern, check_server_url
from .protocol import BuildContext, ConfigField, ConfigurationSchema, ProgressListener
from .result import StepResult, StepStatus

STEP_NAME = "file-upload"
DISPLAY_NAME = "Post-build file upload"

ClientFactory = Callable[..., UploadClient]


class ProgressLog:
    """Collects progress lines, logs them and forwards them to the host listener."""

    def __init__(self, listener: Optional[ProgressListener] = None) -> None:
        self.lines: List[str] = []
        self._listener = listener

    def info(self, line: str) -> None:
        logger.info(line)
        self._record(line)

    def warning(self, line: str) -> None:
        logger.warning(line)
        self._record(line)

    def error(self, line: str, cause: Optional[BaseException] = None) -> None:
        # Unexpected exceptions get a traceback; our own errors carry enough context.
        exc_info = cause if cause is not None and not isinstance(cause, PostBuildUploadError) else None
        logger.error(line, exc_info=exc_info)
        self._record(line)

    def _record(self, line: str) -> None:
        self.lines.append(line)
        if self._listener is None:
            return
        try:
            self._listener(line)
        except Exception as e:
            logger.warning(f"Progress listener raised an exception: {e}")


class FileUploadStep:
    """
    Uploads the workspace files matching a pattern in one multipart request.

    Runs the whole state machine of one invocation: scan the workspace,
    decide what an empty result means, and send everything found to the
    configured endpoint. Every failure is returned as a FAILURE result.

    Example:
        step = FileUploadStep(UploadConfig(
            api_url="https://reports.example.com/upload",
            request_key="docs",
            file_pattern="**/*.xml",
        ))
        result = step.execute(BuildContext(workspace=Path("/build/ws")))
        if result.status is StepStatus.FAILURE:
            print(result.error_message)
    """

    def __init__(
        self,
        config: UploadConfig,
        matcher: Optional[FileMatcher] = None,
        client_factory: ClientFactory = UploadClient,
    ) -> None:
        """
        Initialize the step.

        Args:
            config: Settings for this run
            matcher: Optional matcher (defaults to one honouring config.case_sensitive)
            client_factory: Callable building the upload client from (url, timeout=...)
        """
        self.config = config
        self._matcher = matcher or FileMatcher(case_sensitive=config.case_sensitive)
        self._client_factory = client_factory

    @property
    def name(self) -> str:
        return STEP_NAME

    def execute(self, context: BuildContext) -> StepResult:
        """
        Run the step against a workspace.

        Args:
            context: Workspace path and optional progress listener

        Returns:
            StepResult. SUCCESS once any response has been received (unless
            fail_on_http_error is set), UNSTABLE when no file matched and
            fail_if_no_files is off, FAILURE otherwise.
        """
        progress = ProgressLog(context.listener)
        matched: List[str] = []

        try:
            progress.info("Starting Post Build Action")
            self._log_advisories(progress)

            workspace = Path(context.workspace).expanduser()
            matched = self._matcher.match(workspace, self.config.file_pattern, excludes=self.config.excludes)
            logger.info(f"Found {len(matched)} file(s) matching '{self.config.file_pattern}' in {workspace}")

            if not self.config.has_destination:
                message = "No API URL set for sending the files"
                progress.error(message)
                return self._result(StepStatus.FAILURE, progress, matched, error_message=message)

            if not matched:
                message = "No Files Found!"
                progress.error(message)
                status = StepStatus.FAILURE if self.config.fail_if_no_files else StepStatus.UNSTABLE
                return self._result(status, progress, matched, error_message=message)

            self.config.validate_destination()

            client = self._client_factory(self.config.api_url, timeout=self.config.timeout)
            for relative_path in matched:
                progress.info(f"Processing file {relative_path}")
                client.add_file(self.config.request_key, workspace / relative_path)

            response = client.send()
            progress.info(f"Response from API Server : {response.text}")

            if self.config.fail_on_http_error and not response.ok:
                message = f"Upload rejected by server. [{response.status_code}]"
                progress.error(message)
                return self._result(StepStatus.FAILURE, progress, matched, response=response, error_message=message)

            progress.info("Finished Post Build Action")
            return self._result(StepStatus.SUCCESS, progress, matched, response=response)

        except Exception as e:
            progress.error(f"Error occurred while performing Post Build Action: {e}", cause=e)
            return self._result(
                StepStatus.FAILURE,
                progress,
                matched,
                error_message=str(e) or e.__class__.__name__,
                cause=e,
            )

    def describe_configuration(self) -> ConfigurationSchema:
        """Describe the settings this step reads."""
        return ConfigurationSchema(
            title=DISPLAY_NAME,
            fields=(
                ConfigField(
                    name="filesUploadApiUrl",
                    type="string",
                    scope="global",
                    description="URL the matched files are POSTed to",
                    default="",
                    env_var="UPLOAD_API_URL",
                    validator=check_server_url,
                ),
                ConfigField(
                    name="filesUploadApiRequestKey",
                    type="string",
                    scope="global",
                    description="Multipart form field name used for every file",
                    default="",
                    env_var="UPLOAD_API_REQUEST_KEY",
                ),
                ConfigField(
                    name="fileSearchPattern",
                    type="string",
                    scope="job",
                    description="Ant-style pattern of workspace files to upload, e.g. **/*.xml",
                    env_var="FILE_SEARCH_PATTERN",
                    validator=check_file_pattern,
                ),
                ConfigField(
                    name="failBuildIfNoFiles",
                    type="boolean",
                    scope="job",
                    description="Fail the build instead of marking it unstable when no file matches",
                    default=False,
                    env_var="FAIL_BUILD_IF_NO_FILES",
                ),
            ),
        )

    def _log_advisories(self, progress: ProgressLog) -> None:
        """Surface validator findings without stopping the run."""
        findings = (
            ("pattern", check_file_pattern(self.config.file_pattern)),
            ("server url", check_server_url(self.config.api_url, self.config.request_key)),
        )
        for label, validation in findings:
            if not validation.is_ok:
                progress.warning(f"Configuration {label}: {validation.message}")

    @staticmethod
    def _result(
        status: StepStatus,
        progress: ProgressLog,
        matched: List[str],
        **kwargs,
    ) -> StepResult:
        return StepResult(status=status, messages=list(progress.lines), matched_files=list(matched), **kwargs)
