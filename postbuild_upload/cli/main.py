"""Command line interface for postbuild-upload.

Every option can also be supplied through an environment variable, which is
how CI systems usually pass settings to a container action:

- WORKSPACE / GITHUB_WORKSPACE: directory to scan (default: current directory)
- FILE_SEARCH_PATTERN: ant-style include pattern, e.g. **/*.xml
- FILE_EXCLUDE_PATTERNS: whitespace separated exclude patterns
- UPLOAD_API_URL: endpoint the files are POSTed to
- UPLOAD_API_REQUEST_KEY: multipart field name for every file
- FAIL_BUILD_IF_NO_FILES: fail instead of warn when nothing matches
- FILE_PATTERN_CASE_SENSITIVE: set to false for case-insensitive matching
- FAIL_ON_HTTP_ERROR: fail when the server answers 4xx/5xx
- UPLOAD_TIMEOUT: upload timeout in seconds (0 disables it)

Exit codes: 0 for success, 0 plus a warning annotation for an unstable run,
1 for a failure.
"""

import os
from pathlib import Path
from typing import Optional, Tuple

import click
import sentry_sdk

from .. import __version__
from .._pipeline import BuildContext, FileUploadStep, StepResult, StepStatus
from .._upload import UPLOAD_TIMEOUT
from ..config import UploadConfig
from ..console import (
    console,
    gha_group,
    print_banner,
    print_final_failure,
    print_final_success,
    print_final_unstable,
    print_summary_table,
    print_upload_summary,
)
from ..exceptions import ConfigurationError
from ..logging_config import logger

VERSION = __version__

EXIT_CODES = {
    StepStatus.SUCCESS: 0,
    StepStatus.UNSTABLE: 0,
    StepStatus.FAILURE: 1,
}


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def filter_sentry_event(event, hint):
    """
    Filter events before sending to Sentry.

    Configuration errors are user mistakes, not bugs, so they are dropped.
    """
    if "exc_info" in hint:
        exc_type, exc_value, tb = hint["exc_info"]
        if isinstance(exc_value, ConfigurationError):
            return None
    return event


def initialize_sentry() -> None:
    """Initialize Sentry when telemetry is enabled and a DSN is configured."""
    if not evaluate_boolean(os.getenv("TELEMETRY", "true")):
        logger.debug("Telemetry disabled")
        return

    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        return

    sentry_sdk.init(
        dsn=sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=0.0,
        before_send=filter_sentry_event,
    )


def build_config(
    file_pattern: Optional[str],
    api_url: Optional[str] = None,
    request_key: Optional[str] = None,
    fail_if_no_files: bool = False,
    excludes: Tuple[str, ...] = (),
    case_sensitive: bool = True,
    fail_on_http_error: bool = False,
    timeout: Optional[float] = UPLOAD_TIMEOUT,
) -> UploadConfig:
    """
    Build the step configuration from CLI values.

    Args:
        file_pattern: Include pattern
        api_url: Upload endpoint
        request_key: Multipart field name
        fail_if_no_files: Fail when nothing matches
        excludes: Exclude patterns
        case_sensitive: Case-sensitive matching
        fail_on_http_error: Fail on 4xx/5xx responses
        timeout: Upload timeout in seconds; 0 or None disables it

    Returns:
        UploadConfig value
    """
    return UploadConfig(
        api_url=(api_url or "").strip(),
        request_key=(request_key or "").strip(),
        file_pattern=(file_pattern or "").strip(),
        fail_if_no_files=fail_if_no_files,
        excludes=tuple(excludes),
        case_sensitive=case_sensitive,
        timeout=timeout or None,
        fail_on_http_error=fail_on_http_error,
    )


def run_pipeline(config: UploadConfig, workspace: Path) -> StepResult:
    """
    Run the upload step and report its outcome on the console.

    Args:
        config: Step settings
        workspace: Directory to scan

    Returns:
        The step result
    """
    if config.has_destination:
        logger.info(f"Upload destination: {config.api_url}")
    logger.info(f"Workspace: {workspace}")

    step = FileUploadStep(config)
    with gha_group("Post-build file upload"):
        result = step.execute(BuildContext(workspace=workspace))

    if result.cause is not None:
        sentry_sdk.capture_exception(result.cause)

    print_upload_summary(
        status=result.status.value,
        files_matched=len(result.matched_files),
        http_status=result.response.status_code if result.response is not None else None,
        error_message=result.error_message,
    )

    if result.status is StepStatus.SUCCESS:
        print_final_success()
    elif result.status is StepStatus.UNSTABLE:
        print_final_unstable(result.error_message or "Build marked unstable")
    else:
        print_final_failure(result.error_message or "Post-build upload failed")

    return result


def print_configuration_schema() -> None:
    """Print the settings the upload step understands."""
    schema = FileUploadStep(UploadConfig()).describe_configuration()
    print_summary_table(
        schema.title,
        [(f"{field.name} ({field.scope})", field.env_var or "-") for field in schema],
        headers=("Setting", "Environment variable"),
    )
    for field in schema:
        console.print(f"[highlight]{field.name}[/highlight]: {field.description}")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, "--version", "-V", prog_name="postbuild-upload", message="%(prog)s %(version)s")
@click.option(
    "--workspace",
    envvar=["WORKSPACE", "GITHUB_WORKSPACE"],
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to scan for files.",
)
@click.option(
    "--pattern",
    "file_pattern",
    envvar="FILE_SEARCH_PATTERN",
    help="Ant-style pattern of files to upload, e.g. '**/*.xml'.",
)
@click.option(
    "--exclude",
    "excludes",
    envvar="FILE_EXCLUDE_PATTERNS",
    multiple=True,
    help="Pattern of files to leave out. Repeatable.",
)
@click.option("--url", "api_url", envvar="UPLOAD_API_URL", default="", help="Endpoint the files are POSTed to.")
@click.option(
    "--field-name",
    "request_key",
    envvar="UPLOAD_API_REQUEST_KEY",
    default="",
    help="Multipart form field name used for every file.",
)
@click.option(
    "--fail-if-no-files/--no-fail-if-no-files",
    envvar="FAIL_BUILD_IF_NO_FILES",
    default=False,
    show_default=True,
    help="Fail instead of marking the build unstable when no file matches.",
)
@click.option(
    "--case-sensitive/--case-insensitive",
    envvar="FILE_PATTERN_CASE_SENSITIVE",
    default=True,
    show_default=True,
    help="Match the pattern case-sensitively.",
)
@click.option(
    "--fail-on-http-error/--no-fail-on-http-error",
    envvar="FAIL_ON_HTTP_ERROR",
    default=False,
    show_default=True,
    help="Fail when the server answers with a 4xx or 5xx status.",
)
@click.option(
    "--timeout",
    envvar="UPLOAD_TIMEOUT",
    type=click.FloatRange(min=0),
    default=UPLOAD_TIMEOUT,
    show_default=True,
    help="Upload timeout in seconds, 0 disables it.",
)
@click.option("--describe", is_flag=True, help="Print the supported settings and exit.")
@click.pass_context
def cli(
    ctx: click.Context,
    workspace: Path,
    file_pattern: Optional[str],
    excludes: Tuple[str, ...],
    api_url: str,
    request_key: str,
    fail_if_no_files: bool,
    case_sensitive: bool,
    fail_on_http_error: bool,
    timeout: float,
    describe: bool,
) -> None:
    """Upload build artifacts matching a pattern to an HTTP endpoint in one multipart request."""
    print_banner(VERSION)

    if describe:
        print_configuration_schema()
        return

    if file_pattern is None:
        click.echo(ctx.get_help())
        return

    initialize_sentry()

    config = build_config(
        file_pattern=file_pattern,
        api_url=api_url,
        request_key=request_key,
        fail_if_no_files=fail_if_no_files,
        excludes=excludes,
        case_sensitive=case_sensitive,
        fail_on_http_error=fail_on_http_error,
        timeout=timeout,
    )

    result = run_pipeline(config, workspace)
    ctx.exit(EXIT_CODES[result.status])


def main() -> None:
    """Main entry point for the post-build upload command."""
    cli(prog_name="postbuild-upload")


if __name__ == "__main__":
    main()
