"""Rich console utilities for postbuild-upload.

This module provides a shared Rich Console instance and helper functions
for CLI output, optimized for GitHub Actions and other CI environments.
"""

import os
from contextlib import contextmanager
from typing import Any, Generator, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"
IS_GITLAB_CI = os.getenv("GITLAB_CI") == "true"
IS_CI = os.getenv("CI") == "true" or IS_GITHUB_ACTIONS or IS_GITLAB_CI

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "step": "bold blue",
        "highlight": "magenta",
    }
)

# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def print_banner(version: str = "unknown") -> None:
    """Print the tool banner."""
    banner = Text()
    banner.append("postbuild-upload", style="bold blue")
    # Only prefix with 'v' if version looks like semver (starts with digit)
    version_display = f"v{version}" if version and version[0:1].isdigit() else version
    banner.append(f" {version_display}", style="magenta")
    banner.append(" - ship build artifacts to your API\n", style="cyan")
    console.print(banner)


@contextmanager
def gha_group(title: str) -> Generator[None, None, None]:
    """
    Context manager for GitHub Actions collapsible groups.

    Args:
        title: Group title
    """
    if IS_GITHUB_ACTIONS:
        print(f"::group::{title}")
    else:
        console.rule(f"[step]{title}[/step]", style="blue")
    try:
        yield
    finally:
        if IS_GITHUB_ACTIONS:
            print("::endgroup::")


def gha_warning(message: str, title: Optional[str] = None) -> None:
    """
    Emit a warning that appears in GitHub Actions job summary.

    Args:
        message: Warning message
        title: Optional title for the warning
    """
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::warning title={title}::{message}")
        else:
            print(f"::warning::{message}")
    else:
        if title:
            console.print(f"[warning]Warning ({title}):[/warning] {escape(message)}")
        else:
            console.print(f"[warning]Warning:[/warning] {escape(message)}")


def gha_error(message: str, title: Optional[str] = None) -> None:
    """
    Emit an error that appears in GitHub Actions job summary.

    Args:
        message: Error message
        title: Optional title for the error
    """
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::error title={title}::{message}")
        else:
            print(f"::error::{message}")
    else:
        if title:
            console.print(f"[error]Error ({title}):[/error] {escape(message)}")
        else:
            console.print(f"[error]Error:[/error] {escape(message)}")


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    headers: Tuple[str, str] = ("Metric", "Value"),
) -> None:
    """
    Print a two-column summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples; None values are skipped
        headers: Column headers
    """
    rows = [(label, value) for label, value in data if value is not None]
    if not rows:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column(headers[0], style="cyan")
    table.add_column(headers[1], justify="right")

    for label, value in rows:
        table.add_row(label, escape(str(value)))

    console.print(table)


def print_upload_summary(
    status: str,
    files_matched: int,
    http_status: Optional[int] = None,
    error_message: Optional[str] = None,
) -> None:
    """
    Print the outcome of an upload run.

    Args:
        status: Terminal status (success/unstable/failure)
        files_matched: Number of files found in the workspace
        http_status: Status code of the upload response, if any
        error_message: Error message if the run did not succeed
    """
    print_summary_table(
        "Upload Summary",
        [
            ("Status", status.upper()),
            ("Files matched", files_matched),
            ("HTTP status", http_status),
            ("Error", error_message),
        ],
    )


def print_final_success() -> None:
    """Print final success message."""
    console.print()
    if IS_GITHUB_ACTIONS:
        console.print("[bold green]✓ SUCCESS![/bold green] Files uploaded.")
    else:
        console.rule("[bold green]SUCCESS[/bold green]", style="green")
    console.print()


def print_final_unstable(message: str) -> None:
    """Print final message for a run that completed with a warning."""
    console.print()
    gha_warning(message, title="Build Unstable")
    if not IS_GITHUB_ACTIONS:
        console.rule("[bold yellow]UNSTABLE[/bold yellow]", style="yellow")
    console.print()


def print_final_failure(message: str) -> None:
    """Print final failure message."""
    console.print()
    gha_error(message, title="Post-build Upload Failed")
    if not IS_GITHUB_ACTIONS:
        console.rule("[bold red]FAILED[/bold red]", style="red")
        console.print(f"[bold red]{escape(message)}[/bold red]", justify="center")
    console.print()
