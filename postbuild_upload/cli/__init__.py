"""CLI module for postbuild-upload.

This module provides the command-line interface for the upload step.
It supports both CLI arguments and environment variables for configuration.
"""

from .main import (
    build_config,
    cli,
    evaluate_boolean,
    initialize_sentry,
    main,
    run_pipeline,
)

__all__ = [
    "cli",
    "main",
    "build_config",
    "run_pipeline",
    "evaluate_boolean",
    "initialize_sentry",
]
