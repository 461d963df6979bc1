"""Workspace file discovery.

Usage:
    from postbuild_upload._scan import FileMatcher, MatchPattern

    files = FileMatcher().match("/workspace", "**/*.xml", excludes=["tmp/**"])
"""

from .matcher import FileMatcher
from .pattern import DOUBLE_STAR, MatchPattern

__all__ = [
    "DOUBLE_STAR",
    "FileMatcher",
    "MatchPattern",
]
