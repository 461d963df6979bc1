"""Recursive file matching against a workspace directory."""

import os
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

from ..exceptions import FilesystemError
from ..logging_config import logger
from .pattern import MatchPattern

# (st_dev, st_ino) of a real directory
DirectoryKey = Tuple[int, int]


class FileMatcher:
    """
    Finds the regular files under a directory that match a glob pattern.

    The walk is depth-first and read-only. Symlinked directories are
    followed, so a directory reachable through a link and through its real
    path is reported under both. A link back to one of its own ancestors is
    a loop and is not entered.

    Example:
        matcher = FileMatcher()
        files = matcher.match("/build/workspace", "**/*.xml")
        # ["a.xml", "reports/b.xml"]
    """

    def __init__(self, case_sensitive: bool = True, follow_symlinks: bool = True) -> None:
        """
        Initialize the matcher.

        Args:
            case_sensitive: Compare pattern segments case-sensitively
            follow_symlinks: Descend into symlinked directories
        """
        self.case_sensitive = case_sensitive
        self.follow_symlinks = follow_symlinks

    def match(
        self,
        base_dir: Union[str, Path],
        pattern: Union[str, MatchPattern],
        excludes: Optional[Iterable[Union[str, MatchPattern]]] = None,
    ) -> List[str]:
        """
        Return the sorted relative paths of files under base_dir matching pattern.

        Args:
            base_dir: Directory to scan
            pattern: Include pattern
            excludes: Optional patterns; files matching any of them are dropped

        Returns:
            Relative POSIX-style paths, sorted. Empty when nothing matches.

        Raises:
            ConfigurationError: If the include pattern is empty
            FilesystemError: If base_dir is missing, not a directory, or unreadable
        """
        include = self._compile(pattern)
        exclude_patterns = [self._compile(p) for p in excludes or ()]

        root = Path(base_dir)
        if not root.exists():
            raise FilesystemError(f"Workspace directory does not exist: {root}")
        if not root.is_dir():
            raise FilesystemError(f"Workspace path is not a directory: {root}")
        if not os.access(root, os.R_OK | os.X_OK):
            raise FilesystemError(f"Workspace directory is not readable: {root}")

        if include.rooted:
            logger.warning(f"Pattern '{include}' starts with a path separator and cannot match relative paths")
            return []

        logger.debug(f"Scanning {root} for '{include}'")
        matches = [
            "/".join(parts)
            for parts in self._walk(root, include)
            if not any(excluded.matches(parts) for excluded in exclude_patterns)
        ]
        matches.sort()
        logger.debug(f"Found {len(matches)} file(s) matching '{include}'")
        return matches

    def _compile(self, pattern: Union[str, MatchPattern]) -> MatchPattern:
        if isinstance(pattern, MatchPattern):
            return pattern
        return MatchPattern.compile(pattern, case_sensitive=self.case_sensitive)

    def _walk(self, root: Path, include: MatchPattern) -> List[Tuple[str, ...]]:
        """Collect the parts of every regular file under root that matches include."""
        found: List[Tuple[str, ...]] = []
        # Each entry carries the real directories on its path from the root.
        pending: List[Tuple[Path, Tuple[str, ...], FrozenSet[DirectoryKey]]] = [(root, (), frozenset())]

        while pending:
            directory, prefix, ancestors = pending.pop()

            try:
                stat = directory.stat()
            except OSError as e:
                logger.debug(f"Skipping {directory}: {e}")
                continue
            key = (stat.st_dev, stat.st_ino)
            if key in ancestors:
                logger.debug(f"Skipping symlink loop at {directory}")
                continue
            ancestors = ancestors | {key}

            try:
                with os.scandir(directory) as iterator:
                    entries = sorted(iterator, key=lambda entry: entry.name)
            except OSError as e:
                if not prefix:
                    raise FilesystemError(f"Cannot read workspace directory {directory}: {e}") from e
                logger.debug(f"Skipping unreadable directory {directory}: {e}")
                continue

            subdirectories: List[Tuple[Path, Tuple[str, ...], FrozenSet[DirectoryKey]]] = []
            for entry in entries:
                parts = prefix + (entry.name,)
                try:
                    if entry.is_dir(follow_symlinks=self.follow_symlinks):
                        if include.could_match_below(parts):
                            subdirectories.append((Path(entry.path), parts, ancestors))
                    elif entry.is_file(follow_symlinks=True) and include.matches(parts):
                        found.append(parts)
                except OSError as e:
                    logger.debug(f"Skipping {entry.path}: {e}")

            # Reversed so the stack pops directories in name order.
            pending.extend(reversed(subdirectories))

        return found
