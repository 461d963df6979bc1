"""Ant-style glob patterns.

A pattern is split into segments on ``/`` or ``\\``. Inside a segment ``*``
matches any run of characters and ``?`` exactly one character. A segment that
is exactly ``**`` matches zero or more whole directory segments, so
``**/*.xml`` finds XML files at every depth including the root.

Edge cases follow the ant directory scanner:

- a trailing separator appends ``**`` (``build/`` selects everything below
  ``build``);
- ``**`` glued to other characters (``a**b``) is two ``*`` wildcards and never
  crosses a separator;
- a leading separator makes the pattern rooted, and rooted patterns never
  match the relative paths produced by a scan.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Pattern, Sequence, Tuple, Union

from ..exceptions import ConfigurationError

DOUBLE_STAR = "**"
SEPARATORS = re.compile(r"[\\/]")

# A compiled segment is either the recursive wildcard marker or a regex.
Segment = Union[str, Pattern[str]]


def _translate_segment(segment: str, flags: int) -> Pattern[str]:
    """Translate one pattern segment into an anchored regular expression."""
    parts = []
    for char in segment:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), flags | re.DOTALL)


@dataclass(frozen=True)
class MatchPattern:
    """
    A compiled include or exclude pattern.

    Attributes:
        raw: The pattern as given, with surrounding whitespace removed
        case_sensitive: Whether segment comparison honours case
        rooted: True when the pattern starts with a separator
    """

    raw: str
    case_sensitive: bool = True
    rooted: bool = False
    segments: Tuple[Segment, ...] = field(default=(), repr=False, compare=False)

    @classmethod
    def compile(cls, pattern: Optional[str], case_sensitive: bool = True) -> "MatchPattern":
        """
        Compile a glob string.

        Args:
            pattern: Glob string such as ``**/*.xml``
            case_sensitive: Compare segments case-sensitively (default)

        Returns:
            The compiled pattern

        Raises:
            ConfigurationError: If the pattern is empty after trimming
        """
        raw = (pattern or "").strip()
        if not raw:
            raise ConfigurationError("File search pattern must not be empty")

        normalized = raw
        if SEPARATORS.match(normalized[-1]):
            normalized += DOUBLE_STAR

        flags = 0 if case_sensitive else re.IGNORECASE
        segments: list = []
        for token in SEPARATORS.split(normalized):
            if not token:
                continue
            if token == DOUBLE_STAR:
                # Consecutive ** segments are equivalent to one.
                if segments and segments[-1] == DOUBLE_STAR:
                    continue
                segments.append(DOUBLE_STAR)
            else:
                segments.append(_translate_segment(token, flags))

        return cls(
            raw=raw,
            case_sensitive=case_sensitive,
            rooted=bool(SEPARATORS.match(raw[0])),
            segments=tuple(segments),
        )

    def matches(self, relative_path: Union[str, Sequence[str]]) -> bool:
        """
        Check whether a relative path matches the whole pattern.

        Args:
            relative_path: Path string (either separator) or its parts

        Returns:
            True if the path matches
        """
        if self.rooted:
            return False
        parts = _split(relative_path)
        segments = self.segments

        @lru_cache(maxsize=None)
        def match_from(seg_index: int, part_index: int) -> bool:
            if seg_index == len(segments):
                return part_index == len(parts)
            segment = segments[seg_index]
            if segment == DOUBLE_STAR:
                return any(match_from(seg_index + 1, k) for k in range(part_index, len(parts) + 1))
            if part_index == len(parts):
                return False
            return bool(segment.fullmatch(parts[part_index])) and match_from(seg_index + 1, part_index + 1)

        return match_from(0, 0)

    def could_match_below(self, relative_dir: Union[str, Sequence[str]]) -> bool:
        """
        Check whether files below a directory could still match.

        Used to prune the directory walk: a directory is worth entering only
        if its path is compatible with a prefix of the pattern.

        Args:
            relative_dir: Directory path relative to the scan root

        Returns:
            False only when no path under the directory can match
        """
        if self.rooted:
            return False
        parts = _split(relative_dir)
        for index, part in enumerate(parts):
            if index >= len(self.segments):
                return False
            segment = self.segments[index]
            if segment == DOUBLE_STAR:
                return True
            if not segment.fullmatch(part):
                return False
        # At least one segment must remain for the file name itself.
        return len(parts) < len(self.segments)

    def __str__(self) -> str:
        return self.raw


def _split(path: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    if isinstance(path, str):
        return tuple(part for part in SEPARATORS.split(path) if part and part != ".")
    return tuple(path)
