"""
Issue path helpers.

Issue paths are tuples of segments: `str` for object keys, `int` for
array/tuple indices. They render as dot paths with bracketed indices:

- ("user", "name")        -> "user.name"
- ("items", 0, "id")      -> "items[0].id"
- (1, 1)                  -> "[1][1]"
"""

import re
from typing import Iterable, Optional, Union

Segment = Union[str, int]


class PathParser:
    """Parser for dot paths (the inverse of `format_path`)."""

    KEY_PATTERN = re.compile(r"^[^.\[\]]+")
    INDEX_PATTERN = re.compile(r"^\[(-?\d+)\]")

    def parse(self, path_str: str) -> tuple[Segment, ...]:
        """Parse a path string into a tuple of segments."""
        if not path_str:
            raise ValueError("Empty path")

        segments: list[Segment] = []
        remaining = path_str

        while remaining:
            segment, rest = self._parse_segment(remaining)
            if segment is None:
                raise ValueError(f"Invalid path syntax at: {remaining}")
            segments.append(segment)
            remaining = rest

            # Skip dot separator if present
            if remaining and remaining[0] == ".":
                remaining = remaining[1:]
                if not remaining:
                    raise ValueError(f"Trailing dot in path: {path_str}")

        return tuple(segments)

    def _parse_segment(self, s: str) -> tuple[Optional[Segment], str]:
        if match := self.INDEX_PATTERN.match(s):
            return int(match.group(1)), s[match.end() :]

        if match := self.KEY_PATTERN.match(s):
            return match.group(0), s[match.end() :]

        return None, s


def parse_path(path_str: str) -> tuple[Segment, ...]:
    """Convenience function to parse a path string."""
    return PathParser().parse(path_str)


def format_path(path: Iterable[Segment]) -> str:
    """Render a path; an index directly after a key renders as `key[n]`."""
    out: list[str] = []
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            out.append(f"[{segment}]")
        else:
            if out:
                out.append(".")
            out.append(str(segment))
    return "".join(out)


def to_path(path: Union[str, Iterable[Segment]]) -> tuple[Segment, ...]:
    """Accept either a dot path string or an iterable of segments."""
    if isinstance(path, str):
        return parse_path(path)
    return tuple(path)
