import os
import re
from typing import Callable

from sandbox_fs_mcp.tools.base import ToolError

from .constants import MAX_PATTERN_LENGTH

Matcher = Callable[[str], bool]


class InvalidPatternError(ToolError):
    """Raised when a name filter cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"Error: Invalid pattern '{pattern}': {reason}.")


def compile_pattern(pattern: str) -> Matcher:
    """
    Compile a glob-like name filter into a matcher.

    `*` matches any run of characters and `?` matches a single character; everything
    else is literal. Matching is case-insensitive and always covers the whole name.

    Raises:
        InvalidPatternError: If the pattern is empty, too long, or contains a
            path separator or a null byte.
    """
    if not pattern or not pattern.strip():
        raise InvalidPatternError(pattern, "pattern must not be empty")
    if len(pattern) > MAX_PATTERN_LENGTH:
        raise InvalidPatternError(pattern, f"pattern is too long (max {MAX_PATTERN_LENGTH} chars)")
    if "\0" in pattern:
        raise InvalidPatternError(pattern.replace("\0", "\\0"), "pattern contains a null byte")
    if "/" in pattern or os.sep in pattern:
        raise InvalidPatternError(pattern, "pattern matches names, not paths")

    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))

    try:
        regex = re.compile("".join(parts), re.IGNORECASE | re.DOTALL)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e

    return lambda name: regex.fullmatch(name) is not None
