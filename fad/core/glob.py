"""
Glob — Shell-style pattern filter over full paths

Globs filter, they do not rank: every matching path scores GLOB_SCORE.
Patterns are anchored on the whole path, and '*' also crosses '/'.
"""

import fnmatch
import re
from typing import Dict, Pattern, Sequence

from ..errors import MalformedPatternError


GLOB_SCORE = 1


def _check_classes(pattern: str) -> None:
    """Reject unterminated [...] classes (fnmatch would match them literally)."""
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise MalformedPatternError(pattern, f"unterminated character class at offset {i}")
            i = j
        i += 1


def compile_glob(pattern: str) -> Pattern[str]:
    """
    Compile a glob token into a full-path regex.

    Raises:
        MalformedPatternError: If the pattern cannot be compiled
    """
    _check_classes(pattern)
    try:
        return re.compile(fnmatch.translate(pattern))
    except re.error as e:
        raise MalformedPatternError(pattern, str(e)) from e


class GlobFilter:
    """A compiled glob token."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex = compile_glob(pattern)

    def matches(self, path: str) -> bool:
        return self._regex.match(path) is not None

    def match_list(self, paths: Sequence[str]) -> Dict[int, int]:
        """Map index -> GLOB_SCORE for every matching path."""
        return {
            index: GLOB_SCORE
            for index, path in enumerate(paths)
            if self.matches(path)
        }
