"""Ignore pattern matching for remote device paths.

Ignore patterns are a restricted glob syntax matched against full remote
paths:

- A pattern starting with the path separator is anchored to the root.
- A pattern starting with ``*`` matches anywhere in the tree.
- Any other pattern matches as a path suffix (``cache/`` ignores every
  directory named ``cache``).
- ``*`` matches one or more characters, never an empty string.
- Directory paths end with the separator, so ``cache/`` only matches
  directories and ``cache`` only matches files.
- Every other character is literal. All regex metacharacters are escaped,
  including ``?``, ``+`` and ``(``, not only backslash, brackets and dot.

Examples:
    >>> compile_pattern("*.avi").matches("/sdcard/Movies/film.avi")
    True
    >>> compile_pattern("/*/some/file_*.cfg").matches("/abcd/some/file_.cfg")
    False
"""

import logging
import re
from typing import Iterable, Optional

from ..exceptions import PatternError

logger = logging.getLogger(__name__)


class IgnorePattern:
    """A single ignore pattern compiled into an anchored regular expression."""

    def __init__(self, pattern: str, separator: str = "/"):
        """Compile an ignore pattern.

        Args:
            pattern: Glob-like ignore pattern
            separator: Path separator used by the remote device

        Raises:
            PatternError: If the pattern is empty
        """
        if not pattern:
            raise PatternError("Ignore pattern must not be empty")

        self.pattern = pattern
        self.separator = separator
        self.regex = re.compile(self._to_regex(pattern, separator), re.DOTALL)

    @staticmethod
    def _to_regex(pattern: str, separator: str) -> str:
        prefix = ""
        if pattern.startswith("*"):
            pattern = separator + pattern
        elif not pattern.startswith(separator):
            # Relative fragment: match it below any directory
            prefix = ".*?" + re.escape(separator)

        body = ".+?".join(re.escape(part) for part in pattern.split("*"))
        return prefix + body

    def matches(self, path: str) -> bool:
        """Check whether the pattern matches the whole path.

        Args:
            path: Remote path (directories end with the separator)

        Returns:
            True if the pattern matches the full path

        Raises:
            PatternError: If the path is empty
        """
        if not path:
            raise PatternError("Path to match must not be empty")
        return self.regex.fullmatch(path) is not None

    def __repr__(self) -> str:
        return f"IgnorePattern({self.pattern!r})"


def compile_pattern(pattern: str, separator: str = "/") -> IgnorePattern:
    """Compile an ignore pattern.

    Args:
        pattern: Glob-like ignore pattern
        separator: Path separator used by the remote device

    Returns:
        Compiled IgnorePattern
    """
    return IgnorePattern(pattern, separator)


class IgnoreMatcher:
    """Collection of ignore patterns, compiled once at registration."""

    def __init__(self, patterns: Optional[Iterable[str]] = None, separator: str = "/"):
        self.separator = separator
        self._patterns: dict[str, IgnorePattern] = {}
        for pattern in patterns or []:
            self.add(pattern)

    @property
    def patterns(self) -> list[str]:
        """Registered pattern strings in registration order."""
        return list(self._patterns)

    def add(self, pattern: str) -> IgnorePattern:
        """Register a pattern, reusing the compiled form if already known."""
        compiled = self._patterns.get(pattern)
        if compiled is None:
            compiled = compile_pattern(pattern, self.separator)
            self._patterns[pattern] = compiled
        return compiled

    def is_ignored(self, path: str) -> bool:
        """Return True if any registered pattern matches the path."""
        for compiled in self._patterns.values():
            if compiled.matches(path):
                logger.debug("Ignoring %s (pattern %s)", path, compiled.pattern)
                return True
        return False

    def __len__(self) -> int:
        return len(self._patterns)
