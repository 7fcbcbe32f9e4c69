#!/usr/bin/env python3
r"""Pattern matching for dotted token paths with glob and regex support.

This module provides pattern matching for file filters:
- Glob patterns over path segments (color.*, **.primary)
- Regex patterns with compiled expressions
- Case-sensitive and case-insensitive modes
- Multiple pattern support with OR logic

In globs ``*`` matches within one segment, ``**`` matches any number of
segments (including none) and ``?`` matches one character of a segment.

Example:
    >>> matcher = PatternMatcher()
    >>> matcher.add_glob_pattern("color.**")
    >>> matcher.add_regex_pattern(r"\.primary$")
    >>> matcher.matches("color.brand.primary")
    True
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Pattern


class PatternType(Enum):
    """Pattern matching type."""

    GLOB = "glob"  # Segment-aware wildcards (color.*, **.hover)
    REGEX = "regex"  # Regular expressions


@dataclass
class PatternEntry:
    """A single pattern entry with metadata."""

    pattern: str
    pattern_type: PatternType
    compiled: Pattern
    case_sensitive: bool = True
    name: Optional[str] = None


def glob_to_regex(pattern: str) -> str:
    """Translate a dotted-path glob into an anchored regular expression."""
    parts = []
    position = 0
    while position < len(pattern):
        if pattern.startswith("**.", position):
            parts.append(r"(?:[^.]+\.)*")
            position += 3
        elif pattern.startswith(".**", position) and position + 3 == len(pattern):
            parts.append(r"(?:\.[^.]+)*")
            position += 3
        elif pattern.startswith("**", position):
            parts.append(".*")
            position += 2
        elif pattern[position] == "*":
            parts.append("[^.]*")
            position += 1
        elif pattern[position] == "?":
            parts.append("[^.]")
            position += 1
        else:
            parts.append(re.escape(pattern[position]))
            position += 1
    return "^" + "".join(parts) + "$"


class PatternMatcher:
    """Pattern matcher supporting glob and regex patterns.

    A path matches when any registered pattern matches it.
    """

    def __init__(self, case_sensitive: bool = True):
        """Initialize pattern matcher.

        Args:
            case_sensitive: Whether patterns are case-sensitive
        """
        self._patterns: List[PatternEntry] = []
        self._case_sensitive = case_sensitive

    def _flags(self, case_sensitive: Optional[bool]) -> int:
        sensitive = self._case_sensitive if case_sensitive is None else case_sensitive
        return 0 if sensitive else re.IGNORECASE

    def add_glob_pattern(
        self, pattern: str, name: Optional[str] = None, case_sensitive: Optional[bool] = None
    ) -> None:
        """Add glob pattern.

        Args:
            pattern: Glob pattern (e.g., "color.*", "**.hover")
            name: Optional name for this pattern
            case_sensitive: Override default case sensitivity
        """
        flags = self._flags(case_sensitive)
        self._patterns.append(
            PatternEntry(
                pattern=pattern,
                pattern_type=PatternType.GLOB,
                compiled=re.compile(glob_to_regex(pattern), flags),
                case_sensitive=not flags,
                name=name,
            )
        )

    def add_regex_pattern(
        self, pattern: str, name: Optional[str] = None, case_sensitive: Optional[bool] = None
    ) -> None:
        """Add regex pattern.

        Args:
            pattern: Regular expression, searched anywhere in the path
            name: Optional name for this pattern
            case_sensitive: Override default case sensitivity

        Raises:
            re.error: If the expression does not compile
        """
        flags = self._flags(case_sensitive)
        self._patterns.append(
            PatternEntry(
                pattern=pattern,
                pattern_type=PatternType.REGEX,
                compiled=re.compile(pattern, flags),
                case_sensitive=not flags,
                name=name,
            )
        )

    def add_pattern(self, pattern: str, pattern_type: PatternType = PatternType.GLOB) -> None:
        if pattern_type == PatternType.GLOB:
            self.add_glob_pattern(pattern)
        else:
            self.add_regex_pattern(pattern)

    def matches(self, path: str) -> bool:
        """Check if a dotted path matches any pattern."""
        for entry in self._patterns:
            if entry.pattern_type == PatternType.GLOB:
                if entry.compiled.match(path):
                    return True
            elif entry.compiled.search(path):
                return True
        return False

    def get_matching_patterns(self, path: str) -> List[str]:
        """Get the names (or sources) of all patterns matching the path."""
        matched = []
        for entry in self._patterns:
            single = PatternMatcher()
            single._patterns.append(entry)
            if single.matches(path):
                matched.append(entry.name or entry.pattern)
        return matched

    def clear(self) -> None:
        self._patterns.clear()

    def get_patterns(self) -> List[PatternEntry]:
        return self._patterns.copy()

    def __len__(self) -> int:
        return len(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)
