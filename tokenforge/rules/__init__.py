"""TokenForge Rules System.

This module provides token filtering and file routing:
- PatternMatcher: Glob and regex matching over dotted token paths
- FilterRule: Declarative, attribute-based token filters
- FileRouter: Per-file token selection

Filters decide which tokens each output file receives based on
configurable criteria like categories, collections and path patterns.
"""

from .engine import OPERATORS, Condition, FileRouter, FilterRule, MatchMode, TokenFilter
from .patterns import PatternEntry, PatternMatcher, PatternType, glob_to_regex

__all__ = [
    # Pattern matching
    "PatternType",
    "PatternEntry",
    "PatternMatcher",
    "glob_to_regex",
    # Filters
    "OPERATORS",
    "MatchMode",
    "Condition",
    "FilterRule",
    "FileRouter",
    "TokenFilter",
]
