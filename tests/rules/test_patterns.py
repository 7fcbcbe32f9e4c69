#!/usr/bin/env python3
"""Tests for dotted-path pattern matching."""

import re

import pytest

from tokenforge.rules.patterns import PatternMatcher, PatternType, glob_to_regex


class TestGlobToRegex:
    """Tests for glob translation."""

    def test_single_star(self):
        """Test star stays within one segment."""
        assert glob_to_regex("color.*") == r"^color\.[^.]*$"

    @pytest.mark.parametrize(
        "pattern, path, expected",
        [
            ("color.*", "color.red", True),
            ("color.*", "color.brand.primary", False),
            ("color.**", "color.brand.primary", True),
            ("color.**", "color", True),
            ("color.**", "colors.red", False),
            ("**.primary", "primary", True),
            ("**.primary", "color.brand.primary", True),
            ("**.primary", "color.brand.primaryDark", False),
            ("spacing.?d", "spacing.md", True),
            ("spacing.?d", "spacing.xxd", False),
            ("color.**.hover", "color.button.bg.hover", True),
            ("a**b", "a.x.b", True),
        ],
    )
    def test_glob_semantics(self, pattern, path, expected):
        """Test segment-aware wildcard behavior."""
        assert bool(re.match(glob_to_regex(pattern), path)) is expected


class TestPatternMatcher:
    """Tests for PatternMatcher."""

    def test_empty(self):
        """Test an empty matcher matches nothing and is falsy."""
        matcher = PatternMatcher()

        assert not matcher
        assert len(matcher) == 0
        assert not matcher.matches("color.red")

    def test_or_logic(self):
        """Test any pattern matching is enough."""
        matcher = PatternMatcher()
        matcher.add_glob_pattern("color.**")
        matcher.add_glob_pattern("spacing.*")

        assert matcher.matches("spacing.md")
        assert matcher.matches("color.text.primary")
        assert not matcher.matches("opacity.disabled")

    def test_regex_search(self):
        """Test regex patterns search anywhere in the path."""
        matcher = PatternMatcher()
        matcher.add_regex_pattern(r"\.primary$")

        assert matcher.matches("color.brand.primary")
        assert not matcher.matches("color.primary.dark")

    def test_invalid_regex(self):
        """Test broken expressions raise at registration."""
        with pytest.raises(re.error):
            PatternMatcher().add_regex_pattern("[unclosed")

    def test_case_insensitive(self):
        """Test default and per-pattern case sensitivity."""
        insensitive = PatternMatcher(case_sensitive=False)
        insensitive.add_glob_pattern("COLOR.*")
        assert insensitive.matches("color.red")

        sensitive = PatternMatcher()
        sensitive.add_glob_pattern("COLOR.*")
        sensitive.add_regex_pattern("^SPACING", case_sensitive=False)
        assert not sensitive.matches("color.red")
        assert sensitive.matches("spacing.md")

    def test_add_pattern_by_type(self):
        """Test the type dispatch."""
        matcher = PatternMatcher()
        matcher.add_pattern("color.*")
        matcher.add_pattern("md$", PatternType.REGEX)

        types = [entry.pattern_type for entry in matcher.get_patterns()]
        assert types == [PatternType.GLOB, PatternType.REGEX]

    def test_matching_pattern_names(self):
        """Test reporting which patterns matched."""
        matcher = PatternMatcher()
        matcher.add_glob_pattern("color.**", name="colors")
        matcher.add_regex_pattern("primary")
        matcher.add_glob_pattern("spacing.*")

        assert matcher.get_matching_patterns("color.brand.primary") == ["colors", "primary"]

    def test_clear(self):
        """Test removing all patterns."""
        matcher = PatternMatcher()
        matcher.add_glob_pattern("*")
        matcher.clear()

        assert len(matcher) == 0
