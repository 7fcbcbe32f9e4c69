#!/usr/bin/env python3
"""Filter rules and file routing.

This module decides which transformed tokens go into which output file:
- Attribute-based conditions (category, collection, type, value, ...)
- Path pattern matching integration
- Match modes (all, any, none)
- Declarative rules built from configuration mappings

Any callable taking a TokenNode and returning a bool also works as a
filter; FilterRule is simply the one configuration files can express.

Example:
    >>> rule = FilterRule(
    ...     conditions=[Condition("collection", "icontains", "semantic")],
    ... )
    >>> router = FileRouter()
    >>> dark_tokens = router.route(tokens, rule)
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from tokenforge.infrastructure.logger import Logger, get_logger
from tokenforge.rules.patterns import PatternMatcher, PatternType
from tokenforge.tokens.models import TokenNode

TokenFilter = Callable[[TokenNode], bool]


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str):
        return str(expected) in actual
    try:
        return expected in actual
    except TypeError:
        return False


OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "eq": lambda actual, expected: actual == expected,
    "ne": lambda actual, expected: actual != expected,
    "lt": lambda actual, expected: actual < expected,
    "le": lambda actual, expected: actual <= expected,
    "gt": lambda actual, expected: actual > expected,
    "ge": lambda actual, expected: actual >= expected,
    "in": lambda actual, expected: actual in expected,
    "not_in": lambda actual, expected: actual not in expected,
    "contains": _contains,
    "icontains": lambda actual, expected: str(expected).lower() in str(actual).lower(),
    "startswith": lambda actual, expected: str(actual).startswith(str(expected)),
    "endswith": lambda actual, expected: str(actual).endswith(str(expected)),
    "matches": lambda actual, expected: bool(re.search(str(expected), str(actual))),
}

OPERATOR_ALIASES = {"==": "eq", "!=": "ne", "<": "lt", "<=": "le", ">": "gt", ">=": "ge"}


class MatchMode(Enum):
    """How the results of a rule's conditions combine."""

    ALL = "all"  # Every condition must hold
    ANY = "any"  # At least one condition must hold
    NONE = "none"  # No condition may hold


@dataclass
class Condition:
    """A single condition over a token field."""

    field: str  # Token view field (category, collection, path, value, ...)
    operator: str  # Comparison operator (eq, in, icontains, ...)
    value: Any  # Value to compare against

    def __post_init__(self):
        operator = self.operator.lower()
        operator = OPERATOR_ALIASES.get(operator, operator)
        if operator not in OPERATORS:
            raise ValueError(f"Unknown filter operator: {self.operator}")
        self.operator = operator

    def evaluate(self, fields: Mapping[str, Any]) -> bool:
        """Evaluate against a token's field view.

        A missing field never matches; incomparable values do not match.
        """
        if self.field not in fields:
            return False
        try:
            return OPERATORS[self.operator](fields[self.field], self.value)
        except TypeError:
            return False


@dataclass
class FilterRule:
    """Declarative token filter.

    Path patterns (when given) must match first; conditions are then
    combined according to ``match``. A rule with neither accepts everything.
    """

    name: Optional[str] = None
    conditions: List[Condition] = field(default_factory=list)
    match: MatchMode = MatchMode.ALL
    patterns: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    pattern_type: PatternType = PatternType.GLOB

    def __post_init__(self):
        self._include = PatternMatcher()
        self._exclude = PatternMatcher()
        for pattern in self.patterns:
            self._include.add_pattern(pattern, self.pattern_type)
        for pattern in self.exclude:
            self._exclude.add_pattern(pattern, self.pattern_type)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FilterRule":
        """Build a rule from its configuration mapping.

        Args:
            data: Mapping with optional name, match, conditions, patterns,
                exclude and pattern_type keys

        Raises:
            ValueError: If the mode, pattern type or an operator is unknown
        """
        return cls(
            name=data.get("name"),
            conditions=[
                Condition(c["field"], c.get("operator", "eq"), c.get("value"))
                for c in data.get("conditions", [])
            ],
            match=MatchMode(data.get("match", MatchMode.ALL.value)),
            patterns=list(data.get("patterns", [])),
            exclude=list(data.get("exclude", [])),
            pattern_type=PatternType(data.get("pattern_type", PatternType.GLOB.value)),
        )

    def __call__(self, token: TokenNode) -> bool:
        if self._exclude and self._exclude.matches(token.name):
            return False
        if self._include and not self._include.matches(token.name):
            return False
        if not self.conditions:
            return True

        fields = token.view()
        results = [condition.evaluate(fields) for condition in self.conditions]
        if self.match is MatchMode.ALL:
            return all(results)
        if self.match is MatchMode.ANY:
            return any(results)
        return not any(results)


class FileRouter:
    """Selects the tokens that belong in each output file."""

    def __init__(self, logger: Optional[Logger] = None):
        self._logger = logger or get_logger()

    def route(self, tokens: List[TokenNode], token_filter: Optional[TokenFilter] = None) -> List[TokenNode]:
        """Filter tokens for one file.

        The same token may be selected by any number of files; selection
        never consumes it.

        Args:
            tokens: Transformed platform tokens, in order
            token_filter: Predicate, or None to take every token

        Returns:
            Selected tokens in their original order
        """
        if token_filter is None:
            return list(tokens)
        selected = [token for token in tokens if token_filter(token)]
        self._logger.debug(
            "Routed tokens",
            filter=getattr(token_filter, "name", None) or type(token_filter).__name__,
            selected=len(selected),
            total=len(tokens),
        )
        return selected
