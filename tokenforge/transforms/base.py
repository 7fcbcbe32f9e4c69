#!/usr/bin/env python3
"""Base classes for token transformations.

This module provides the foundation for all transforms:
- Transform abstract base class
- TransformKind (value, name or attribute)
- TransformResult for reporting what a transform did
- FunctionTransform for plain ``{matcher, function}`` records

A transform rewrites one field of a token copy. Value transforms replace
``resolved_value``, name transforms set ``final_name`` and attribute
transforms merge into ``attributes``. The matcher sees the token's
*current* attributes, so attribute transforms must come first in a group.

Example:
    >>> class UppercaseTransform(Transform):
    ...     kind = TransformKind.VALUE
    ...     def transform(self, token, options):
    ...         return str(token.value).upper()
    ...
    >>> result = UppercaseTransform().apply(token)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from tokenforge.core.errors import TransformError, TransformWarning, UnsupportedTransformValue
from tokenforge.tokens.models import TokenNode

Matcher = Callable[[Dict[str, Any]], bool]
TransformFunction = Callable[[TokenNode, Dict[str, Any]], Any]


class TransformKind(Enum):
    """Which token field a transform rewrites."""

    VALUE = "value"
    NAME = "name"
    ATTRIBUTE = "attribute"


@dataclass
class TransformResult:
    """Outcome of applying one transform to one token."""

    token: TokenNode
    applied: bool = True
    warning: Optional[TransformWarning] = None
    transform_name: Optional[str] = None


class Transform(ABC):
    """Abstract base class for token transformations.

    Subclasses set ``kind`` and implement transform(); matches() may be
    overridden or a matcher passed in.
    """

    kind: TransformKind = TransformKind.VALUE

    def __init__(
        self,
        name: Optional[str] = None,
        matcher: Optional[Matcher] = None,
        enabled: bool = True,
    ):
        """Initialize transform.

        Args:
            name: Registry name, e.g. "size/pxToRem"
            matcher: Predicate over token attributes (default: match all)
            enabled: Whether transform is enabled
        """
        self.name = name or self.__class__.__name__
        self.matcher = matcher
        self.enabled = enabled
        self._stats = {"applied": 0, "skipped": 0, "passthrough": 0}

    @abstractmethod
    def transform(self, token: TokenNode, options: Dict[str, Any]) -> Any:
        """Compute the new field value.

        Args:
            token: Token copy being transformed
            options: Platform options (prefix, platform name)

        Returns:
            New value, name, or attribute mapping depending on kind

        Raises:
            UnsupportedTransformValue: If the input cannot be converted
        """

    def matches(self, token: TokenNode) -> bool:
        """Check whether this transform applies to a token."""
        if self.matcher is None:
            return True
        return bool(self.matcher(token.attributes))

    def apply(self, token: TokenNode, options: Optional[Dict[str, Any]] = None) -> TransformResult:
        """Apply the transform in place on a token copy.

        Unsupported inputs leave the token untouched and return a warning.

        Args:
            token: Token copy (never a shared tree node)
            options: Platform options

        Returns:
            TransformResult describing the outcome
        """
        if not self.enabled or not self.matches(token):
            self._stats["skipped"] += 1
            return TransformResult(token=token, applied=False, transform_name=self.name)

        try:
            output = self.transform(token, options or {})
        except UnsupportedTransformValue as e:
            self._stats["passthrough"] += 1
            warning = TransformWarning(
                f"{self.name}: {e.message}", path=token.name, transform_name=self.name
            )
            return TransformResult(
                token=token, applied=False, warning=warning, transform_name=self.name
            )

        if self.kind is TransformKind.VALUE:
            token.resolved_value = output
        elif self.kind is TransformKind.NAME:
            token.final_name = output
        else:
            if not isinstance(output, dict):
                raise TransformError(
                    f"Attribute transform must return a mapping, got {type(output).__name__}",
                    self.name,
                )
            token.attributes.update(output)

        self._stats["applied"] += 1
        return TransformResult(token=token, transform_name=self.name)

    def get_stats(self) -> Dict[str, int]:
        """Get transform statistics."""
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset transform statistics."""
        self._stats = {"applied": 0, "skipped": 0, "passthrough": 0}

    def enable(self) -> None:
        """Enable this transform."""
        self.enabled = True

    def disable(self) -> None:
        """Disable this transform."""
        self.enabled = False

    def __repr__(self) -> str:
        status = "enabled" if self.enabled else "disabled"
        return f"<{self.__class__.__name__} name={self.name} kind={self.kind.value} {status}>"


class FunctionTransform(Transform):
    """Transform built from a plain function and an optional matcher."""

    def __init__(
        self,
        name: str,
        kind: TransformKind,
        function: TransformFunction,
        matcher: Optional[Matcher] = None,
    ):
        super().__init__(name=name, matcher=matcher)
        self.kind = kind
        self._function = function

    def transform(self, token: TokenNode, options: Dict[str, Any]) -> Any:
        return self._function(token, options)
