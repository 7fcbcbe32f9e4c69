#!/usr/bin/env python3
"""Alias resolution for token trees.

This module resolves every token's raw value into a literal:
- Standalone, embedded and chained references
- Arithmetic over resolved numeric values
- Composite tokens resolved field by field
- Memoized, dependency-driven order
- Cycle detection naming the full reference chain

Resolution is platform independent and happens once per tree; the
per-platform transforms only ever see resolved copies.

Example:
    >>> resolver = AliasResolver(tree)
    >>> resolver.resolve("button.padding")
    16
"""

from typing import Any, Dict, List, Optional, Union

from tokenforge.core.errors import CycleError, UnresolvedReferenceError
from tokenforge.infrastructure.logger import Logger, get_logger
from tokenforge.resolve.expressions import evaluate, format_number, parse_arithmetic, parse_template
from tokenforge.tokens.models import TokenNode, TokenTree


class AliasResolver:
    """Resolves references and arithmetic in a TokenTree."""

    def __init__(self, tree: TokenTree, logger: Optional[Logger] = None):
        """Initialize resolver.

        Args:
            tree: Loaded token tree (its index is used for lookups)
            logger: Optional logger
        """
        self._tree = tree
        self._logger = logger or get_logger()
        self._resolved: Dict[str, Any] = {}
        self._stats = {"resolved": 0, "references": 0, "expressions": 0}

    def resolve(self, token: Union[str, TokenNode]) -> Any:
        """Resolve one token (and, recursively, what it references).

        Args:
            token: Token or its dotted path

        Returns:
            Fully literal value

        Raises:
            UnresolvedReferenceError: If the path or a referenced path is unknown
            CycleError: If the references loop
            ExpressionError: If an expression cannot be evaluated
        """
        if isinstance(token, str):
            node = self._tree.get(token)
            if node is None:
                raise UnresolvedReferenceError(token)
            token = node
        return self._resolve_token(token, [])

    def resolve_all(self) -> TokenTree:
        """Resolve every effective token in the tree.

        Returns:
            The same tree, with resolved_value set on each token
        """
        for token in self._tree.tokens:
            self._resolve_token(token, [])
        self._logger.debug("Resolved token tree", **self._stats)
        return self._tree

    def is_resolved(self, path: str) -> bool:
        return path in self._resolved

    def get_stats(self) -> Dict[str, int]:
        return self._stats.copy()

    def _resolve_token(self, token: TokenNode, chain: List[str]) -> Any:
        key = token.name
        if key in self._resolved:
            return self._resolved[key]
        if key in chain:
            raise CycleError(chain + [key])

        value = self._resolve_value(token.raw_value, token, chain + [key])

        self._resolved[key] = value
        token.resolved_value = value
        token.resolved = True
        self._stats["resolved"] += 1
        return value

    def _resolve_value(self, value: Any, token: TokenNode, chain: List[str]) -> Any:
        if isinstance(value, dict):
            return {field: self._resolve_value(item, token, chain) for field, item in value.items()}
        if isinstance(value, list):
            return [self._resolve_value(item, token, chain) for item in value]
        if not isinstance(value, str):
            return value

        template = parse_template(value)
        if template.has_references:
            self._stats["references"] += len(template.references)

            def lookup(path: str) -> Any:
                target = self._tree.get(path)
                if target is None:
                    raise UnresolvedReferenceError(path, referrer=token.name)
                return self._resolve_token(target, chain)

            value = template.substitute(lookup)
            if not isinstance(value, str):
                return value

        expression = parse_arithmetic(value)
        if expression is None:
            return value

        self._stats["expressions"] += 1
        return format_number(evaluate(expression))
