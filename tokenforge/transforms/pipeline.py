#!/usr/bin/env python3
"""Transform pipeline for per-platform token transformation.

This module provides pipeline execution for transforms:
- Ordered transform chaining per token
- Copy-on-transform, so the shared tree is never mutated
- Passthrough warnings collected instead of raised
- Pipeline statistics

Example:
    >>> pipeline = TransformPipeline.from_group(registry, "vibors/web", {"prefix": "vbr"})
    >>> result = pipeline.apply(tree.tokens)
    >>> result.tokens[0].final_name
    'vbr-color-brand-primary'
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from tokenforge.core.errors import TransformError, TransformWarning
from tokenforge.infrastructure.logger import Logger, get_logger
from tokenforge.tokens.models import TokenNode
from tokenforge.transforms.base import Transform
from tokenforge.transforms.registry import TransformRegistry


@dataclass
class PipelineResult:
    """Transformed token copies plus the warnings raised on the way."""

    tokens: List[TokenNode] = field(default_factory=list)
    warnings: List[TransformWarning] = field(default_factory=list)

    def by_path(self) -> Dict[str, TokenNode]:
        return {token.name: token for token in self.tokens}


class TransformPipeline:
    """Pipeline applying an ordered transform list to token copies."""

    def __init__(
        self,
        transforms: Optional[Iterable[Transform]] = None,
        options: Optional[Dict[str, Any]] = None,
        logger: Optional[Logger] = None,
    ):
        """Initialize transform pipeline.

        Args:
            transforms: Transforms, executed in order
            options: Platform options handed to every transform (prefix, platform)
            logger: Optional logger
        """
        self._transforms: List[Transform] = list(transforms or [])
        self.options = dict(options or {})
        self._logger = logger or get_logger()
        self._stats = {"tokens": 0, "warnings": 0}

    @classmethod
    def from_group(
        cls,
        registry: TransformRegistry,
        group: str,
        options: Optional[Dict[str, Any]] = None,
        logger: Optional[Logger] = None,
    ) -> "TransformPipeline":
        """Build a pipeline from a registered transform group."""
        return cls(registry.get_group(group), options=options, logger=logger)

    def add_transform(self, transform: Transform) -> None:
        """Add transform to pipeline.

        Transforms are executed in order they are added.
        """
        self._transforms.append(transform)

    def remove_transform(self, name: str) -> bool:
        """Remove transform by name.

        Returns:
            True if transform was removed
        """
        for i, transform in enumerate(self._transforms):
            if transform.name == name:
                self._transforms.pop(i)
                return True
        return False

    def clear_transforms(self) -> None:
        self._transforms.clear()

    def get_transforms(self) -> List[Transform]:
        return self._transforms.copy()

    def apply_token(self, token: TokenNode) -> PipelineResult:
        """Transform one token.

        Raises:
            TransformError: If the token has not been resolved
        """
        if not token.resolved:
            raise TransformError(f"Token {token.name} must be resolved before transforming")

        working = token.copy()
        result = PipelineResult(tokens=[working])
        for transform in self._transforms:
            outcome = transform.apply(working, self.options)
            if outcome.warning is not None:
                result.warnings.append(outcome.warning)
        return result

    def apply(self, tokens: Iterable[TokenNode]) -> PipelineResult:
        """Transform every token, preserving order.

        Args:
            tokens: Resolved tokens (left untouched)

        Returns:
            PipelineResult with transformed copies and passthrough warnings
        """
        result = PipelineResult()
        for token in tokens:
            single = self.apply_token(token)
            result.tokens.extend(single.tokens)
            result.warnings.extend(single.warnings)

        for warning in result.warnings:
            self._logger.warning(str(warning), path=warning.path)

        self._stats["tokens"] += len(result.tokens)
        self._stats["warnings"] += len(result.warnings)
        return result

    def get_stats(self) -> Dict[str, Any]:
        """Get pipeline statistics, including per-transform counters."""
        stats: Dict[str, Any] = self._stats.copy()
        stats["transform_stats"] = {t.name: t.get_stats() for t in self._transforms}
        return stats

    def reset_stats(self) -> None:
        self._stats = {"tokens": 0, "warnings": 0}
        for transform in self._transforms:
            transform.reset_stats()

    def __len__(self) -> int:
        return len(self._transforms)

    def __repr__(self) -> str:
        transform_names = [t.name for t in self._transforms]
        return f"<TransformPipeline transforms={transform_names}>"
