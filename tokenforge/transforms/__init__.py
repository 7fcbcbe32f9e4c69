"""TokenForge Transforms - Per-platform token transformation.

This module provides token transformation capabilities:
- Transform base classes and kinds (value, name, attribute)
- TransformRegistry: named transforms and ordered groups
- TransformPipeline: apply a group to copies of resolved tokens
- Built-in unit, color and naming conversions
"""

from .base import FunctionTransform, Transform, TransformKind, TransformResult
from .builtin import BUILTIN_GROUPS, builtin_transforms, category_in, infer_category
from .pipeline import PipelineResult, TransformPipeline
from .registry import TransformRegistry

__all__ = [
    # Pipeline
    "TransformPipeline",
    "PipelineResult",
    # Base classes
    "Transform",
    "TransformKind",
    "TransformResult",
    "FunctionTransform",
    # Registry and built-ins
    "TransformRegistry",
    "BUILTIN_GROUPS",
    "builtin_transforms",
    "category_in",
    "infer_category",
]
