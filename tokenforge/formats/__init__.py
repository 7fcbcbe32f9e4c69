"""TokenForge format emitters.

This module serializes transformed tokens into platform artifacts:
- FormatRegistry: named emitters
- FormatContext: what an emitter knows about the file it renders
- web: CSS custom properties, ES module, TypeScript declarations, JSON
- ios: SwiftUI constant classes
- android: XML resources and a Compose Kotlin object
"""

from .base import FormatContext, FormatRegistry, Formatter, flatten_value, nest_tokens, render

__all__ = [
    "FormatContext",
    "FormatRegistry",
    "Formatter",
    "flatten_value",
    "nest_tokens",
    "render",
]
