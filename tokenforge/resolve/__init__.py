"""TokenForge alias resolution.

- AliasResolver: resolves references and arithmetic across a token tree
- expressions: reference templates and the arithmetic interpreter
"""

from .expressions import ValueTemplate, evaluate, find_references, parse_arithmetic, parse_template
from .resolver import AliasResolver

__all__ = [
    "AliasResolver",
    "ValueTemplate",
    "parse_template",
    "find_references",
    "parse_arithmetic",
    "evaluate",
]
