#!/usr/bin/env python3
"""Format emitter foundation.

This module provides what every format emitter shares:
- FormatContext: platform, destination, options and the platform's tokens
- FormatRegistry: named emitters, owned by a build configuration
- Jinja2 rendering of artifact templates
- Composite flattening and path nesting helpers

An emitter is any callable ``(tokens, context) -> str``. Emitters are
pure: identical inputs always render identical text.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import jinja2

from tokenforge.core.constants import GENERATED_HEADER
from tokenforge.core.errors import FormatError, TokenWarning
from tokenforge.infrastructure.logger import Logger, get_logger
from tokenforge.resolve.expressions import parse_template, stringify
from tokenforge.tokens.models import TokenNode

Suffix = Tuple[str, ...]


@dataclass
class FormatContext:
    """Everything an emitter may look at besides its selected tokens.

    Attributes:
        platform: Platform name (e.g. "web/css")
        destination: Artifact path relative to the platform build path
        options: Per-file format options
        dictionary: All transformed platform tokens by dotted path
        header: Do-not-edit notice placed at the top of each artifact
        warnings: Non-fatal problems found while rendering
        logger: Logger warnings are reported to (default: the global logger)
    """

    platform: str
    destination: str
    options: Dict[str, Any] = field(default_factory=dict)
    dictionary: Dict[str, TokenNode] = field(default_factory=dict)
    header: str = GENERATED_HEADER
    warnings: List[TokenWarning] = field(default_factory=list)
    logger: Optional[Logger] = None

    def warn(self, message: str, path: Optional[str] = None) -> None:
        warning = TokenWarning(message, path)
        self.warnings.append(warning)
        logger = self.logger or get_logger()
        logger.warning(message, path=path, destination=self.destination)

    def referenced_token(self, token: TokenNode) -> Optional[TokenNode]:
        """Token this one aliases verbatim, if it is in the platform set."""
        if not isinstance(token.raw_value, str):
            return None
        template = parse_template(token.raw_value)
        if not template.is_single_reference:
            return None
        return self.dictionary.get(template.references[0])


Formatter = Callable[[List[TokenNode], FormatContext], str]


class FormatRegistry:
    """Named format emitters."""

    def __init__(self):
        self._formats: Dict[str, Formatter] = {}

    @classmethod
    def with_builtins(cls) -> "FormatRegistry":
        """Create a registry holding the web, iOS and Android emitters."""
        from tokenforge.formats import android, ios, web

        registry = cls()
        for module in (web, ios, android):
            for name, formatter in module.FORMATS.items():
                registry.register(name, formatter)
        return registry

    def register(self, name: str, formatter: Formatter) -> None:
        self._formats[name] = formatter

    def get(self, name: str) -> Formatter:
        """Look up an emitter.

        Raises:
            FormatError: If no emitter has that name
        """
        try:
            return self._formats[name]
        except KeyError:
            raise FormatError(f"Unknown format: {name}", name)

    def names(self) -> List[str]:
        return list(self._formats)

    def __contains__(self, name: object) -> bool:
        return name in self._formats

    def __repr__(self) -> str:
        return f"<FormatRegistry formats={self.names()}>"


@lru_cache(maxsize=2)
def _environment(autoescape: bool) -> jinja2.Environment:
    return jinja2.Environment(
        autoescape=autoescape,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


@lru_cache(maxsize=64)
def _template(source: str, autoescape: bool) -> jinja2.Template:
    return _environment(autoescape).from_string(source)


def render(source: str, format_name: str, autoescape: bool = False, **context: Any) -> str:
    """Render an artifact template.

    Args:
        source: Jinja2 template source
        format_name: Emitter name, for error reporting
        autoescape: Escape markup (XML artifacts)
        **context: Template variables

    Returns:
        Rendered text

    Raises:
        FormatError: If the template fails to render
    """
    try:
        return _template(source, autoescape).render(**context)
    except jinja2.TemplateError as e:
        raise FormatError(f"Template error: {e}", format_name)


def is_scalar_list(value: Any) -> bool:
    return isinstance(value, list) and not any(isinstance(v, (dict, list)) for v in value)


def flatten_value(value: Any, suffix: Suffix = ()) -> Iterator[Tuple[Suffix, Any]]:
    """Yield (sub-field suffix, scalar) pairs for a possibly composite value.

    Scalars yield a single pair with an empty suffix. Lists of scalars are
    kept whole; lists holding mappings are indexed.
    """
    if isinstance(value, dict):
        for key, item in value.items():
            yield from flatten_value(item, suffix + (str(key),))
    elif isinstance(value, list) and not is_scalar_list(value):
        for index, item in enumerate(value):
            yield from flatten_value(item, suffix + (str(index),))
    else:
        yield suffix, value


def scalar_text(value: Any, separator: str = ", ") -> str:
    """Render a flattened scalar as plain text."""
    if isinstance(value, list):
        return separator.join(stringify(item) for item in value)
    return stringify(value)


def nest_tokens(tokens: List[TokenNode], context: FormatContext) -> Dict[str, Any]:
    """Rebuild the path hierarchy with token values at the leaves.

    A token whose path collides with another token (one being a prefix of
    the other) is left out and reported as a warning.
    """
    root: Dict[str, Any] = {}
    leaves = set()
    for token in tokens:
        node = root
        conflict = False
        for depth, segment in enumerate(token.path[:-1], start=1):
            if token.path[:depth] in leaves:
                conflict = True
                break
            node = node.setdefault(segment, {})
        leaf = token.path[-1]
        if conflict or (leaf in node and token.path not in leaves):
            context.warn("Nested output path conflict, token skipped", token.name)
            continue
        node[leaf] = token.value
        leaves.add(token.path)
    return root
