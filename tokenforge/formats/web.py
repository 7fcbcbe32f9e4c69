#!/usr/bin/env python3
"""Web format emitters.

- css/variables: custom properties under a selector, optionally aliasing
  other properties with ``var(--name)``
- javascript/es6: nested token object as an ES module
- typescript/es6-declarations: type declarations matching the ES module
- json/nested: nested token values as JSON

Example:
    >>> context = FormatContext(platform="web/css", destination="tokens.css")
    >>> print(css_variables(tokens, context))
"""

import json
import re
from typing import Any, Dict, List

from tokenforge.formats.base import FormatContext, flatten_value, nest_tokens, render, scalar_text
from tokenforge.tokens.models import TokenNode
from tokenforge.transforms.conversions import to_kebab_case

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

CSS_TEMPLATE = """\
/**
 * {{ header }}
 */

{{ selector }} {
{% for name, value in declarations %}
  --{{ name }}: {{ value }};
{% endfor %}
}
"""

JS_TEMPLATE = """\
/**
 * {{ header }}
 */

export const {{ export_name }} = {{ body }};

export default {{ export_name }};
"""

DTS_TEMPLATE = """\
/**
 * {{ header }}
 */

export declare const {{ export_name }}: {{ body }};

export default {{ export_name }};
"""


def _css_name(token: TokenNode) -> str:
    return token.final_name or to_kebab_case(token.path)


def css_variables(tokens: List[TokenNode], context: FormatContext) -> str:
    """Emit CSS custom properties.

    Options:
        selector: Rule selector (default ``:root``)
        outputReferences: Emit ``var(--other)`` for tokens that alias
            another token of the platform. An alias of a composite token
            references each of the target's field properties.
    """
    output_references = bool(context.options.get("outputReferences", False))
    declarations = []
    for token in tokens:
        name = _css_name(token)
        target = context.referenced_token(token) if output_references else None
        if target is not None:
            target_name = _css_name(target)
            for suffix, _ in flatten_value(target.value):
                field = f"-{to_kebab_case(suffix)}" if suffix else ""
                declarations.append((name + field, f"var(--{target_name}{field})"))
            continue
        for suffix, value in flatten_value(token.value):
            field_name = f"{name}-{to_kebab_case(suffix)}" if suffix else name
            declarations.append((field_name, scalar_text(value)))

    return render(
        CSS_TEMPLATE,
        "css/variables",
        header=context.header,
        selector=context.options.get("selector", ":root"),
        declarations=declarations,
    )


def javascript_es6(tokens: List[TokenNode], context: FormatContext) -> str:
    """Emit the nested token object as an ES module export."""
    body = json.dumps(nest_tokens(tokens, context), indent=2, ensure_ascii=False)
    return render(
        JS_TEMPLATE,
        "javascript/es6",
        header=context.header,
        export_name=context.options.get("exportName", "tokens"),
        body=body,
    )


def _ts_key(key: str) -> str:
    return key if _IDENTIFIER.match(key) else json.dumps(key)


def typescript_type(value: Any, indent: int = 0) -> str:
    """TypeScript type literal describing a nested value."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        item_types = sorted({typescript_type(item, indent) for item in value}) or ["unknown"]
        item = item_types[0] if len(item_types) == 1 else "(" + " | ".join(item_types) + ")"
        return f"{item}[]"
    if isinstance(value, dict):
        if not value:
            return "{}"
        pad = "  " * (indent + 1)
        lines = [
            f"{pad}{_ts_key(key)}: {typescript_type(item, indent + 1)};" for key, item in value.items()
        ]
        return "{\n" + "\n".join(lines) + "\n" + "  " * indent + "}"
    return "unknown"


def typescript_declarations(tokens: List[TokenNode], context: FormatContext) -> str:
    """Emit declarations for the javascript/es6 module."""
    return render(
        DTS_TEMPLATE,
        "typescript/es6-declarations",
        header=context.header,
        export_name=context.options.get("exportName", "tokens"),
        body=typescript_type(nest_tokens(tokens, context)),
    )


def json_nested(tokens: List[TokenNode], context: FormatContext) -> str:
    """Emit nested token values as JSON."""
    return json.dumps(nest_tokens(tokens, context), indent=2, ensure_ascii=False) + "\n"


FORMATS: Dict[str, Any] = {
    "css/variables": css_variables,
    "javascript/es6": javascript_es6,
    "typescript/es6-declarations": typescript_declarations,
    "json/nested": json_nested,
}
