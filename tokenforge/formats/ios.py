#!/usr/bin/env python3
"""iOS format emitters.

- ios-swift/class.swift: a SwiftUI class of static constants

Colors arrive as ``Color(...)`` initializers from the color/swift
transform and are emitted verbatim; numbers are emitted as literals and
everything else as string literals.
"""

import json
import re
from typing import Any, Dict, List

from tokenforge.formats.base import FormatContext, flatten_value, render
from tokenforge.tokens.models import TokenNode
from tokenforge.transforms.conversions import to_camel_case

_NUMERIC = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)$")

SWIFT_TEMPLATE = """\
//
// {{ destination }}
//
// {{ header }}
//

import SwiftUI

{{ access }}class {{ class_name }} {
{% for name, value in members %}
    {{ access }}static let {{ name }} = {{ value }}
{% endfor %}
}
"""


def swift_literal(value: Any) -> str:
    """Render a scalar as a Swift literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, list):
        return "[" + ", ".join(swift_literal(item) for item in value) + "]"
    if value is None:
        return '""'
    text = str(value)
    if text.startswith("Color(") or _NUMERIC.match(text):
        return text
    return json.dumps(text, ensure_ascii=False)


def swift_class(tokens: List[TokenNode], context: FormatContext) -> str:
    """Emit a Swift class with one static constant per token field.

    Options:
        className: Class name (default ``Tokens``)
        accessControl: Access modifier for the class and members
    """
    access = context.options.get("accessControl") or ""
    if access:
        access += " "

    members = []
    for token in tokens:
        name = token.final_name or to_camel_case(token.path)
        for suffix, value in flatten_value(token.value):
            member = to_camel_case((name,) + suffix) if suffix else name
            members.append((member, swift_literal(value)))

    return render(
        SWIFT_TEMPLATE,
        "ios-swift/class.swift",
        header=context.header,
        destination=context.destination,
        access=access,
        class_name=context.options.get("className", "Tokens"),
        members=members,
    )


FORMATS: Dict[str, Any] = {
    "ios-swift/class.swift": swift_class,
}
