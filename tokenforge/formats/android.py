#!/usr/bin/env python3
"""Android format emitters.

- android/colors, android/dimens, android/strings: XML resource files
  keyed by the token's final name
- android/compose: one Kotlin object with nested objects per category

Composite tokens contribute one resource (or property) per sub-field.
"""

import json
import re
from typing import Any, Callable, Dict, List, Tuple

from markupsafe import Markup

from tokenforge.core.constants import Category
from tokenforge.formats.base import FormatContext, flatten_value, render, scalar_text
from tokenforge.tokens.models import TokenNode
from tokenforge.transforms.conversions import to_camel_case, to_snake_case

_HEX8 = re.compile(r"^#([0-9A-Fa-f]{8})$")
_DENSITY = re.compile(r"^(-?(?:\d+(?:\.\d*)?|\.\d+))(dp|sp)$")

XML_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>

<!--
  {{ header }}
-->
<resources>
{% for name, value in resources %}
  <{{ element }} name="{{ name }}">{{ value }}</{{ element }}>
{% endfor %}
</resources>
"""

KOTLIN_TEMPLATE = """\
//
// {{ destination }}
//
// {{ header }}
//

package {{ package_name }}

import androidx.compose.ui.graphics.Color
import androidx.compose.ui.unit.dp
import androidx.compose.ui.unit.sp

object {{ object_name }} {
{% for group_name, members in groups %}

    object {{ group_name }} {
{% for name, value in members %}
        val {{ name }} = {{ value }}
{% endfor %}
    }
{% endfor %}
}
"""

# Category to nested Kotlin object; order here is emission order
COMPOSE_GROUPS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Colors", (Category.COLOR,)),
    ("Spacing", (Category.SPACING, Category.SIZING)),
    ("Radius", (Category.BORDER_RADIUS,)),
    ("Stroke", (Category.BORDER_WIDTH,)),
    (
        "Typography",
        (
            Category.TYPOGRAPHY,
            Category.FONT_SIZE,
            Category.FONT_WEIGHT,
            Category.LINE_HEIGHT,
            Category.FONT_FAMILY,
            Category.LETTER_SPACING,
        ),
    ),
    ("Opacity", (Category.OPACITY,)),
    ("Motion", (Category.DURATION, Category.EASING)),
    ("Effects", (Category.SHADOW,)),
)
OTHER_GROUP = "Other"


def _resource_name(token: TokenNode) -> str:
    return token.final_name or to_snake_case(token.path)


def android_string(text: str) -> Markup:
    """Escape text for a <string> resource.

    XML markup characters become entities; backslashes and quotes get the
    backslash escapes aapt requires, as does a leading @ or ?.

    >>> android_string("Don't")
    Markup("Don\\\\'t")
    """
    text = text.replace("\\", "\\\\")
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    text = text.replace("'", "\\'").replace('"', '\\"')
    if text.startswith(("@", "?")):
        text = "\\" + text
    return Markup(text)


def _resources(tokens: List[TokenNode], escape: Callable[[str], Any] = str) -> List[Tuple[str, Any]]:
    resources = []
    for token in tokens:
        name = _resource_name(token)
        for suffix, value in flatten_value(token.value):
            resource = to_snake_case((name,) + suffix) if suffix else name
            resources.append((resource, escape(scalar_text(value))))
    return resources


def _resource_formatter(element: str, format_name: str):
    escape = android_string if element == "string" else str

    def formatter(tokens: List[TokenNode], context: FormatContext) -> str:
        return render(
            XML_TEMPLATE,
            format_name,
            autoescape=True,
            header=context.header,
            element=element,
            resources=_resources(tokens, escape),
        )

    formatter.__name__ = f"android_{element}s"
    formatter.__doc__ = f"Emit an Android <{element}> resource file."
    return formatter


def kotlin_literal(value: Any) -> str:
    """Render a scalar as a Compose-friendly Kotlin expression."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, list):
        return "listOf(" + ", ".join(kotlin_literal(item) for item in value) + ")"
    if value is None:
        return '""'
    text = str(value)
    color = _HEX8.match(text)
    if color:
        return f"Color(0x{color.group(1).upper()})"
    density = _DENSITY.match(text)
    if density:
        return f"{density.group(1)}.{density.group(2)}"
    return json.dumps(text, ensure_ascii=False).replace("$", "\\$")


def _compose_group(token: TokenNode) -> str:
    for group_name, categories in COMPOSE_GROUPS:
        if token.category in categories:
            return group_name
    return OTHER_GROUP


def android_compose(tokens: List[TokenNode], context: FormatContext) -> str:
    """Emit a Kotlin object for Jetpack Compose.

    Options:
        packageName: Kotlin package (default ``com.example.tokens``)
        objectName: Outer object name (default ``Tokens``)
    """
    grouped: Dict[str, List[Tuple[str, str]]] = {}
    for token in tokens:
        name = to_camel_case(_resource_name(token).split("_"))
        members = grouped.setdefault(_compose_group(token), [])
        for suffix, value in flatten_value(token.value):
            member = to_camel_case((name,) + suffix) if suffix else name
            members.append((member, kotlin_literal(value)))

    order = [group_name for group_name, _ in COMPOSE_GROUPS] + [OTHER_GROUP]
    groups = [(group_name, grouped[group_name]) for group_name in order if group_name in grouped]

    return render(
        KOTLIN_TEMPLATE,
        "android/compose",
        header=context.header,
        destination=context.destination,
        package_name=context.options.get("packageName", "com.example.tokens"),
        object_name=context.options.get("objectName", "Tokens"),
        groups=groups,
    )


FORMATS: Dict[str, Any] = {
    "android/colors": _resource_formatter("color", "android/colors"),
    "android/dimens": _resource_formatter("dimen", "android/dimens"),
    "android/strings": _resource_formatter("string", "android/strings"),
    "android/compose": android_compose,
}
