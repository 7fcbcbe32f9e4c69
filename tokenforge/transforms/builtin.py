#!/usr/bin/env python3
"""Built-in transforms and transform groups.

Attribute transforms:
- attribute/cti: category/type/item/subitem/state from type and path

Name transforms:
- name/cti/kebab, name/swift/camelCase, name/android/snakeCase

Value transforms:
- size/pxToRem, size/dp, size/sp, time/msToSeconds, opacity/percent
  (pxToRem and sp also convert the size fields of typography composites)
- color/css, color/swift, color/hex8android

Every call to builtin_transforms() returns fresh instances, so statistics
never leak between builds.
"""

from typing import Any, Dict, List, Optional

from tokenforge.core.constants import (
    CTI_FIELDS,
    DIMENSION_CATEGORIES,
    GENERIC_TYPES,
    PATH_CATEGORIES,
    REM_CATEGORIES,
    TYPE_CATEGORIES,
    TYPOGRAPHY_DIMENSION_FIELDS,
    Category,
)
from tokenforge.tokens.models import TokenNode
from tokenforge.transforms import conversions
from tokenforge.transforms.base import FunctionTransform, Matcher, Transform, TransformKind

WEB_GROUP = "vibors/web"
IOS_GROUP = "vibors/ios"
ANDROID_GROUP = "vibors/android"

# Attribute transforms lead each group so matchers see categories
BUILTIN_GROUPS: Dict[str, List[str]] = {
    WEB_GROUP: [
        "attribute/cti",
        "name/cti/kebab",
        "opacity/percent",
        "size/pxToRem",
        "color/css",
    ],
    IOS_GROUP: [
        "attribute/cti",
        "name/swift/camelCase",
        "opacity/percent",
        "color/swift",
        "time/msToSeconds",
    ],
    ANDROID_GROUP: [
        "attribute/cti",
        "name/android/snakeCase",
        "opacity/percent",
        "color/hex8android",
        "size/dp",
        "size/sp",
    ],
}


def category_in(*categories: str) -> Matcher:
    """Matcher accepting tokens whose category is one of the given ones."""
    accepted = frozenset(categories)

    def matcher(attributes: Dict[str, Any]) -> bool:
        return attributes.get("category") in accepted

    return matcher


def infer_category(token: TokenNode) -> Optional[str]:
    """Work out a token's category.

    An explicit, specific type wins. Otherwise the first path segment
    that names a known category decides; failing that, the top-level
    path segment is used as-is.
    """
    token_type = token.token_type
    if token_type and token_type not in GENERIC_TYPES:
        if token_type in TYPE_CATEGORIES:
            return TYPE_CATEGORIES[token_type]

    for segment in token.path:
        category = PATH_CATEGORIES.get(segment.lower())
        if category:
            return category

    if token_type and token_type not in GENERIC_TYPES:
        return token_type
    return token.path[0] if token.path else None


def cti_attributes(token: TokenNode, options: Dict[str, Any]) -> Dict[str, Any]:
    attributes: Dict[str, Any] = {"category": infer_category(token)}
    for field, segment in zip(CTI_FIELDS, token.path[1:]):
        attributes[field] = segment
    return attributes


def kebab_name(token: TokenNode, options: Dict[str, Any]) -> str:
    return conversions.to_kebab_case(token.path, options.get("prefix"))


def camel_name(token: TokenNode, options: Dict[str, Any]) -> str:
    return conversions.to_camel_case(token.path, options.get("prefix"))


def snake_name(token: TokenNode, options: Dict[str, Any]) -> str:
    return conversions.to_snake_case(token.path, options.get("prefix"))


def _value(function):
    def transform(token: TokenNode, options: Dict[str, Any]) -> Any:
        return function(token.value)

    transform.__name__ = function.__name__
    return transform


def _dimensions(convert):
    def transform(token: TokenNode, options: Dict[str, Any]) -> Any:
        return conversions.convert_fields(token.value, convert, TYPOGRAPHY_DIMENSION_FIELDS)

    transform.__name__ = convert.__name__
    return transform


def _sp(value: Any) -> str:
    return conversions.to_unit(value, "sp")


def builtin_transforms() -> List[Transform]:
    """Create the built-in transform set."""
    return [
        FunctionTransform("attribute/cti", TransformKind.ATTRIBUTE, cti_attributes),
        FunctionTransform("name/cti/kebab", TransformKind.NAME, kebab_name),
        FunctionTransform("name/swift/camelCase", TransformKind.NAME, camel_name),
        FunctionTransform("name/android/snakeCase", TransformKind.NAME, snake_name),
        FunctionTransform(
            "size/pxToRem",
            TransformKind.VALUE,
            _dimensions(conversions.px_to_rem),
            category_in(*REM_CATEGORIES, Category.TYPOGRAPHY),
        ),
        FunctionTransform(
            "size/dp",
            TransformKind.VALUE,
            lambda token, options: conversions.to_unit(token.value, "dp"),
            category_in(*DIMENSION_CATEGORIES),
        ),
        FunctionTransform(
            "size/sp",
            TransformKind.VALUE,
            _dimensions(_sp),
            category_in(Category.FONT_SIZE, Category.TYPOGRAPHY),
        ),
        FunctionTransform(
            "time/msToSeconds",
            TransformKind.VALUE,
            _value(conversions.ms_to_seconds),
            category_in(Category.DURATION),
        ),
        FunctionTransform(
            "opacity/percent",
            TransformKind.VALUE,
            _value(conversions.percent_to_decimal),
            category_in(Category.OPACITY),
        ),
        FunctionTransform(
            "color/css",
            TransformKind.VALUE,
            _value(conversions.to_css_color),
            category_in(Category.COLOR),
        ),
        FunctionTransform(
            "color/swift",
            TransformKind.VALUE,
            _value(conversions.to_swift_color),
            category_in(Category.COLOR),
        ),
        FunctionTransform(
            "color/hex8android",
            TransformKind.VALUE,
            _value(conversions.to_hex8_android),
            category_in(Category.COLOR),
        ),
    ]
