"""
TokenForge Core: Constants and Type Definitions

This module provides system-wide constants, error codes, and the category
vocabulary shared by the loader, the transforms and the formats.
"""
from enum import IntEnum
from typing import Dict, Tuple, TypeAlias

# Version information
TOKENFORGE_VERSION = "1.0.0"


class ErrorCode(IntEnum):
    """Standardized error codes for TokenForge operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Malformed document or configuration
    NOT_FOUND = 2  # File or referenced token doesn't exist
    PERMISSION_DENIED = 3  # Cannot write artifact
    CONFLICT = 4  # Conflicting token paths
    DEPENDENCY_ERROR = 5  # Reference cycle or unresolvable alias
    INTERNAL_ERROR = 6  # Bug in TokenForge


# Type aliases for clarity
TokenPath: TypeAlias = Tuple[str, ...]
CollectionName: TypeAlias = str
FormatName: TypeAlias = str
TransformName: TypeAlias = str


class DocumentKey:
    """Well-known keys of the token document."""

    RESERVED_PREFIX = "$"  # $themes, $metadata, $type on groups
    VALUE_KEYS = ("value", "$value")
    TYPE_KEYS = ("type", "$type")
    DESCRIPTION_KEYS = ("description", "$description")


# Collections the original Tokens Studio export is expected to contain
DEFAULT_EXPECTED_COLLECTIONS = (
    "01 - Primitives",
    "02 - Semantic",
    "03 - Components",
    "03 - Spacing",
    "04 - Typography",
    "05 - Platform",
    "06 - Radius",
    "07 - Grid",
    "08 - Layout",
    "09 - Stroke",
    "10 - Opacity",
    "11 - Motion & Effects",
)


class Category:
    """Token categories used by transform matchers and file filters."""

    COLOR = "color"
    SPACING = "spacing"
    SIZING = "sizing"
    BORDER_RADIUS = "borderRadius"
    BORDER_WIDTH = "borderWidth"
    FONT_SIZE = "fontSize"
    FONT_WEIGHT = "fontWeight"
    LINE_HEIGHT = "lineHeight"
    FONT_FAMILY = "fontFamily"
    LETTER_SPACING = "letterSpacing"
    TYPOGRAPHY = "typography"
    OPACITY = "opacity"
    DURATION = "duration"
    EASING = "easing"
    SHADOW = "boxShadow"


# Explicit token types (Tokens Studio vocabulary) to categories
TYPE_CATEGORIES: Dict[str, str] = {
    "color": Category.COLOR,
    "spacing": Category.SPACING,
    "sizing": Category.SIZING,
    "borderRadius": Category.BORDER_RADIUS,
    "borderWidth": Category.BORDER_WIDTH,
    "fontSizes": Category.FONT_SIZE,
    "fontSize": Category.FONT_SIZE,
    "fontWeights": Category.FONT_WEIGHT,
    "fontWeight": Category.FONT_WEIGHT,
    "lineHeights": Category.LINE_HEIGHT,
    "lineHeight": Category.LINE_HEIGHT,
    "fontFamilies": Category.FONT_FAMILY,
    "fontFamily": Category.FONT_FAMILY,
    "letterSpacing": Category.LETTER_SPACING,
    "typography": Category.TYPOGRAPHY,
    "opacity": Category.OPACITY,
    "duration": Category.DURATION,
    "easing": Category.EASING,
    "cubicBezier": Category.EASING,
    "boxShadow": Category.SHADOW,
    "shadow": Category.SHADOW,
}

# Types that say nothing about the category; the path decides instead
GENERIC_TYPES = frozenset({"dimension", "number", "other", "string", "text"})

# Path segments recognised by the naming convention
PATH_CATEGORIES: Dict[str, str] = {
    "color": Category.COLOR,
    "colors": Category.COLOR,
    "spacing": Category.SPACING,
    "space": Category.SPACING,
    "size": Category.SIZING,
    "sizes": Category.SIZING,
    "sizing": Category.SIZING,
    "radius": Category.BORDER_RADIUS,
    "radii": Category.BORDER_RADIUS,
    "borderradius": Category.BORDER_RADIUS,
    "stroke": Category.BORDER_WIDTH,
    "borderwidth": Category.BORDER_WIDTH,
    "fontsize": Category.FONT_SIZE,
    "fontweight": Category.FONT_WEIGHT,
    "lineheight": Category.LINE_HEIGHT,
    "fontfamily": Category.FONT_FAMILY,
    "letterspacing": Category.LETTER_SPACING,
    "typography": Category.TYPOGRAPHY,
    "opacity": Category.OPACITY,
    "duration": Category.DURATION,
    "easing": Category.EASING,
    "shadow": Category.SHADOW,
}

# Positional attribute names after the category (category/type/item/...)
CTI_FIELDS = ("type", "item", "subitem", "state")

# Category groups shared by the default platform configuration
DIMENSION_CATEGORIES = (
    Category.SPACING,
    Category.SIZING,
    Category.BORDER_RADIUS,
    Category.BORDER_WIDTH,
)
REM_CATEGORIES = (
    Category.SPACING,
    Category.FONT_SIZE,
    Category.LINE_HEIGHT,
    Category.BORDER_RADIUS,
    Category.SIZING,
)
TYPOGRAPHY_CATEGORIES = (
    Category.FONT_SIZE,
    Category.FONT_WEIGHT,
    Category.LINE_HEIGHT,
    Category.FONT_FAMILY,
)
MOTION_CATEGORIES = (Category.DURATION, Category.EASING)
# Typography sub-fields holding pixel sizes
TYPOGRAPHY_DIMENSION_FIELDS = ("fontSize", "lineHeight", "letterSpacing", "paragraphSpacing")

GENERATED_HEADER = "Do not edit directly, this file was auto-generated."
