"""Pure value and name conversions used by the built-in transforms.

Numeric conversions raise UnsupportedTransformValue for inputs they cannot
read, which the transform machinery turns into a passthrough.
"""

import re
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from tokenforge.core.errors import UnsupportedTransformValue

_DIMENSION = re.compile(r"^\s*(-?(?:\d+(?:\.\d*)?|\.\d+))\s*(px)?\s*$")
_DURATION = re.compile(r"^\s*(-?(?:\d+(?:\.\d*)?|\.\d+))\s*(ms)?\s*$")
_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_WORD_SPLIT = re.compile(r"[^a-zA-Z0-9]+")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

Number = Union[int, float]


def trim_number(value: float, places: int) -> str:
    """Format with fixed places, then strip trailing zeros and dot."""
    text = f"{value:.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _read_number(value: Any, pattern: re.Pattern, what: str) -> float:
    if isinstance(value, bool):
        raise UnsupportedTransformValue(f"{value!r} is not a {what}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = pattern.match(value)
        if match:
            return float(match.group(1))
    raise UnsupportedTransformValue(f"{value!r} is not a {what}")


def px_to_rem(value: Any, base: float = 16.0) -> str:
    """Convert a pixel size to rem.

    Accepts numbers and ``"<n>"``/``"<n>px"`` strings; divides by the base
    font size, keeps at most 4 decimal places and strips trailing zeros.

    >>> px_to_rem(24)
    '1.5rem'
    """
    pixels = _read_number(value, _DIMENSION, "pixel size")
    return f"{trim_number(pixels / base, 4)}rem"


def ms_to_seconds(value: Any) -> str:
    """Convert milliseconds to seconds with 2 decimal places.

    >>> ms_to_seconds(300)
    '0.30s'
    """
    millis = _read_number(value, _DURATION, "duration")
    return f"{millis / 1000:.2f}s"


def to_unit(value: Any, unit: str) -> str:
    """Attach a density-independent unit (dp/sp) to a pixel size."""
    pixels = _read_number(value, _DIMENSION, "pixel size")
    return f"{trim_number(pixels, 4)}{unit}"


def convert_fields(value: Any, convert: Callable[[Any], Any], fields: Iterable[str]) -> Any:
    """Apply a scalar conversion to a value or to named composite sub-fields.

    Scalars go straight through ``convert``. For a composite, only the named
    sub-fields are converted and any the conversion cannot read stay as they are.

    >>> convert_fields({"fontSize": "24", "fontFamily": "Inter"}, px_to_rem, ["fontSize"])
    {'fontSize': '1.5rem', 'fontFamily': 'Inter'}
    """
    if not isinstance(value, dict):
        return convert(value)
    converted = dict(value)
    for key in fields:
        if key not in converted:
            continue
        try:
            converted[key] = convert(converted[key])
        except UnsupportedTransformValue:
            continue
    return converted


def percent_to_decimal(value: Any) -> Any:
    """Turn ``"50%"`` into ``0.5``; other values are returned untouched."""
    if isinstance(value, str) and value.strip().endswith("%"):
        try:
            return round(float(value.strip()[:-1]) / 100, 4)
        except ValueError:
            raise UnsupportedTransformValue(f"{value!r} is not a percentage")
    return value


def parse_hex_color(value: Any) -> Tuple[int, int, int, int]:
    """Parse #rgb, #rgba, #rrggbb or #rrggbbaa into 0-255 channels.

    Six-digit colors imply full opacity.
    """
    if not isinstance(value, str):
        raise UnsupportedTransformValue(f"{value!r} is not a hex color")
    match = _HEX_COLOR.match(value.strip())
    if not match:
        raise UnsupportedTransformValue(f"{value!r} is not a hex color")

    digits = match.group(1)
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits)
    if len(digits) == 6:
        digits += "ff"
    r, g, b, a = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
    return r, g, b, a


def hex_to_rgba_fractions(value: Any) -> Tuple[float, float, float, float]:
    """Normalize a hex color to per-channel fractions in [0, 1]."""
    return tuple(channel / 255 for channel in parse_hex_color(value))


def to_swift_color(value: Any) -> str:
    """SwiftUI initializer with 3-decimal channel fractions."""
    r, g, b, a = hex_to_rgba_fractions(value)
    return f"Color(red: {r:.3f}, green: {g:.3f}, blue: {b:.3f}, opacity: {a:.3f})"


def to_css_color(value: Any) -> str:
    """Lowercase #rrggbb, or rgba() when the color is translucent."""
    r, g, b, a = parse_hex_color(value)
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"rgba({r}, {g}, {b}, {trim_number(a / 255, 3)})"


def to_hex8_android(value: Any) -> str:
    """Android #AARRGGBB notation."""
    r, g, b, a = parse_hex_color(value)
    return f"#{a:02X}{r:02X}{g:02X}{b:02X}"


def split_words(path: Iterable[str]) -> List[str]:
    """Split path segments into words on separators and camelCase humps."""
    words: List[str] = []
    for segment in path:
        spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", str(segment))
        words.extend(w for w in _WORD_SPLIT.split(spaced) if w)
    return words


def _with_prefix(path: Iterable[str], prefix: Optional[str]) -> List[str]:
    segments = [str(s) for s in path]
    return [prefix] + segments if prefix else segments


def to_kebab_case(path: Iterable[str], prefix: Optional[str] = None) -> str:
    """``["color", "brand", "primary"]`` -> ``"color-brand-primary"``."""
    return "-".join(w.lower() for w in split_words(_with_prefix(path, prefix)))


def to_camel_case(path: Iterable[str], prefix: Optional[str] = None) -> str:
    """``["color", "brand", "primary"]`` -> ``"colorBrandPrimary"``.

    Words keep their inner casing; only the first letter of each word
    after the first is raised.
    """
    words = [w for w in _WORD_SPLIT.split(" ".join(_with_prefix(path, prefix))) if w]
    if not words:
        return ""
    head = words[0][0].lower() + words[0][1:]
    return head + "".join(w[0].upper() + w[1:] for w in words[1:])


def to_snake_case(path: Iterable[str], prefix: Optional[str] = None) -> str:
    """``["color", "brand", "primary"]`` -> ``"color_brand_primary"``.

    Any character outside [a-zA-Z0-9_] becomes an underscore.
    """
    joined = "_".join(_with_prefix(path, prefix))
    return re.sub(r"[^a-zA-Z0-9_]", "_", joined).lower()
