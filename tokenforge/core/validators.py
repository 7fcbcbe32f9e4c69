"""
TokenForge Core: Configuration Validators.

This module validates the merged build settings before any token is
loaded, so configuration mistakes fail fast with a precise message.
"""
import re
from pathlib import PurePosixPath
from typing import Any, Dict

from tokenforge.core.constants import ErrorCode

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
MATCH_MODES = ("all", "any", "none")
PATTERN_TYPES = ("glob", "regex")


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


def validate_build_settings(settings: Dict[str, Any]) -> bool:
    """Validate the ``tokenforge`` settings section.

    Args:
        settings: Merged settings mapping

    Returns:
        True if valid

    Raises:
        ValidationError: If settings are invalid
    """
    if not isinstance(settings, dict):
        raise ValidationError("Configuration must be a dictionary")

    source = settings.get("source")
    if not isinstance(source, str) or not source:
        raise ValidationError("Configuration must have a non-empty 'source' path")

    if not isinstance(settings.get("reserved_prefix", "$"), str):
        raise ValidationError("'reserved_prefix' must be a string")

    expected = settings.get("expected_collections", [])
    if not isinstance(expected, list) or not all(isinstance(name, str) for name in expected):
        raise ValidationError("'expected_collections' must be a list of names")

    validate_logging_config(settings.get("logging") or {})

    groups = settings.get("transform_groups") or {}
    if not isinstance(groups, dict):
        raise ValidationError("'transform_groups' must be a mapping")
    for name, members in groups.items():
        if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
            raise ValidationError(f"Transform group {name!r} must be a list of transform names")

    platforms = settings.get("platforms")
    if not isinstance(platforms, dict):
        raise ValidationError("'platforms' must be a mapping")

    for name, platform in platforms.items():
        if platform is None:
            continue
        try:
            validate_platform_config(platform)
        except ValidationError as e:
            raise ValidationError(f"Invalid platform {name!r}: {e}")

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    if not isinstance(logging_config, dict):
        raise ValidationError("'logging' must be a mapping")
    level = logging_config.get("level", "INFO")
    if str(level).upper() not in LOG_LEVELS:
        raise ValidationError(f"Invalid log level: {level}. Must be one of {list(LOG_LEVELS)}")
    return True


def validate_platform_config(platform: Dict[str, Any]) -> bool:
    """Validate one platform entry.

    Raises:
        ValidationError: If the platform is invalid
    """
    if not isinstance(platform, dict):
        raise ValidationError("Platform must be a dictionary")

    group = platform.get("transform_group")
    if not isinstance(group, str) or not group:
        raise ValidationError("Platform must have a 'transform_group'")

    prefix = platform.get("prefix")
    if prefix is not None and (not isinstance(prefix, str) or not re.match(r"^[A-Za-z0-9_-]*$", prefix)):
        raise ValidationError(f"Invalid prefix: {prefix!r}")

    if not isinstance(platform.get("build_path", ""), str):
        raise ValidationError("'build_path' must be a string")

    files = platform.get("files")
    if not isinstance(files, list) or not files:
        raise ValidationError("Platform must have a non-empty 'files' list")

    for i, file_config in enumerate(files):
        try:
            validate_file_config(file_config)
        except ValidationError as e:
            raise ValidationError(f"file at index {i}: {e}")

    return True


def validate_file_config(file_config: Dict[str, Any]) -> bool:
    if not isinstance(file_config, dict):
        raise ValidationError("File entry must be a dictionary")

    destination = file_config.get("destination")
    if not isinstance(destination, str) or not destination:
        raise ValidationError("File entry must have a 'destination'")
    if not validate_destination(destination):
        raise ValidationError(f"Destination must stay inside the build path: {destination}")

    if not isinstance(file_config.get("format"), str):
        raise ValidationError("File entry must have a 'format'")

    if not isinstance(file_config.get("options") or {}, dict):
        raise ValidationError("File 'options' must be a mapping")

    token_filter = file_config.get("filter")
    if token_filter is not None and not callable(token_filter):
        validate_filter_config(token_filter)

    return True


def validate_filter_config(token_filter: Dict[str, Any]) -> bool:
    """Validate a declarative filter mapping.

    Operators are checked when the filter is built.
    """
    if not isinstance(token_filter, dict):
        raise ValidationError("Filter must be a mapping")

    if token_filter.get("match", "all") not in MATCH_MODES:
        raise ValidationError(
            f"Invalid filter match: {token_filter.get('match')}. Must be one of {list(MATCH_MODES)}"
        )

    pattern_type = token_filter.get("pattern_type", "glob")
    if pattern_type not in PATTERN_TYPES:
        raise ValidationError(f"Invalid pattern type: {pattern_type}")

    for key in ("patterns", "exclude"):
        patterns = token_filter.get(key, [])
        if not isinstance(patterns, list):
            raise ValidationError(f"Filter '{key}' must be a list")
        for pattern in patterns:
            if not validate_pattern(pattern, pattern_type):
                raise ValidationError(f"Invalid pattern: {pattern}")

    conditions = token_filter.get("conditions", [])
    if not isinstance(conditions, list):
        raise ValidationError("Filter 'conditions' must be a list")
    for condition in conditions:
        if not isinstance(condition, dict) or not isinstance(condition.get("field"), str):
            raise ValidationError("Each filter condition needs a 'field'")

    return True


def validate_pattern(pattern: Any, pattern_type: str = "glob") -> bool:
    """Check a glob or regex pattern.

    Returns:
        True if the pattern is usable
    """
    if not isinstance(pattern, str) or not pattern:
        return False
    if pattern_type == "regex":
        try:
            re.compile(pattern)
        except re.error:
            return False
    return True


def validate_destination(destination: str) -> bool:
    """Check that a relative artifact path cannot escape its build path."""
    path = PurePosixPath(destination.replace("\\", "/"))
    if path.is_absolute():
        return False
    return ".." not in path.parts
