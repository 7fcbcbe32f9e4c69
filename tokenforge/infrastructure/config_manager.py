#!/usr/bin/env python3
"""Hierarchical configuration manager for TokenForge.

This module provides configuration management with:
- 5-level precedence hierarchy
- YAML configuration files
- Environment variable overrides
- Deep merge of nested mappings

The compiled defaults describe the complete Vibors build (web, iOS and
Android platforms), so a bare ``tokenforge build`` needs no config file.

Example:
    >>> config = ConfigManager()
    >>> config.load_file("tokenforge.yaml")
    >>> config.get("tokenforge.source", default="tokens/tokens.json")
"""

import copy
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from tokenforge.core.constants import (
    DEFAULT_EXPECTED_COLLECTIONS,
    MOTION_CATEGORIES,
    TYPOGRAPHY_CATEGORIES,
    Category,
    ErrorCode,
)

ENV_PREFIX = "TOKENFORGE_"
ENV_NESTING = "__"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    CLI_ARGS = 4
    RUNTIME = 5  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


def _category_filter(*categories: str) -> Dict[str, Any]:
    return {"conditions": [{"field": "category", "operator": "in", "value": list(categories)}]}


def _swift_file(destination: str, class_name: str, *categories: str) -> Dict[str, Any]:
    return {
        "destination": destination,
        "format": "ios-swift/class.swift",
        "filter": _category_filter(*categories),
        "options": {"className": class_name, "accessControl": "public"},
    }


class ConfigManager:
    """Hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. User config file (tokenforge.yaml)
    3. Environment variables (TOKENFORGE_*)
    4. CLI arguments
    5. Runtime updates (highest)
    """

    DEFAULT_CONFIG = {
        "tokenforge": {
            "source": "tokens/tokens.json",
            "reserved_prefix": "$",
            "expected_collections": list(DEFAULT_EXPECTED_COLLECTIONS),
            "logging": {
                "level": "INFO",
                "file": None,
            },
            "transform_groups": {},
            "platforms": {
                "web/css": {
                    "transform_group": "vibors/web",
                    "prefix": "vbr",
                    "build_path": "build/web/",
                    "files": [
                        {
                            "destination": "tokens.css",
                            "format": "css/variables",
                            "options": {"outputReferences": True, "selector": ":root"},
                        },
                        {
                            "destination": "tokens.dark.css",
                            "format": "css/variables",
                            "filter": {
                                "match": "any",
                                "conditions": [
                                    {"field": "collection", "operator": "icontains", "value": "semantic"},
                                    {"field": "collection", "operator": "icontains", "value": "component"},
                                ],
                            },
                            "options": {
                                "outputReferences": True,
                                "selector": '[data-theme="dark"]',
                            },
                        },
                    ],
                },
                "web/js": {
                    "transform_group": "vibors/web",
                    "build_path": "build/web/",
                    "files": [
                        {"destination": "tokens.js", "format": "javascript/es6"},
                        {"destination": "tokens.d.ts", "format": "typescript/es6-declarations"},
                    ],
                },
                "web/json": {
                    "transform_group": "vibors/web",
                    "build_path": "build/web/",
                    "files": [{"destination": "tokens.json", "format": "json/nested"}],
                },
                "ios/swift": {
                    "transform_group": "vibors/ios",
                    "build_path": "build/ios/",
                    "files": [
                        _swift_file("ViborsTokens+Colors.swift", "ViborsColors", Category.COLOR),
                        _swift_file(
                            "ViborsTokens+Spacing.swift",
                            "ViborsSpacing",
                            Category.SPACING,
                            Category.SIZING,
                        ),
                        _swift_file(
                            "ViborsTokens+Typography.swift",
                            "ViborsTypography",
                            *TYPOGRAPHY_CATEGORIES,
                        ),
                        _swift_file(
                            "ViborsTokens+Radius.swift", "ViborsRadius", Category.BORDER_RADIUS
                        ),
                        _swift_file(
                            "ViborsTokens+Motion.swift", "ViborsMotion", *MOTION_CATEGORIES
                        ),
                    ],
                },
                "android/xml": {
                    "transform_group": "vibors/android",
                    "build_path": "build/android/",
                    "files": [
                        {
                            "destination": "res/values/vibors_colors.xml",
                            "format": "android/colors",
                            "filter": _category_filter(Category.COLOR),
                        },
                        {
                            "destination": "res/values/vibors_dimens.xml",
                            "format": "android/dimens",
                            "filter": _category_filter(
                                Category.SPACING, Category.SIZING, Category.BORDER_RADIUS
                            ),
                        },
                        {
                            "destination": "res/values/vibors_strings.xml",
                            "format": "android/strings",
                            "filter": _category_filter(Category.FONT_FAMILY, Category.EASING),
                        },
                    ],
                },
                "android/compose": {
                    "transform_group": "vibors/android",
                    "build_path": "build/android/",
                    "files": [
                        {
                            "destination": "ViborsTokens.kt",
                            "format": "android/compose",
                            "options": {
                                "packageName": "com.vibors.design.tokens",
                                "objectName": "ViborsTokens",
                            },
                        }
                    ],
                },
            },
        }
    }

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            load_environment: Read TOKENFORGE_* environment variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}

        # Initialize with defaults
        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        # Bare settings files may omit the top-level key
        if "tokenforge" not in config_data:
            config_data = {"tokenforge": config_data}

        self._config[source] = config_data

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Environment variables in format: TOKENFORGE_SECTION__KEY=value
        Example: TOKENFORGE_LOGGING__LEVEL=DEBUG
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split(ENV_NESTING)

            # Build nested dictionary
            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            self._config[ConfigSource.ENVIRONMENT] = {"tokenforge": env_config}

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            Parsed value (int, float, bool, or str)
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "tokenforge.logging.level")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._get_nested(self.get_all(), key)
        return default if value is None else value

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        """Get value from nested dictionary using dot notation.

        Platform names contain slashes but no dots, so dot splitting is safe.
        """
        current: Any = config

        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            if part not in current:
                return None
            current = current[part]

        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        current = self._config.setdefault(source, {})
        parts = key.split(".")

        for part in parts[:-1]:
            current = current.setdefault(part, {})

        current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        merged: Dict[str, Any] = {}

        # Merge from lowest to highest precedence
        for source in sorted(self._config.keys(), key=lambda s: s.value):
            merged = self._deep_merge(merged, self._config[source])

        return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        if source:
            if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                del self._config[source]
        else:
            for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                del self._config[s]
