#!/usr/bin/env python3
"""Typed build configuration.

The ConfigManager yields a merged settings mapping; this module validates
it and turns it into the objects the builder works with:
- FileConfig: destination, format, filter and options of one artifact
- PlatformConfig: transform group, prefix, build path and files
- BuildConfig: source, platforms and the transform/format registries

Example:
    >>> config = BuildConfig.from_manager(ConfigManager("tokenforge.yaml"))
    >>> list(config.platforms)
    ['web/css', 'web/js', 'web/json', 'ios/swift', 'android/xml', 'android/compose']
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from tokenforge.core.constants import DEFAULT_EXPECTED_COLLECTIONS, DocumentKey
from tokenforge.core.errors import TransformError
from tokenforge.core.validators import ValidationError, validate_build_settings
from tokenforge.formats.base import FormatRegistry
from tokenforge.infrastructure.config_manager import ConfigManager
from tokenforge.rules.engine import FilterRule, TokenFilter
from tokenforge.transforms.registry import TransformRegistry


@dataclass
class FileConfig:
    """One output artifact of a platform."""

    destination: str
    format: str
    filter: Optional[TokenFilter] = None
    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileConfig":
        """Build from a settings mapping; filter mappings become FilterRules.

        Raises:
            ValidationError: If the filter uses an unknown operator or mode
        """
        token_filter = data.get("filter")
        if isinstance(token_filter, dict):
            try:
                token_filter = FilterRule.from_dict(token_filter)
            except (KeyError, ValueError) as e:
                raise ValidationError(f"Invalid filter for {data['destination']}: {e}")
        return cls(
            destination=data["destination"],
            format=data["format"],
            filter=token_filter,
            options=dict(data.get("options") or {}),
        )


@dataclass
class PlatformConfig:
    """A named output target."""

    name: str
    transform_group: str
    files: List[FileConfig] = field(default_factory=list)
    build_path: str = ""
    prefix: Optional[str] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "PlatformConfig":
        return cls(
            name=name,
            transform_group=data["transform_group"],
            files=[FileConfig.from_dict(f) for f in data["files"]],
            build_path=data.get("build_path") or "",
            prefix=data.get("prefix") or None,
        )

    @property
    def transform_options(self) -> Dict[str, Any]:
        """Options handed to every transform of this platform."""
        return {"platform": self.name, "prefix": self.prefix}

    def output_path(self, file_config: FileConfig, base_dir: Path) -> Path:
        return base_dir / self.build_path / file_config.destination


@dataclass
class BuildConfig:
    """Everything one build run needs, with its own registries."""

    source: str
    platforms: Dict[str, PlatformConfig] = field(default_factory=dict)
    transforms: TransformRegistry = field(default_factory=TransformRegistry.with_builtins)
    formats: FormatRegistry = field(default_factory=FormatRegistry.with_builtins)
    reserved_prefix: str = DocumentKey.RESERVED_PREFIX
    expected_collections: List[str] = field(default_factory=lambda: list(DEFAULT_EXPECTED_COLLECTIONS))
    base_dir: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_dict(
        cls,
        settings: Dict[str, Any],
        base_dir: Optional[Path] = None,
        transforms: Optional[TransformRegistry] = None,
        formats: Optional[FormatRegistry] = None,
    ) -> "BuildConfig":
        """Validate settings and build the configuration.

        Platforms set to null are skipped. Custom transform groups are
        registered on top of the built-in ones.

        Args:
            settings: The ``tokenforge`` settings section
            base_dir: Directory relative paths are resolved against
            transforms: Registry to use (default: fresh built-ins)
            formats: Registry to use (default: fresh built-ins)

        Raises:
            ValidationError: If settings are invalid or name unknown
                transforms, transform groups or formats
        """
        validate_build_settings(settings)

        transforms = transforms or TransformRegistry.with_builtins()
        formats = formats or FormatRegistry.with_builtins()

        for group, members in (settings.get("transform_groups") or {}).items():
            try:
                transforms.register_group(group, members)
            except TransformError as e:
                raise ValidationError(e.message)

        platforms: Dict[str, PlatformConfig] = {}
        for name, data in settings["platforms"].items():
            if data is None:
                continue
            platform = PlatformConfig.from_dict(name, data)
            if not transforms.has_group(platform.transform_group):
                raise ValidationError(
                    f"Platform {name!r} uses unknown transform group {platform.transform_group!r}"
                )
            for file_config in platform.files:
                if file_config.format not in formats:
                    raise ValidationError(
                        f"Platform {name!r} uses unknown format {file_config.format!r}"
                    )
            platforms[name] = platform

        return cls(
            source=settings["source"],
            platforms=platforms,
            transforms=transforms,
            formats=formats,
            reserved_prefix=settings.get("reserved_prefix", DocumentKey.RESERVED_PREFIX),
            expected_collections=list(
                settings.get("expected_collections", DEFAULT_EXPECTED_COLLECTIONS)
            ),
            base_dir=base_dir or Path.cwd(),
        )

    @classmethod
    def from_manager(cls, manager: ConfigManager, base_dir: Optional[Path] = None) -> "BuildConfig":
        return cls.from_dict(manager.get("tokenforge", {}), base_dir=base_dir)

    @property
    def source_path(self) -> Path:
        return self.base_dir / self.source
