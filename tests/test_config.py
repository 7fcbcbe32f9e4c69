#!/usr/bin/env python3
"""Tests for the typed build configuration."""

from pathlib import Path

import pytest

from tokenforge.config import BuildConfig, FileConfig, PlatformConfig
from tokenforge.core.validators import ValidationError
from tokenforge.formats.base import FormatRegistry
from tokenforge.infrastructure.config_manager import ConfigManager
from tokenforge.rules.engine import FilterRule


def settings(**platform_overrides):
    platform = {
        "transform_group": "vibors/web",
        "build_path": "out",
        "files": [{"destination": "tokens.json", "format": "json/nested"}],
    }
    platform.update(platform_overrides)
    return {"source": "tokens.json", "platforms": {"web/json": platform}}


class TestFileConfig:
    """Tests for FileConfig."""

    def test_filter_mapping_becomes_rule(self):
        """Test declarative filters are built."""
        file_config = FileConfig.from_dict(
            {
                "destination": "colors.xml",
                "format": "android/colors",
                "filter": {"conditions": [{"field": "category", "operator": "eq", "value": "color"}]},
            }
        )

        assert isinstance(file_config.filter, FilterRule)
        assert file_config.options == {}

    def test_callable_filter_kept(self):
        """Test programmatic filters pass through."""
        predicate = lambda token: True  # noqa: E731
        file_config = FileConfig.from_dict({"destination": "a", "format": "json/nested", "filter": predicate})

        assert file_config.filter is predicate

    def test_bad_operator(self):
        """Test unknown operators surface as validation errors."""
        with pytest.raises(ValidationError, match="Invalid filter for a.css"):
            FileConfig.from_dict(
                {
                    "destination": "a.css",
                    "format": "css/variables",
                    "filter": {"conditions": [{"field": "category", "operator": "~", "value": 1}]},
                }
            )


class TestPlatformConfig:
    """Tests for PlatformConfig."""

    def test_from_dict(self):
        """Test fields and defaults."""
        platform = PlatformConfig.from_dict("web/css", settings(prefix="")["platforms"]["web/json"])

        assert platform.name == "web/css"
        assert platform.prefix is None
        assert platform.transform_options == {"platform": "web/css", "prefix": None}

    def test_output_path(self):
        """Test artifact paths under the build path."""
        platform = PlatformConfig.from_dict("web/json", settings()["platforms"]["web/json"])

        assert platform.output_path(platform.files[0], Path("/project")) == Path("/project/out/tokens.json")


class TestBuildConfig:
    """Tests for BuildConfig."""

    def test_defaults(self):
        """Test the compiled default build."""
        config = BuildConfig.from_manager(ConfigManager(load_environment=False), base_dir=Path("/project"))

        assert list(config.platforms) == [
            "web/css",
            "web/js",
            "web/json",
            "ios/swift",
            "android/xml",
            "android/compose",
        ]
        assert config.platforms["web/css"].prefix == "vbr"
        assert config.source_path == Path("/project/tokens/tokens.json")
        assert "07 - Grid" in config.expected_collections

    def test_null_platform_skipped(self):
        """Test platforms set to null are disabled."""
        data = settings()
        data["platforms"]["web/css"] = None

        assert list(BuildConfig.from_dict(data).platforms) == ["web/json"]

    def test_unknown_group(self):
        """Test unknown transform groups."""
        with pytest.raises(ValidationError, match="unknown transform group"):
            BuildConfig.from_dict(settings(transform_group="vibors/tv"))

    def test_unknown_format(self):
        """Test unknown formats."""
        with pytest.raises(ValidationError, match="unknown format"):
            BuildConfig.from_dict(settings(files=[{"destination": "a", "format": "scss/map"}]))

    def test_custom_format_registry(self):
        """Test formats registered by the caller are accepted."""
        formats = FormatRegistry.with_builtins()
        formats.register("text/count", lambda tokens, context: f"{len(tokens)}\n")

        config = BuildConfig.from_dict(
            settings(files=[{"destination": "count.txt", "format": "text/count"}]), formats=formats
        )

        assert config.formats is formats

    def test_custom_transform_group(self):
        """Test groups declared in settings."""
        data = settings(transform_group="plain")
        data["transform_groups"] = {"plain": ["attribute/cti", "name/cti/kebab"]}

        config = BuildConfig.from_dict(data)

        assert [t.name for t in config.transforms.get_group("plain")] == ["attribute/cti", "name/cti/kebab"]

    def test_custom_group_unknown_member(self):
        """Test groups naming unknown transforms."""
        data = settings()
        data["transform_groups"] = {"plain": ["size/huge"]}

        with pytest.raises(ValidationError, match="size/huge"):
            BuildConfig.from_dict(data)

    def test_escaping_destination(self):
        """Test destinations may not leave the build path."""
        with pytest.raises(ValidationError, match="inside the build path"):
            BuildConfig.from_dict(settings(files=[{"destination": "../x.json", "format": "json/nested"}]))

    def test_registries_per_config(self):
        """Test each configuration owns its registries."""
        first, second = BuildConfig.from_dict(settings()), BuildConfig.from_dict(settings())

        assert first.transforms is not second.transforms
        assert first.formats is not second.formats
