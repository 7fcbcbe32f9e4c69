#!/usr/bin/env python3
"""Tests for the ConfigManager module."""

from pathlib import Path

import pytest
import yaml

from tokenforge.core.constants import ErrorCode
from tokenforge.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_precedence_order(self):
        """Test config source precedence ordering."""
        sources = [
            ConfigSource.COMPILED_DEFAULTS,
            ConfigSource.USER_CONFIG,
            ConfigSource.ENVIRONMENT,
            ConfigSource.CLI_ARGS,
            ConfigSource.RUNTIME,
        ]

        for i in range(len(sources) - 1):
            assert sources[i].value < sources[i + 1].value


class TestDefaults:
    """Tests for compiled defaults."""

    def test_default_source(self):
        """Test default token document path."""
        config = ConfigManager(load_environment=False)

        assert config.get("tokenforge.source") == "tokens/tokens.json"

    def test_default_platforms(self):
        """Test the six default platforms."""
        config = ConfigManager(load_environment=False)
        platforms = config.get("tokenforge.platforms")

        assert list(platforms) == [
            "web/css",
            "web/js",
            "web/json",
            "ios/swift",
            "android/xml",
            "android/compose",
        ]

    def test_default_css_files(self):
        """Test light and dark CSS artifacts."""
        config = ConfigManager(load_environment=False)
        files = config.get("tokenforge.platforms")["web/css"]["files"]

        assert [f["destination"] for f in files] == ["tokens.css", "tokens.dark.css"]
        assert files[1]["options"]["selector"] == '[data-theme="dark"]'
        assert files[1]["filter"]["match"] == "any"

    def test_default_swift_files(self):
        """Test five Swift class files."""
        config = ConfigManager(load_environment=False)
        files = config.get("tokenforge.platforms")["ios/swift"]["files"]

        assert len(files) == 5
        assert files[0]["options"] == {"className": "ViborsColors", "accessControl": "public"}

    def test_get_default_value(self):
        """Test default for missing key."""
        config = ConfigManager(load_environment=False)

        assert config.get("tokenforge.missing", default="x") == "x"


class TestLoadFile:
    """Tests for YAML file loading."""

    def test_load_file_overrides_defaults(self, temp_dir):
        """Test user config overrides compiled defaults."""
        path = temp_dir / "tokenforge.yaml"
        path.write_text(yaml.safe_dump({"tokenforge": {"source": "design/tokens.yaml"}}))

        config = ConfigManager(str(path), load_environment=False)

        assert config.get("tokenforge.source") == "design/tokens.yaml"
        assert config.get("tokenforge.reserved_prefix") == "$"

    def test_bare_settings_are_wrapped(self, temp_dir):
        """Test files may omit the top-level key."""
        path = temp_dir / "tokenforge.yaml"
        path.write_text(yaml.safe_dump({"source": "other.json"}))

        config = ConfigManager(str(path), load_environment=False)

        assert config.get("tokenforge.source") == "other.json"

    def test_platform_deep_merge(self, temp_dir):
        """Test nested platform settings merge with defaults."""
        path = temp_dir / "tokenforge.yaml"
        path.write_text(
            yaml.safe_dump({"tokenforge": {"platforms": {"web/css": {"prefix": "acme"}}}})
        )

        config = ConfigManager(str(path), load_environment=False)
        platform = config.get("tokenforge.platforms")["web/css"]

        assert platform["prefix"] == "acme"
        assert platform["transform_group"] == "vibors/web"

    def test_null_platform(self, temp_dir):
        """Test a platform can be switched off."""
        path = temp_dir / "tokenforge.yaml"
        path.write_text("tokenforge:\n  platforms:\n    android/compose: null\n")

        config = ConfigManager(str(path), load_environment=False)

        assert config.get("tokenforge.platforms")["android/compose"] is None

    def test_missing_file(self, temp_dir):
        """Test missing config file."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(str(temp_dir / "nope.yaml"), load_environment=False)

        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_invalid_yaml(self, temp_dir):
        """Test unparsable YAML."""
        path = temp_dir / "bad.yaml"
        path.write_text("tokenforge: [unclosed")

        with pytest.raises(ConfigError, match="YAML parse error"):
            ConfigManager(str(path), load_environment=False)

    def test_non_mapping(self, temp_dir):
        """Test YAML that is not a mapping."""
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="Invalid config format"):
            ConfigManager(str(path), load_environment=False)


class TestEnvironment:
    """Tests for environment overrides."""

    def test_environment_override(self, monkeypatch):
        """Test TOKENFORGE_ variables with nesting."""
        monkeypatch.setenv("TOKENFORGE_LOGGING__LEVEL", "DEBUG")
        monkeypatch.setenv("TOKENFORGE_SOURCE", "env.json")

        config = ConfigManager()

        assert config.get("tokenforge.logging.level") == "DEBUG"
        assert config.get("tokenforge.source") == "env.json"

    def test_parse_env_value(self):
        """Test environment value coercion."""
        config = ConfigManager(load_environment=False)

        assert config._parse_env_value("true") is True
        assert config._parse_env_value("no") is False
        assert config._parse_env_value("42") == 42
        assert config._parse_env_value("1.5") == 1.5
        assert config._parse_env_value("text") == "text"

    def test_cli_beats_environment(self, monkeypatch):
        """Test CLI level outranks environment."""
        monkeypatch.setenv("TOKENFORGE_SOURCE", "env.json")
        config = ConfigManager()
        config.load_dict({"tokenforge": {"source": "cli.json"}}, ConfigSource.CLI_ARGS)

        assert config.get("tokenforge.source") == "cli.json"


class TestSetAndClear:
    """Tests for runtime updates."""

    def test_set_runtime(self):
        """Test runtime values have highest precedence."""
        config = ConfigManager(load_environment=False)
        config.set("tokenforge.source", "runtime.json")

        assert config.get("tokenforge.source") == "runtime.json"

    def test_lists_replace(self):
        """Test lists are replaced, not merged."""
        config = ConfigManager(load_environment=False)
        config.set("tokenforge.expected_collections", ["Only"])

        assert config.get("tokenforge.expected_collections") == ["Only"]

    def test_clear_keeps_defaults(self):
        """Test clear removes everything but defaults."""
        config = ConfigManager(load_environment=False)
        config.set("tokenforge.source", "runtime.json")
        config.clear()

        assert config.get("tokenforge.source") == "tokens/tokens.json"

    def test_defaults_not_mutated(self):
        """Test merged views are copies."""
        config = ConfigManager(load_environment=False)
        config.get_all()["tokenforge"]["source"] = "changed"

        assert ConfigManager.DEFAULT_CONFIG["tokenforge"]["source"] == "tokens/tokens.json"
