#!/usr/bin/env python3
"""Tests for the command-line interface."""

import json

import pytest
import yaml

from tokenforge.cli import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    EXIT_USAGE,
    CLIError,
    build_config_from_args,
    load_configuration,
    main,
    parse_arguments,
)


def write_config(temp_dir, settings):
    path = temp_dir / "custom.yaml"
    path.write_text(yaml.safe_dump({"tokenforge": settings}), encoding="utf-8")
    return str(path)


class TestParseArguments:
    """Test argument parsing."""

    def test_default_command(self):
        """Test a bare invocation builds."""
        args = parse_arguments([])

        assert args.command == "build"
        assert args.source is None
        assert args.platforms is None

    def test_build_options(self):
        """Test source and repeated platforms."""
        args = parse_arguments(["build", "-s", "t.json", "--platform", "web/css", "--platform", "ios/swift"])

        assert args.source == "t.json"
        assert args.platforms == ["web/css", "ios/swift"]

    def test_global_options(self):
        """Test config and logging options."""
        args = parse_arguments(["-c", "x.yaml", "--debug", "--log-file", "b.log", "validate"])

        assert args.config == "x.yaml"
        assert args.debug
        assert args.log_file == "b.log"
        assert args.command == "validate"

    def test_version(self, capsys):
        """Test --version exits cleanly."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["--version"])

        assert exc_info.value.code == 0
        assert "tokenforge 1.0.0" in capsys.readouterr().out

    def test_unknown_command(self):
        """Test argparse rejects unknown commands."""
        with pytest.raises(SystemExit):
            parse_arguments(["deploy"])


class TestConfiguration:
    """Test configuration assembly."""

    def test_cli_overrides(self):
        """Test CLI values land in the settings section."""
        overrides = build_config_from_args(parse_arguments(["--debug", "build", "-s", "t.json"]))

        assert overrides == {"tokenforge": {"source": "t.json", "logging": {"level": "DEBUG"}}}

    def test_missing_config_file(self, temp_dir):
        """Test a missing config file is a CLI error."""
        args = parse_arguments(["-c", str(temp_dir / "nope.yaml")])

        with pytest.raises(CLIError, match="does not exist"):
            load_configuration(args)

    def test_source_override_wins(self, config_file):
        """Test --source beats the config file."""
        args = parse_arguments(["-c", str(config_file), "build", "-s", "other.json"])

        assert load_configuration(args).get("tokenforge.source") == "other.json"


class TestBuildCommand:
    """Test the build command."""

    def test_build(self, config_file, temp_dir):
        """Test a full build exits 0 and writes artifacts."""
        assert main(["-c", str(config_file), "build"]) == EXIT_SUCCESS

        assert (temp_dir / "build" / "web" / "tokens.css").exists()
        assert (temp_dir / "build" / "android" / "ViborsTokens.kt").exists()

    def test_selected_platform(self, config_file, temp_dir):
        """Test --platform restricts the build."""
        assert main(["-c", str(config_file), "build", "--platform", "web/json"]) == EXIT_SUCCESS

        assert json.loads((temp_dir / "build" / "web" / "tokens.json").read_text())["opacity"] == {
            "disabled": 0.4
        }
        assert not (temp_dir / "build" / "web" / "tokens.css").exists()
        assert not (temp_dir / "build" / "ios").exists()

    def test_unknown_platform(self, config_file, capsys):
        """Test unknown platform names are usage errors."""
        assert main(["-c", str(config_file), "build", "--platform", "web/scss"]) == EXIT_USAGE
        assert "Unknown platform: web/scss" in capsys.readouterr().err

    def test_invalid_configuration(self, temp_dir, tokens_file, capsys):
        """Test invalid settings exit with usage error."""
        config = write_config(
            temp_dir,
            {"source": str(tokens_file), "platforms": {"web/css": {"prefix": "v b r"}}},
        )

        assert main(["-c", config, "build"]) == EXIT_USAGE
        assert "Invalid configuration" in capsys.readouterr().err

    def test_unparsable_config(self, temp_dir):
        """Test broken YAML exits with usage error."""
        path = temp_dir / "broken.yaml"
        path.write_text("tokenforge: [unclosed", encoding="utf-8")

        assert main(["-c", str(path)]) == EXIT_USAGE

    def test_missing_source(self, config_file, temp_dir):
        """Test an unreadable token document fails the build."""
        assert main(["-c", str(config_file), "build", "-s", str(temp_dir / "none.json")]) == EXIT_FAILURE

    def test_cycle_fails(self, config_file, temp_dir, capsys):
        """Test resolution failures exit 1 and name the platform."""
        source = temp_dir / "cycle.json"
        source.write_text(json.dumps({"core": {"a": {"value": "{b}"}, "b": {"value": "{a}"}}}))

        assert main(["-c", str(config_file), "build", "-s", str(source)]) == EXIT_FAILURE

        err = capsys.readouterr().err
        assert "Platform web/css failed: Circular reference: a -> b -> a" in err
        assert not (temp_dir / "build").exists()

    def test_log_file(self, config_file, temp_dir):
        """Test --log-file receives log records."""
        log_file = temp_dir / "build.log"

        assert main(["-c", str(config_file), "--log-file", str(log_file), "build"]) == EXIT_SUCCESS
        assert "Build finished" in log_file.read_text(encoding="utf-8")


class TestValidateCommand:
    """Test the validate command."""

    def test_valid(self, config_file, capsys):
        """Test a clean document."""
        assert main(["-c", str(config_file), "validate"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "Validating design tokens..." in out
        assert "All good!" in out

    def test_missing_collection_warns(self, tokens_file, capsys):
        """Test missing expected collections pass with warnings."""
        assert main(["validate", "-s", str(tokens_file)]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert '  WARN  "07 - Grid" - not found' in out
        assert "Passed with warnings" in out

    def test_invalid_document(self, temp_dir, capsys):
        """Test unparsable documents fail validation."""
        source = temp_dir / "bad.json"
        source.write_text("{", encoding="utf-8")

        assert main(["validate", "-s", str(source)]) == EXIT_FAILURE
        assert "Failed" in capsys.readouterr().out
