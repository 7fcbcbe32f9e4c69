#!/usr/bin/env python3
"""Command-line interface for TokenForge.

This module provides the CLI for building and validating design tokens:
- Argument parsing (build and validate commands)
- Configuration file loading and CLI overrides
- Logging setup
- Exit codes: 0 success, 1 build or validation failure,
  2 usage or configuration error, 130 interrupted

Example:
    >>> from tokenforge.cli import main
    >>> main(["validate", "--source", "tokens/tokens.json"])
    0
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from tokenforge.build import TokenBuilder
from tokenforge.config import BuildConfig
from tokenforge.core.constants import TOKENFORGE_VERSION
from tokenforge.core.errors import StructuralError
from tokenforge.core.validators import ValidationError
from tokenforge.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from tokenforge.infrastructure.logger import Logger, set_global_logger
from tokenforge.tokens.validation import validate_file

DESCRIPTION = "TokenForge - Design token build pipeline"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


class CLIError(Exception):
    """Exception raised for CLI-related errors."""


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace (command defaults to "build")

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="tokenforge",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build every configured platform with the default settings
  tokenforge build

  # Build with a configuration file
  tokenforge --config tokenforge.yaml build

  # Check the token document before building
  tokenforge validate --source tokens/tokens.json
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {TOKENFORGE_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log records to this file",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    build_parser = subparsers.add_parser("build", help="Generate platform artifacts")
    build_parser.add_argument(
        "-s", "--source", metavar="FILE", type=str, help="Token document (JSON or YAML)"
    )
    build_parser.add_argument(
        "--platform",
        metavar="NAME",
        action="append",
        dest="platforms",
        help="Only build this platform (can be specified multiple times)",
    )

    validate_parser = subparsers.add_parser("validate", help="Check the token document")
    validate_parser.add_argument(
        "-s", "--source", metavar="FILE", type=str, help="Token document (JSON or YAML)"
    )

    parsed = parser.parse_args(args)
    if parsed.command is None:
        parsed.command = "build"
        parsed.source = None
        parsed.platforms = None
    return parsed


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build the CLI-level configuration overrides.

    Args:
        args: Parsed arguments namespace

    Returns:
        Settings mapping for the CLI_ARGS precedence level
    """
    settings: Dict[str, Any] = {}

    if args.source:
        settings["source"] = args.source

    logging_config: Dict[str, Any] = {}
    if args.debug:
        logging_config["level"] = "DEBUG"
    if args.log_file:
        logging_config["file"] = args.log_file
    if logging_config:
        settings["logging"] = logging_config

    return {"tokenforge": settings}


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Assemble the layered configuration.

    Raises:
        CLIError: If the configuration file is missing or unreadable
    """
    if args.config and not Path(args.config).is_file():
        raise CLIError(f"Configuration file does not exist: {args.config}")

    try:
        manager = ConfigManager(config_file=args.config)
    except ConfigError as e:
        raise CLIError(e.message)

    manager.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)
    return manager


def setup_logging(manager: ConfigManager) -> Logger:
    """
    Setup logging based on configuration.

    Args:
        manager: Configuration manager

    Returns:
        Configured logger instance, also installed as the global logger
    """
    level = str(manager.get("tokenforge.logging.level", "INFO")).upper()
    log_file = manager.get("tokenforge.logging.file")

    logger = Logger("tokenforge", level=level)
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))

    set_global_logger(logger)
    return logger


def select_platforms(config: BuildConfig, names: Optional[List[str]]) -> None:
    """Restrict the build to the named platforms.

    Raises:
        CLIError: If a name is not a configured platform
    """
    if not names:
        return
    unknown = [name for name in names if name not in config.platforms]
    if unknown:
        raise CLIError(f"Unknown platform: {', '.join(unknown)}")
    config.platforms = {name: p for name, p in config.platforms.items() if name in names}


def run_build(args: argparse.Namespace, config: BuildConfig, logger: Logger) -> int:
    select_platforms(config, args.platforms)

    try:
        report = TokenBuilder(config, logger).build()
    except StructuralError as e:
        logger.error(e.message)
        return EXIT_FAILURE

    for result in report.failed:
        print(f"Platform {result.name} failed: {result.error.message}", file=sys.stderr)
    return EXIT_SUCCESS if report.success else EXIT_FAILURE


def run_validate(config: BuildConfig, logger: Logger) -> int:
    report = validate_file(
        config.source_path,
        expected_collections=config.expected_collections,
        reserved_prefix=config.reserved_prefix,
        logger=logger,
    )
    for line in report.render():
        print(line)
    return report.exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)
        manager = load_configuration(args)
        logger = setup_logging(manager)

        try:
            config = BuildConfig.from_manager(manager)
        except ValidationError as e:
            raise CLIError(f"Invalid configuration: {e.message}")

        if args.command == "validate":
            return run_validate(config, logger)
        return run_build(args, config, logger)

    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
