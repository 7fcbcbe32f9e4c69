"""TokenForge Infrastructure Layer.

This layer provides core services used by the build pipeline:
- ConfigManager: Hierarchical configuration from defaults, YAML, environment
- Logger: Structured logging system
"""

from .config_manager import ConfigError, ConfigManager, ConfigSource
from .logger import Logger, LogLevel, get_logger, set_global_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_global_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "ConfigManager",
]
