"""FSSearch Infrastructure Layer.

Services used by the search, rules and CLI layers:
- Logger: Structured logging system
- ConfigManager: Layered YAML/environment configuration
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
