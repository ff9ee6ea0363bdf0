"""Configuration management for the job board aggregator."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config_dict
from .models import (
    AppConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    PaginationConfig,
    ProviderConfig,
    SearchConfig,
)

__all__ = [
    "load_config",
    "parse_config_dict",
    "load_environment_config",
    "AppConfig",
    "ProviderConfig",
    "PaginationConfig",
    "SearchConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "LogLevel",
    "LogFormat",
    "ConfigurationError",
]
