"""Configuration management module for the Worker Scoring Service."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import AppConfig, AuthConfig, LogFormat, LoggingConfig, LogLevel, ServerConfig

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "ServerConfig",
    "LoggingConfig",
    "AuthConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
