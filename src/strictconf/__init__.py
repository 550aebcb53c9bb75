"""strictconf - strict accessors and startup diagnostics for layered configuration."""

from __future__ import annotations

# Accessors
from strictconf.extensions import (
    STARTUP_CONFIGURATION_FLAG,
    get_string,
    get_string_strict,
    get_value_strict,
    log_all,
)

# Sources
from strictconf.source import KEY_DELIMITER, Configuration, ConfigurationSource, environ_layer

# Errors
from strictconf.errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValueConversionError,
    ErrorCodes,
    InvalidConfigKeyError,
    MissingConfigValueError,
    StrictConfigError,
)

__version__ = "0.1.0"

__all__ = [
    # Accessors
    "get_value_strict",
    "get_string_strict",
    "get_string",
    "log_all",
    "STARTUP_CONFIGURATION_FLAG",
    # Sources
    "ConfigurationSource",
    "Configuration",
    "environ_layer",
    "KEY_DELIMITER",
    # Errors
    "ErrorCodes",
    "StrictConfigError",
    "InvalidConfigKeyError",
    "MissingConfigValueError",
    "ConfigValueConversionError",
    "ConfigNotFoundError",
    "ConfigError",
]
