"""Error hierarchy for strictconf."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "StrictConfigError",
    "InvalidConfigKeyError",
    "MissingConfigValueError",
    "ConfigValueConversionError",
    "ConfigNotFoundError",
    "ConfigError",
    "ErrorCodes",
]


class StrictConfigError(Exception):
    """Base error for all strictconf errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class InvalidConfigKeyError(StrictConfigError, ValueError):
    """Raised when a configuration key is None, empty, or only whitespace."""

    def __init__(self, key: Any, param_name: str = "key", **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_INVALID_KEY",
            message=f"The configuration key: '{key}' is invalid; it cannot be null or whitespace.",
            details={"param_name": param_name, "key": key},
            **kwargs,
        )

    @property
    def key(self) -> Any:
        """The rejected key text."""
        return self.details["key"]

    @property
    def param_name(self) -> str:
        """Name of the parameter that carried the key."""
        return self.details["param_name"]


class MissingConfigValueError(StrictConfigError, LookupError):
    """Raised when a required configuration key is absent or resolves to None."""

    def __init__(self, key: str, type_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_VALUE_MISSING",
            message=(
                f"Could not retrieve the required configuration key: '{key}' ({type_name}). "
                "Be sure the key is present in the configuration used."
            ),
            details={"key": key, "type_name": type_name},
            **kwargs,
        )

    @property
    def key(self) -> str:
        """The configuration key that could not be resolved."""
        return self.details["key"]

    @property
    def type_name(self) -> str:
        """Name of the type the caller asked for."""
        return self.details["type_name"]


class ConfigValueConversionError(StrictConfigError):
    """Raised when a configuration value cannot be converted to the requested type."""

    def __init__(
        self,
        key: str,
        type_name: str,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="CONFIG_CONVERSION_FAILED",
            message=f"Failed to convert configuration key '{key}' to {type_name}",
            details={"key": key, "type_name": type_name, "errors": errors or []},
            **kwargs,
        )


class ConfigNotFoundError(StrictConfigError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(StrictConfigError):
    """Raised when a configuration document is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class ErrorCodes:
    """All strictconf error codes as constants.

    Example:
        if error.code == ErrorCodes.CONFIG_VALUE_MISSING:
            abort_startup()
    """

    CONFIG_INVALID_KEY = "CONFIG_INVALID_KEY"
    CONFIG_VALUE_MISSING = "CONFIG_VALUE_MISSING"
    CONFIG_CONVERSION_FAILED = "CONFIG_CONVERSION_FAILED"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
