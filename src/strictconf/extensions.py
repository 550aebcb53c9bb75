"""Strict and diagnostic accessors over a ConfigurationSource.

All functions take the configuration as their first argument and keep no
state between calls.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar, overload

from strictconf.errors import InvalidConfigKeyError, MissingConfigValueError
from strictconf.source import ConfigurationSource

__all__ = [
    "STARTUP_CONFIGURATION_FLAG",
    "get_value_strict",
    "get_string_strict",
    "get_string",
    "log_all",
]

STARTUP_CONFIGURATION_FLAG = "Log:StartupConfiguration"

T = TypeVar("T")

_logger = logging.getLogger(__name__)


def _validate_key(key: Any) -> None:
    if not isinstance(key, str) or not key.strip():
        raise InvalidConfigKeyError(key=key, param_name="key")


@overload
def get_value_strict(configuration: ConfigurationSource, key: str) -> str: ...


@overload
def get_value_strict(configuration: ConfigurationSource, key: str, type_: type[T]) -> T: ...


def get_value_strict(configuration: ConfigurationSource, key: str, type_: Any = str) -> Any:
    """Return the value for ``key`` as ``type_``, raising if it is missing.

    Behaves like ``configuration.get_value`` but enforces that the key exists
    and resolves to a non-None value. Intended for values that are mandatory
    at startup.

    Args:
        configuration: The configuration source to read from.
        key: The configuration key, e.g. ``"Database:Host"``.
        type_: The expected type of the value. Defaults to ``str``.

    Returns:
        The resolved value. Never None.

    Raises:
        InvalidConfigKeyError: If ``key`` is None, empty, or whitespace.
        MissingConfigValueError: If ``key`` is absent or its value is None.
    """
    _validate_key(key)

    if type_ is str:
        value = configuration.get(key)
    elif not configuration.exists(key):
        value = None
    else:
        value = configuration.get_value(key, type_)

    if value is None:
        raise MissingConfigValueError(key=key, type_name=getattr(type_, "__name__", repr(type_)))

    return value


def get_string_strict(configuration: ConfigurationSource, key: str) -> str:
    """Return the string value for ``key``, raising if it is missing.

    Raises:
        InvalidConfigKeyError: If ``key`` is None, empty, or whitespace.
        MissingConfigValueError: If ``key`` is absent or its value is None.
    """
    return get_value_strict(configuration, key, str)


def get_string(configuration: ConfigurationSource, key: str) -> str | None:
    """Return the string value for ``key``, or None if it is absent or unset.

    An empty string is returned as-is.

    Raises:
        InvalidConfigKeyError: If ``key`` is None, empty, or whitespace.
    """
    _validate_key(key)
    return configuration.get(key)


def _flag_enabled(raw: str | None) -> bool:
    if raw is None:
        return False
    text = raw.strip().lower()
    if text in ("1", "true"):
        return True
    if text not in ("0", "false", ""):
        _logger.debug("Unrecognized value %r for %s; treating as disabled", raw, STARTUP_CONFIGURATION_FLAG)
    return False


def log_all(configuration: ConfigurationSource, logger: logging.Logger | logging.LoggerAdapter) -> None:
    """Log every effective configuration key/value pair at DEBUG level.

    Only runs when ``Log:StartupConfiguration`` is ``true`` or ``1`` and
    ``logger`` has DEBUG enabled. Entries with a None value (bare sections)
    are skipped and the rest are ordered by ordinal key comparison, bracketed
    by start and end marker lines. Nothing is logged when no entry remains.
    """
    if not _flag_enabled(configuration.get(STARTUP_CONFIGURATION_FLAG)):
        return

    if not logger.isEnabledFor(logging.DEBUG):
        return

    entries = [(key, value) for key, value in configuration.items() if value is not None]
    if not entries:
        return

    # str ordering compares code points: case-sensitive and locale-free
    entries.sort(key=lambda item: item[0])

    logger.debug("----- Start of effective configuration -----")
    for key, value in entries:
        logger.debug("%s=%s", key, value)
    logger.debug("----- End of effective configuration -----")
