"""Shared fixtures for the strictconf test suite."""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from strictconf.source import Configuration


class RecordingSource:
    """ConfigurationSource that records every call for test assertions."""

    def __init__(self, values: dict[str, str | None] | None = None) -> None:
        self.values: dict[str, str | None] = values or {}
        self.calls: list[tuple[str, Any]] = []

    def get(self, key: str) -> str | None:
        self.calls.append(("get", key))
        return self.values.get(key)

    def get_value(self, key: str, type_: type) -> Any:
        self.calls.append(("get_value", key))
        raw = self.values.get(key)
        return None if raw is None else type_(raw)

    def exists(self, key: str) -> bool:
        self.calls.append(("exists", key))
        return key in self.values

    def items(self) -> list[tuple[str, str | None]]:
        self.calls.append(("items", None))
        return list(self.values.items())


@pytest.fixture
def recording_source() -> RecordingSource:
    """An empty recording source; tests fill ``values`` as needed."""
    return RecordingSource()


@pytest.fixture
def app_config() -> Configuration:
    """A nested configuration with strings, numbers, booleans, and a list."""
    return Configuration(
        {
            "Database": {"Host": "db.local", "Port": 5432, "Ssl": True},
            "Feature": {"Name": "X", "Empty": "", "Unset": None},
            "Servers": ["a.example", "b.example"],
        }
    )


@pytest.fixture
def debug_logger() -> MagicMock:
    """A mock logger that reports DEBUG as enabled."""
    logger = MagicMock(spec=logging.Logger)
    logger.isEnabledFor.return_value = True
    return logger
