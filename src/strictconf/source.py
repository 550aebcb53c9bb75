"""Configuration source protocol and a mapping-backed implementation.

``ConfigurationSource`` describes what the helpers in
:mod:`strictconf.extensions` need from a configuration collaborator.
``Configuration`` implements it over one or more layered mappings, flattening
nested data into ``:``-delimited keys.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Iterable, Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

import pydantic
import yaml

from strictconf.errors import ConfigError, ConfigNotFoundError, ConfigValueConversionError

__all__ = ["KEY_DELIMITER", "ConfigurationSource", "Configuration", "environ_layer"]

KEY_DELIMITER = ":"

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@runtime_checkable
class ConfigurationSource(Protocol):
    """Read-only view over an effective configuration."""

    def get(self, key: str) -> str | None:
        """Return the raw string value for ``key``, or None when absent or unset."""
        ...

    def get_value(self, key: str, type_: type[T]) -> T | None:
        """Return the value for ``key`` converted to ``type_``, or None when absent."""
        ...

    def exists(self, key: str) -> bool:
        """Return True if ``key`` has a value or child keys."""
        ...

    def items(self) -> Iterable[tuple[str, str | None]]:
        """Return every effective (key, value) pair, section keys included."""
        ...


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", repr(type_))


def _join(prefix: str, key: str) -> str:
    return f"{prefix}{KEY_DELIMITER}{key}" if prefix else key


def _render(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _touch(values: dict[str, str | None], key: str) -> None:
    """Register ``key`` and all of its parent sections without overwriting values."""
    if not key:
        return
    parts = key.split(KEY_DELIMITER)
    for i in range(1, len(parts) + 1):
        values.setdefault(KEY_DELIMITER.join(parts[:i]), None)


def _flatten(value: Any, key: str, values: dict[str, str | None]) -> None:
    if isinstance(value, Mapping):
        _touch(values, key)
        for child_key, child in value.items():
            _flatten(child, _join(key, str(child_key)), values)
    elif isinstance(value, (list, tuple)):
        _touch(values, key)
        for index, child in enumerate(value):
            _flatten(child, _join(key, str(index)), values)
    else:
        _touch(values, key)
        values[key] = _render(value)


def _listify(node: Any) -> Any:
    """Turn dicts whose keys are all indices into lists ordered by index, recursively.

    Gaps left by unset items are skipped.
    """
    if not isinstance(node, dict):
        return node
    converted = {k: _listify(v) for k, v in node.items()}
    if converted and all(k.isdigit() for k in converted):
        return [converted[k] for k in sorted(converted, key=int)]
    return converted


@functools.lru_cache(maxsize=128)
def _cached_adapter(type_: Any) -> pydantic.TypeAdapter[Any]:
    return pydantic.TypeAdapter(type_)


def _adapter(type_: Any) -> pydantic.TypeAdapter[Any]:
    try:
        hash(type_)
    except TypeError:
        return pydantic.TypeAdapter(type_)
    return _cached_adapter(type_)


def environ_layer(prefix: str = "", environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Build a configuration layer from environment variables.

    Only variables whose name starts with ``prefix`` are taken; the prefix is
    stripped and ``__`` is translated to the key delimiter, so
    ``APP_Log__StartupConfiguration`` with prefix ``APP_`` becomes
    ``Log:StartupConfiguration``.
    """
    source = os.environ if environ is None else environ
    layer: dict[str, str] = {}
    for name, value in source.items():
        if not name.startswith(prefix):
            continue
        key = name[len(prefix):].replace("__", KEY_DELIMITER)
        if key:
            layer[key] = value
    return layer


class Configuration:
    """Immutable, case-sensitive configuration built from layered mappings.

    Later layers override earlier ones key by key. Nested mappings and lists
    are flattened (``db: {host: x}`` becomes ``db:host``, list items become
    ``servers:0``), and every intermediate section is present with a None value.

    Thread safety:
        Instances are never mutated after construction; concurrent reads are safe.
    """

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        values: dict[str, str | None] = {}
        for layer in layers:
            _flatten(layer, "", values)
        self._values = values

    @classmethod
    def load(cls, yaml_path: str, *extra_layers: Mapping[str, Any]) -> Configuration:
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML document.
            *extra_layers: Mappings applied on top of the file, in order.

        Returns:
            A new Configuration.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the YAML is invalid or is not a mapping.
        """
        if not os.path.isfile(yaml_path):
            raise ConfigNotFoundError(config_path=yaml_path)

        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration document must be a mapping, got {type(data).__name__}"
            )

        _logger.debug("Loaded configuration from %s", yaml_path)
        return cls(data, *extra_layers)

    @classmethod
    def from_environ(cls, prefix: str = "", environ: Mapping[str, str] | None = None) -> Configuration:
        """Create a Configuration from environment variables. See :func:`environ_layer`."""
        return cls(environ_layer(prefix, environ))

    def with_layer(self, layer: Mapping[str, Any]) -> Configuration:
        """Return a new Configuration with ``layer`` overriding this one."""
        derived = Configuration()
        derived._values = dict(self._values)
        _flatten(layer, "", derived._values)
        return derived

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def exists(self, key: str) -> bool:
        return key in self._values

    def items(self) -> list[tuple[str, str | None]]:
        return list(self._values.items())

    def get_value(self, key: str, type_: type[T]) -> T | None:
        """Resolve ``key`` and convert it to ``type_`` with pydantic.

        The raw value is converted when set; otherwise a section's children are
        rebuilt into a nested dict and validated, so models and dicts bind
        from sections. If the dict form does not validate, index-keyed
        sections are retried as lists.

        Raises:
            ConfigValueConversionError: If the value does not validate as ``type_``.
        """
        if key not in self._values:
            return None

        raw = self._values[key]
        if type_ is str:
            return raw  # type: ignore[return-value]

        adapter = _adapter(type_)
        if raw is not None:
            candidates: list[Any] = [raw]
        else:
            section = self._section(key)
            if not section:
                return None
            candidates = [section]
            as_lists = _listify(section)
            if as_lists != section:
                candidates.append(as_lists)

        error: pydantic.ValidationError | None = None
        for data in candidates:
            try:
                return adapter.validate_python(data)
            except pydantic.ValidationError as e:
                error = e

        raise ConfigValueConversionError(
            key=key,
            type_name=_type_name(type_),
            errors=error.errors(include_url=False),
            cause=error,
        ) from error

    def _section(self, key: str) -> dict[str, Any]:
        prefix = key + KEY_DELIMITER
        tree: dict[str, Any] = {}
        for full_key, value in self._values.items():
            if value is None or not full_key.startswith(prefix):
                continue
            parts = full_key[len(prefix):].split(KEY_DELIMITER)
            node = tree
            for part in parts[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            if not isinstance(node.get(parts[-1]), dict):
                node[parts[-1]] = value
        return tree

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Configuration(keys={len(self._values)})"
