"""
Serializer configuration, optionally loaded from TOML.
"""

from __future__ import annotations

import dataclasses
import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .exceptions import ConfigError
from .strategies.base import BaseStrategy
from .strategies.temporal import DATE_FORMAT, DATETIME_FORMAT, TIME_FORMAT
from .typedefs import ITEMS_KEY, TYPE_KEY

__all__ = [
    "SerializerConfig",
    "load_config",
]

PYPROJECT_SECTION = ("tool", "mapcraft")
"""
Section holding configuration in `pyproject.toml`.
"""


@dataclass(frozen=True, kw_only=True)
class SerializerConfig:
    """
    Configures serialization behavior.
    """

    type_key: str = TYPE_KEY
    """
    Reserved key holding the type identifier in serialized mappings.
    """

    items_key: str = ITEMS_KEY
    """
    Key holding the elements of serialized collection objects.
    """

    datetime_format: str = DATETIME_FORMAT
    """
    Format of `datetime` literals.
    """

    date_format: str = DATE_FORMAT
    """
    Format of `date` literals.
    """

    time_format: str = TIME_FORMAT
    """
    Format of `time` literals.
    """

    use_builtin_strategies: bool = True
    """
    Whether to register the builtin temporal strategies.
    """

    sort_sets: bool = True
    """
    Whether to sort sets, producing deterministic output. Sets whose elements don't
    support comparison are left in iteration order.
    """

    strategies: tuple[str, ...] = field(default_factory=tuple)
    """
    Additional strategies to register, as import paths `"module:attr"` naming a
    strategy instance or a strategy class constructible without arguments.
    """

    def __post_init__(self):
        if self.type_key == self.items_key:
            raise ConfigError(
                f"Type key and items key must differ, both are '{self.type_key}'"
            )

    def load_strategies(self) -> tuple[BaseStrategy[Any], ...]:
        """
        Import the strategies named by `strategies`.

        :raises ConfigError: If a path cannot be imported or doesn't name a strategy
        """
        return tuple(_import_strategy(path) for path in self.strategies)


def load_config(path: Path | str, /) -> SerializerConfig:
    """
    Load configuration from a TOML file: either a `pyproject.toml` with a
    `[tool.mapcraft]` table, or a standalone file with top-level keys. A
    `pyproject.toml` without the table yields the default configuration.

    :raises ConfigError: If the file cannot be read or contains invalid values
    """
    path_ = Path(path)
    try:
        document = tomlkit.parse(path_.read_text())
    except (OSError, TOMLKitError) as e:
        raise ConfigError(f"Could not load configuration from {path_}: {e}") from e

    values: Any = document.unwrap()
    if path_.name == "pyproject.toml":
        for key in PYPROJECT_SECTION:
            values = values.get(key, {})

    if not isinstance(values, dict):
        raise ConfigError(f"Expected table of configuration values in {path_}")

    return _create_config(values, path_)


def _create_config(values: dict[str, Any], path: Path) -> SerializerConfig:
    names = {f.name for f in dataclasses.fields(SerializerConfig)}

    if extra := sorted(set(values) - names):
        raise ConfigError(f"Unknown configuration keys in {path}: {extra}")

    kwargs: dict[str, Any] = {}
    for name, value in values.items():
        if name == "strategies":
            if not (
                isinstance(value, list) and all(isinstance(v, str) for v in value)
            ):
                raise ConfigError(f"Expected list of import paths for '{name}'")
            kwargs[name] = tuple(value)
            continue

        default = getattr(SerializerConfig(), name)
        if not isinstance(value, type(default)):
            raise ConfigError(
                f"Expected {type(default).__name__} for '{name}', got {value!r}"
            )
        kwargs[name] = value

    return SerializerConfig(**kwargs)


def _import_strategy(path: str) -> BaseStrategy[Any]:
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Invalid strategy path '{path}', expected 'module:attr'")

    try:
        obj = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigError(f"Could not import strategy '{path}': {e}") from e

    if isinstance(obj, type) and issubclass(obj, BaseStrategy):
        obj = obj()
    if not isinstance(obj, BaseStrategy):
        raise ConfigError(f"Not a strategy: '{path}' is {obj!r}")

    return obj
