"""
Serialization capability: public entry points converting objects to/from serialized
values.
"""

from __future__ import annotations

import threading
from typing import Any, overload

from .builder import ReflectiveStrategyBuilder
from .cache import BaseStrategyCache, MemoryStrategyCache
from .config import SerializerConfig
from .exceptions import InvalidArgumentError, ReflectionError
from .frame import Frame, is_object
from .inspecting.types import get_type_id, resolve_type
from .locator import StrategyLocator
from .registry import StrategyRegistry, get_builtin_strategies
from .strategies.base import BaseStrategy
from .typedefs import SerializedValue

__all__ = [
    "Serializer",
    "build_serializer",
    "serialize",
    "deserialize",
]

_DEFAULT_SERIALIZER: Serializer | None = None
_DEFAULT_SERIALIZER_LOCK = threading.Lock()


class Serializer:
    """
    Converts objects to serialized values and back, delegating to the strategy
    resolved by the locator for each type.
    """

    __locator: StrategyLocator
    __config: SerializerConfig
    __frame: Frame

    def __init__(
        self,
        locator: StrategyLocator,
        /,
        *,
        config: SerializerConfig | None = None,
    ):
        self.__locator = locator
        self.__config = config or SerializerConfig()
        self.__frame = Frame(locator, self.__config)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(locator={self.__locator})"

    @property
    def locator(self) -> StrategyLocator:
        return self.__locator

    @property
    def config(self) -> SerializerConfig:
        return self.__config

    def serialize(self, obj: Any, /) -> SerializedValue:
        """
        Serialize object to a mapping tagged with its type identifier, or to the
        representation of its registered strategy.

        :param obj: Object to serialize
        :raises InvalidArgumentError: If `obj` is a scalar or builtin container
        :raises ReflectionError: If a strategy cannot be built for a type in the \
        object graph
        """
        if not is_object(obj):
            raise InvalidArgumentError(
                f"Can only serialize objects, got {type(obj).__name__}: {obj!r}"
            )
        return self.__frame.serialize(obj)

    @overload
    def deserialize[T](self, type_: type[T], data: Any = None, /) -> T: ...

    @overload
    def deserialize(self, type_: str, data: Any = None, /) -> Any: ...

    def deserialize(self, type_: type | str, data: Any = None, /) -> Any:
        """
        Reconstruct object of the given type from its serialized value.

        Members missing from the data keep their default; missing data for a
        collection type yields an empty collection.

        :param type_: Type identifier or class to reconstruct
        :param data: Serialized value, typically a mapping
        :raises InvalidArgumentError: If `type_` does not name a resolvable type
        :raises ReflectionError: If a strategy cannot be built for a type in the \
        serialized data
        :raises FormatError: If a strategy cannot parse its serialized value
        """
        type_id = self.__get_type_id(type_)
        strategy = self.__locator.resolve(type_id)
        return strategy.from_map(data, self.__frame)

    def __get_type_id(self, type_: type | str) -> str:
        if isinstance(type_, type):
            type_id = get_type_id(type_)
        elif isinstance(type_, str):
            type_id = type_
        else:
            raise InvalidArgumentError(
                f"Expected type identifier or class, got {type_!r}"
            )

        # classes must be resolvable too, e.g. not defined in a function scope
        try:
            resolve_type(type_id)
        except ReflectionError as e:
            raise InvalidArgumentError(
                f"Not a resolvable type identifier: '{type_id}'"
            ) from e
        return type_id


def build_serializer(
    *strategies: BaseStrategy[Any],
    config: SerializerConfig | None = None,
    cache: BaseStrategyCache | None = None,
) -> Serializer:
    """
    Create a serializer with the builtin strategies (unless disabled), strategies
    named by the configuration and the given custom strategies, in increasing order
    of precedence.

    :param strategies: Custom strategies to register
    :param config: Configuration, default if not passed
    :param cache: Strategy cache, in-memory if not passed
    """
    config_ = config or SerializerConfig()

    registry = StrategyRegistry()
    if config_.use_builtin_strategies:
        registry.extend(get_builtin_strategies(config_))
    registry.extend(config_.load_strategies())
    registry.extend(strategies)

    locator = StrategyLocator(
        registry,
        ReflectiveStrategyBuilder(),
        cache if cache is not None else MemoryStrategyCache(),
    )
    return Serializer(locator, config=config_)


def get_default_serializer() -> Serializer:
    """
    Get the process-wide serializer with default configuration (thread-safe).
    """
    global _DEFAULT_SERIALIZER
    with _DEFAULT_SERIALIZER_LOCK:
        if _DEFAULT_SERIALIZER is None:
            _DEFAULT_SERIALIZER = build_serializer()
        return _DEFAULT_SERIALIZER


def serialize(obj: Any, /) -> SerializedValue:
    """
    Serialize object using the default serializer.
    """
    return get_default_serializer().serialize(obj)


def deserialize(type_: type | str, data: Any = None, /) -> Any:
    """
    Reconstruct object using the default serializer.
    """
    return get_default_serializer().deserialize(type_, data)
