"""
Type-driven conversion of objects to/from generic nested key-value representations.
"""

from .builder import ReflectiveStrategyBuilder
from .cache import (
    CACHE_MISS,
    BaseStrategyCache,
    MemoryStrategyCache,
    NullStrategyCache,
)
from .config import SerializerConfig, load_config
from .exceptions import (
    ConfigError,
    FormatError,
    InvalidArgumentError,
    MapcraftError,
    ReflectionError,
)
from .frame import Frame
from .inspecting.types import get_type_id, resolve_type
from .locator import StrategyLocator
from .registry import StrategyRegistry, get_builtin_strategies
from .serializer import Serializer, build_serializer, deserialize, serialize
from .strategies import (
    BaseStrategy,
    CollectionStrategy,
    DateStrategy,
    DateTimeStrategy,
    FuncStrategy,
    ReflectiveStrategy,
    TimeStrategy,
)
from .typedefs import SerializedValue

__all__ = [
    "Serializer",
    "build_serializer",
    "serialize",
    "deserialize",
    "SerializedValue",
    "SerializerConfig",
    "load_config",
    "Frame",
    "StrategyLocator",
    "StrategyRegistry",
    "get_builtin_strategies",
    "ReflectiveStrategyBuilder",
    "BaseStrategyCache",
    "MemoryStrategyCache",
    "NullStrategyCache",
    "CACHE_MISS",
    "BaseStrategy",
    "FuncStrategy",
    "ReflectiveStrategy",
    "CollectionStrategy",
    "DateTimeStrategy",
    "DateStrategy",
    "TimeStrategy",
    "get_type_id",
    "resolve_type",
    "MapcraftError",
    "InvalidArgumentError",
    "ReflectionError",
    "FormatError",
    "ConfigError",
]
