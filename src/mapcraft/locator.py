"""
Resolution of the strategy handling a type.
"""

from __future__ import annotations

import logging
from typing import Any

from .builder import ReflectiveStrategyBuilder
from .cache import BaseStrategyCache, CacheMiss, MemoryStrategyCache
from .inspecting.types import get_type_id
from .registry import StrategyRegistry
from .strategies.base import BaseStrategy

__all__ = [
    "StrategyLocator",
]

logger = logging.getLogger(__name__)


class StrategyLocator:
    """
    Single source of which strategy handles a type, combining registered strategies,
    reflective fallback and memoization.

    Resolution order:

    1. Cached strategy
    2. Strategy registered for the exact type
    3. Strategy built by reflection

    Strategies from both the registry and reflection are cached, so all custom
    strategies must be registered before the first conversion: a type registered
    after it was first resolved stays shadowed by the cached entry.
    """

    __registry: StrategyRegistry
    __builder: ReflectiveStrategyBuilder
    __cache: BaseStrategyCache

    def __init__(
        self,
        registry: StrategyRegistry | None = None,
        builder: ReflectiveStrategyBuilder | None = None,
        cache: BaseStrategyCache | None = None,
    ):
        self.__registry = registry if registry is not None else StrategyRegistry()
        self.__builder = builder or ReflectiveStrategyBuilder()
        self.__cache = cache if cache is not None else MemoryStrategyCache()

    def __repr__(self) -> str:
        return "{}(registry={}, builder={}, cache={})".format(
            type(self).__name__, self.__registry, self.__builder, self.__cache
        )

    @property
    def registry(self) -> StrategyRegistry:
        return self.__registry

    @property
    def cache(self) -> BaseStrategyCache:
        return self.__cache

    def resolve(self, type_id: str, /) -> BaseStrategy[Any]:
        """
        Get the strategy handling the type with the given identifier.

        :raises ReflectionError: If there is no registered strategy and one cannot
        be built by reflection
        """
        cached = self.__cache.get(type_id)
        if not isinstance(cached, CacheMiss):
            return cached

        if strategy := self.__registry.lookup(type_id):
            logger.debug(f"Using registered strategy for {type_id}: {strategy}")
        else:
            strategy = self.__builder.build(type_id)

        self.__cache.put(type_id, strategy)
        return strategy

    def resolve_type(self, cls: type, /) -> BaseStrategy[Any]:
        """
        Get the strategy handling the given class.
        """
        return self.resolve(get_type_id(cls))
