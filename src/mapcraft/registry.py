"""
Registry of strategies explicitly registered for specific types.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from .strategies.base import BaseStrategy
from .strategies.temporal import DateStrategy, DateTimeStrategy, TimeStrategy

if TYPE_CHECKING:
    from .config import SerializerConfig

__all__ = [
    "StrategyRegistry",
    "get_builtin_strategies",
]

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """
    Holds strategies keyed by type identifier. Lookup is by exact type only: a
    strategy registered for a base class is never used for its subclasses.

    Registration is expected to happen at startup, before the first conversion.
    """

    __strategies: dict[str, BaseStrategy[Any]]

    def __init__(self, *strategies: BaseStrategy[Any]):
        self.__strategies = {}
        self.extend(strategies)

    def __repr__(self) -> str:
        return f"StrategyRegistry(strategies={self.strategies})"

    def __len__(self) -> int:
        return len(self.__strategies)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self.__strategies

    @property
    def strategies(self) -> tuple[BaseStrategy[Any], ...]:
        """
        Get strategies currently registered.
        """
        return tuple(self.__strategies.values())

    def register(self, strategy: BaseStrategy[Any], /, type_id: str | None = None):
        """
        Register a strategy under the given type identifier, defaulting to that of
        the strategy's target type. Overwrites any strategy previously registered
        for the same type.
        """
        type_id_ = type_id or strategy.type_id
        if previous := self.__strategies.get(type_id_):
            logger.debug(f"Overwriting strategy for {type_id_}: {previous}")
        self.__strategies[type_id_] = strategy

    def extend(self, strategies: Iterable[BaseStrategy[Any]], /):
        """
        Register multiple strategies.
        """
        for strategy in strategies:
            self.register(strategy)

    def lookup(self, type_id: str, /) -> BaseStrategy[Any] | None:
        """
        Get strategy registered for the exact type, or `None` if there is none.
        """
        return self.__strategies.get(type_id)


def get_builtin_strategies(
    config: SerializerConfig | None = None,
) -> tuple[BaseStrategy[Any], ...]:
    """
    Get builtin strategies for temporal values, using the formats from the
    configuration if passed.
    """
    if config is None:
        return (DateTimeStrategy(), DateStrategy(), TimeStrategy())
    return (
        DateTimeStrategy(config.datetime_format),
        DateStrategy(config.date_format),
        TimeStrategy(config.time_format),
    )
