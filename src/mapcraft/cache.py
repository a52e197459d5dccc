"""
Memoization of resolved strategies by type identifier.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any

from .strategies.base import BaseStrategy

__all__ = [
    "CacheMiss",
    "CACHE_MISS",
    "BaseStrategyCache",
    "MemoryStrategyCache",
    "NullStrategyCache",
]


class CacheMiss:
    """
    Sentinel type returned on a cache miss.
    """

    def __repr__(self) -> str:
        return type(self).__name__


CACHE_MISS = CacheMiss()


class BaseStrategyCache(ABC):
    """
    Abstract key-value store for strategies.

    Entries are never invalidated: types are assumed not to change for the lifetime
    of the process. Implementations must be safe to call from multiple threads.
    """

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def get(self, type_id: str, /) -> BaseStrategy[Any] | CacheMiss:
        """
        Get strategy cached for the type, or `CACHE_MISS`.
        """

    @abstractmethod
    def put(self, type_id: str, strategy: BaseStrategy[Any], /):
        """
        Store strategy for the type, replacing any existing entry.
        """

    @abstractmethod
    def clear(self):
        """
        Remove all entries.
        """


class MemoryStrategyCache(BaseStrategyCache):
    """
    In-process cache guarded by a lock.

    Two threads resolving the same type concurrently may both build a strategy;
    the last one stored wins, which is harmless as both are equivalent.
    """

    __entries: dict[str, BaseStrategy[Any]]
    __lock: threading.Lock

    def __init__(self):
        self.__entries = {}
        self.__lock = threading.Lock()

    def __repr__(self) -> str:
        return f"MemoryStrategyCache(entries={len(self)})"

    def __len__(self) -> int:
        with self.__lock:
            return len(self.__entries)

    def get(self, type_id: str, /) -> BaseStrategy[Any] | CacheMiss:
        with self.__lock:
            return self.__entries.get(type_id, CACHE_MISS)

    def put(self, type_id: str, strategy: BaseStrategy[Any], /):
        with self.__lock:
            self.__entries[type_id] = strategy

    def clear(self):
        with self.__lock:
            self.__entries.clear()


class NullStrategyCache(BaseStrategyCache):
    """
    Cache which never stores anything, causing strategies to be resolved on every
    use.
    """

    def __len__(self) -> int:
        return 0

    def get(self, type_id: str, /) -> CacheMiss:
        _ = type_id
        return CACHE_MISS

    def put(self, type_id: str, strategy: BaseStrategy[Any], /):
        _ = type_id, strategy

    def clear(self):
        pass
