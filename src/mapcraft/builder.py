"""
Construction of generic strategies for types without a registered strategy.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from enum import Enum
from typing import Any

from .exceptions import ReflectionError
from .inspecting.annotations import Annotation
from .inspecting.members import get_members
from .inspecting.types import resolve_type
from .inspecting.utils import safe_issubclass
from .strategies.base import BaseStrategy
from .strategies.reflective import CollectionStrategy, ReflectiveStrategy
from .typedefs import NATIVE_CONTAINER_TYPES, SCALAR_TYPES

__all__ = [
    "ReflectiveStrategyBuilder",
]

logger = logging.getLogger(__name__)


class ReflectiveStrategyBuilder:
    """
    Builds strategies by inspecting the members a type declares.

    Building involves resolving the type and evaluating its annotations, so results
    should be memoized by the caller.
    """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def build(self, type_id: str, /) -> BaseStrategy[Any]:
        """
        Build strategy for the type with the given identifier.

        :raises ReflectionError: If the type cannot be resolved or is not a composite
        type
        """
        cls = resolve_type(type_id)
        self._check_composite(cls)

        if safe_issubclass(cls, (list, tuple)):
            item_annotation = Annotation(cls).item_annotation()
            logger.debug(
                f"Building collection strategy for {type_id} with items of type "
                f"{item_annotation.raw}"
            )
            return CollectionStrategy(cls, item_annotation)

        members = get_members(cls)
        if not members and _has_native_state(cls):
            raise ReflectionError(
                f"Type {cls.__qualname__} has no discoverable members and requires a "
                "registered strategy"
            )

        logger.debug(
            f"Building reflective strategy for {type_id} with members: "
            f"{[m.name for m in members]}"
        )
        return ReflectiveStrategy(cls, members)

    def _check_composite(self, cls: type):
        """
        Ensure the type is one whose instances can be reconstructed from members.
        """
        if cls in SCALAR_TYPES or cls in NATIVE_CONTAINER_TYPES or cls is object:
            raise ReflectionError(f"Type {cls.__qualname__} is not a composite type")
        if safe_issubclass(cls, Enum):
            raise ReflectionError(
                f"Enum {cls.__qualname__} requires a registered strategy"
            )
        if inspect.isabstract(cls):
            raise ReflectionError(
                f"Cannot instantiate abstract type {cls.__qualname__}; serialized "
                "data must carry a type tag naming a concrete type"
            )


def _has_native_state(cls: type) -> bool:
    """
    Check whether instances of a class without members may still hold state,
    e.g. set by a custom `__new__` or `__init__` or kept by a C implementation.
    """
    if dataclasses.is_dataclass(cls):
        return False
    return cls.__new__ is not object.__new__ or cls.__init__ is not object.__init__
