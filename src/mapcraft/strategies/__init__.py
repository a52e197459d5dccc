"""
Strategies converting objects of one type to/from serialized values.
"""

from .base import BaseStrategy, FuncStrategy
from .reflective import CollectionStrategy, ReflectiveStrategy
from .temporal import (
    BaseTemporalStrategy,
    DateStrategy,
    DateTimeStrategy,
    TimeStrategy,
)

__all__ = [
    "BaseStrategy",
    "FuncStrategy",
    "ReflectiveStrategy",
    "CollectionStrategy",
    "BaseTemporalStrategy",
    "DateTimeStrategy",
    "DateStrategy",
    "TimeStrategy",
]
