"""
Interface for type-bound strategies converting objects to/from serialized values.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

from ..inspecting.generics import extract_arg
from ..inspecting.types import get_type_id
from ..typedefs import SerializedValue

if TYPE_CHECKING:
    from ..frame import Frame

__all__ = [
    "FuncToMapType",
    "FuncFromMapType",
    "BaseStrategy",
    "FuncStrategy",
]

type FuncToMapType[TargetT] = Callable[[TargetT], SerializedValue] | Callable[
    [TargetT, Frame], SerializedValue
]
"""
Function which converts an object to its serialized value.

Can take the object by itself or the object with frame for recursion.
"""

type FuncFromMapType[TargetT] = Callable[[Any], TargetT] | Callable[
    [Any, Frame], TargetT
]
"""
Function which reconstructs an object from its serialized value.

Can take the data by itself or the data with frame for recursion.
"""


class BaseStrategy[TargetT](ABC):
    """
    Base class for strategies: a pair of conversions bound to exactly one type.

    Subclass with a type parameter to determine the target type, then implement
    `to_map()` and `from_map()`. Alternatively pass the target type explicitly, e.g.
    for strategies built at runtime.

    Strategies are shared between threads through the strategy cache, so they must
    not be mutated after construction.
    """

    __target_type: type[TargetT]

    def __init__(self, target_type: type[TargetT] | None = None, /):
        self.__target_type = target_type or self.__extract_target_type()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type_id})"

    @property
    def target_type(self) -> type[TargetT]:
        """
        Type this strategy converts.
        """
        return self.__target_type

    @property
    def type_id(self) -> str:
        """
        Type identifier this strategy is registered and cached under.
        """
        return get_type_id(self.__target_type)

    @abstractmethod
    def to_map(self, obj: TargetT, frame: Frame, /) -> SerializedValue:
        """
        Convert object to its serialized value.

        :param obj: Object to convert
        :param frame: Frame for recursing into nested values
        :return: Serialized value
        """

    @abstractmethod
    def from_map(self, data: Any, frame: Frame, /) -> TargetT:
        """
        Reconstruct object from its serialized value.

        :param data: Serialized value, `None` if absent
        :param frame: Frame for recursing into nested values
        :return: Reconstructed object
        """

    @classmethod
    def __extract_target_type(cls) -> type[TargetT]:
        try:
            target_type = extract_arg(cls, BaseStrategy, "TargetT")
        except (TypeError, ValueError) as e:
            raise TypeError(
                f"Could not determine target type of {cls.__name__}, pass it "
                "explicitly or parameterize the class"
            ) from e
        return cast(type[TargetT], target_type)


class FuncStrategy[TargetT](BaseStrategy[TargetT]):
    """
    Function-based strategy.
    """

    __to_map_func: FuncToMapType[TargetT]
    __from_map_func: FuncFromMapType[TargetT]
    __to_map_takes_frame: bool
    __from_map_takes_frame: bool

    def __init__(
        self,
        target_type: type[TargetT],
        /,
        *,
        to_map: FuncToMapType[TargetT],
        from_map: FuncFromMapType[TargetT],
    ):
        super().__init__(target_type)
        self.__to_map_func = to_map
        self.__from_map_func = from_map
        self.__to_map_takes_frame = _takes_frame(to_map)
        self.__from_map_takes_frame = _takes_frame(from_map)

    def to_map(self, obj: TargetT, frame: Frame, /) -> SerializedValue:
        if self.__to_map_takes_frame:
            func = cast(Callable[[TargetT, Frame], SerializedValue], self.__to_map_func)
            return func(obj, frame)
        return cast(Callable[[TargetT], SerializedValue], self.__to_map_func)(obj)

    def from_map(self, data: Any, frame: Frame, /) -> TargetT:
        if self.__from_map_takes_frame:
            func = cast(Callable[[Any, Frame], TargetT], self.__from_map_func)
            return func(data, frame)
        return cast(Callable[[Any], TargetT], self.__from_map_func)(data)


def _takes_frame(func: Callable[..., Any]) -> bool:
    """
    Check whether function takes a second positional parameter for the frame.
    """
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        # builtins like `str` may not have a signature
        return False

    positional = [
        p
        for p in params
        if p.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    assert len(
        positional
    ), f"Function {func} does not take any positional params, must take data as positional"
    return len(positional) > 1
