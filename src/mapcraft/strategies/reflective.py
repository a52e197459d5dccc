"""
Generic strategies synthesized from a type's declared structure rather than
hand-written.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..exceptions import FormatError, ReflectionError
from ..inspecting.annotations import ANY, Annotation
from ..inspecting.members import MISSING, MemberDescriptor
from ..typedefs import SerializedValue
from .base import BaseStrategy

if TYPE_CHECKING:
    from ..frame import Frame

__all__ = [
    "ReflectiveStrategy",
    "CollectionStrategy",
]


class ReflectiveStrategy[TargetT](BaseStrategy[TargetT]):
    """
    Strategy converting each declared member to an entry of a mapping tagged with
    the type identifier.

    Reconstruction tolerates missing values: members absent from the input or
    explicitly `None` keep their default.
    """

    __members: tuple[MemberDescriptor, ...]

    def __init__(
        self, target_type: type[TargetT], members: tuple[MemberDescriptor, ...], /
    ):
        super().__init__(target_type)
        self.__members = members

    def __repr__(self) -> str:
        names = ", ".join(m.name for m in self.__members)
        return f"{type(self).__name__}({self.type_id}, members=[{names}])"

    @property
    def members(self) -> tuple[MemberDescriptor, ...]:
        return self.__members

    def to_map(self, obj: TargetT, frame: Frame, /) -> dict[str, SerializedValue]:
        serialized: dict[str, SerializedValue] = {}

        for member in self.__members:
            value = getattr(obj, member.name, MISSING)
            if value is MISSING:
                if member.inferred:
                    raise ReflectionError(
                        f"Instance of {self.type_id} has no attribute '{member.name}' "
                        "matching its __init__ parameter; register a strategy for it"
                    )
                # unset declared attributes are treated the same as None
                value = None
            serialized[member.name] = (
                None if value is None else frame.serialize(value, member.name)
            )

        serialized[frame.config.type_key] = self.type_id
        return serialized

    def from_map(self, data: Any, frame: Frame, /) -> TargetT:
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise FormatError(
                f"Expected mapping to reconstruct {self.type_id}, got {data!r}"
            )

        obj = self.__create_instance()

        for member in self.__members:
            value = data.get(member.name)
            if value is None:
                value = member.get_default()
            else:
                value = frame.deserialize(
                    value, member.name, annotation=member.annotation
                )

            # bypass __setattr__ to support frozen dataclasses
            object.__setattr__(obj, member.name, value)

        return obj

    def __create_instance(self) -> TargetT:
        """
        Create instance without invoking `__init__`; members are populated
        afterwards.
        """
        cls = self.target_type
        try:
            return cls.__new__(cls)
        except TypeError as e:
            raise ReflectionError(
                f"Could not create instance of {self.type_id} without arguments: {e}"
            ) from e


class CollectionStrategy[TargetT: list | tuple](BaseStrategy[TargetT]):
    """
    Strategy for user-defined ordered collections, i.e. subclasses of `list` or
    `tuple`. Converts to a mapping with the recursively converted elements under
    the items key, tagged with the collection's own type identifier so the concrete
    collection type can be reconstructed.
    """

    __item_annotation: Annotation

    def __init__(
        self, target_type: type[TargetT], item_annotation: Annotation = ANY, /
    ):
        super().__init__(target_type)
        self.__item_annotation = item_annotation

    @property
    def item_annotation(self) -> Annotation:
        return self.__item_annotation

    def to_map(self, obj: TargetT, frame: Frame, /) -> dict[str, SerializedValue]:
        items_key = frame.config.items_key
        return {
            items_key: [frame.serialize(o, items_key, i) for i, o in enumerate(obj)],
            frame.config.type_key: self.type_id,
        }

    def from_map(self, data: Any, frame: Frame, /) -> TargetT:
        """
        Reconstruct collection, accepting a mapping with the items key or a bare
        list. Missing data or items yield an empty collection.
        """
        items_key = frame.config.items_key

        if data is None:
            items = None
        elif isinstance(data, Mapping):
            items = data.get(items_key)
        else:
            items = data

        if items is None:
            items = []
        if not isinstance(items, list):
            raise FormatError(
                f"Expected list of items to reconstruct {self.type_id}, got {items!r}"
            )

        values = [
            frame.deserialize(o, items_key, i, annotation=self.__item_annotation)
            for i, o in enumerate(items)
        ]
        return self.__construct(values)

    def __construct(self, values: list[Any]) -> TargetT:
        cls = self.target_type
        if hasattr(cls, "_fields"):
            # named tuple
            return cls(*values)
        return cls(values)
