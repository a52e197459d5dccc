"""
Recursion glue: walks nested values, dispatching objects to their strategies.
"""

from __future__ import annotations

from collections.abc import Generator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from .exceptions import FormatError, MapcraftError, ReflectionError
from .inspecting.annotations import ANY, Annotation
from .inspecting.types import get_type_id
from .typedefs import NATIVE_SEQUENCE_TYPES, SCALAR_TYPES, SerializedValue

if TYPE_CHECKING:
    from .config import SerializerConfig
    from .locator import StrategyLocator

__all__ = [
    "Frame",
    "is_object",
]


class Frame:
    """
    Recursion state passed to strategies, providing access to the locator and
    configuration.

    Strategies recurse into nested values via `serialize()` and `deserialize()`,
    passing the path segment(s) under which the nested value is found. Errors raised
    while converting a nested value get annotated with its path from the root.
    """

    __locator: StrategyLocator
    __config: SerializerConfig

    def __init__(self, locator: StrategyLocator, config: SerializerConfig):
        self.__locator = locator
        self.__config = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(locator={self.__locator})"

    @property
    def locator(self) -> StrategyLocator:
        return self.__locator

    @property
    def config(self) -> SerializerConfig:
        return self.__config

    def serialize(self, obj: Any, /, *path: str | int) -> SerializedValue:
        """
        Recursively serialize a nested value.

        - Scalars and `None` are returned as-is
        - Builtin containers are serialized structurally, without a tag
        - Any other object is converted by the strategy resolved for its runtime type

        :param obj: Value to serialize
        :param path: Segment(s) under which the value is found in its parent
        """
        with _bubble_path(path):
            return self._serialize_value(obj)

    def deserialize(
        self,
        data: Any,
        /,
        *path: str | int,
        annotation: Annotation | Any = ANY,
    ) -> Any:
        """
        Recursively reconstruct a nested value.

        A mapping carrying a type tag is always reconstructed as the tagged type.
        Otherwise the declared annotation determines how to reconstruct it; values
        with no matching declared type are reconstructed structurally.

        :param data: Serialized value
        :param path: Segment(s) under which the value is found in its parent
        :param annotation: Declared annotation of the value
        :raises ReflectionError: If no tag is present and the declared annotation
        is ambiguous or cannot be instantiated
        """
        annotation_ = (
            annotation if isinstance(annotation, Annotation) else Annotation(annotation)
        )
        with _bubble_path(path):
            return self._deserialize_value(data, annotation_)

    def _serialize_value(self, obj: Any) -> SerializedValue:
        if obj is None or isinstance(obj, SCALAR_TYPES):
            return obj

        if is_object(obj):
            strategy = self.__locator.resolve(get_type_id(type(obj)))
            return strategy.to_map(obj, self)

        if isinstance(obj, Mapping):
            return {k: self.serialize(v, k) for k, v in obj.items()}

        if type(obj) in (list, tuple):
            return [self.serialize(o, i) for i, o in enumerate(obj)]

        assert isinstance(obj, (set, frozenset))
        return self.__serialize_set(obj)

    def _deserialize_value(self, data: Any, annotation: Annotation) -> Any:
        if data is None:
            return None

        # explicit tag always wins over the declared type
        if isinstance(data, Mapping) and self.__config.type_key in data:
            return self.__deserialize_tagged(data)

        options = annotation.options
        if any(o.is_any for o in options):
            return self.__deserialize_untyped(data)

        if isinstance(data, list):
            for option in options:
                if option.native_type in NATIVE_SEQUENCE_TYPES:
                    return self.__deserialize_sequence(data, option)
        elif isinstance(data, Mapping):
            for option in options:
                if option.native_type is dict:
                    return self.__deserialize_mapping(data, option)
        elif any(o.is_scalar for o in options):
            return data

        composites = [o for o in options if o.is_composite]
        if len(composites) > 1:
            raise ReflectionError(
                "Cannot choose between {} without a type tag".format(
                    ", ".join(str(o.raw) for o in composites)
                )
            )
        if composites:
            strategy = self.__locator.resolve(get_type_id(composites[0].concrete_type))
            return strategy.from_map(data, self)

        # no declared type matches the data: reconstruct as-is
        return self.__deserialize_untyped(data)

    def __serialize_set(self, obj: set[Any] | frozenset[Any]) -> list[Any]:
        items = [self.serialize(o, i) for i, o in enumerate(obj)]
        if not self.__config.sort_sets:
            return items
        try:
            return sorted(items)
        except TypeError:
            # elements don't support comparison
            return items

    def __deserialize_tagged(self, data: Mapping[str, Any]) -> Any:
        type_id = data[self.__config.type_key]
        if not isinstance(type_id, str):
            raise FormatError(f"Invalid type tag: {type_id!r}")
        return self.__locator.resolve(type_id).from_map(data, self)

    def __deserialize_untyped(self, data: Any) -> Any:
        if isinstance(data, Mapping):
            if self.__config.type_key in data:
                return self.__deserialize_tagged(data)
            return {k: self.deserialize(v, k) for k, v in data.items()}
        if isinstance(data, list):
            return [self.deserialize(o, i) for i, o in enumerate(data)]
        return data

    def __deserialize_sequence(self, data: list[Any], annotation: Annotation) -> Any:
        item_annotation = annotation.item_annotation()
        items = [
            self.deserialize(o, i, annotation=item_annotation)
            for i, o in enumerate(data)
        ]
        native_type = annotation.native_type
        assert native_type is not None
        return items if native_type is list else native_type(items)

    def __deserialize_mapping(
        self, data: Mapping[str, Any], annotation: Annotation
    ) -> dict[str, Any]:
        value_annotation = annotation.value_annotation()
        return {
            k: self.deserialize(v, k, annotation=value_annotation)
            for k, v in data.items()
        }


@contextmanager
def _bubble_path(path: tuple[str | int, ...]) -> Generator[None, None, None]:
    """
    Prepend path segments to errors bubbling up from a nested value.
    """
    try:
        yield
    except MapcraftError as e:
        for segment in reversed(path):
            e._prepend_path(segment)
        raise


def is_object(obj: Any, /) -> bool:
    """
    Check whether value is an object converted by a strategy, as opposed to a scalar
    or builtin container which is serialized structurally.
    """
    if obj is None or isinstance(obj, (*SCALAR_TYPES, Mapping, set, frozenset)):
        return False
    return type(obj) not in (list, tuple)
