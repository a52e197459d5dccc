"""
Utilities to inspect type annotations.
"""

from __future__ import annotations

from collections import abc
from types import EllipsisType, GenericAlias, NoneType, UnionType
from typing import (
    Annotated,
    Any,
    Literal,
    TypeAliasType,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from ..typedefs import NATIVE_CONTAINER_TYPES, SCALAR_TYPES
from .generics import extract_args, normalize_args
from .utils import safe_issubclass

__all__ = [
    "ANY",
    "Annotation",
    "is_union",
    "unwrap_alias",
    "split_annotated",
    "normalize_annotation",
    "flatten_union",
    "get_concrete_type",
]


class Annotation:
    """
    Normalized representation of a declared annotation, used to reconstruct values
    when serialized data carries no type tag.

    Unwraps `TypeAlias` and `Annotated` if applicable.
    """

    raw: Any
    """
    Original annotation after stripping `Annotated[]` if applicable. May be a generic
    type.
    """

    extras: tuple[Any, ...]
    """
    Annotation extras, if `Annotated[]` was passed.
    """

    origin: Any
    """
    Origin, non-`None` if annotation is a generic type.
    """

    args: tuple[Any, ...]
    """
    Generic type parameters.
    """

    concrete_type: type
    """
    Concrete (non-generic) type, determined based on annotation:

    - `Any` or an unbound `TypeVar`: `object`
    - `Literal`: type of `Literal[]` forms
    - `None`: `NoneType`
    - `Union`: `UnionType`
    - Generic type: `get_origin(annotation)`
    - Otherwise: annotation itself, ensuring it's a type
    """

    def __init__(self, annotation: Any, /):
        raw, extras = split_annotated(unwrap_alias(annotation))
        raw = unwrap_alias(raw)

        self.raw = raw
        self.extras = extras
        self.origin = get_origin(raw)
        self.args = get_args(raw)
        self.concrete_type = get_concrete_type(raw)

    def __repr__(self) -> str:
        return f"Annotation({self.raw}, concrete_type={self.concrete_type})"

    def __eq__(self, other: Any, /) -> bool:
        if not isinstance(other, Annotation):
            return False
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    @property
    def is_union(self) -> bool:
        return self.concrete_type is UnionType

    @property
    def is_any(self) -> bool:
        return self.concrete_type is object

    @property
    def is_scalar(self) -> bool:
        """
        Whether values of this annotation are passed through as-is.
        """
        return self.concrete_type is LiteralType or safe_issubclass(
            self.concrete_type, SCALAR_TYPES
        )

    @property
    def is_native_container(self) -> bool:
        """
        Whether this annotation is a builtin container or abstract container
        interface, serialized structurally.
        """
        return self.native_type is not None

    @property
    def native_type(self) -> type | None:
        """
        Builtin container type to construct for this annotation, e.g. `list` for
        `Sequence[int]`, or `None` if it isn't a container annotation.
        """
        if self.concrete_type in NATIVE_CONTAINER_TYPES:
            return self.concrete_type
        return ABSTRACT_CONTAINER_MAP.get(self.concrete_type)

    @property
    def is_composite(self) -> bool:
        """
        Whether values of this annotation are handled by a strategy.
        """
        return not (
            self.is_any or self.is_union or self.is_scalar or self.is_native_container
        )

    @property
    def arg_annotations(self) -> tuple[Annotation, ...]:
        if self.origin is Literal:
            return ()
        return tuple(Annotation(a) for a in self.args)

    @property
    def options(self) -> tuple[Annotation, ...]:
        """
        Union members excluding `None`, or just this annotation if it isn't a union.
        """
        if not self.is_union:
            return (self,)
        return tuple(
            Annotation(a) for a in flatten_union(self.raw) if a not in (None, NoneType)
        )

    def item_annotation(self) -> Annotation:
        """
        Get annotation of items for a value collection, e.g. `int` for `list[int]`,
        `tuple[int, ...]` or a subclass of `list[int]`.
        """
        for base in (list, tuple, set, frozenset):
            if safe_issubclass(self.concrete_type, base):
                break
        else:
            # abstract interface like `Sequence[int]`
            return Annotation(self.args[0]) if self.args else ANY

        if self.concrete_type is base:
            args = self.args
        else:
            try:
                args = normalize_args(extract_args(self.concrete_type, base))
            except TypeError:
                args = ()

        if not args:
            return ANY
        if base is tuple and not (len(args) == 2 and args[1] is ...):
            # fixed-length or heterogeneous tuple
            return Annotation(args[0]) if len(set(args)) == 1 else ANY
        return Annotation(args[0])

    def value_annotation(self) -> Annotation:
        """
        Get annotation of values for a mapping, e.g. `Bar` for `dict[str, Bar]`.
        """
        if len(self.args) == 2:
            return Annotation(self.args[1])
        return ANY


def is_union(annotation: Any, /) -> bool:
    """
    Check whether annotation is a union, accommodating both `int | str`
    and `Union[int, str]`.
    """
    return isinstance(annotation, UnionType) or get_origin(annotation) is Union


def unwrap_alias(annotation: Any, /) -> Any:
    """
    If annotation is a `TypeAlias`, extract the corresponding definition.
    """
    if isinstance(annotation, TypeAliasType):
        return annotation.__value__
    elif isinstance(annotation, GenericAlias):
        # e.g. `type MyType[T] = list[T]` used as `MyType[int]`
        origin = get_origin(annotation)
        if isinstance(origin, TypeAliasType):
            return origin.__value__
    return annotation


def split_annotated(annotation: Any, /) -> tuple[Any, tuple[Any, ...]]:
    """
    If annotation is an `Annotated`, split it into the wrapped annotation and extras.
    """
    if get_origin(annotation) is Annotated:
        args = get_args(annotation)
        return args[0], tuple(args[1:])
    return annotation, ()


def normalize_annotation(annotation: Any, /) -> Any:
    """
    Unwrap aliases and `Annotated`, discarding extras.
    """
    annotation_ = unwrap_alias(annotation)
    if get_origin(annotation_) is Annotated:
        annotation_, _ = split_annotated(annotation_)
        annotation_ = unwrap_alias(annotation_)
    return annotation_


def flatten_union(annotation: Any, /) -> tuple[Any, ...]:
    """
    If annotation is a union, recursively flatten it into its constituent types;
    otherwise return the annotation as-is.
    """
    annotation_ = normalize_annotation(annotation)
    if not is_union(annotation_):
        return (annotation_,)
    flattened: list[Any] = []
    for arg in get_args(annotation_):
        flattened += flatten_union(arg)
    return tuple(flattened)


def get_concrete_type(annotation: Any, /) -> type:
    """
    Get concrete type of parameterized annotation, or `object` if the annotation is
    `Any` or an unbound `TypeVar`.
    """
    annotation_ = normalize_annotation(annotation)
    concrete_type = get_origin(annotation_) or annotation_

    if concrete_type is Literal:
        return LiteralType

    if concrete_type is Any:
        return object

    if isinstance(concrete_type, TypeVar):
        concrete_type = concrete_type.__bound__ or object

    # convert singletons to respective type so isinstance() works as expected
    singleton_map = {None: NoneType, Ellipsis: EllipsisType, Union: UnionType}
    concrete_type = singleton_map.get(concrete_type, concrete_type)

    if not isinstance(concrete_type, type):
        # forward references and other unsupported annotations are treated as Any
        return object

    return concrete_type


LiteralType: type = type(Literal["sentinel"])

ABSTRACT_CONTAINER_MAP: dict[type, type] = {
    abc.Iterable: list,
    abc.Collection: list,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Set: set,
    abc.MutableSet: set,
    abc.Mapping: dict,
    abc.MutableMapping: dict,
}
"""
Abstract container interfaces mapped to the builtin container constructed for them.
"""

ANY = Annotation(Any)
"""
Annotation encapsulating `Any`.
"""
