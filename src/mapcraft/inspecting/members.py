"""
Discovery of the members a class declares, without the class cooperating.
"""

from __future__ import annotations

import copy
import dataclasses
import inspect
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, get_origin, get_type_hints

from ..exceptions import ReflectionError
from .annotations import ANY, Annotation, normalize_annotation

__all__ = [
    "MISSING",
    "MemberDescriptor",
    "get_members",
]

MISSING = dataclasses.MISSING
"""
Sentinel for members without a declared default.
"""


@dataclass(frozen=True)
class MemberDescriptor:
    """
    Describes a single member of a class as discovered by reflection.
    """

    name: str
    """
    Attribute name, also used as key in the serialized mapping.
    """

    annotation: Annotation = ANY
    """
    Declared annotation, or `Any` if the member is not annotated.
    """

    default: Any = MISSING
    """
    Declared default value, if any.
    """

    default_factory: Callable[[], Any] | None = None
    """
    Factory creating the default value, if any.
    """

    inferred: bool = False
    """
    Whether the member was inferred from a parameter of `__init__` rather than
    declared, in which case the attribute may not exist on instances.
    """

    def get_default(self) -> Any:
        """
        Get the value the member takes when absent from the input: the declared
        default, a fresh value from the factory, or `None`.

        Declared defaults are shallow-copied so mutable class-level defaults
        aren't shared between instances.
        """
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not MISSING:
            return copy.copy(self.default)
        return None


def get_members(cls: type, /) -> tuple[MemberDescriptor, ...]:
    """
    Get the members declared by a class, base classes first, from (in order of
    precedence):

    - Dataclass fields
    - Class-level annotations throughout the MRO, excluding `ClassVar`
    - `__slots__` throughout the MRO
    - Parameters of `__init__`, for plain classes without any of the above

    :raises ReflectionError: If the annotations of the class cannot be evaluated
    """
    type_hints = _get_type_hints(cls)

    if dataclasses.is_dataclass(cls):
        return tuple(_from_field(f, type_hints) for f in dataclasses.fields(cls))

    members: dict[str, MemberDescriptor] = {}

    # annotated attributes, base classes first
    for base in reversed(cls.__mro__):
        if base is object:
            continue
        for name in inspect.get_annotations(base):
            hint = type_hints.get(name, Any)
            if _is_classvar(hint) or name.startswith("__"):
                continue
            members[name] = MemberDescriptor(
                name,
                Annotation(hint),
                default=_get_class_default(cls, name),
            )

    # slotted attributes which aren't annotated
    for base in reversed(cls.__mro__):
        slots = vars(base).get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if name in members or name in ("__dict__", "__weakref__"):
                continue
            members[name] = MemberDescriptor(
                name, Annotation(type_hints.get(name, Any))
            )

    if members:
        return tuple(members.values())

    return _from_init(cls)


def _get_type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise ReflectionError(
            f"Could not evaluate annotations of {cls.__qualname__}: {e}"
        ) from e


def _from_field(
    field: dataclasses.Field[Any], type_hints: dict[str, Any]
) -> MemberDescriptor:
    default_factory = field.default_factory
    return MemberDescriptor(
        field.name,
        Annotation(type_hints.get(field.name, Any)),
        default=field.default,
        default_factory=(
            None if default_factory is dataclasses.MISSING else default_factory
        ),
    )


def _from_init(cls: type) -> tuple[MemberDescriptor, ...]:
    """
    Get members from the parameters of `__init__`, assuming each is stored under
    an attribute of the same name.
    """
    if cls.__init__ is object.__init__:
        return ()

    try:
        sig = inspect.signature(cls.__init__)
    except (TypeError, ValueError) as e:
        raise ReflectionError(f"Could not inspect {cls.__qualname__}: {e}") from e

    try:
        hints = get_type_hints(cls.__init__, include_extras=True)
    except (NameError, TypeError):
        hints = {}

    members: list[MemberDescriptor] = []
    for i, param in enumerate(sig.parameters.values()):
        if i == 0 or param.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        ):
            # skip self, *args and **kwargs
            continue
        members.append(
            MemberDescriptor(
                param.name,
                Annotation(hints.get(param.name, Any)),
                default=(
                    MISSING
                    if param.default is inspect.Parameter.empty
                    else param.default
                ),
                inferred=True,
            )
        )
    return tuple(members)


def _get_class_default(cls: type, name: str) -> Any:
    for base in cls.__mro__:
        if name in vars(base):
            value = vars(base)[name]
            # slot descriptors and properties aren't defaults
            if inspect.isdatadescriptor(value):
                return MISSING
            return value
    return MISSING


def _is_classvar(hint: Any) -> bool:
    hint_ = normalize_annotation(hint)
    return hint_ is ClassVar or get_origin(hint_) is ClassVar
