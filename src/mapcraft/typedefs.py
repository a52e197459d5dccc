"""
Basic definitions for type-based mapping.
"""

from __future__ import annotations

from types import NoneType

__all__ = [
    "SerializedValue",
    "TYPE_KEY",
    "ITEMS_KEY",
    "SCALAR_TYPES",
    "NATIVE_SEQUENCE_TYPES",
    "NATIVE_CONTAINER_TYPES",
]

type SerializedValue = str | int | float | bool | NoneType | list[
    SerializedValue
] | dict[str, SerializedValue]
"""
Generic nested key-value representation produced by serialization.
"""

TYPE_KEY = "__type"
"""
Reserved key holding the type identifier of the object a mapping was created from.
"""

ITEMS_KEY = "items"
"""
Key holding the elements of a serialized collection object.
"""

SCALAR_TYPES: tuple[type, ...] = (str, int, float, bool, bytes, NoneType)
"""
Types which are passed through as-is and are never composite.
"""

NATIVE_SEQUENCE_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)
"""
Builtin value collections serialized structurally as lists, without a tag.
"""

NATIVE_CONTAINER_TYPES: tuple[type, ...] = (*NATIVE_SEQUENCE_TYPES, dict)
"""
All builtin containers serialized structurally, without a tag.
"""
