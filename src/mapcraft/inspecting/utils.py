"""
Inspecting utilities.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "safe_issubclass",
    "get_qualified_attr",
]


def safe_issubclass(cls: Any, class_or_tuple: type | tuple[type, ...], /) -> bool:
    """
    `issubclass()` can raise `TypeError` in some cases, e.g. for generic aliases or
    protocols with non-method members; handle it and gracefully return `False`.
    """
    if not isinstance(cls, type):
        return False

    try:
        is_subclass = issubclass(cls, class_or_tuple)
    except TypeError:
        return False

    return is_subclass


def get_qualified_attr(obj: Any, qualname: str, /) -> Any:
    """
    Walk a dotted qualified name like `Outer.Inner` starting from `obj`.

    :raises AttributeError: If any segment is missing
    """
    for segment in qualname.split("."):
        obj = getattr(obj, segment)
    return obj
