"""
Type identifiers: fully-qualified names which uniquely identify a class.
"""

from __future__ import annotations

import importlib
from functools import cache
from typing import Any

from ..exceptions import ReflectionError
from .utils import get_qualified_attr

__all__ = [
    "get_type_id",
    "resolve_type",
]


def get_type_id(cls: type, /) -> str:
    """
    Get the type identifier of a class: its module followed by its qualified name,
    e.g. `"datetime.datetime"` or `"app.models.Outer.Inner"`.
    """
    if not isinstance(cls, type):
        raise TypeError(f"Not a class: {cls!r}")
    return f"{cls.__module__}.{cls.__qualname__}"


@cache
def resolve_type(type_id: str, /) -> type:
    """
    Resolve a type identifier back to the class it was created from.

    Imports the longest importable module prefix, then walks the remaining segments
    as attributes to accommodate nested classes.

    :raises ReflectionError: If the identifier does not name a class
    """
    if not isinstance(type_id, str) or not type_id:
        raise ReflectionError(f"Invalid type identifier: {type_id!r}")

    segments = type_id.split(".")
    if "<locals>" in segments:
        raise ReflectionError(
            f"Type '{type_id}' is defined in a function scope and cannot be resolved"
        )

    for i in range(len(segments) - 1, 0, -1):
        module_name = ".".join(segments[:i])
        module = _import_module(module_name)
        if module is None:
            continue
        try:
            obj = get_qualified_attr(module, ".".join(segments[i:]))
        except AttributeError:
            break
        if not isinstance(obj, type):
            raise ReflectionError(f"Type identifier '{type_id}' names {obj!r}")
        return obj

    raise ReflectionError(f"Unknown type '{type_id}'")


def _import_module(module_name: str) -> Any | None:
    """
    Import module by name, returning `None` if it (or a parent package) does not
    exist. Import errors raised from within an existing module are propagated.
    """
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if e.name is not None and not module_name.startswith(e.name):
            raise
        return None
    except ValueError:
        # empty segment, e.g. "foo..Bar"
        return None
