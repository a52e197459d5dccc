"""
Utilities to extract type parameters passed to generic base classes.
"""

from __future__ import annotations

from typing import (
    Any,
    TypeVar,
    cast,
    get_args,
    get_origin,
)

from .utils import safe_issubclass

__all__ = [
    "extract_args",
    "extract_arg",
    "normalize_args",
]

type _ArgEntry = Any | tuple[str, Any]
"""
Positional arg, or (parameter name, arg) if the base declares named parameters.
"""


def extract_args(cls: type, base_cls: type, /) -> tuple[Any, ...]:
    """
    Extract from `cls` the type arguments that were passed to `base_cls`, e.g.
    `(Bar,)` for `class BarCollection(list[Bar])` and `list`.

    :param cls: Class to extract type arguments from
    :param base_cls: Generic base class whose arguments should be extracted
    :raises TypeError: If `base_cls` is not in `cls`'s inheritance hierarchy
    :return: Resolved types or unresolved `TypeVar`s, in parameter order
    """
    entries = _find_args(cls, base_cls, {})
    if entries is None:
        raise TypeError(
            f"Base class {base_cls} not found in {cls}'s inheritance hierarchy"
        )
    return tuple(e[1] if isinstance(e, tuple) else e for e in entries)


def extract_arg(
    cls: type, base_cls: type, name_or_index: str | int, /
) -> type | Any:
    """
    Extract from `cls` the resolved type argument passed to `base_cls` for the
    parameter with the given name or index.

    :raises TypeError: If `base_cls` is not in `cls`'s inheritance hierarchy
    :raises KeyError: If parameter name not found
    :raises IndexError: If parameter index out of range
    :raises ValueError: If the argument is an unresolved `TypeVar`
    """
    entries = _find_args(cls, base_cls, {})
    if entries is None:
        raise TypeError(
            f"Base class {base_cls} not found in {cls}'s inheritance hierarchy"
        )

    if isinstance(name_or_index, str):
        named = {e[0]: e[1] for e in entries if isinstance(e, tuple)}
        if name_or_index not in named:
            raise KeyError(
                f"Type parameter '{name_or_index}' not found in {base_cls}, "
                f"available: {list(named)}"
            )
        arg = named[name_or_index]
    else:
        if name_or_index >= len(entries):
            raise IndexError(
                f"Type parameter index {name_or_index} out of range for {base_cls}"
            )
        entry = entries[name_or_index]
        arg = entry[1] if isinstance(entry, tuple) else entry

    if isinstance(arg, TypeVar):
        raise ValueError(
            f"Type parameter '{name_or_index}' of {base_cls} is unresolved in {cls}"
        )

    return arg


def normalize_args(args: tuple[Any, ...], /) -> tuple[Any, ...]:
    """
    Normalize args, replacing unresolved `TypeVar`s with `Any`.
    """
    return tuple(Any if isinstance(a, TypeVar) else a for a in args)


def _find_args(
    cls: Any, base_cls: type, tv_map: dict[TypeVar, Any]
) -> list[_ArgEntry] | None:
    origin, args = get_origin(cls), get_args(cls)

    # the unparameterized base itself: its own type parameters are unresolved
    if cls is base_cls and origin is None:
        return [(t.__name__, t) for t in _get_parameters(base_cls)]

    # map this level's type parameters to the args passed, chaining substitutions
    if isinstance(origin, type):
        tv_map = _update_typevar_map(tv_map, _get_parameters(origin), args)

    if origin is base_cls:
        return _build_args_list(_get_parameters(base_cls), args, tv_map)

    # recurse into bases, using the origin's bases for a generic alias
    check_cls = origin if isinstance(origin, type) else cls
    bases = _get_bases(check_cls, "__orig_bases__") + _get_bases(
        check_cls, "__bases__"
    )
    for base in bases:
        if (result := _find_args(base, base_cls, tv_map)) is not None:
            return result

    # ABC registered via `register()` or structural protocol: not in the MRO
    if (
        args
        and isinstance(check_cls, type)
        and base_cls not in check_cls.__mro__
        and safe_issubclass(check_cls, base_cls)
    ):
        return _build_args_list(_get_parameters(base_cls), args, tv_map)

    return None


def _get_parameters(cls: type) -> tuple[TypeVar, ...]:
    parameters = cast(tuple[Any, ...], getattr(cls, "__parameters__", ()))
    return tuple(p for p in parameters if isinstance(p, TypeVar))


def _get_bases(cls: Any, attr: str) -> list[Any]:
    return list(cast(tuple[Any, ...], getattr(cls, attr, ())))


def _build_args_list(
    type_params: tuple[TypeVar, ...],
    args: tuple[Any, ...],
    tv_map: dict[TypeVar, Any],
) -> list[_ArgEntry]:
    resolved = [tv_map.get(a, a) if isinstance(a, TypeVar) else a for a in args]

    if type_params:
        assert len(type_params) == len(
            args
        ), f"Type parameters mismatched with args: parameters={type_params}, args={args}"
        return [(p.__name__, a) for p, a in zip(type_params, resolved)]

    # builtin generic like list[int]: no named parameters, just positional args
    return list(resolved)


def _update_typevar_map(
    tv_map: dict[TypeVar, Any],
    type_params: tuple[TypeVar, ...],
    args: tuple[Any, ...],
) -> dict[TypeVar, Any]:
    if not type_params or not args:
        return tv_map

    new_tv_map = tv_map.copy()
    for type_param, arg in zip(type_params, args):
        if isinstance(arg, TypeVar):
            if arg in tv_map:
                new_tv_map[type_param] = tv_map[arg]
        else:
            new_tv_map[type_param] = arg
    return new_tv_map
