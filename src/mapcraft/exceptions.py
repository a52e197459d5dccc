"""
Exception classes.
"""

from __future__ import annotations

__all__ = [
    "MapcraftError",
    "InvalidArgumentError",
    "ReflectionError",
    "FormatError",
    "ConfigError",
]


class MapcraftError(Exception):
    """
    Base class for errors raised by this package.

    Carries the path of the value being converted when the error was raised, which
    gets filled in as the error bubbles up through nested frames.
    """

    message: str
    """
    Error message without path information.
    """

    path: tuple[str | int, ...]
    """
    Path from the root object to the value which failed.
    """

    def __init__(self, message: str, /, *, path: tuple[str | int, ...] = ()):
        self.message = message
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.format_path()}: {self.message}"

    def format_path(self) -> str:
        """
        Path tuple formatted as dot notation.

        Examples:

        - `('bars', 'items', 1) -> "bars.items[1]"`
        - `('foo', 'foo') -> "foo.foo"`
        - `(0, 'id') -> "[0].id"`
        - `() -> "<root>"`
        """
        if not self.path:
            return "<root>"
        parts: list[str] = []
        for i, segment in enumerate(self.path):
            if isinstance(segment, int):
                # index: append as [n]
                parts.append(f"[{segment}]")
            else:
                # field name: prefix with dot
                prefix = "." if i != 0 else ""
                parts.append(f"{prefix}{segment}")
        return "".join(parts)

    def _prepend_path(self, segment: str | int, /):
        """
        Adjust path upon bubbling up to the parent frame.
        """
        self.path = (segment, *self.path)


class InvalidArgumentError(MapcraftError, ValueError):
    """
    Top-level input to `serialize()` or `deserialize()` has the wrong shape: a
    non-object passed to `serialize()` or an unresolvable type passed to
    `deserialize()`.
    """


class ReflectionError(MapcraftError, TypeError):
    """
    A type could not be introspected to build a reflective strategy, e.g. an
    unknown type name or a non-composite type.
    """


class FormatError(MapcraftError, ValueError):
    """
    A strategy could not parse its expected literal representation.
    """


class ConfigError(MapcraftError):
    """
    Invalid configuration file or value.
    """
