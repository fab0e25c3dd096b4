"""Argument matchers selected while recording a binding."""

from __future__ import annotations

import collections.abc as cabc
import typing as t


class Matcher(t.Protocol):
    """Callable returning ``True`` when a live argument is acceptable."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the matcher."""
        ...


class Any:
    """Match any value."""

    __slots__ = ()

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "Any()"


class EqualsValue:
    """Match values comparing equal to ``expected``."""

    __slots__ = ("expected",)

    def __init__(self, expected: object) -> None:
        self.expected = expected

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value == expected``."""
        return bool(value == self.expected)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"EqualsValue({self.expected!r})"


class SameReference:
    """Match only the very object passed as ``expected``."""

    __slots__ = ("expected",)

    def __init__(self, expected: object) -> None:
        self.expected = expected

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* is ``expected``."""
        return value is self.expected

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"SameReference({self.expected!r})"


class Predicate:
    """Use a custom ``func`` to determine a match."""

    __slots__ = ("func",)

    def __init__(self, func: t.Callable[[t.Any], object]) -> None:
        self.func = func

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        name = getattr(self.func, "__qualname__", None) or repr(self.func)
        return f"Predicate({name})"


class Elements:
    """Match a sequence item by item, requiring the same length.

    Used for the packed tuple of a ``*args`` parameter.
    """

    __slots__ = ("matchers",)

    def __init__(self, matchers: t.Iterable[Matcher]) -> None:
        self.matchers = tuple(matchers)

    def __call__(self, value: object) -> bool:
        """Return ``True`` when every item of *value* satisfies its matcher."""
        if not isinstance(value, cabc.Sequence) or isinstance(value, str):
            return False
        if len(value) != len(self.matchers):
            return False
        return all(
            matcher(item) for matcher, item in zip(self.matchers, value, strict=True)
        )

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Elements({', '.join(repr(m) for m in self.matchers)})"


class Keywords:
    """Match a mapping key by key, requiring the same set of keys.

    Used for the packed dict of a ``**kwargs`` parameter.
    """

    __slots__ = ("matchers",)

    def __init__(self, matchers: t.Mapping[str, Matcher]) -> None:
        self.matchers = dict(matchers)

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* has exactly the expected accepted keys."""
        if not isinstance(value, cabc.Mapping) or set(value) != set(self.matchers):
            return False
        return all(matcher(value[key]) for key, matcher in self.matchers.items())

    def __repr__(self) -> str:
        """Return a debug representation."""
        parts = ", ".join(f"{key}={m!r}" for key, m in self.matchers.items())
        return f"Keywords({parts})"


__all__ = [
    "Any",
    "Elements",
    "EqualsValue",
    "Keywords",
    "Matcher",
    "Predicate",
    "SameReference",
]
