"""Formatting helpers for diagnostics."""

from __future__ import annotations

import typing as t


def format_args(args: t.Iterable[object]) -> str:
    """Return the comma separated ``repr`` of *args*."""
    return ", ".join(repr(arg) for arg in args)


def format_call(name: str, args: t.Iterable[object]) -> str:
    """Return ``name(arg, ...)`` for *args*."""
    return f"{name}({format_args(args)})"


def format_kwargs(kwargs: t.Mapping[str, object]) -> str:
    """Return the comma separated ``key=value`` pairs of *kwargs*."""
    return ", ".join(f"{key}={value!r}" for key, value in kwargs.items())


def format_invocation(
    name: str, args: t.Sequence[object], kwargs: t.Mapping[str, object]
) -> str:
    """Return a call expression as the caller wrote it."""
    parts = [part for part in (format_args(args), format_kwargs(kwargs)) if part]
    return f"{name}({', '.join(parts)})"
