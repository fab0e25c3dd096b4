"""Shared validation helpers."""

from __future__ import annotations

import inspect


def validate_interface(interface: object) -> None:
    """Ensure *interface* is a class a mock can be derived from."""
    if not inspect.isclass(interface):
        msg = f"interface must be a class, got {type(interface).__name__}"
        raise TypeError(msg)
    if getattr(interface, "__final__", False):
        msg = f"cannot mock {interface.__qualname__}: class is marked final"
        raise TypeError(msg)


def validate_callable(value: object, role: str) -> None:
    """Ensure *value* can be invoked, naming it *role* in the error."""
    if not callable(value):
        msg = f"{role} must be callable, got {type(value).__name__}"
        raise TypeError(msg)
