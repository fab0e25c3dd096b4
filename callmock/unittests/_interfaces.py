"""Interfaces shared by the unit tests."""

from __future__ import annotations

import abc
import typing as t


class Example(t.Protocol):
    """Interface with a single nullary operation."""

    def get_int(self) -> int: ...


class WithArgs(abc.ABC):
    """Interface whose operation takes two arguments."""

    @abc.abstractmethod
    def a(self, i: int, text: str) -> str:
        """Combine *i* and *text*."""


class Repository:
    """Concrete class used as an interface; its constructor must never run."""

    def __init__(self, dsn: str) -> None:
        msg = f"tried to connect to {dsn}"
        raise AssertionError(msg)

    def get(self, key: object) -> object:
        """Return the row stored under *key*."""
        raise NotImplementedError

    def find(self, name: object, fallback: object = None) -> object:
        """Return the row named *name*, or *fallback*."""
        raise NotImplementedError

    def put(self, key: object, value: object, *, overwrite: bool = False) -> None:
        """Store *value* under *key*."""
        raise NotImplementedError

    def log(self, *messages: str, **extra: object) -> int:
        """Write *messages*; return how many were written."""
        raise NotImplementedError

    def _connect(self) -> None:
        raise NotImplementedError


class Sized(abc.ABC):
    """Interface exposing dunder protocol methods."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Return the size."""

    @abc.abstractmethod
    def __call__(self, value: int) -> int:
        """Transform *value*."""

    @property
    @abc.abstractmethod
    def label(self) -> str:
        """Return a label."""

    @classmethod
    def build(cls) -> Sized:
        """Alternate constructor; not an operation."""
        raise NotImplementedError


class Token:
    """Value object compared by content."""

    def __init__(self, text: str) -> None:
        self.text = text

    def __eq__(self, other: object) -> bool:
        """Tokens with equal text are equal."""
        return isinstance(other, Token) and other.text == self.text

    def __hash__(self) -> int:
        """Hash by text."""
        return hash(self.text)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Token({self.text!r})"


class Consumer(t.Protocol):
    """Interface taking a token."""

    def consume(self, token: Token) -> str: ...
