"""Unit tests for positional argument marker resolution."""

from __future__ import annotations

import logging

import pytest

from callmock.errors import AmbiguousMatcherError
from callmock.matchers import Any, EqualsValue, SameReference
from callmock.registry import ArgumentMatcherRegistry
from callmock.unittests._interfaces import Token


def test_unmarked_arguments_default_to_equality() -> None:
    """Positions without a marker compare by value."""
    registry = ArgumentMatcherRegistry()
    matchers = registry.matchers_for((1, "x"))
    assert all(isinstance(m, EqualsValue) for m in matchers)
    assert [m.expected for m in matchers] == [1, "x"]  # type: ignore[attr-defined]


def test_marker_applies_to_its_position() -> None:
    """A marked object receives its matcher at the position it occupies."""
    text = "only-here"
    registry = ArgumentMatcherRegistry()
    registry.register(text, Any())
    first, second = registry.matchers_for((10, text))
    assert isinstance(first, EqualsValue)
    assert isinstance(second, Any)


def test_equal_values_do_not_collide() -> None:
    """Two equal but distinct arguments keep separate matchers."""
    left = Token("t")
    right = Token("t")
    registry = ArgumentMatcherRegistry()
    registry.register(left, Any())
    registry.register(right, SameReference(right))
    first, second = registry.matchers_for((left, right))
    assert isinstance(first, Any)
    assert isinstance(second, SameReference)


def test_repeated_object_marked_each_time() -> None:
    """Markers on the same object pair up with its positions in order."""
    shared = Token("s")
    registry = ArgumentMatcherRegistry()
    registry.register(shared, EqualsValue(shared))
    registry.register(shared, Any())
    first, second = registry.matchers_for((shared, shared))
    assert isinstance(first, EqualsValue)
    assert isinstance(second, Any)


def test_under_marked_repeated_object_uses_last_marker(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """The last marker covers every identical position, with a warning."""
    shared = Token("s")
    registry = ArgumentMatcherRegistry()
    registry.register(shared, Any())
    with caplog.at_level(logging.WARNING, logger="callmock.registry"):
        first, second = registry.matchers_for((shared, shared))
    assert isinstance(first, Any)
    assert isinstance(second, Any)
    assert "appears 2 times" in caplog.text


def test_under_marked_repeated_object_is_ambiguous_when_strict() -> None:
    """Strict registries refuse to guess which occurrence was marked."""
    shared = Token("s")
    registry = ArgumentMatcherRegistry(strict=True)
    registry.register(shared, Any())
    with pytest.raises(AmbiguousMatcherError, match="wrap every occurrence"):
        registry.matchers_for((shared, shared))


def test_default_positions_are_not_aligned() -> None:
    """A position filled from a parameter default keeps equality matching."""
    registry = ArgumentMatcherRegistry(strict=True)
    registry.register(None, Any())
    first, second = registry.matchers_for((None, None), (True, False))
    assert isinstance(first, Any)
    assert isinstance(second, EqualsValue)
    assert second.expected is None


def test_marker_not_passed_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    """A marker whose object never reaches the call only logs a warning."""
    registry = ArgumentMatcherRegistry()
    registry.register(Token("stray"), Any())
    with caplog.at_level(logging.WARNING, logger="callmock.registry"):
        matchers = registry.matchers_for((Token("other"),))
    assert isinstance(matchers[0], EqualsValue)
    assert "was not passed" in caplog.text


def test_markers_are_kept_in_order() -> None:
    """The registry exposes markers in registration order."""
    registry = ArgumentMatcherRegistry()
    registry.register("a", Any())
    registry.register("b", Any())
    assert len(registry) == 2
    assert [m.value for m in registry.markers] == ["a", "b"]
