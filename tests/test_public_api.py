"""Checks on the names exported from the package root."""

from __future__ import annotations

import pytest

import callmock


@pytest.mark.parametrize("name", callmock.__all__)
def test_exported_names_resolve(name: str) -> None:
    """Everything listed in ``__all__`` is importable from ``callmock``."""
    assert getattr(callmock, name) is not None


def test_errors_share_a_base_class() -> None:
    """All library errors can be caught with one handler."""
    for error in (
        callmock.UnboundCallError,
        callmock.RecordingAlreadyInProgressError,
        callmock.NoCallRecordedError,
        callmock.AmbiguousMatcherError,
    ):
        assert issubclass(error, callmock.CallMockError)


def test_usage_from_package_root() -> None:
    """The package root is enough to record and replay a binding."""

    class Dice:
        def roll(self, sides: int) -> int:
            raise NotImplementedError

    mox = callmock.CallMock()
    dice = mox.mock(Dice)
    mox.set_return_value(lambda: dice.roll(mox.any(6)), 4)
    assert dice.roll(20) == 4
