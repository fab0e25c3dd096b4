"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

from callmock import CallMock

pytest_plugins = ("callmock.pytest_plugin", "pytester")


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "threaded: mark test as exercising recordings from several threads",
    )


@pytest.fixture
def mox() -> t.Iterator[CallMock]:
    """Provide a controller and check no recording leaks past the test."""
    controller = CallMock()
    yield controller
    assert not controller.dispatcher.is_recording
