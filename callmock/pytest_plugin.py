"""Pytest plugin providing the ``call_mock`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .controller import CallMock

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("call_mock")
    group.addoption(
        "--call-mock-strict",
        action="store_true",
        dest="call_mock_strict",
        default=None,
        help=(
            "Fail a recording closure that calls no mock, or that marks only "
            "some occurrences of a repeated argument, instead of logging a "
            "warning. Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-call-mock-strict",
        action="store_false",
        dest="call_mock_strict",
        default=None,
        help="Only warn about empty recordings and ambiguous markers.",
    )
    parser.addini(
        "call_mock_strict",
        "Fail empty recordings and ambiguous argument markers.",
        type="bool",
        default=False,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "call_mock(strict: bool = False): override strict recording for a "
            "single test."
        ),
    )


def _strict_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether the fixture's controller should record strictly."""
    # Priority order: marker > fixture param > CLI option > INI setting

    marker_value = _get_marker_strict(request)
    if marker_value is not None:
        return marker_value

    param_value = _get_param_strict(request)
    if param_value is not None:
        return param_value

    config = request.config
    cli_value = config.getoption("call_mock_strict")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("call_mock_strict"))


def _get_marker_strict(request: pytest.FixtureRequest) -> bool | None:
    """Return marker override for strict recording if present."""
    marker = request.node.get_closest_marker("call_mock")
    if marker is None or "strict" not in marker.kwargs:
        return None
    return bool(marker.kwargs["strict"])


def _get_param_strict(request: pytest.FixtureRequest) -> bool | None:
    """Return fixture parameter override for strict recording if present."""
    param = getattr(request, "param", None)
    if param is None:
        return None
    if isinstance(param, dict):
        if "strict" in param:
            return bool(param["strict"])
        keys = list(param.keys())
        msg = f"call_mock fixture param dict must contain 'strict' key, got keys: {keys}"
        raise TypeError(msg)
    if isinstance(param, bool):
        return param
    msg = (
        "call_mock fixture param must be a bool or dict with 'strict' key, "
        f"got {type(param).__name__}"
    )
    raise TypeError(msg)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach each phase's report to the test item.

    Teardown of the ``call_mock`` fixture inspects the call report to avoid
    masking a test failure with its own.
    """
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


@pytest.fixture
def call_mock(request: pytest.FixtureRequest) -> t.Generator[CallMock, None, None]:
    """Provide a fresh :class:`CallMock` controller for the test."""
    try:
        mox = CallMock(strict=_strict_enabled(request))
        yield mox
    except Exception:
        logger.exception("Error during call_mock fixture setup or test execution")
        raise
    _check_no_open_recording(request.node, mox)


def _check_no_open_recording(item: pytest.Item, mox: CallMock) -> None:
    """Fail the test when it left a recording session open."""
    if not mox.dispatcher.is_recording:
        return
    logger.error("call_mock fixture torn down with a recording still open")
    if not _call_stage_failed(item):
        pytest.fail("call_mock fixture torn down with a recording still open")


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    return bool(rep_call and rep_call.failed)
