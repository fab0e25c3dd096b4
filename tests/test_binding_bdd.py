"""Behavioural tests for call binding using pytest-bdd."""

from __future__ import annotations

from pathlib import Path

from pytest_bdd import scenario

from tests.steps.binding import *  # noqa: F403

FEATURES_DIR = Path(__file__).resolve().parent.parent / "features"


@scenario(str(FEATURES_DIR / "binding.feature"), "constant return value")
def test_constant_return_value() -> None:
    """A recorded constant is returned on replay."""


@scenario(str(FEATURES_DIR / "binding.feature"), "stateful body")
def test_stateful_body() -> None:
    """Bodies run on every replayed call."""


@scenario(
    str(FEATURES_DIR / "binding.feature"),
    "specific binding recorded before a wildcard",
)
def test_specific_before_wildcard() -> None:
    """First-registered bindings win over later ones."""


@scenario(
    str(FEATURES_DIR / "binding.feature"),
    "identity matching rejects equal copies",
)
def test_identity_matching() -> None:
    """``same`` markers accept only the recorded object."""


@scenario(str(FEATURES_DIR / "binding.feature"), "unbound call")
def test_unbound_call() -> None:
    """Calls without a binding raise."""


@scenario(str(FEATURES_DIR / "binding.feature"), "nested recording is rejected")
def test_nested_recording() -> None:
    """Recording is not re-entrant."""
