"""Runtime mocks programmed by recording ordinary calls.

A mock is synthesized from any class. Its behaviour is then bound by running a
small closure that calls the mock once; the call is captured, not executed,
and later calls with matching arguments run the bound behaviour.
"""

from __future__ import annotations

from .bindings import Call, MockFunction, Operation
from .controller import CallMock
from .dispatcher import BindingSession, Dispatcher
from .errors import (
    AmbiguousMatcherError,
    CallMockError,
    NoCallRecordedError,
    RecordingAlreadyInProgressError,
    UnboundCallError,
)
from .matchers import (
    Any,
    Elements,
    EqualsValue,
    Keywords,
    Matcher,
    Predicate,
    SameReference,
)
from .proxy import MockState, ProxyFactory, state_of
from .pytest_plugin import call_mock as call_mock_fixture

__all__ = [
    "AmbiguousMatcherError",
    "Any",
    "BindingSession",
    "Call",
    "CallMock",
    "CallMockError",
    "Dispatcher",
    "Elements",
    "EqualsValue",
    "Keywords",
    "Matcher",
    "MockFunction",
    "MockState",
    "NoCallRecordedError",
    "Operation",
    "Predicate",
    "ProxyFactory",
    "RecordingAlreadyInProgressError",
    "SameReference",
    "UnboundCallError",
    "call_mock_fixture",
    "state_of",
]
