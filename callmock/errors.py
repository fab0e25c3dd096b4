"""Custom exceptions for callmock."""

from __future__ import annotations


class CallMockError(Exception):
    """Base exception for callmock errors."""


class UnboundCallError(CallMockError, LookupError):
    """Raised when a mock receives a call with no matching binding."""


class RecordingAlreadyInProgressError(CallMockError, RuntimeError):
    """Raised when a binding is recorded while another recording is open."""


class NoCallRecordedError(CallMockError, RuntimeError):
    """Raised in strict mode when a recording closure never calls a mock."""


class AmbiguousMatcherError(CallMockError, ValueError):
    """Raised when an argument marker cannot be tied to a single position."""


__all__ = [
    "AmbiguousMatcherError",
    "CallMockError",
    "NoCallRecordedError",
    "RecordingAlreadyInProgressError",
    "UnboundCallError",
]
