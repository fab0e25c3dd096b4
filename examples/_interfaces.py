"""Interfaces used by the runnable examples."""

from __future__ import annotations

import typing as t


class Clock(t.Protocol):
    """Source of timestamps."""

    def now(self) -> float: ...


class Mailer(t.Protocol):
    """Outbound mail gateway."""

    def send(self, to: str, subject: str, body: str = "") -> bool: ...


class Greeter:
    """Greets users by name using a mail gateway."""

    def __init__(self, mailer: Mailer, clock: Clock) -> None:
        self._mailer = mailer
        self._clock = clock

    def greet(self, user: str) -> str:
        """Send a greeting to *user* and report the outcome."""
        stamp = self._clock.now()
        if self._mailer.send(user, "hello"):
            return f"greeted {user} at {stamp:.0f}"
        return f"could not greet {user}"
