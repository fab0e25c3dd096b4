"""Positional storage for argument markers captured while recording.

Markers such as ``mox.any(value)`` are evaluated as ordinary call arguments,
before the intercepted call happens. Each marker returns its value untouched,
so the registry only learns *which object* was marked and *in what order*.
When the call arrives, markers are paired with argument positions by object
identity, left to right. Keying on positions rather than on the marked value
keeps two equal arguments from overwriting each other's matcher. Positions
filled from parameter defaults never take part in the pairing.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t
from collections import defaultdict

from .errors import AmbiguousMatcherError
from .matchers import EqualsValue

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .matchers import Matcher

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class Marker:
    """A value flagged by a wrapper call, and the matcher chosen for it."""

    value: object
    matcher: Matcher


class ArgumentMatcherRegistry:
    """Collect markers for one recording session and resolve them per call.

    Parameters
    ----------
    strict:
        When ``True``, a marked object that occupies more positions than it
        has markers raises :class:`AmbiguousMatcherError`. Otherwise the last
        marker for that object applies to every position holding it.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._markers: list[Marker] = []

    def __len__(self) -> int:
        """Return the number of registered markers."""
        return len(self._markers)

    @property
    def markers(self) -> tuple[Marker, ...]:
        """Return the markers registered so far, in evaluation order."""
        return tuple(self._markers)

    def register(self, value: object, matcher: Matcher) -> None:
        """Record that *value* should be matched with *matcher*."""
        self._markers.append(Marker(value, matcher))

    def matchers_for(
        self,
        arguments: t.Sequence[object],
        supplied: t.Sequence[bool] | None = None,
    ) -> list[Matcher]:
        """Return one matcher per entry of *arguments*.

        Unmarked positions default to :class:`EqualsValue`. Only positions
        flagged in *supplied* take part in alignment; positions filled from a
        parameter default always compare by equality.
        """
        if supplied is None:
            supplied = [True] * len(arguments)
        resolved: list[Matcher] = [EqualsValue(arg) for arg in arguments]
        for markers in self._group_by_identity().values():
            value = markers[0].value
            positions = [
                i
                for i, arg in enumerate(arguments)
                if supplied[i] and arg is value
            ]
            if not positions:
                logger.warning(
                    "Marker for %r was not passed to the recorded call; ignoring it",
                    value,
                )
                continue
            if len(positions) > len(markers):
                self._apply_last_marker(positions, markers, resolved)
                continue
            if len(markers) > len(positions):
                logger.warning(
                    "Marker for %r registered %d times but passed %d times; "
                    "extra markers ignored",
                    value,
                    len(markers),
                    len(positions),
                )
            for position, marker in zip(positions, markers, strict=False):
                resolved[position] = marker.matcher
        return resolved

    def _apply_last_marker(
        self,
        positions: list[int],
        markers: list[Marker],
        resolved: list[Matcher],
    ) -> None:
        msg = (
            f"Argument {markers[0].value!r} appears {len(positions)} times in the "
            f"recorded call but is marked {len(markers)} time(s)"
        )
        if self.strict:
            msg += "; wrap every occurrence to make the matchers unambiguous"
            raise AmbiguousMatcherError(msg)
        logger.warning("%s; applying the last marker to every occurrence", msg)
        for position in positions:
            resolved[position] = markers[-1].matcher

    def _group_by_identity(self) -> dict[int, list[Marker]]:
        groups: defaultdict[int, list[Marker]] = defaultdict(list)
        for marker in self._markers:
            groups[id(marker.value)].append(marker)
        return groups


__all__ = ["ArgumentMatcherRegistry", "Marker"]
