"""Central interception hub for synthesized mocks.

Every call on a mock produced by :class:`~callmock.proxy.ProxyFactory` lands
in :meth:`Dispatcher.handle_call`. While a recording session is open the call
is turned into a :class:`~callmock.bindings.MockFunction` and the recording
closure is aborted; otherwise the call is replayed against the bindings
already registered on that mock.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import typing as t

from ._formatting import format_invocation
from .bindings import MockFunction
from .errors import (
    NoCallRecordedError,
    RecordingAlreadyInProgressError,
    UnboundCallError,
)
from .registry import ArgumentMatcherRegistry

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .bindings import Behaviour, Call, Operation
    from .matchers import Matcher
    from .proxy import MockState

logger = logging.getLogger(__name__)


class _RecordingComplete(BaseException):  # noqa: N818 - control flow, not an error
    """Abort a recording closure once its call has been bound.

    Derives from ``BaseException`` so ``except Exception`` blocks inside the
    closure cannot swallow it.
    """

    def __init__(self, binding: MockFunction) -> None:
        super().__init__(binding.describe())
        self.binding = binding


class BindingSession:
    """State of one open recording: the pending behaviour and its markers."""

    def __init__(self, behaviour: Behaviour, *, strict: bool = False) -> None:
        self.behaviour = behaviour
        self.registry = ArgumentMatcherRegistry(strict=strict)
        self.binding: MockFunction | None = None


class Dispatcher:
    """Route mock calls to recording or replay.

    Sessions are tracked per thread, so tests running concurrently in
    different threads never see each other's recordings. Recording is not
    re-entrant within a thread.

    Parameters
    ----------
    strict:
        When ``True``, a recording closure that finishes without calling any
        mock raises :class:`NoCallRecordedError`, and a marked object that
        appears unmarked elsewhere in the recorded call raises
        :class:`~callmock.errors.AmbiguousMatcherError`. Otherwise both are
        logged as warnings.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._state = threading.local()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    @property
    def session(self) -> BindingSession | None:
        """Return the recording session open in this thread, if any."""
        return getattr(self._state, "session", None)

    @property
    def is_recording(self) -> bool:
        """Return ``True`` while a recording session is open."""
        return self.session is not None

    @contextlib.contextmanager
    def open_session(self, behaviour: Behaviour) -> t.Iterator[BindingSession]:
        """Open a recording session for *behaviour*, closing it on exit."""
        if self.session is not None:
            msg = "A recording is already in progress; set_body() is not re-entrant"
            raise RecordingAlreadyInProgressError(msg)
        session = BindingSession(behaviour, strict=self.strict)
        self._state.session = session
        logger.debug("Opened recording session")
        try:
            yield session
        finally:
            self._state.session = None
            logger.debug("Closed recording session")

    def record(self, closure: t.Callable[[], object], behaviour: Behaviour) -> None:
        """Run *closure* in a new session and bind its first mock call."""
        with self.open_session(behaviour) as session:
            try:
                closure()
            except _RecordingComplete as done:
                logger.debug("Recorded binding %s", done.binding.describe())
                return
        if session.binding is not None:
            # The unwind signal was caught inside the closure; keep the binding.
            logger.debug("Recorded binding %s", session.binding.describe())
            return
        self._handle_empty_recording()

    def _handle_empty_recording(self) -> None:
        msg = "Recording closure completed without calling a mock"
        if self.strict:
            raise NoCallRecordedError(msg)
        logger.warning("%s; no binding created", msg)

    # ------------------------------------------------------------------
    # Argument markers
    # ------------------------------------------------------------------
    def mark(self, value: object, matcher: Matcher) -> None:
        """Register *matcher* for *value* in the open session."""
        session = self.session
        if session is None:
            logger.warning(
                "Argument marker %r used outside a recording; it has no effect",
                matcher,
            )
            return
        session.registry.register(value, matcher)

    # ------------------------------------------------------------------
    # Interception
    # ------------------------------------------------------------------
    def handle_call(self, state: MockState, operation: Operation, call: Call) -> t.Any:  # noqa: ANN401
        """Record or replay *call* of *operation* on the mock owning *state*."""
        session = self.session
        if session is not None:
            self._bind(session, state, operation, call)
        return self._replay(state, operation, call)

    def _bind(
        self,
        session: BindingSession,
        state: MockState,
        operation: Operation,
        call: Call,
    ) -> t.NoReturn:
        if session.binding is not None:
            # Only the first call of a closure is bound.
            raise _RecordingComplete(session.binding)
        slots = call.slots()
        matchers = session.registry.matchers_for(
            [value for value, _ in slots], [supplied for _, supplied in slots]
        )
        binding = MockFunction(operation, call.group(matchers), session.behaviour)
        state.add_binding(binding)
        session.binding = binding
        raise _RecordingComplete(binding)

    def _replay(self, state: MockState, operation: Operation, call: Call) -> t.Any:  # noqa: ANN401
        bindings = state.bindings
        for binding in bindings:
            if binding.matches(operation, call):
                logger.debug(
                    "Dispatching %s on %s to %s",
                    operation.name,
                    state.name,
                    binding.describe(),
                )
                return binding.invoke(call)
        raise UnboundCallError(self._describe_unbound(state, operation, call))

    @staticmethod
    def _describe_unbound(state: MockState, operation: Operation, call: Call) -> str:
        lines = [
            f"No binding on {state.name} accepts "
            f"{format_invocation(operation.name, call.args, call.kwargs)}"
        ]
        candidates = [b for b in state.bindings if b.operation == operation]
        if candidates:
            lines.append("Bindings for this operation, in match order:")
            lines.extend(f"  {b.describe()}" for b in candidates)
        else:
            lines.append(f"{operation} has no bindings")
        return "\n".join(lines)


__all__ = ["BindingSession", "Dispatcher"]
