"""CallMock controller: the public binding API."""

from __future__ import annotations

import typing as t

from ._validators import validate_callable
from .dispatcher import Dispatcher
from .matchers import Any, EqualsValue, Predicate, SameReference
from .proxy import ProxyFactory, state_of

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .bindings import Behaviour, MockFunction
    from .matchers import Matcher

T = t.TypeVar("T")
V = t.TypeVar("V")


class CallMock:
    """Create mocks and program them by recording calls.

    A binding is recorded by passing a closure that makes exactly one call on
    a mock, along with the behaviour that call should have::

        mox = CallMock()
        repo = mox.mock(Repository)
        mox.set_body(lambda: repo.get(mox.any(0)), lambda key: f"row {key}")
        assert repo.get(7) == "row 7"

    Unwrapped arguments are matched by equality. Wrap an argument with
    :meth:`any`, :meth:`same` or :meth:`matches` to change how it is matched.
    Bindings are tried in the order they were recorded and the first match
    wins, so record specific bindings before general ones.
    """

    def __init__(
        self, *, strict: bool = False, dispatcher: Dispatcher | None = None
    ) -> None:
        """Create a new controller.

        Parameters
        ----------
        strict:
            Raise :class:`~callmock.errors.NoCallRecordedError` when a
            recording closure calls no mock, and
            :class:`~callmock.errors.AmbiguousMatcherError` when a marked
            argument also appears unmarked, instead of logging a warning.
            Ignored when *dispatcher* is supplied.
        dispatcher:
            Optional :class:`Dispatcher` to share between controllers. When
            omitted a fresh dispatcher is created.
        """
        self.dispatcher = (
            dispatcher if dispatcher is not None else Dispatcher(strict=strict)
        )
        self._factory = ProxyFactory(self.dispatcher)

    @property
    def strict(self) -> bool:
        """Return whether empty recordings are treated as errors."""
        return self.dispatcher.strict

    # ------------------------------------------------------------------
    # Mock creation
    # ------------------------------------------------------------------
    def mock(self, interface: type[T], name: str | None = None) -> T:
        """Return a new mock implementing *interface*."""
        return self._factory.create(interface, name)

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------
    def set_body(self, closure: t.Callable[[], object], behaviour: Behaviour) -> None:
        """Bind *behaviour* to the call made by *closure*.

        *behaviour* receives the arguments of each matching call, as the caller
        passed them after defaults are applied.
        """
        validate_callable(closure, "recording closure")
        validate_callable(behaviour, "behaviour")
        self.dispatcher.record(closure, behaviour)

    def set_return_value(self, closure: t.Callable[[], V], value: V) -> None:
        """Make the call recorded by *closure* return *value*."""

        def returns(*_args: object, **_kwargs: object) -> V:
            return value

        self.set_body(closure, returns)

    def set_error(self, closure: t.Callable[[], object], error: BaseException) -> None:
        """Make the call recorded by *closure* raise *error*."""

        def raises(*_args: object, **_kwargs: object) -> t.NoReturn:
            raise error

        self.set_body(closure, raises)

    def bindings(self, mock: object) -> tuple[MockFunction, ...]:
        """Return the bindings of *mock* in match order."""
        return state_of(mock).bindings

    # ------------------------------------------------------------------
    # Argument markers
    # ------------------------------------------------------------------
    def any(self, value: V) -> V:
        """Match any argument at this position."""
        return self._mark(value, Any())

    def equals(self, value: V) -> V:
        """Match arguments equal to *value* (the default)."""
        return self._mark(value, EqualsValue(value))

    def same(self, value: V) -> V:
        """Match only *value* itself, not equal copies."""
        return self._mark(value, SameReference(value))

    def matches(self, value: V, predicate: t.Callable[[t.Any], object]) -> V:
        """Match arguments for which *predicate* is truthy."""
        validate_callable(predicate, "predicate")
        return self._mark(value, Predicate(predicate))

    def _mark(self, value: V, matcher: Matcher) -> V:
        self.dispatcher.mark(value, matcher)
        return value


__all__ = ["CallMock"]
