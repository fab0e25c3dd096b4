"""Synthesize mock objects for arbitrary interfaces."""

from __future__ import annotations

import abc
import inspect
import itertools
import logging
import threading
import typing as t

from ._validators import validate_interface
from .bindings import Operation

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .bindings import MockFunction
    from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)

T = t.TypeVar("T")

# Bases contributing only typing/ABC machinery, never operations.
_PLUMBING_BASES: frozenset[type] = frozenset(
    {object, abc.ABC, t.Generic, t.Protocol}  # type: ignore[arg-type]
)
_EXCLUDED_NAMES: frozenset[str] = frozenset(
    {
        "__init__",
        "__new__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
        "__getattr__",
        "__getattribute__",
        "__setattr__",
        "__delattr__",
        "__del__",
        "__set_name__",
        "__annotate__",
        "__annotate_func__",
    }
)

_counter = itertools.count(1)


class MockState:
    """Per-mock bookkeeping: identity and the ordered list of bindings."""

    def __init__(self, interface: type, name: str) -> None:
        self.interface = interface
        self.name = name
        self._bindings: list[MockFunction] = []
        self._lock = threading.Lock()

    @property
    def bindings(self) -> tuple[MockFunction, ...]:
        """Return a snapshot of the bindings in registration order."""
        with self._lock:
            return tuple(self._bindings)

    def add_binding(self, binding: MockFunction) -> None:
        """Append *binding*; earlier bindings keep precedence."""
        with self._lock:
            self._bindings.append(binding)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"MockState({self.name!r}, bindings={len(self._bindings)})"


def _is_operation_name(name: str) -> bool:
    if name in _EXCLUDED_NAMES:
        return False
    if name.startswith("__") and name.endswith("__"):
        # Dunder protocol methods count unless object already provides them.
        return name not in vars(object)
    return not name.startswith("_")


def _unwrap_member(member: object) -> t.Callable[..., t.Any] | None:
    """Return the underlying function of an instance method, if it is one."""
    if isinstance(member, (staticmethod, classmethod, property)):
        return None
    if inspect.isfunction(member):
        return member
    return None


def iter_operations(interface: type) -> t.Iterator[Operation]:
    """Yield one :class:`Operation` per callable member of *interface*.

    Members are discovered along the MRO so inherited methods are mocked too;
    the most derived definition of a name wins.
    """
    seen: set[str] = set()
    for klass in interface.__mro__:
        if klass in _PLUMBING_BASES:
            continue
        for name, member in vars(klass).items():
            if name in seen or not _is_operation_name(name):
                continue
            seen.add(name)
            func = _unwrap_member(member)
            if func is None:
                continue
            yield Operation.from_function(interface, func)


def _make_forwarder(
    dispatcher: Dispatcher, state: MockState, operation: Operation
) -> t.Callable[..., t.Any]:
    def forward(_self: object, /, *args: t.Any, **kwargs: t.Any) -> t.Any:  # noqa: ANN401
        call = operation.bind(args, kwargs)
        return dispatcher.handle_call(state, operation, call)

    forward.__name__ = operation.name
    forward.__qualname__ = f"{state.name}.{operation.name}"
    receiver = inspect.Parameter("self", inspect.Parameter.POSITIONAL_ONLY)
    forward.__signature__ = operation.signature.replace(  # type: ignore[attr-defined]
        parameters=[receiver, *operation.signature.parameters.values()]
    )
    return forward


def _describe_mock(self: object) -> str:
    state: MockState = type(self)._callmock_state  # type: ignore[attr-defined]
    return f"<mock {state.name} of {state.interface.__qualname__}>"


class ProxyFactory:
    """Build synthesized instances whose calls go through a :class:`Dispatcher`."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def create(self, interface: type[T], name: str | None = None) -> T:
        """Return a new mock implementing *interface*.

        A fresh subclass is generated for every mock so that each one owns its
        bindings. The interface's constructor is never run.
        """
        interface = t.get_origin(interface) or interface
        validate_interface(interface)
        mock_name = name or f"{interface.__name__}#{next(_counter)}"
        state = MockState(interface, mock_name)
        namespace: dict[str, t.Any] = {
            "__module__": interface.__module__,
            "__repr__": _describe_mock,
            "_callmock_state": state,
        }
        operations = list(iter_operations(interface))
        for operation in operations:
            namespace[operation.name] = _make_forwarder(
                self.dispatcher, state, operation
            )
        metaclass = type(interface)
        proxy_type = metaclass(f"{interface.__name__}Mock", (interface,), namespace)
        if getattr(proxy_type, "__abstractmethods__", None):
            # Abstract members that are not operations (properties, class
            # methods) stay unimplemented; the mock must still be instantiable.
            proxy_type.__abstractmethods__ = frozenset()
        logger.debug(
            "Created mock %s with operations %s",
            mock_name,
            [operation.name for operation in operations],
        )
        return t.cast("T", object.__new__(proxy_type))


def state_of(mock: object) -> MockState:
    """Return the :class:`MockState` of a synthesized instance."""
    state = getattr(type(mock), "_callmock_state", None)
    if not isinstance(state, MockState):
        msg = f"{mock!r} was not created by callmock"
        raise TypeError(msg)
    return state


__all__ = ["MockState", "ProxyFactory", "iter_operations", "state_of"]
