"""Unit tests for mock synthesis."""

from __future__ import annotations

import inspect
import typing as t

import pytest

from callmock.bindings import Call, Operation
from callmock.dispatcher import Dispatcher
from callmock.errors import UnboundCallError
from callmock.proxy import MockState, ProxyFactory, iter_operations, state_of
from callmock.unittests._interfaces import Example, Repository, Sized, WithArgs


class RecordingDispatcher(Dispatcher):
    """Dispatcher that remembers every call routed through it."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[MockState, Operation, Call]] = []

    def handle_call(self, state: MockState, operation: Operation, call: Call) -> t.Any:  # noqa: ANN401
        """Store the call and echo its arguments."""
        self.calls.append((state, operation, call))
        return call.arguments


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    """Provide a dispatcher that records routed calls."""
    return RecordingDispatcher()


@pytest.fixture
def factory(dispatcher: RecordingDispatcher) -> ProxyFactory:
    """Provide a factory bound to the recording dispatcher."""
    return ProxyFactory(dispatcher)


def test_operations_skip_private_and_constructor() -> None:
    """Only public callable members become operations."""
    names = [op.name for op in iter_operations(Repository)]
    assert sorted(names) == ["find", "get", "log", "put"]


def test_operations_include_dunder_protocol_methods() -> None:
    """Protocol dunders count; properties and class methods do not."""
    names = {op.name for op in iter_operations(Sized)}
    assert names == {"__len__", "__call__"}


def test_operation_signature_drops_receiver() -> None:
    """The operation signature describes the arguments callers pass."""
    (operation,) = iter_operations(WithArgs)
    assert list(operation.signature.parameters) == ["i", "text"]
    assert operation.owner == "WithArgs"


def test_mock_is_instance_of_interface(factory: ProxyFactory) -> None:
    """Mocks pass ``isinstance`` checks without running the constructor."""
    repo = factory.create(Repository)
    assert isinstance(repo, Repository)
    assert isinstance(factory.create(WithArgs), WithArgs)


def test_calls_are_forwarded_with_normalised_arguments(
    factory: ProxyFactory, dispatcher: RecordingDispatcher
) -> None:
    """Keyword and default arguments are bound against the signature."""
    repo = factory.create(Repository)
    result = repo.put("k", value=3)
    assert result == ("k", 3, False)
    state, operation, call = dispatcher.calls[-1]
    assert state is state_of(repo)
    assert operation.name == "put"
    assert call.kwargs == {"overwrite": False}


def test_variadic_parameters_form_single_arguments(
    factory: ProxyFactory,
) -> None:
    """``*args`` and ``**kwargs`` each contribute one argument."""
    repo = factory.create(Repository)
    assert repo.log("a", "b", level=2) == (("a", "b"), {"level": 2})


def test_wrong_arity_raises_type_error(
    factory: ProxyFactory, dispatcher: RecordingDispatcher
) -> None:
    """Calls that do not fit the signature fail before dispatch."""
    mock = factory.create(WithArgs)
    with pytest.raises(TypeError):
        mock.a(1)  # type: ignore[call-arg]
    assert dispatcher.calls == []


def test_dunder_operations_are_dispatched(factory: ProxyFactory) -> None:
    """Special methods route through the dispatcher like any other call."""
    sized = factory.create(Sized)
    assert sized(5) == (5,)


def test_each_mock_owns_its_state(factory: ProxyFactory) -> None:
    """Two mocks of one interface keep separate binding lists."""
    first = factory.create(Example)
    second = factory.create(Example)
    assert state_of(first) is not state_of(second)
    assert type(first) is not type(second)


def test_named_mock_repr(factory: ProxyFactory) -> None:
    """Mocks describe themselves with their name and interface."""
    mock = factory.create(Example, name="clock")
    assert repr(mock) == "<mock clock of Example>"


def test_forwarder_exposes_interface_signature(factory: ProxyFactory) -> None:
    """Introspection of a mock method reports the interface signature."""
    mock = factory.create(WithArgs)
    assert str(inspect.signature(mock.a)) == "(i: 'int', text: 'str') -> 'str'"


def test_unknown_attribute_raises(factory: ProxyFactory) -> None:
    """Members absent from the interface are not invented."""
    mock = factory.create(Example)
    with pytest.raises(AttributeError):
        mock.missing()  # type: ignore[attr-defined]


@pytest.mark.parametrize("interface", [42, "Example", Example.get_int])
def test_non_class_interface_rejected(factory: ProxyFactory, interface: object) -> None:
    """Only classes can be mocked."""
    with pytest.raises(TypeError, match="must be a class"):
        factory.create(interface)  # type: ignore[arg-type]


def test_state_of_rejects_foreign_objects() -> None:
    """Objects not produced by the factory have no mock state."""
    with pytest.raises(TypeError, match="not created by callmock"):
        state_of(object())


def test_unbound_call_through_real_dispatcher() -> None:
    """A fresh mock has no bindings, so every call is unbound."""
    mock = ProxyFactory(Dispatcher()).create(Example)
    with pytest.raises(UnboundCallError, match="has no bindings"):
        mock.get_int()
