"""Operations, intercepted calls and the bindings matched against them."""

from __future__ import annotations

import dataclasses as dc
import inspect
import itertools
import typing as t

from ._formatting import format_call
from .matchers import Elements, Keywords

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .matchers import Matcher

Behaviour = t.Callable[..., t.Any]


@dc.dataclass(frozen=True, slots=True)
class Operation:
    """One callable member of a mocked interface."""

    owner: str
    name: str
    signature: inspect.Signature

    @classmethod
    def from_function(cls, owner: type, func: t.Callable[..., t.Any]) -> Operation:
        """Build an operation from an interface method, dropping the receiver."""
        signature = inspect.signature(func)
        params = list(signature.parameters.values())[1:]
        return cls(
            owner=owner.__qualname__,
            name=func.__name__,
            signature=signature.replace(parameters=params),
        )

    def bind(self, args: tuple[t.Any, ...], kwargs: dict[str, t.Any]) -> Call:
        """Normalise live arguments against the signature.

        Raise ``TypeError`` exactly as a real implementation would when the
        arguments do not fit the signature.
        """
        bound = self.signature.bind(*args, **kwargs)
        supplied = frozenset(bound.arguments)
        bound.apply_defaults()
        return Call(bound, supplied)

    def __str__(self) -> str:
        """Return the qualified name and signature."""
        return f"{self.owner}.{self.name}{self.signature}"


@dc.dataclass(frozen=True, slots=True)
class Call:
    """Arguments of an intercepted call, one entry per declared parameter.

    ``supplied`` names the parameters the caller passed explicitly; the rest
    were filled from their defaults.
    """

    bound: inspect.BoundArguments
    supplied: frozenset[str] = frozenset()

    @property
    def arguments(self) -> tuple[t.Any, ...]:
        """Return the argument values in parameter order."""
        return tuple(self.bound.arguments.values())

    @property
    def args(self) -> tuple[t.Any, ...]:
        """Return the positional arguments to forward to a behaviour."""
        return self.bound.args

    @property
    def kwargs(self) -> dict[str, t.Any]:
        """Return the keyword arguments to forward to a behaviour."""
        return self.bound.kwargs

    def slots(self) -> list[tuple[object, bool]]:
        """Return ``(value, supplied)`` per argument, expanding variadics.

        Items of ``*args`` and values of ``**kwargs`` each get their own slot,
        so markers passed through them can be located.
        """
        params = self.bound.signature.parameters
        slots: list[tuple[object, bool]] = []
        for name, value in self.bound.arguments.items():
            kind = params[name].kind
            if kind is inspect.Parameter.VAR_POSITIONAL:
                slots.extend((item, True) for item in value)
            elif kind is inspect.Parameter.VAR_KEYWORD:
                slots.extend((item, True) for item in value.values())
            else:
                slots.append((value, name in self.supplied))
        return slots

    def group(self, matchers: t.Sequence[Matcher]) -> tuple[Matcher, ...]:
        """Fold one matcher per slot back into one matcher per parameter."""
        params = self.bound.signature.parameters
        remaining = iter(matchers)
        grouped: list[Matcher] = []
        for name, value in self.bound.arguments.items():
            kind = params[name].kind
            if kind is inspect.Parameter.VAR_POSITIONAL:
                grouped.append(Elements(itertools.islice(remaining, len(value))))
            elif kind is inspect.Parameter.VAR_KEYWORD:
                grouped.append(Keywords({key: next(remaining) for key in value}))
            else:
                grouped.append(next(remaining))
        return tuple(grouped)


@dc.dataclass(frozen=True, slots=True)
class MockFunction:
    """A behaviour bound to an operation for arguments accepted by matchers."""

    operation: Operation
    matchers: tuple[Matcher, ...]
    behaviour: Behaviour

    def matches(self, operation: Operation, call: Call) -> bool:
        """Return ``True`` if this binding accepts *call* on *operation*."""
        if operation != self.operation:
            return False
        arguments = call.arguments
        if len(arguments) != len(self.matchers):
            return False
        return all(
            matcher(arg)
            for matcher, arg in zip(self.matchers, arguments, strict=True)
        )

    def invoke(self, call: Call) -> t.Any:  # noqa: ANN401 - behaviour defined result
        """Run the behaviour with the call's arguments."""
        return self.behaviour(*call.args, **call.kwargs)

    def describe(self) -> str:
        """Return a human readable representation of this binding."""
        return format_call(self.operation.name, self.matchers)


__all__ = ["Behaviour", "Call", "MockFunction", "Operation"]
