"""State machine model: states, transitions and the Machine that holds them."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Union

from statewalk.errors import InvalidMachineError, UnknownEdgeError, UnknownStateError
from statewalk.errors.base import ErrorContext

StartEffect = Callable[[], Union[Any, Awaitable[Any]]]
Effect = Callable[[Any], Union[Any, Awaitable[Any]]]
Validator = Callable[[Any], Any]

_EMPTY_EDGES: Mapping[str, Any] = MappingProxyType({})


class StateKind(Enum):
    """The three kinds of state a machine may contain."""

    START = "start"
    TERMINATE = "terminate"
    INTERMEDIATE = "intermediate"


@dataclass(frozen=True)
class StartTransition:
    """An edge leaving a start state. Its effect takes no input value."""

    to: str
    apply: StartEffect


@dataclass(frozen=True)
class Transition:
    """An edge leaving an intermediate state.

    ``apply`` receives the current value and returns the next one, or an
    awaitable resolving to it.
    """

    to: str
    apply: Effect


class State:
    """Behaviour shared by every state variant.

    ``validate`` is the state's invariant: it is called with the value a
    transition produced on arrival, and signals a violation by raising or
    by returning ``False``.
    """

    kind: ClassVar[StateKind]
    validate: Validator | None
    edges: Mapping[str, StartTransition | Transition]

    @property
    def is_start(self) -> bool:
        return self.kind is StateKind.START

    @property
    def is_terminal(self) -> bool:
        return self.kind is StateKind.TERMINATE


@dataclass(frozen=True, eq=False)
class StartState(State):
    """Where walks begin. Edges run zero-argument effects."""

    kind: ClassVar[StateKind] = StateKind.START

    edges: Mapping[str, StartTransition] = field(default_factory=dict)
    validate: Validator | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "edges", MappingProxyType(dict(self.edges)))


@dataclass(frozen=True, eq=False)
class IntermediateState(State):
    """An ordinary state whose edges transform the current value."""

    kind: ClassVar[StateKind] = StateKind.INTERMEDIATE

    edges: Mapping[str, Transition] = field(default_factory=dict)
    validate: Validator | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "edges", MappingProxyType(dict(self.edges)))


@dataclass(frozen=True, eq=False)
class TerminateState(State):
    """A state that ends every walk reaching it. It has no edges."""

    kind: ClassVar[StateKind] = StateKind.TERMINATE

    validate: Validator | None = None

    @property  # type: ignore[override]
    def edges(self) -> Mapping[str, Transition]:
        return _EMPTY_EDGES


class Machine:
    """A name-keyed collection of states, validated on construction.

    The machine is treated as read-only once built; it may be shared by
    any number of walks.

    Example:
        machine = Machine({
            "idle": StartState(edges={"boot": StartTransition("ready", lambda: 0)}),
            "ready": IntermediateState(
                edges={"tick": Transition("ready", lambda n: n + 1),
                       "halt": Transition("done", lambda n: n)},
                validate=lambda n: n < 100,
            ),
            "done": TerminateState(),
        })
    """

    def __init__(self, states: Mapping[str, State]) -> None:
        self._states: dict[str, State] = dict(states)
        self._validate()

    @classmethod
    def from_dict(cls, spec: Mapping[str, Mapping[str, Any]]) -> Machine:
        """Build a machine from plain descriptors.

        Each descriptor looks like ``{"kind": "start" | "terminate" |
        "intermediate", "validate": fn, "edges": {name: {"to": state,
        "apply": fn}}}``. ``kind`` defaults to intermediate; ``validate``
        and ``edges`` are optional.
        """
        states: dict[str, State] = {}
        for name, descriptor in spec.items():
            if not isinstance(descriptor, Mapping):
                raise InvalidMachineError(
                    f'State "{name}" must be described by a mapping, got {type(descriptor).__name__}',
                    context=ErrorContext(state=name),
                )
            states[name] = _state_from_descriptor(name, descriptor)
        return cls(states)

    def _validate(self) -> None:
        for name, state in self._states.items():
            if not isinstance(state, State) or not hasattr(state, "kind"):
                raise InvalidMachineError(
                    f'State "{name}" is not a StartState, IntermediateState or TerminateState',
                    context=ErrorContext(state=name),
                )
            if state.validate is not None and not callable(state.validate):
                raise InvalidMachineError(
                    f'State "{name}" has a non-callable validate',
                    context=ErrorContext(state=name),
                )
            expected = StartTransition if state.is_start else Transition
            for edge_name, edge in state.edges.items():
                if not isinstance(edge, expected):
                    raise InvalidMachineError(
                        f'Edge "{edge_name}" of state "{name}" must be a {expected.__name__}',
                        context=ErrorContext(state=name, edge=edge_name),
                    )
                if not callable(edge.apply):
                    raise InvalidMachineError(
                        f'Edge "{edge_name}" of state "{name}" has a non-callable apply',
                        context=ErrorContext(state=name, edge=edge_name),
                    )
                if edge.to not in self._states:
                    raise InvalidMachineError(
                        f'Edge "{edge_name}" of state "{name}" leads to unknown state "{edge.to}"',
                        context=ErrorContext(state=name, edge=edge_name, extra={"to": edge.to}),
                    )

    @property
    def states(self) -> Mapping[str, State]:
        return MappingProxyType(self._states)

    @property
    def starts(self) -> list[str]:
        """Names of all start states, in declaration order."""
        return [name for name, state in self._states.items() if state.is_start]

    def state(self, name: str) -> State:
        """Get a state by name, raising UnknownStateError if absent."""
        try:
            return self._states[name]
        except KeyError:
            raise UnknownStateError(
                f'Unknown state: "{name}"',
                context=ErrorContext(state=name),
            ) from None

    def step(self, name: str, edge: str) -> str:
        """Destination reached by following ``edge`` out of state ``name``."""
        transition = self.state(name).edges.get(edge)
        if transition is None:
            raise UnknownEdgeError(
                f'Unknown edge: "{edge}" at state "{name}"',
                context=ErrorContext(state=name, edge=edge),
            )
        return transition.to

    def __getitem__(self, name: str) -> State:
        return self.state(name)

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"Machine(states={list(self._states)!r})"


def _state_from_descriptor(name: str, descriptor: Mapping[str, Any]) -> State:
    raw_kind = descriptor.get("kind", StateKind.INTERMEDIATE)
    try:
        kind = StateKind(raw_kind)
    except ValueError:
        raise InvalidMachineError(
            f'State "{name}" has unknown kind {raw_kind!r}',
            context=ErrorContext(state=name),
        ) from None

    validate = descriptor.get("validate")
    edges = descriptor.get("edges") or {}

    if kind is StateKind.TERMINATE:
        if edges:
            raise InvalidMachineError(
                f'Terminate state "{name}" cannot have edges',
                context=ErrorContext(state=name),
            )
        return TerminateState(validate=validate)

    transition_cls = StartTransition if kind is StateKind.START else Transition
    built: dict[str, StartTransition | Transition] = {}
    for edge_name, edge in edges.items():
        if isinstance(edge, (StartTransition, Transition)):
            built[edge_name] = edge
            continue
        if not isinstance(edge, Mapping) or "to" not in edge or "apply" not in edge:
            raise InvalidMachineError(
                f'Edge "{edge_name}" of state "{name}" needs "to" and "apply"',
                context=ErrorContext(state=name, edge=edge_name),
            )
        built[edge_name] = transition_cls(to=edge["to"], apply=edge["apply"])

    if kind is StateKind.START:
        return StartState(edges=built, validate=validate)
    return IntermediateState(edges=built, validate=validate)
