"""State machines shared by the statewalk tests."""

from __future__ import annotations

import asyncio

from statewalk import (
    IntermediateState,
    Machine,
    StartState,
    StartTransition,
    TerminateState,
    Transition,
)


def _noop(*_args: object) -> None:
    return None


def step1_invariant(value: int) -> None:
    if value >= 3:
        raise ValueError("step1 fail")


def build_loop_machine() -> Machine:
    """step0 --init--> step1 --foo--> step2 {--bar--> step3, --back--> step1}."""
    return Machine({
        "step0": StartState(edges={"init": StartTransition("step1", _noop)}),
        "step1": IntermediateState(
            edges={"foo": Transition("step2", _noop)},
            validate=_noop,
        ),
        "step2": IntermediateState(
            edges={
                "bar": Transition("step3", _noop),
                "back": Transition("step1", _noop),
            },
            validate=_noop,
        ),
        "step3": TerminateState(validate=_noop),
    })


def build_failing_machine() -> Machine:
    """Same shape as the loop machine, but step1 rejects values of 3 or more."""
    return Machine.from_dict({
        "step0": {
            "kind": "start",
            "edges": {"init": {"to": "step1", "apply": lambda: 1}},
        },
        "step1": {
            "validate": step1_invariant,
            "edges": {"foo": {"to": "step2", "apply": lambda s: s + 1}},
        },
        "step2": {
            "edges": {
                "bar": {"to": "step3", "apply": lambda s: s},
                "back": {"to": "step1", "apply": lambda s: s},
            },
        },
        "step3": {"kind": "terminate"},
    })


def build_async_failing_machine() -> Machine:
    """The failing machine with coroutine effects and invariants."""

    async def init() -> int:
        await asyncio.sleep(0)
        return 1

    async def increment(value: int) -> int:
        await asyncio.sleep(0)
        return value + 1

    async def same(value: int) -> int:
        return value

    async def invariant(value: int) -> bool:
        await asyncio.sleep(0)
        return value < 3

    return Machine({
        "step0": StartState(edges={"init": StartTransition("step1", init)}),
        "step1": IntermediateState(edges={"foo": Transition("step2", increment)}, validate=invariant),
        "step2": IntermediateState(
            edges={"bar": Transition("step3", same), "back": Transition("step1", same)},
        ),
        "step3": TerminateState(),
    })


FAILING_SPEC = {
    "step0": {"kind": "start", "edges": {"init": {"to": "step1", "apply": lambda: 1}}},
    "step1": {"validate": step1_invariant, "edges": {"foo": {"to": "step2", "apply": lambda s: s + 1}}},
    "step2": {
        "edges": {
            "bar": {"to": "step3", "apply": lambda s: s},
            "back": {"to": "step1", "apply": lambda s: s},
        },
    },
    "step3": {"kind": "terminate"},
}

LOOP_MACHINE = build_loop_machine()

NO_START_MACHINE = Machine({"a": IntermediateState(), "b": TerminateState()})

BROKEN_SPEC = {"a": {"kind": "sideways"}}

NOT_A_MACHINE = 42
