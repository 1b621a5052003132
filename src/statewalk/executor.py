"""Walk execution - replay a walk step by step, checking invariants."""

from __future__ import annotations

import inspect
import logging
from typing import Any

from statewalk.core.machine import Machine, State, StartTransition, Transition
from statewalk.core.walk import TraceEntry, Walk
from statewalk.errors import (
    EffectFailure,
    StatewalkError,
    UnknownEdgeError,
    ValidationFailure,
    WalkFailure,
)
from statewalk.errors.base import ErrorContext

logger = logging.getLogger(__name__)


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


async def _apply(edge: StartTransition | Transition, value: Any) -> Any:
    if isinstance(edge, StartTransition):
        return await _resolve(edge.apply())
    return await _resolve(edge.apply(value))


async def _check_invariant(name: str, state: State, value: Any) -> None:
    if state.validate is None:
        return
    if await _resolve(state.validate(value)) is False:
        raise ValidationFailure(
            f'Invariant of state "{name}" returned False',
            context=ErrorContext(state=name),
        )


async def execute_walk(machine: Machine, walk: Walk) -> Any:
    """Run ``walk`` against ``machine`` and return the final value.

    Effects and invariants run strictly in order; each is awaited before
    the next step starts. Reaching a terminate state ends the walk early
    without error, leaving any remaining edges unconsumed.

    Raises:
        WalkFailure: If the walk names an unknown edge, an effect raises,
            or a destination state's invariant rejects the new value. The
            failure's walk is truncated to include the failing step.
    """
    trace: list[TraceEntry] = []
    value: Any = None
    state_name = walk.start
    edge: str | None = None
    index = 0

    try:
        state = machine.state(state_name)
        for index, edge in enumerate(walk.edges):
            if state.is_terminal:
                logger.debug(
                    'Walk reached terminate state "%s" with %d edge(s) left',
                    state_name,
                    len(walk) - index,
                )
                break

            transition = state.edges.get(edge)
            if transition is None:
                raise UnknownEdgeError(
                    f'Unknown edge: "{edge}" at state "{state_name}"',
                    context=ErrorContext(state=state_name, edge=edge, index=index),
                )

            try:
                value = await _apply(transition, value)
            except Exception as e:
                raise EffectFailure(
                    f'Effect of edge "{edge}" raised {type(e).__name__}: {e}',
                    context=ErrorContext(state=state_name, edge=edge, index=index),
                ) from e

            destination = machine.state(transition.to)
            trace.append(TraceEntry(state_name, transition.to, edge, index))
            logger.debug("Step %d: %s", index, trace[-1])

            if not destination.is_start:
                try:
                    await _check_invariant(transition.to, destination, value)
                except ValidationFailure:
                    raise
                except Exception as e:
                    raise ValidationFailure(
                        f'Invariant of state "{transition.to}" raised {type(e).__name__}: {e}',
                        context=ErrorContext(state=transition.to, index=index),
                    ) from e

            state_name = transition.to
            state = destination
    except StatewalkError as cause:
        raise _wrap(walk, cause, trace, index, state_name, edge) from cause

    return value


def _wrap(
    walk: Walk,
    cause: StatewalkError,
    trace: list[TraceEntry],
    index: int,
    state_name: str,
    edge: str | None,
) -> WalkFailure:
    log = "\n".join(f"    {entry}" for entry in trace)
    running = f' and running edge "{edge}"' if edge is not None else ""
    message = (
        f'While at state "{state_name}"{running} (index {index})\n'
        f'In walk from "{walk.start}":\n'
        f"{log}\n"
        f"Hit error: {_describe(cause)}"
    )
    truncated = walk.prefix(index + 1) if walk.edges else walk
    logger.debug("Walk failed at index %d: %s", index, cause)
    return WalkFailure(
        message,
        walk=truncated,
        cause=cause,
        trace=tuple(trace),
        index=index,
        state=state_name,
        edge=edge,
    )


def _describe(cause: StatewalkError) -> str:
    inner = cause.__cause__
    if inner is not None:
        return str(inner) or type(inner).__name__
    return cause.message
