"""Cycle detection over walks.

A cycle is a range of a walk's edges that leaves some state and comes back
to it. Ranges are half-open ``(i, j)`` pairs, so removing one is the slice
``edges[:i] + edges[j:]``.
"""

from __future__ import annotations

from collections.abc import Iterator

from statewalk.core.machine import Machine
from statewalk.core.walk import Walk


def end_state(machine: Machine, walk: Walk) -> str:
    """Return the name of the state ``walk`` ends at.

    Only the graph is traversed; no effect or invariant runs.

    Raises:
        UnknownEdgeError: If an edge is not declared by the state it is
            taken from, including any edge taken out of a terminate state.
        UnknownStateError: If the walk starts at an unknown state.
    """
    current = walk.start
    machine.state(current)
    for edge in walk.edges:
        current = machine.step(current, edge)
    return current


def is_cycle(machine: Machine, walk: Walk) -> bool:
    """True if replaying ``walk`` from its start ends back at its start.

    A walk that reaches a terminate state before using all of its edges is
    not a cycle.
    """
    current = walk.start
    for edge in walk.edges:
        if machine.state(current).is_terminal:
            return False
        current = machine.step(current, edge)
    return current == walk.start


def trajectory(machine: Machine, walk: Walk) -> list[str]:
    """States visited by ``walk``: element ``k`` is the state after ``k`` steps.

    Traversal stops at the first edge that cannot be taken, either because
    the current state is terminal or because it does not declare the edge.
    """
    current = walk.start
    states = [current]
    if current not in machine:
        return states
    for edge in walk.edges:
        state = machine.state(current)
        if state.is_terminal or edge not in state.edges:
            break
        current = state.edges[edge].to
        states.append(current)
    return states


def find_cycles(machine: Machine, walk: Walk) -> Iterator[tuple[int, int]]:
    """Yield every half-open range ``(i, j)`` of ``walk`` that forms a cycle.

    Ranges come out with ``i`` ascending and, for each ``i``, ``j``
    descending, so the largest removable range starting earliest is seen
    first. Ranges that would run past a terminate state or an undeclared
    edge are never yielded.
    """
    states = trajectory(machine, walk)
    reachable = len(states) - 1
    for i in range(reachable):
        for j in range(reachable, i, -1):
            if states[j] == states[i]:
                yield (i, j)


def reductions(machine: Machine, walk: Walk) -> Iterator[Walk]:
    """Yield ``walk`` with each of its cycles removed, one cycle at a time."""
    for i, j in find_cycles(machine, walk):
        yield walk.without(i, j)
