"""Core data objects for statewalk.

This module contains the fundamental data structures:
- Machine, State variants, Transition: the model under test
- Walk, TraceEntry: candidate executions and their trace
- CheckResult: final output of a check run
"""

from statewalk.core.machine import (
    IntermediateState,
    Machine,
    StartState,
    StartTransition,
    State,
    StateKind,
    TerminateState,
    Transition,
)
from statewalk.core.result import CheckResult
from statewalk.core.walk import TraceEntry, Walk

__all__ = [
    "Machine",
    "State",
    "StateKind",
    "StartState",
    "IntermediateState",
    "TerminateState",
    "StartTransition",
    "Transition",
    "Walk",
    "TraceEntry",
    "CheckResult",
]
