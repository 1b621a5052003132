"""statewalk - model-based test generation over finite state machines.

Generate random walks through a state machine, replay them while checking
each state's invariant, and shrink the first failing walk by cutting out
cycles.

Example:
    from statewalk import Machine, check

    result = await check(Machine.from_dict({...}))
    result.raise_for_failure()
"""

from statewalk.config import StatewalkSettings, load_settings
from statewalk.core import (
    CheckResult,
    IntermediateState,
    Machine,
    StartState,
    StartTransition,
    State,
    StateKind,
    TerminateState,
    TraceEntry,
    Transition,
    Walk,
)
from statewalk.cycles import end_state, find_cycles, is_cycle, reductions, trajectory
from statewalk.driver import check
from statewalk.errors import (
    ConfigValidationError,
    EffectFailure,
    ErrorCode,
    InvalidMachineError,
    NoStartStateError,
    StatewalkError,
    UnknownEdgeError,
    UnknownStateError,
    ValidationFailure,
    WalkFailure,
)
from statewalk.executor import execute_walk
from statewalk.generator import WalkStream, generate_walk, generate_walks, random_walk_length
from statewalk.shrinker import minimize, replay, shrink

__version__ = "0.1.0"

__all__ = [
    # Model
    "Machine",
    "State",
    "StateKind",
    "StartState",
    "IntermediateState",
    "TerminateState",
    "StartTransition",
    "Transition",
    # Values
    "Walk",
    "TraceEntry",
    "CheckResult",
    # Operations
    "generate_walk",
    "generate_walks",
    "random_walk_length",
    "WalkStream",
    "execute_walk",
    "end_state",
    "is_cycle",
    "trajectory",
    "find_cycles",
    "reductions",
    "minimize",
    "shrink",
    "replay",
    "check",
    # Config
    "StatewalkSettings",
    "load_settings",
    # Errors
    "StatewalkError",
    "ErrorCode",
    "NoStartStateError",
    "InvalidMachineError",
    "UnknownStateError",
    "UnknownEdgeError",
    "ValidationFailure",
    "EffectFailure",
    "ConfigValidationError",
    "WalkFailure",
]
