"""Exception hierarchy for statewalk.

Every error raised by the engine derives from :class:`StatewalkError` and
carries an :class:`ErrorCode` plus an :class:`ErrorContext` describing where
in the machine it happened.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from statewalk.core.walk import TraceEntry, Walk


class ErrorCode(Enum):
    """Stable identifiers for each error kind."""

    NO_START_STATE = "E001"
    UNKNOWN_EDGE = "E002"
    UNKNOWN_STATE = "E003"
    VALIDATION_FAILED = "E004"
    EFFECT_FAILED = "E005"
    INVALID_MACHINE = "E006"
    WALK_FAILED = "E007"
    CONFIG_INVALID = "E008"


@dataclass
class ErrorContext:
    """Where an error happened inside a machine or walk."""

    state: str | None = None
    edge: str | None = None
    index: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.state is not None:
            data["state"] = self.state
        if self.edge is not None:
            data["edge"] = self.edge
        if self.index is not None:
            data["index"] = self.index
        data.update(self.extra)
        return data


class StatewalkError(Exception):
    """Base class for all statewalk errors."""

    default_code: ErrorCode = ErrorCode.WALK_FAILED

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "code": self.code.value,
            "message": self.message,
            "context": self.context.to_dict(),
        }


class NoStartStateError(StatewalkError):
    """The machine has no start-kind state, so no walk can be generated."""

    default_code = ErrorCode.NO_START_STATE


class InvalidMachineError(StatewalkError):
    """The machine definition is malformed (bad kind, dangling edge, ...)."""

    default_code = ErrorCode.INVALID_MACHINE


class UnknownStateError(StatewalkError):
    """A state name does not exist in the machine."""

    default_code = ErrorCode.UNKNOWN_STATE


class UnknownEdgeError(StatewalkError):
    """A walk names an edge that the current state does not declare."""

    default_code = ErrorCode.UNKNOWN_EDGE


class ValidationFailure(StatewalkError):
    """A state's invariant rejected the value produced by a transition."""

    default_code = ErrorCode.VALIDATION_FAILED


class EffectFailure(StatewalkError):
    """A transition's effect raised while producing the next value."""

    default_code = ErrorCode.EFFECT_FAILED


class ConfigValidationError(StatewalkError, ValueError):
    """A configuration value is out of range or of the wrong shape."""

    default_code = ErrorCode.CONFIG_INVALID

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.field = field
        self.value = value


class WalkFailure(StatewalkError):
    """A walk failed while being executed.

    Carries the walk truncated to (and including) the failing step, the
    trace of transitions taken before the failure, and the classified
    error that caused it. The user's own exception, when there is one,
    is reachable through ``root_cause`` and the ``__cause__`` chain.

    Attributes:
        walk: The originating walk, truncated to ``[0, index]``.
        trace: Transitions completed up to the failure, in order.
        cause: The classified error (unknown edge, validation, effect...).
        index: Position of the failing step in the walk.
        state: Name of the state the walk was at when it failed.
        edge: Name of the edge that was being run, if any.
    """

    default_code = ErrorCode.WALK_FAILED

    def __init__(
        self,
        message: str,
        walk: Walk,
        cause: StatewalkError,
        trace: tuple[TraceEntry, ...] = (),
        index: int = 0,
        state: str | None = None,
        edge: str | None = None,
    ) -> None:
        super().__init__(
            message,
            context=ErrorContext(state=state, edge=edge, index=index),
        )
        self.walk = walk
        self.cause = cause
        self.trace = tuple(trace)
        self.index = index
        self.state = state
        self.edge = edge

    @property
    def originating_walk(self) -> Walk:
        return self.walk

    @property
    def root_cause(self) -> BaseException:
        """The innermost exception behind this failure."""
        return self.cause.__cause__ or self.cause

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["walk"] = {"start": self.walk.start, "edges": list(self.walk.edges)}
        data["trace"] = [str(entry) for entry in self.trace]
        data["cause"] = self.cause.to_dict()
        return data
