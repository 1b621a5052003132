"""statewalk error handling.

- Custom exception hierarchy with error codes
- Error context describing the state, edge and step involved
- ``WalkFailure``: the failure value produced by walk execution
"""

from statewalk.errors.base import (
    ConfigValidationError,
    EffectFailure,
    ErrorCode,
    ErrorContext,
    InvalidMachineError,
    NoStartStateError,
    StatewalkError,
    UnknownEdgeError,
    UnknownStateError,
    ValidationFailure,
    WalkFailure,
)

__all__ = [
    "StatewalkError",
    "ErrorCode",
    "ErrorContext",
    "NoStartStateError",
    "InvalidMachineError",
    "UnknownStateError",
    "UnknownEdgeError",
    "ValidationFailure",
    "EffectFailure",
    "ConfigValidationError",
    "WalkFailure",
]
