from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    UNKNOWN_TOKEN = "unknown_token"
    UNKNOWN_TERM = "unknown_term"
    UNKNOWN_UNIT = "unknown_unit"
    UNKNOWN_ZONE = "unknown_zone"
    MISSING_DURATION = "missing_duration"
    MISSING_TERM = "missing_term"
    AMBIGUOUS_OPERATOR = "ambiguous_operator"
    OUT_OF_RANGE = "out_of_range"


class TimeRangeError(ValueError):
    """Raised for any expression that cannot be turned into a range."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
