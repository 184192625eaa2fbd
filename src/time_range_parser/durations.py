from __future__ import annotations

from typing import Final

from time_range_parser.errors import ErrorKind, TimeRangeError


_SECOND: Final[int] = 1000
_MINUTE: Final[int] = 60 * _SECOND
_HOUR: Final[int] = 60 * _MINUTE
_DAY: Final[int] = 24 * _HOUR

# Fixed-length units: a month is always 31 days and a year always 365 days.
UNIT_MILLIS: Final[dict[str, int]] = {
    "year": 365 * _DAY,
    "month": 31 * _DAY,
    "day": _DAY,
    "hour": _HOUR,
    "minute": _MINUTE,
    "second": _SECOND,
}

UNIT_ALIASES: Final[dict[str, tuple[str, ...]]] = {
    "year": ("y", "yr", "yrs", "year", "years"),
    "month": ("mo", "mon", "mos", "mons", "month", "months"),
    "day": ("d", "dy", "dys", "day", "days"),
    "hour": ("h", "hr", "hrs", "hour", "hours"),
    "minute": ("m", "min", "mins", "minute", "minutes"),
    "second": ("s", "sec", "secs", "second", "seconds"),
}


def _build_rel_tokens() -> dict[str, int]:
    tokens: dict[str, int] = {}
    for unit, aliases in UNIT_ALIASES.items():
        for alias in aliases:
            tokens[alias] = UNIT_MILLIS[unit]
    return tokens


REL_TOKENS: Final[dict[str, int]] = _build_rel_tokens()


def duration_millis(count: int, unit: str) -> int:
    key = "".join(unit.split()).lower()
    try:
        return count * REL_TOKENS[key]
    except KeyError:
        raise TimeRangeError(ErrorKind.UNKNOWN_UNIT, f"unknown duration unit {unit}") from None
