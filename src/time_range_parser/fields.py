from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from time_range_parser.errors import ErrorKind, TimeRangeError
from time_range_parser.schema import CalendarVector, InstantRange, Precision


_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS: Final[timedelta] = timedelta(milliseconds=1)
_CYCLE_YEARS: Final[int] = 400
_CYCLE_MS: Final[int] = 146_097 * 24 * 60 * 60 * 1000


@lru_cache(maxsize=64)
def resolve_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise TimeRangeError(ErrorKind.UNKNOWN_ZONE, f"unknown time zone {name}") from e


@dataclass(frozen=True)
class CalendarMode:
    """Which wall clock calendar fields are read from: a named zone, UTC or the host clock."""

    utc: bool = False
    tz: Optional[str] = None

    def zone(self) -> Optional[tzinfo]:
        if self.tz:
            return resolve_zone(self.tz)
        if self.utc:
            return timezone.utc
        return None  # host local time


def _wall_clock(vector: CalendarVector) -> datetime:
    """Naive datetime for a vector, rolling over out-of-range fields."""
    year, month, day, hour, minute, second, ms = vector
    y, m0 = divmod(year * 12 + (month - 1), 12)
    try:
        return datetime(y, m0 + 1, 1) + timedelta(
            days=day - 1, hours=hour, minutes=minute, seconds=second, milliseconds=ms
        )
    except (ValueError, OverflowError) as e:
        raise TimeRangeError(ErrorKind.OUT_OF_RANGE, f"date out of range: {vector}") from e


def to_fields(instant_ms: int, mode: CalendarMode) -> CalendarVector:
    zone = mode.zone()
    try:
        local = (_EPOCH + timedelta(milliseconds=instant_ms)).astimezone(zone)
    except (ValueError, OverflowError) as e:
        raise TimeRangeError(ErrorKind.OUT_OF_RANGE, f"instant out of range: {instant_ms}") from e
    return [
        local.year,
        local.month,
        local.day,
        local.hour,
        local.minute,
        local.second,
        local.microsecond // 1000,
    ]


def from_fields(vector: CalendarVector, mode: CalendarMode) -> int:
    """
    Interpret a vector as wall-clock time in `mode` and return epoch milliseconds.
    The zone offset is taken at the vector's own date, not the current one.
    """
    zone = mode.zone()
    shift = 0
    if vector[Precision.YEAR] > datetime.max.year - _CYCLE_YEARS:
        # Exclusive ends of year-9999 ranges land in year 10000; one Gregorian
        # cycle earlier has the same calendar and the same zone rules.
        vector = [vector[Precision.YEAR] - _CYCLE_YEARS, *vector[1:]]
        shift = _CYCLE_MS
    naive = _wall_clock(vector)
    try:
        aware = naive.astimezone() if zone is None else naive.replace(tzinfo=zone)
    except (ValueError, OverflowError) as e:
        raise TimeRangeError(ErrorKind.OUT_OF_RANGE, f"date out of range: {vector}") from e
    return (aware - _EPOCH) // _ONE_MS + shift


# -----------------------------
# Precision arithmetic
# -----------------------------


def zero_below(vector: CalendarVector, precision: Precision, offset: int = 0) -> CalendarVector:
    out = list(vector)
    out[precision] += offset
    for i in range(precision + 1, len(out)):
        out[i] = 1 if i < Precision.HOUR else 0
    return out


def snap_to_week_start(vector: CalendarVector) -> CalendarVector:
    """Move back to the Sunday that starts the vector's week."""
    wall = _wall_clock(vector)
    days_since_sunday = (wall.weekday() + 1) % 7
    out = list(vector)
    out[Precision.DAY] -= days_since_sunday
    return out


def snap_to_quarter_start(vector: CalendarVector) -> CalendarVector:
    wall = _wall_clock(vector)
    out = list(vector)
    out[Precision.YEAR] = wall.year
    out[Precision.MONTH] = ((wall.month - 1) // 3) * 3 + 1
    return out


def make_range(vector: CalendarVector, precision: Precision, mode: CalendarMode, step: int = 1) -> InstantRange:
    start = from_fields(vector, mode)
    upper = list(vector)
    upper[precision] += step
    return InstantRange(start=start, end=from_fields(upper, mode))
