from __future__ import annotations

from typing import Optional

from time_range_parser.errors import ErrorKind, TimeRangeError
from time_range_parser.schema import (
    Anchor,
    InstantRange,
    Operator,
    RangeResult,
    Relative,
    ResolvedTerm,
)


def _point(term: ResolvedTerm) -> InstantRange | Anchor:
    if isinstance(term, Relative):
        raise TimeRangeError(ErrorKind.MISSING_TERM, "a duration needs a date or time to extend")
    return term


def _interval(term1: Optional[ResolvedTerm], term2: Optional[ResolvedTerm]) -> RangeResult:
    if term1 is None and term2 is None:
        raise TimeRangeError(ErrorKind.MISSING_TERM, "range operator without terms")
    if term2 is None:
        return RangeResult(start=_point(term1).start, end=None)
    if term1 is None:
        return RangeResult(start=None, end=_point(term2).end)
    if isinstance(term2, Relative):
        p = _point(term1)
        return RangeResult(start=p.start, end=p.end + term2.rel_ms)
    if isinstance(term1, Relative):
        return RangeResult(start=term2.start - term1.rel_ms, end=term2.end)
    return RangeResult(start=term1.start, end=term2.end)


def _around(term1: Optional[ResolvedTerm], term2: Optional[ResolvedTerm], default_range: int) -> RangeResult:
    if term1 is None:
        raise TimeRangeError(ErrorKind.MISSING_TERM, "'<>' needs a date or time before it")
    p = _point(term1)
    if term2 is None:
        return RangeResult(start=p.start - default_range, end=p.end + default_range)
    if not isinstance(term2, Relative):
        raise TimeRangeError(ErrorKind.MISSING_DURATION, "second term did not have a range")
    return RangeResult(start=p.start - term2.rel_ms, end=p.end + term2.rel_ms)


def combine(
    operator: Operator,
    term1: Optional[ResolvedTerm],
    term2: Optional[ResolvedTerm],
    origin: int,
    default_range: int,
) -> RangeResult:
    """
    Combine resolved terms into an end-exclusive range.

    - '<' / '->': interval between the two terms, open on a missing side
    - '<>': first term widened on both sides by the duration (or the default)
    - no operator: a duration or 'now' is centered on the origin
    """
    if operator.is_interval:
        return _interval(term1, term2)
    if operator is Operator.AROUND:
        return _around(term1, term2, default_range)

    if term1 is None:
        raise TimeRangeError(ErrorKind.MISSING_TERM, "no term given")
    if isinstance(term1, Relative):
        return RangeResult(start=origin - term1.rel_ms, end=origin + term1.rel_ms)
    if isinstance(term1, Anchor):
        return RangeResult(start=term1.now - default_range, end=term1.now + default_range)
    return RangeResult(start=term1.start, end=term1.end)
