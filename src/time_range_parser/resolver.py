from __future__ import annotations

from datetime import datetime
import re
from typing import Final

from time_range_parser.durations import duration_millis
from time_range_parser.errors import ErrorKind, TimeRangeError
from time_range_parser.fields import (
    CalendarMode,
    make_range,
    snap_to_quarter_start,
    snap_to_week_start,
    to_fields,
    zero_below,
)
from time_range_parser.schema import (
    KEYWORD_RULES,
    Anchor,
    InstantRange,
    Keyword,
    Precision,
    Relative,
    ResolvedTerm,
)


_RE_KEYWORD: Final[re.Pattern[str]] = re.compile(r"^[a-z]+$")
# YYYY[-MM[-DD]] [H[H][:MM[:SS]]]
_RE_LITERAL: Final[re.Pattern[str]] = re.compile(
    r"^(?:(\d{4})(?:-(\d{2})(?:-(\d{2}))?)?)? ?(?:(\d{1,2})(?::(\d{2})(?::(\d{2}))?)?)?$"
)
_RE_DURATION: Final[re.Pattern[str]] = re.compile(r"^(\d+) ?([a-z]+)$")


def resolve_keyword(word: str, origin: int, mode: CalendarMode) -> ResolvedTerm:
    try:
        keyword = Keyword(word)
    except ValueError:
        raise TimeRangeError(ErrorKind.UNKNOWN_TOKEN, f"unknown token {word}") from None

    if keyword is Keyword.NOW:
        return Anchor(now=origin)

    rule = KEYWORD_RULES[keyword]
    vector = zero_below(to_fields(origin, mode), rule.precision, rule.offset)
    if rule.snap == "week":
        vector = snap_to_week_start(vector)
    elif rule.snap == "quarter":
        vector = snap_to_quarter_start(vector)
    return make_range(vector, rule.precision, mode, step=rule.step)


def resolve_literal(match: re.Match[str], origin: int, mode: CalendarMode) -> InstantRange:
    """
    Fields before the first supplied component come from the origin (a bare
    time means "on the origin's day"); fields after the last supplied one are
    reset to the start of that unit.
    """
    vector = to_fields(origin, mode)
    precision: Precision | None = None
    for i, raw in enumerate(match.groups()):
        if raw is not None:
            vector[i] = int(raw)
            precision = Precision(i)
        elif precision is not None:
            vector[i] = 1 if i < Precision.HOUR else 0
    if precision is None:
        raise TimeRangeError(ErrorKind.UNKNOWN_TERM, f"unknown term {match.string}")
    vector[Precision.MILLISECOND] = 0

    try:
        datetime(*vector[: Precision.MILLISECOND])
    except ValueError as e:
        raise TimeRangeError(ErrorKind.OUT_OF_RANGE, f"invalid date {match.string}: {e}") from e
    return make_range(vector, precision, mode)


def resolve_duration(match: re.Match[str]) -> Relative:
    count = int(match.group(1))
    return Relative(rel_ms=duration_millis(count, match.group(2)))


def resolve_term(text: str, origin: int, mode: CalendarMode) -> ResolvedTerm:
    """
    Resolve one side of an expression. First match wins:
    keyword, then date/time literal, then relative duration.
    """
    term = " ".join(text.split()).lower()

    word = term.replace(" ", "")
    if _RE_KEYWORD.match(word):
        return resolve_keyword(word, origin, mode)

    m = _RE_LITERAL.match(term)
    if m and any(g is not None for g in m.groups()):
        return resolve_literal(m, origin, mode)

    m = _RE_DURATION.match(term)
    if m:
        return resolve_duration(m)

    raise TimeRangeError(ErrorKind.UNKNOWN_TERM, f"unknown term {text}")
