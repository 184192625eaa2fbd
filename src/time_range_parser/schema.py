from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Final, Literal, Optional

from time_range_parser.errors import ErrorKind, TimeRangeError


# -----------------------------
# Calendar structures
# -----------------------------

# [year, month (1-based), day, hour, minute, second, millisecond]
CalendarVector = list[int]


class Precision(IntEnum):
    YEAR = 0
    MONTH = 1
    DAY = 2
    HOUR = 3
    MINUTE = 4
    SECOND = 5
    MILLISECOND = 6


SnapKind = Literal["week", "quarter"]


# -----------------------------
# Resolved terms
# -----------------------------


@dataclass(frozen=True)
class InstantRange:
    start: int
    end: int  # end-exclusive


@dataclass(frozen=True)
class Relative:
    rel_ms: int


@dataclass(frozen=True)
class Anchor:
    now: int

    @property
    def start(self) -> int:
        return self.now

    @property
    def end(self) -> int:
        return self.now


ResolvedTerm = InstantRange | Relative | Anchor


@dataclass(frozen=True)
class RangeResult:
    start: Optional[int]
    end: Optional[int]  # end-exclusive, None = unbounded


# -----------------------------
# Keywords
# -----------------------------


class Keyword(str, Enum):
    NOW = "now"
    TODAY = "today"
    YESTERDAY = "yesterday"
    TOMORROW = "tomorrow"
    THIS_WEEK = "thisweek"
    LAST_WEEK = "lastweek"
    NEXT_WEEK = "nextweek"
    THIS_MONTH = "thismonth"
    LAST_MONTH = "lastmonth"
    NEXT_MONTH = "nextmonth"
    THIS_QUARTER = "thisquarter"
    LAST_QUARTER = "lastquarter"
    NEXT_QUARTER = "nextquarter"
    THIS_YEAR = "thisyear"
    LAST_YEAR = "lastyear"
    NEXT_YEAR = "nextyear"


@dataclass(frozen=True)
class KeywordRule:
    precision: Precision
    offset: int = 0
    step: int = 1
    snap: Optional[SnapKind] = None


KEYWORD_RULES: Final[dict[Keyword, KeywordRule]] = {
    Keyword.TODAY: KeywordRule(Precision.DAY),
    Keyword.YESTERDAY: KeywordRule(Precision.DAY, offset=-1),
    Keyword.TOMORROW: KeywordRule(Precision.DAY, offset=1),
    Keyword.THIS_WEEK: KeywordRule(Precision.DAY, step=7, snap="week"),
    Keyword.LAST_WEEK: KeywordRule(Precision.DAY, offset=-7, step=7, snap="week"),
    Keyword.NEXT_WEEK: KeywordRule(Precision.DAY, offset=7, step=7, snap="week"),
    Keyword.THIS_MONTH: KeywordRule(Precision.MONTH),
    Keyword.LAST_MONTH: KeywordRule(Precision.MONTH, offset=-1),
    Keyword.NEXT_MONTH: KeywordRule(Precision.MONTH, offset=1),
    Keyword.THIS_QUARTER: KeywordRule(Precision.MONTH, step=3, snap="quarter"),
    Keyword.LAST_QUARTER: KeywordRule(Precision.MONTH, offset=-3, step=3, snap="quarter"),
    Keyword.NEXT_QUARTER: KeywordRule(Precision.MONTH, offset=3, step=3, snap="quarter"),
    Keyword.THIS_YEAR: KeywordRule(Precision.YEAR),
    Keyword.LAST_YEAR: KeywordRule(Precision.YEAR, offset=-1),
    Keyword.NEXT_YEAR: KeywordRule(Precision.YEAR, offset=1),
}


# -----------------------------
# Expression splitting
# -----------------------------


class Operator(str, Enum):
    NONE = ""
    INTERVAL = "<"
    ARROW = "->"
    AROUND = "<>"

    @property
    def is_interval(self) -> bool:
        return self in (Operator.INTERVAL, Operator.ARROW)


@dataclass(frozen=True)
class Expression:
    term1: Optional[str]
    operator: Operator
    term2: Optional[str]


def _find_operator(text: str) -> Optional[tuple[int, Operator]]:
    """Return (index, operator) of the first operator token, two-char tokens first."""
    for i, ch in enumerate(text):
        pair = text[i : i + 2]
        if pair == "->":
            return i, Operator.ARROW
        if pair == "<>":
            return i, Operator.AROUND
        if ch == "<":
            return i, Operator.INTERVAL
    return None


def split_expression(text: str) -> Expression:
    """
    Split an expression into (term1, operator, term2).

    - no operator: the whole text is term1
    - a '-' not followed by '>' belongs to a term (date separator)
    - a second operator is rejected rather than silently dropped
    """
    found = _find_operator(text)
    if found is None:
        term = text.strip()
        return Expression(term1=term or None, operator=Operator.NONE, term2=None)

    idx, op = found
    head = text[:idx].strip()
    tail = text[idx + len(op.value) :].strip()
    if _find_operator(tail) is not None:
        raise TimeRangeError(ErrorKind.AMBIGUOUS_OPERATOR, f"more than one range operator in {text}")
    return Expression(term1=head or None, operator=op, term2=tail or None)
