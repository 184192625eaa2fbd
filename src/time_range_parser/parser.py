from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Any, Callable, Final, Optional

from time_range_parser.combine import combine
from time_range_parser.config import ParserConfig
from time_range_parser.errors import ErrorKind, TimeRangeError
from time_range_parser.preprocess import preprocess
from time_range_parser.resolver import resolve_term
from time_range_parser.schema import RangeResult, split_expression


logger = logging.getLogger(__name__)

NO_FILTER: Final[str] = "No filter"
EMPTY_MESSAGE: Final[str] = "Invalid or empty time range"


@dataclass(frozen=True)
class TimeRangeValue:
    from_ms: Optional[int]
    to_ms: Optional[int]  # end-inclusive
    time_range: str


@dataclass(frozen=True)
class ParseResult:
    value: Optional[TimeRangeValue] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.value is not None

    def to_json(self) -> dict[str, Any]:
        if self.value is None:
            return {"error": self.error}
        return {
            "value": {
                "from": self.value.from_ms,
                "to": self.value.to_ms,
                "timeRange": self.value.time_range,
            }
        }


def current_millis() -> int:
    return time.time_ns() // 1_000_000


class RangeParser:
    """
    Parses time-range expressions against one configuration.

    Instances hold no mutable state, so one parser can be shared between threads;
    use `config.replace(...)` to derive a parser with different settings.
    """

    def __init__(self, config: ParserConfig | None = None, *, clock: Callable[[], int] = current_millis) -> None:
        self.config = config or ParserConfig()
        self._clock = clock

    def resolve(self, text: str | None) -> RangeResult:
        """Resolve to an end-exclusive range. Raises TimeRangeError."""
        if text is None or not text.strip() or text == NO_FILTER:
            raise TimeRangeError(ErrorKind.EMPTY_INPUT, EMPTY_MESSAGE)

        origin = self.config.now if self.config.now is not None else self._clock()
        mode = self.config.mode

        expr = split_expression(preprocess(text))
        term1 = resolve_term(expr.term1, origin, mode) if expr.term1 else None
        term2 = resolve_term(expr.term2, origin, mode) if expr.term2 else None
        return combine(expr.operator, term1, term2, origin, self.config.default_range_ms)

    def parse(self, text: str | None) -> ParseResult:
        """
        Parse to an end-inclusive range. Never raises for bad input:
        failures come back as ParseResult.error.
        """
        try:
            r = self.resolve(text)
        except TimeRangeError as e:
            logger.debug("time range %r rejected: %s", text, e.message)
            return ParseResult(error=e.message, kind=e.kind)

        end = r.end - 1 if r.end is not None else None
        return ParseResult(value=TimeRangeValue(from_ms=r.start, to_ms=end, time_range=text or ""))


def parse(text: str | None, config: ParserConfig | None = None) -> ParseResult:
    return RangeParser(config).parse(text)
