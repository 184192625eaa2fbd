import pytest

from time_range_parser.durations import REL_TOKENS, UNIT_ALIASES, duration_millis
from time_range_parser.errors import ErrorKind, TimeRangeError

from conftest import DAY, HR, MIN, SEC


def test_all_aliases_registered() -> None:
    assert len(REL_TOKENS) == sum(len(a) for a in UNIT_ALIASES.values())


@pytest.mark.parametrize(
    "unit,expected",
    [("y", 365 * DAY), ("mons", 31 * DAY), ("dys", DAY), ("hrs", HR), ("m", MIN), ("seconds", SEC)],
)
def test_fixed_length_units(unit: str, expected: int) -> None:
    assert duration_millis(1, unit) == expected


def test_lookup_is_case_and_space_insensitive() -> None:
    assert duration_millis(3, " Days ") == 3 * DAY


def test_unknown_unit() -> None:
    with pytest.raises(TimeRangeError) as exc:
        duration_millis(3, "fortnights")
    assert exc.value.kind is ErrorKind.UNKNOWN_UNIT
