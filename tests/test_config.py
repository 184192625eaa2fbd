from pathlib import Path

import pytest

from time_range_parser.config import (
    DEFAULT_RANGE_MS,
    ParserConfig,
    load_config,
    parse_bool,
    parse_instant,
    parse_range_ms,
)
from time_range_parser.fields import CalendarMode

from conftest import NOW

_ENV = ("TIME_RANGE_UTC", "TIME_RANGE_TZ", "TIME_RANGE_NOW", "TIME_RANGE_DEFAULT_RANGE_MS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    c = ParserConfig()
    assert (c.utc, c.tz, c.now, c.default_range_ms) == (False, None, None, DEFAULT_RANGE_MS)
    assert c.mode == CalendarMode(utc=False, tz=None)


def test_load_config_without_settings(tmp_path: Path) -> None:
    assert load_config(tmp_path / ".env") == ParserConfig()


def test_load_config_from_dotenv(tmp_path: Path) -> None:
    env = tmp_path / ".env"
    env.write_text(
        "# parser settings\n"
        "TIME_RANGE_UTC=true\n"
        "TIME_RANGE_TZ='Asia/Karachi'\n"
        f"TIME_RANGE_NOW={NOW}\n"
        "TIME_RANGE_DEFAULT_RANGE_MS=3600000\n",
        encoding="utf-8",
    )
    assert load_config(env) == ParserConfig(utc=True, tz="Asia/Karachi", now=NOW, default_range_ms=3_600_000)


def test_environment_wins_over_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env = tmp_path / ".env"
    env.write_text("TIME_RANGE_TZ=Asia/Karachi\n", encoding="utf-8")
    monkeypatch.setenv("TIME_RANGE_TZ", "Europe/Berlin")
    assert load_config(env).tz == "Europe/Berlin"


def test_invalid_settings_are_listed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIME_RANGE_TZ", "Nowhere/Land")
    monkeypatch.setenv("TIME_RANGE_DEFAULT_RANGE_MS", "a day")
    with pytest.raises(RuntimeError) as exc:
        load_config(tmp_path / ".env")
    assert "TIME_RANGE_TZ" in str(exc.value)
    assert "TIME_RANGE_DEFAULT_RANGE_MS" in str(exc.value)


def test_parse_bool() -> None:
    assert parse_bool("Yes") is True
    assert parse_bool("0") is False
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_parse_instant() -> None:
    assert parse_instant(str(NOW)) == NOW
    assert parse_instant("2001-09-09T01:46:40.123Z") == NOW + 123
    assert parse_instant("2001-09-09T06:46:40+05:00") == NOW


def test_negative_default_range_is_invalid(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIME_RANGE_DEFAULT_RANGE_MS", "-5")
    with pytest.raises(RuntimeError) as exc:
        load_config(tmp_path / ".env")
    assert "TIME_RANGE_DEFAULT_RANGE_MS" in str(exc.value)


def test_parse_range_ms() -> None:
    assert parse_range_ms(" 0 ") == 0
    with pytest.raises(ValueError):
        parse_range_ms("-1")
