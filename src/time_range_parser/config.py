from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Final, Optional

import os

from time_range_parser.errors import TimeRangeError
from time_range_parser.fields import CalendarMode, resolve_zone


DEFAULT_RANGE_MS: Final[int] = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class ParserConfig:
    # Calendar fields are read in UTC instead of the host clock.
    utc: bool = False
    # IANA zone name; wins over `utc` when set.
    tz: Optional[str] = None
    # Fixed "current instant" in epoch ms; None reads the clock on every parse.
    now: Optional[int] = None
    # Half-width applied around 'now' and around a '<>' anchor without a duration.
    default_range_ms: int = DEFAULT_RANGE_MS

    @property
    def mode(self) -> CalendarMode:
        return CalendarMode(utc=self.utc, tz=self.tz)

    def replace(self, **changes: Any) -> ParserConfig:
        return dataclasses.replace(self, **changes)


_ENV_UTC: Final[str] = "TIME_RANGE_UTC"
_ENV_TZ: Final[str] = "TIME_RANGE_TZ"
_ENV_NOW: Final[str] = "TIME_RANGE_NOW"
_ENV_DEFAULT_RANGE: Final[str] = "TIME_RANGE_DEFAULT_RANGE_MS"

_TRUE: Final[set[str]] = {"1", "true", "yes", "on"}
_FALSE: Final[set[str]] = {"0", "false", "no", "off", ""}


def _parse_dotenv(path: Path) -> dict[str, str]:
    """
    Minimal .env parser:
    - KEY=VALUE pairs
    - ignores blanks and lines starting with '#'
    - strips surrounding quotes on VALUE
    """
    data: dict[str, str] = {}
    if not path.exists():
        return data
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        k = k.strip()
        v = v.strip().strip("'").strip('"')
        if k:
            data[k] = v
    return data


def _default_dotenv_path() -> Path:
    return Path.cwd() / ".env"


def parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def parse_instant(value: str) -> int:
    """
    Epoch milliseconds from either an integer string or an ISO 8601 timestamp.
    Naive timestamps are taken as host local time.
    """
    v = value.strip()
    if v.lstrip("-").isdigit():
        return int(v)
    dt = datetime.fromisoformat(v.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return (dt - datetime(1970, 1, 1, tzinfo=timezone.utc)) // timedelta(milliseconds=1)


def parse_range_ms(value: str) -> int:
    ms = int(value.strip())
    if ms < 0:
        raise ValueError(f"range must not be negative, got {ms}")
    return ms


def load_config(dotenv_path: Path | None = None) -> ParserConfig:
    """
    Load parser settings from environment variables, falling back to `.env`.
    Unset settings keep the ParserConfig defaults.
    """
    dotenv_path = dotenv_path or _default_dotenv_path()
    dotenv = _parse_dotenv(dotenv_path)

    def get(name: str) -> str | None:
        return os.environ.get(name) or dotenv.get(name)

    invalid: list[str] = []
    config = ParserConfig()

    raw_utc = get(_ENV_UTC)
    if raw_utc is not None:
        try:
            config = config.replace(utc=parse_bool(raw_utc))
        except ValueError:
            invalid.append(_ENV_UTC)

    raw_tz = get(_ENV_TZ)
    if raw_tz:
        try:
            resolve_zone(raw_tz)
            config = config.replace(tz=raw_tz)
        except TimeRangeError:
            invalid.append(_ENV_TZ)

    raw_now = get(_ENV_NOW)
    if raw_now:
        try:
            config = config.replace(now=parse_instant(raw_now))
        except ValueError:
            invalid.append(_ENV_NOW)

    raw_range = get(_ENV_DEFAULT_RANGE)
    if raw_range:
        try:
            config = config.replace(default_range_ms=parse_range_ms(raw_range))
        except ValueError:
            invalid.append(_ENV_DEFAULT_RANGE)

    if invalid:
        raise RuntimeError(
            "Invalid settings: "
            + ", ".join(invalid)
            + ". Fix them in the environment or the .env file."
        )
    return config
