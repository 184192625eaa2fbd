from __future__ import annotations

import sys
from pathlib import Path


# Allow `import time_range_parser` (and the `api` app) without `pip install -e .`
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
if _SRC.exists():
    sys.path.insert(0, str(_SRC))
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import pytest

from time_range_parser.config import ParserConfig


SEC = 1000
MIN = 60 * SEC
HR = 60 * MIN
DAY = 24 * HR

NOW = 1_000_000_000_000  # sunday 09 sep 2001 01:46:40 GMT
NOW_D = 999_993_600_000  # sunday 09 sep 2001 00:00:00 GMT
NOW_M = 999_302_400_000  # saturday 01 sep 2001 00:00:00 GMT
NOW_Y = 978_307_200_000  # monday 01 jan 2001 00:00:00 GMT

Y2010 = 1_262_304_000_000
Y2011 = 1_293_840_000_000
Y2021 = 1_609_459_200_000


@pytest.fixture
def utc_config() -> ParserConfig:
    return ParserConfig(utc=True, now=NOW, default_range_ms=DAY)
