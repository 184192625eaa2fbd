from __future__ import annotations

import re
from typing import Final


_DASH_MAP: Final[dict[str, str]] = {
    "—": "-",
    "–": "-",
    "－": "-",
    "‒": "-",
    "−": "-",
}

_ARROW_MAP: Final[dict[str, str]] = {
    "→": "->",
    "⟶": "->",
    "↔": "<>",
}

_RE_SPACES: Final[re.Pattern[str]] = re.compile(r"\s+")


def _to_halfwidth_ascii(ch: str) -> str:
    """
    - U+FF01..U+FF5E map to ASCII by -0xFEE0
    - U+3000 (full-width space) -> ' '
    """
    o = ord(ch)
    if o == 0x3000:
        return " "
    if 0xFF01 <= o <= 0xFF5E:
        return chr(o - 0xFEE0)
    return ch


def normalize_unicode(text: str) -> str:
    out = []
    for ch in text:
        ch2 = _DASH_MAP.get(ch, ch)
        ch2 = _to_halfwidth_ascii(ch2)
        ch2 = _ARROW_MAP.get(ch2, ch2)
        out.append(ch2)
    return "".join(out)


def preprocess(text: str) -> str:
    """Normalize look-alike characters and collapse whitespace."""
    return _RE_SPACES.sub(" ", normalize_unicode(text)).strip()
