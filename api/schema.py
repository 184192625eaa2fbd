"""
Request/response schemas for the time-range API.

Instants are epoch milliseconds; `to` is end-inclusive, `None` means unbounded.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    """Request body for POST /parse."""

    time_range: str = Field(..., min_length=1, description="Expression such as 'last week' or '2010 <> 2days'")
    utc: bool = Field(False, description="Read calendar fields in UTC instead of the server clock")
    tz: str | None = Field(None, description="IANA time zone, e.g. Asia/Karachi; wins over utc")
    now: int | None = Field(None, description="Fixed current instant in epoch ms; default is server time")
    default_range_ms: int = Field(
        24 * 60 * 60 * 1000,
        ge=0,
        description="Half-width used around 'now' and around '<>' without a duration",
    )


class ParseResponse(BaseModel):
    """A resolved, end-inclusive time range."""

    time_range: str = Field(..., description="Echo of the input expression")
    from_ms: int | None = Field(None, alias="from", description="Start instant (inclusive), epoch ms")
    to_ms: int | None = Field(None, alias="to", description="End instant (inclusive), epoch ms")
    from_iso: str | None = Field(None, description="Start as ISO 8601 UTC")
    to_iso: str | None = Field(None, description="End as ISO 8601 UTC")

    model_config = {"populate_by_name": True}


def ms_to_iso(ms: int | None) -> str | None:
    if ms is None:
        return None
    try:
        dt = datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=ms)
    except OverflowError:
        return None  # beyond datetime.max
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
