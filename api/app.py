"""
Minimal API service for time-range parsing.

POST /parse: accepts an expression plus calendar settings, returns the resolved
range as epoch milliseconds (end-inclusive).
"""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from api.schema import ParseRequest, ParseResponse, ms_to_iso
from time_range_parser.config import ParserConfig
from time_range_parser.parser import RangeParser


app = FastAPI(
    title="Time Range Parser API",
    description="Turn short expressions like 'last week' or '2010 <> 2days' into millisecond ranges.",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/parse", response_model=ParseResponse, response_model_by_alias=True)
def parse(req: ParseRequest) -> ParseResponse:
    """Parse an expression and return its inclusive range."""
    config = ParserConfig(utc=req.utc, tz=req.tz, now=req.now, default_range_ms=req.default_range_ms)
    result = RangeParser(config).parse(req.time_range)
    if result.value is None:
        raise HTTPException(status_code=400, detail=result.error)
    value = result.value
    return ParseResponse(
        time_range=value.time_range,
        from_ms=value.from_ms,
        to_ms=value.to_ms,
        from_iso=ms_to_iso(value.from_ms),
        to_iso=ms_to_iso(value.to_ms),
    )
