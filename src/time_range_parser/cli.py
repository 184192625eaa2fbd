from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from time_range_parser.config import load_config, parse_instant, parse_range_ms
from time_range_parser.errors import TimeRangeError


def _instant(s: str) -> int:
    try:
        return parse_instant(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid instant '{s}', expected epoch ms or ISO 8601") from e


def _range_ms(s: str) -> int:
    try:
        return parse_range_ms(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid range '{s}', expected a non-negative number of ms") from e


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="time-range-parser")
    parser.add_argument("--verbose", "-v", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_parse = sub.add_parser("parse", help="Resolve a time-range expression.")
    p_parse.add_argument("expression")
    p_parse.add_argument("--utc", action="store_true", default=None, help="Use UTC calendar fields.")
    p_parse.add_argument("--tz", default=None, help="IANA time zone for calendar fields.")
    p_parse.add_argument("--now", type=_instant, default=None, help="Fixed current instant (epoch ms or ISO 8601).")
    p_parse.add_argument("--default-range", type=_range_ms, default=None, help="Default half-width in ms.")
    p_parse.add_argument(
        "--exclusive", action="store_true", help="Print the raw end-exclusive range instead of the inclusive one."
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.cmd == "parse":
        from time_range_parser.parser import RangeParser

        try:
            config = load_config()
        except RuntimeError as e:
            parser.error(str(e))
        changes: dict[str, Any] = {}
        if args.utc is not None:
            changes["utc"] = args.utc
        if args.tz is not None:
            changes["tz"] = args.tz
        if args.now is not None:
            changes["now"] = args.now
        if args.default_range is not None:
            changes["default_range_ms"] = args.default_range
        rp = RangeParser(config.replace(**changes))

        if args.exclusive:
            try:
                r = rp.resolve(args.expression)
            except TimeRangeError as e:
                print(json.dumps({"error": e.message}, ensure_ascii=False))
                return 1
            print(json.dumps({"start": r.start, "end": r.end}, ensure_ascii=False))
            return 0

        result = rp.parse(args.expression)
        print(json.dumps(result.to_json(), ensure_ascii=False))
        return 0 if result.ok else 1

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
