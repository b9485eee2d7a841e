import argparse
import json
import logging
import os
import sys
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pathpos.app.interpolator import make_interpolator
from pathpos.domain.errors import InvalidInterpolationSpec
from pathpos.io.interpolator_logging import LOGGER_NAME
from pathpos.sim.clock import SimClock


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise argparse.ArgumentTypeError(f"unknown time zone: {name}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathpos-track",
        description="Print the position of an entity moving along a path at given times.",
    )
    parser.add_argument("spec", help="path to a JSON spec file, '-' for stdin, or inline JSON")
    when = parser.add_mutually_exclusive_group(required=True)
    when.add_argument("--at", type=float, nargs="+", metavar="H", help="decimal hours to query")
    when.add_argument("--from", dest="start", type=float, metavar="H", help="first query time")
    when.add_argument(
        "--sim-seconds",
        type=float,
        nargs="+",
        metavar="T",
        help="simulation times in seconds since --epoch",
    )
    parser.add_argument("--to", dest="end", type=float, metavar="H", help="last query time")
    parser.add_argument(
        "--step", type=float, default=0.25, metavar="H", help="hours between queries"
    )
    parser.add_argument(
        "--epoch",
        type=datetime.fromisoformat,
        metavar="ISO",
        help="wall time of simulation t=0 (naive means UTC)",
    )
    parser.add_argument(
        "--tz", type=_zone, help="IANA zone for the time of day (default: the epoch's own)"
    )
    parser.add_argument("--return", dest="return_format", choices=["geo:json", "geo:point"])
    parser.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    parser.add_argument("--debug", action="store_true", help="log every query")
    return parser


def _read_spec(arg: str) -> str:
    if arg == "-":
        return sys.stdin.read()
    if os.path.isfile(arg):
        with open(arg, encoding="utf-8") as f:
            return f.read()
    return arg


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.start is not None and args.end is None:
        parser.error("--from requires --to")
    if args.sim_seconds is not None and args.epoch is None:
        parser.error("--sim-seconds requires --epoch")
    if not args.step > 0:
        parser.error("--step must be > 0")

    # the interpolator installs the JSON stderr handler; the CLI only owns the level
    log = logging.getLogger(LOGGER_NAME)
    prev_level = log.level
    log.setLevel(logging.DEBUG if args.debug else args.log_level)
    try:
        try:
            interp = make_interpolator(
                _read_spec(args.spec),
                settings={"log": {"level": args.log_level, "debug": args.debug}},
                return_format=args.return_format,
            )
        except InvalidInterpolationSpec as exc:
            print(str(exc), file=sys.stderr)
            return 2

        if args.at is not None:
            results = ((h, interp(h)) for h in args.at)
        elif args.sim_seconds is not None:
            clock = SimClock(args.epoch)
            hours = (clock.decimal_hours_at(t, tz=args.tz) for t in args.sim_seconds)
            results = ((h, interp(h)) for h in hours)
        else:
            results = interp.checkpoints(args.start, args.end, args.step)
        for h, position in results:
            print(json.dumps({"hours": h, "position": position}))
        return 0
    finally:
        log.setLevel(prev_level)
