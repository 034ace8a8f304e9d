from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional
from quantumwalk.io.json_io import save_json, steps_to_dict
from quantumwalk.io import load_config, build_from_config
from quantumwalk.core.errors import HashFailure, HashUnavailable, InvalidInput, ResourceExhausted
from quantumwalk.core.matching import MatchRequest, parse_timestamp_string
from quantumwalk.core.duration import parse_interval_string
from quantumwalk.core.step import QuantumStep
from quantumwalk.reporting import format_text_report, format_steps_table, build_json_report
from quantumwalk import __version__

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Distinct exit codes per error kind
EXIT_CODES = {
    InvalidInput: 2,
    ResourceExhausted: 3,
    HashUnavailable: 4,
    HashFailure: 5,
}

def _default_log_level() -> str:
    level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    return level if level in LOG_LEVELS else "WARNING"

def _timestamp_arg(value: str) -> int:
    parsed = parse_timestamp_string(value)
    if len(parsed) != 1:
        raise argparse.ArgumentTypeError(f"not a timestamp: {value!r}")
    return parsed[0]

def _emit_steps(steps: List[QuantumStep], out: Optional[str]) -> None:
    if out:
        save_json(out, steps_to_dict(steps))
    else:
        print(format_steps_table(steps, max_rows=len(steps)))

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="quantumwalk", description="QuantumWalk CLI")
    parser.add_argument("--config", required=False, help="Path to configuration file (JSON or YAML)")
    parser.add_argument("--log-level", default=_default_log_level(), type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default: $LOG_LEVEL or WARNING)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="Show QuantumWalk version and exit")

    p_steps = sub.add_parser("steps", help="List consecutive chain steps")
    p_steps.add_argument("--count", type=int, default=10, help="Number of steps to list")
    p_steps.add_argument("--from-index", type=int, default=0, help="Index of the first step listed")
    p_steps.add_argument("--out", required=False, help="Path to write steps JSON")

    p_near = sub.add_parser("nearest", help="Find the step closest to a timestamp")
    p_near.add_argument("--at", required=True, type=_timestamp_arg, help="Unix seconds/ms or ISO-8601")

    p_range = sub.add_parser("range", help="List steps within a time range")
    p_range.add_argument("--start", required=True, type=_timestamp_arg)
    p_range.add_argument("--end", required=True, type=_timestamp_arg)
    p_range.add_argument("--out", required=False, help="Path to write steps JSON")

    p_match = sub.add_parser("match", help="Align a sequence against the chain and score it")
    src = p_match.add_mutually_exclusive_group(required=True)
    src.add_argument("--intervals", help='Comma-separated durations, e.g. "3d 14h 23m, 2.5d, 48h"')
    src.add_argument("--timestamps", help="Comma-separated Unix seconds/ms or ISO-8601 timestamps")
    p_match.add_argument("--start", type=_timestamp_arg, help="Search range start")
    p_match.add_argument("--end", type=_timestamp_arg, help="Search range end")
    p_match.add_argument("--out", required=False, help="Path to write match JSON report")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    if args.cmd == "version":
        print(__version__)
        return 0

    try:
        cfg: Dict[str, Any] = load_config(args.config) if args.config else {}
        generator, matcher = build_from_config(cfg)

        if args.cmd == "steps":
            first = generator.step_at(args.from_index)
            steps = [first] + generator.steps_forward(first, args.count - 1) if args.count > 0 else []
            _emit_steps(steps, args.out)

        elif args.cmd == "nearest":
            print(format_steps_table([generator.find_nearest(args.at)]))

        elif args.cmd == "range":
            _emit_steps(generator.steps_in_range(args.start, args.end), args.out)

        elif args.cmd == "match":
            if args.intervals is not None:
                request = MatchRequest(values=parse_interval_string(args.intervals), kind="intervals")
            else:
                request = MatchRequest(values=parse_timestamp_string(args.timestamps), kind="timestamps")
            if (args.start is None) != (args.end is None):
                parser.error("--start and --end must be given together")
            if args.start is not None:
                request.search_range = (args.start, args.end)
            result = matcher.match(request)
            if args.out:
                save_json(args.out, build_json_report(result))
            else:
                print(format_text_report(result))

    except (InvalidInput, ResourceExhausted, HashUnavailable, HashFailure) as e:
        print(f"error: {e}", file=sys.stderr)
        return next(code for kind, code in EXIT_CODES.items() if isinstance(e, kind))
    except (OSError, ValueError) as e:
        # unreadable or malformed config
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
