"""Application entrypoint — classify readings from the command line."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from vitals_triage.config import get_settings
from vitals_triage.errors import InvalidValueError, RegistryIntegrityError
from vitals_triage.logger import setup_logging
from vitals_triage.models import Reading
from vitals_triage.monitors.aggregator import AlertAggregator, count_by_severity, sort_by_severity
from vitals_triage.monitors.classifier import StatusClassifier
from vitals_triage.ranges.registry import RangeRegistry, get_registry, load_registry

_READINGS = TypeAdapter(list[Reading])

EXIT_OK = 0
EXIT_CRITICAL = 1
EXIT_INVALID = 2


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _read_readings(source: str) -> list[Reading]:
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("readings", [])
    return _READINGS.validate_python(data)


# ── Commands ──────────────────────────────────────────────────


def _cmd_ranges(registry: RangeRegistry, args: argparse.Namespace) -> int:  # noqa: ARG001
    _emit(registry.as_records())
    return EXIT_OK


def _cmd_classify(registry: RangeRegistry, args: argparse.Namespace) -> int:
    try:
        result = StatusClassifier(registry).classify_detailed(args.kind, args.value)
    except InvalidValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID
    _emit({"kind": args.kind, "value": args.value, **result.model_dump(mode="json")})
    return EXIT_OK


def _cmd_check(registry: RangeRegistry, args: argparse.Namespace) -> int:
    try:
        readings = _read_readings(args.file)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        print(f"error: cannot read readings from {args.file}: {exc}", file=sys.stderr)
        return EXIT_INVALID

    report = AlertAggregator(StatusClassifier(registry)).aggregate_report(readings)
    alerts = sort_by_severity(report.alerts) if args.sort else report.alerts
    payload = report.model_dump(mode="json")
    payload["alerts"] = [a.model_dump(mode="json") for a in alerts]
    payload["counts"] = {s.value: n for s, n in count_by_severity(alerts).items()}
    _emit(payload)
    return EXIT_CRITICAL if report.has_critical else EXIT_OK


# ── Entry point ───────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vitals-triage",
        description="Classify physiological readings against clinical reference ranges.",
    )
    parser.add_argument(
        "--ranges",
        type=Path,
        default=None,
        help="JSON reference-range catalog (overrides configuration).",
    )
    sub = parser.add_subparsers(dest="command")

    # ── ranges ────────────────────────────────────────────────
    ranges_parser = sub.add_parser("ranges", help="Print the active reference-range catalog.")
    ranges_parser.set_defaults(handler=_cmd_ranges)

    # ── classify ──────────────────────────────────────────────
    classify_parser = sub.add_parser("classify", help="Classify a single value.")
    classify_parser.add_argument("kind", help="Metric kind, e.g. HEART_RATE.")
    classify_parser.add_argument("value", type=float)
    classify_parser.set_defaults(handler=_cmd_classify)

    # ── check ─────────────────────────────────────────────────
    check_parser = sub.add_parser("check", help="Aggregate alerts for a JSON batch of readings.")
    check_parser.add_argument("file", help="Path to a JSON list of readings, or '-' for stdin.")
    check_parser.add_argument("--sort", action="store_true", help="Order alerts by severity.")
    check_parser.set_defaults(handler=_cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, json=settings.log_json)

    if args.command is None:
        parser.print_help()
        return EXIT_INVALID

    try:
        registry = load_registry(args.ranges) if args.ranges else get_registry(settings)
    except (OSError, RegistryIntegrityError) as exc:
        print(f"error: cannot load reference ranges: {exc}", file=sys.stderr)
        return EXIT_INVALID

    return args.handler(registry, args)


if __name__ == "__main__":
    sys.exit(main())
