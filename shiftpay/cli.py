from __future__ import annotations

import argparse
import asyncio
from datetime import date
from pathlib import Path

from .config import EngineOptions, get_settings
from .csv_io import export_entries, export_summary
from .engine import compute_payroll
from .errors import PayrollError
from .log import configure_logging, get_logger
from .models import PayrollResult
from .report_pdf import export_payroll_report_pdf
from .sources import JsonDataStore, fetch_inputs
from .views import format_entries, format_locations, result_as_json

logger = get_logger(__name__)


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def run_from_args(args: argparse.Namespace) -> PayrollResult:
    store = JsonDataStore(Path(args.store))
    start, end = parse_date(args.start), parse_date(args.end)
    location = getattr(args, "location", None)
    inputs = asyncio.run(fetch_inputs(store, store, start, end, location, time_off=store, roster=store))
    return compute_payroll(
        inputs.shifts,
        inputs.attendance_logs,
        start,
        end,
        location,
        time_off=inputs.time_off,
        employees=inputs.employees,
        options=EngineOptions.from_settings(),
    )


def cmd_compute(args: argparse.Namespace) -> None:
    result = run_from_args(args)
    if not args.output:
        print(result_as_json(result))
        return
    path = Path(args.output)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        export_summary(path, result.summary)
    elif suffix == ".pdf":
        export_payroll_report_pdf(result, path)
    elif suffix == ".json":
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(result_as_json(result), encoding="utf-8")
    else:
        raise ValueError("Unsupported export format. Use .csv, .json or .pdf")
    print(f"Payroll exported to {path}")


def cmd_entries(args: argparse.Namespace) -> None:
    result = run_from_args(args)
    if args.output:
        path = export_entries(Path(args.output), result.entries)
        print(f"Entries exported to {path}")
        return
    print(format_entries(result.entries, args.employee))


def cmd_locations(args: argparse.Namespace) -> None:
    result = run_from_args(args)
    print(format_locations(result.location_summary))


def _add_period_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("store", help="JSON document with locations, employees, shifts and attendance")
    parser.add_argument("start", help="Period start (YYYY-MM-DD)")
    parser.add_argument("end", help="Period end (YYYY-MM-DD), inclusive")
    parser.add_argument("--location", help="Only reconcile shifts at this location")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shift payroll reconciliation CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    compute = sub.add_parser("compute", help="Reconcile a period and print or export the payroll")
    _add_period_arguments(compute)
    compute.add_argument("--output", help="Export to .csv, .json or .pdf instead of printing")
    compute.set_defaults(func=cmd_compute)

    entries = sub.add_parser("entries", help="Show the daily entries for a period")
    _add_period_arguments(entries)
    entries.add_argument("--employee")
    entries.add_argument("--output", help="Export entries to CSV")
    entries.set_defaults(func=cmd_entries)

    locations = sub.add_parser("locations", help="Show per-location totals for a period")
    _add_period_arguments(locations)
    locations.set_defaults(func=cmd_locations)

    return parser


def main(argv: list[str] | None = None) -> None:
    configure_logging(get_settings().log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except PayrollError as exc:
        logger.error("payroll_failed", command=args.command, error=str(exc))
        raise


if __name__ == "__main__":
    main()
