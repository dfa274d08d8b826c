from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional

from opentelemetry import metrics, trace

from .aggregation import LocationRollupAggregator, PeriodAggregator
from .config import EngineOptions
from .daily import DailyEntryBuilder, build_entries
from .errors import ValidationError
from .insights import AttendanceInsights, summarise_totals
from .log import get_logger
from .models import AttendanceLog, EmployeeRateProfile, PayrollResult, ShiftRecord, TimeOffRequest
from .timeutils import local_date, overlap_days, parse_time_of_day, weeks_in_period

logger = get_logger(__name__)
tracer = trace.get_tracer(__name__)
meter = metrics.get_meter(__name__)
entries_counter = meter.create_counter(
    "shiftpay.entries_built", unit="1", description="Daily payroll entries produced"
)


def _select_shifts(
    shifts: Iterable[ShiftRecord], period_start: date, period_end: date, location_id: Optional[str]
) -> List[ShiftRecord]:
    selected = [
        shift
        for shift in shifts
        if period_start <= shift.shift_date <= period_end
        and (location_id is None or shift.location.location_id == location_id)
    ]
    return sorted(selected, key=lambda s: (s.shift_date, parse_time_of_day(s.start_time, s.id), s.id))


def _index_attendance(attendance_logs: Iterable[AttendanceLog]) -> Dict[str, List[AttendanceLog]]:
    by_employee: Dict[str, List[AttendanceLog]] = defaultdict(list)
    for log in attendance_logs:
        by_employee[log.employee_id].append(log)
    return dict(by_employee)


def _active_without_shifts(
    roster: Dict[str, EmployeeRateProfile],
    scheduled: Iterable[str],
    logs: Iterable[AttendanceLog],
    time_off: Iterable[TimeOffRequest],
    period_start: date,
    period_end: date,
    location_id: Optional[str],
    options: EngineOptions,
) -> List[str]:
    """Rostered employees with in-period attendance or approved time off but no shift entry."""

    active = {
        log.employee_id
        for log in logs
        if period_start <= local_date(log.check_in_at, options.timezone) <= period_end
    }
    active.update(
        request.employee_id
        for request in time_off
        if request.status == "approved"
        and overlap_days(request.start_date, request.end_date, period_start, period_end) > 0
    )
    active.difference_update(scheduled)
    return sorted(
        employee_id
        for employee_id in active
        if employee_id in roster
        and (location_id is None or roster[employee_id].home_location_id == location_id)
    )


def compute_payroll(
    shifts: Iterable[ShiftRecord],
    attendance_logs: Iterable[AttendanceLog],
    period_start: date,
    period_end: date,
    location_id: Optional[str] = None,
    *,
    time_off: Iterable[TimeOffRequest] = (),
    employees: Iterable[EmployeeRateProfile] = (),
    options: EngineOptions | None = None,
) -> PayrollResult:
    """Reconcile scheduled shifts against attendance for one period.

    Pure and deterministic: the same shift and attendance snapshots always give
    an equal result, and nothing is written anywhere.

    ``employees`` is the roster. A rostered employee with no shift in the period
    still gets a summary when they clocked in or had approved time off.
    """

    if period_end < period_start:
        raise ValidationError(f"Period end {period_end} is before period start {period_start}")
    options = options or EngineOptions()
    logs = list(attendance_logs)
    requests = list(time_off)

    with tracer.start_as_current_span("shiftpay.compute_payroll") as span:
        span.set_attribute("shiftpay.period_start", period_start.isoformat())
        span.set_attribute("shiftpay.period_end", period_end.isoformat())

        weeks = weeks_in_period(period_start, period_end)
        selected = _select_shifts(shifts, period_start, period_end, location_id)
        builder = DailyEntryBuilder(options)
        entries, seen = build_entries(selected, _index_attendance(logs), builder)
        roster = {profile.employee_id: profile for profile in employees}
        profiles = {**roster, **seen}
        entries.sort(key=lambda e: (e.shift_date, parse_time_of_day(e.start_time, e.shift_id), e.shift_id, e.employee_id))

        idle = _active_without_shifts(
            roster, seen, logs, requests, period_start, period_end, location_id, options
        )
        summary = PeriodAggregator(profiles).aggregate(entries, weeks, idle)
        summary = AttendanceInsights(period_start, period_end, options).annotate(summary, entries, logs, requests)
        location_summary = LocationRollupAggregator().aggregate(entries)

        entries_counter.add(len(entries))
        span.set_attribute("shiftpay.entries", len(entries))
        logger.info(
            "payroll_computed",
            period_start=period_start.isoformat(),
            period_end=period_end.isoformat(),
            location_id=location_id,
            weeks_in_period=weeks,
            entries=len(entries),
            employees=len(summary),
        )

    return PayrollResult(
        period_start=period_start,
        period_end=period_end,
        weeks_in_period=weeks,
        entries=entries,
        summary=summary,
        location_summary=location_summary,
        totals=summarise_totals(summary),
    )
