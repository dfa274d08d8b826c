from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List, Sequence

from .config import EngineOptions
from .daily import entry_outcome
from .models import (
    MEDICAL_TYPES,
    VACATION_TYPES,
    AttendanceLog,
    CrossLocationShift,
    DailyPayrollEntry,
    EarlyDeparture,
    PayrollSummaryItem,
    PayrollTotals,
    ShiftOutcome,
    TimeOffRequest,
)
from .timeutils import local_date, overlap_days, parse_time_of_day


class AttendanceInsights:
    """Annotate per-employee summaries with time off, unscheduled work and anomalies."""

    def __init__(self, period_start: date, period_end: date, options: EngineOptions | None = None) -> None:
        self.period_start = period_start
        self.period_end = period_end
        self.options = options or EngineOptions()

    def annotate(
        self,
        summary: Sequence[PayrollSummaryItem],
        entries: Iterable[DailyPayrollEntry],
        attendance_logs: Iterable[AttendanceLog] = (),
        time_off: Iterable[TimeOffRequest] = (),
    ) -> List[PayrollSummaryItem]:
        entries_by_employee: Dict[str, List[DailyPayrollEntry]] = defaultdict(list)
        for entry in entries:
            entries_by_employee[entry.employee_id].append(entry)
        logs_by_employee: Dict[str, List[AttendanceLog]] = defaultdict(list)
        for log in attendance_logs:
            logs_by_employee[log.employee_id].append(log)
        time_off_by_employee: Dict[str, List[TimeOffRequest]] = defaultdict(list)
        for request in time_off:
            if request.status == "approved":
                time_off_by_employee[request.employee_id].append(request)

        return [
            self._annotate_one(
                item,
                entries_by_employee[item.employee_id],
                logs_by_employee[item.employee_id],
                time_off_by_employee[item.employee_id],
            )
            for item in summary
        ]

    def _annotate_one(
        self,
        item: PayrollSummaryItem,
        entries: List[DailyPayrollEntry],
        logs: List[AttendanceLog],
        time_off: List[TimeOffRequest],
    ) -> PayrollSummaryItem:
        unexcused = tuple(day for day in item.missed_dates if not any(req.covers(day) for req in time_off))

        vacation_days = 0
        medical_days = 0
        for request in time_off:
            days = overlap_days(request.start_date, request.end_date, self.period_start, self.period_end)
            if request.request_type in VACATION_TYPES:
                vacation_days += days
            elif request.request_type in MEDICAL_TYPES:
                medical_days += days

        shift_ids = {entry.shift_id for entry in entries}
        shift_dates = {entry.shift_date for entry in entries}
        unscheduled = set()
        for log in logs:
            log_date = local_date(log.check_in_at, self.options.timezone)
            if not (self.period_start <= log_date <= self.period_end):
                continue
            if log.shift_id in shift_ids or log_date in shift_dates:
                continue
            unscheduled.add(log_date)

        cross_location: List[CrossLocationShift] = []
        early_departures: List[EarlyDeparture] = []
        anomalies: List[str] = []
        for entry in sorted(entries, key=lambda e: (e.shift_date, parse_time_of_day(e.start_time, e.shift_id), e.shift_id)):
            label = entry.shift_date.isoformat()
            if entry_outcome(entry) is ShiftOutcome.WORKED:
                if item.home_location_id and entry.location_id != item.home_location_id:
                    cross_location.append(CrossLocationShift(entry.shift_date, entry.location_id, entry.location_name))
                if entry.early_departure_reason:
                    early_departures.append(EarlyDeparture(entry.shift_date, entry.early_departure_reason))
            if entry.is_late:
                anomalies.append(f"Late on {label} ({entry.late_minutes} min)")
            if entry.auto_clocked_out:
                anomalies.append(f"Auto-clocked out on {label}")
            if entry.actual_hours > self.options.long_shift_hours:
                anomalies.append(f"Shift over {self.options.long_shift_hours:g} hours on {label}")
            if entry.is_anomalous:
                anomalies.append(f"Check-out before check-in on {label}")
        anomalies.extend(f"Missing on {day.isoformat()}" for day in unexcused)

        return replace(
            item,
            vacation_days=vacation_days,
            medical_days=medical_days,
            unexcused_missed_dates=unexcused,
            unscheduled_dates=tuple(sorted(unscheduled)),
            cross_location_shifts=tuple(cross_location),
            early_departures=tuple(early_departures),
            anomalies=tuple(anomalies),
        )


def summarise_totals(summary: Iterable[PayrollSummaryItem]) -> PayrollTotals:
    items = list(summary)
    return PayrollTotals(
        employee_count=len(items),
        scheduled_hours=sum(item.scheduled_hours for item in items),
        actual_hours=sum(item.actual_hours for item in items),
        overtime_hours=sum(item.overtime_hours for item in items),
        total_amount=sum(item.total_amount for item in items),
        overtime_pay=sum(item.overtime_pay for item in items),
        extra_shifts=sum(item.extra_shifts for item in items),
        missing_shifts=sum(item.missing_shifts for item in items),
        anomaly_count=sum(len(item.anomalies) for item in items),
    )
