from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

from .models import DailyPayrollEntry, PayrollSummaryItem


SUMMARY_HEADERS = [
    "employee_id",
    "employee_name",
    "role",
    "scheduled_hours",
    "actual_hours",
    "overtime_hours",
    "undertime_hours",
    "days_worked",
    "days_confirmed",
    "extra_shifts",
    "missing_shifts",
    "late_count",
    "late_minutes",
    "overtime_pay",
    "total_amount",
    "worked_dates",
    "missed_dates",
    "extra_shift_dates",
    "vacation_days",
    "medical_days",
]

ENTRY_HEADERS = [
    "shift_date",
    "shift_id",
    "employee_id",
    "employee_name",
    "location_id",
    "location_name",
    "scheduled_hours",
    "actual_hours",
    "hourly_rate",
    "daily_amount",
    "requires_check_in",
    "is_missed",
    "is_late",
    "late_minutes",
    "auto_clocked_out",
    "is_anomalous",
]


def _dates(values: Sequence[date]) -> str:
    return ";".join(value.isoformat() for value in values)


def export_summary(path: Path, summary: Iterable[PayrollSummaryItem]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=SUMMARY_HEADERS)
        writer.writeheader()
        for item in summary:
            writer.writerow(
                {
                    "employee_id": item.employee_id,
                    "employee_name": item.employee_name,
                    "role": item.role,
                    "scheduled_hours": round(item.scheduled_hours, 2),
                    "actual_hours": round(item.actual_hours, 2),
                    "overtime_hours": round(item.overtime_hours, 2),
                    "undertime_hours": round(item.undertime_hours, 2),
                    "days_worked": item.days_worked,
                    "days_confirmed": item.days_confirmed,
                    "extra_shifts": item.extra_shifts,
                    "missing_shifts": item.missing_shifts,
                    "late_count": item.late_count,
                    "late_minutes": item.late_minutes,
                    "overtime_pay": round(item.overtime_pay, 2),
                    "total_amount": round(item.total_amount, 2),
                    "worked_dates": _dates(item.worked_dates),
                    "missed_dates": _dates(item.missed_dates),
                    "extra_shift_dates": _dates(item.extra_shift_dates),
                    "vacation_days": item.vacation_days,
                    "medical_days": item.medical_days,
                }
            )
    return path


def export_entries(path: Path, entries: Iterable[DailyPayrollEntry]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=ENTRY_HEADERS)
        writer.writeheader()
        for entry in entries:
            writer.writerow(
                {
                    "shift_date": entry.shift_date.isoformat(),
                    "shift_id": entry.shift_id,
                    "employee_id": entry.employee_id,
                    "employee_name": entry.employee_name,
                    "location_id": entry.location_id,
                    "location_name": entry.location_name,
                    "scheduled_hours": round(entry.scheduled_hours, 2),
                    "actual_hours": round(entry.actual_hours, 2),
                    "hourly_rate": entry.hourly_rate,
                    "daily_amount": round(entry.daily_amount, 2),
                    "requires_check_in": entry.requires_check_in,
                    "is_missed": entry.is_missed,
                    "is_late": entry.is_late,
                    "late_minutes": entry.late_minutes,
                    "auto_clocked_out": entry.auto_clocked_out,
                    "is_anomalous": entry.is_anomalous,
                }
            )
    return path
