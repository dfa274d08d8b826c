from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Dict, Iterable

from .models import DailyPayrollEntry, LocationSummary, PayrollResult


def _json_default(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Type {type(value)} not serializable")


def result_as_dict(result: PayrollResult) -> Dict[str, Any]:
    return asdict(result)


def result_as_json(result: PayrollResult) -> str:
    return json.dumps(result_as_dict(result), default=_json_default, indent=2)


def format_entries(entries: Iterable[DailyPayrollEntry], employee_id: str | None = None) -> str:
    rows = ["Daily entries", "Date        Employee              Location        Sched  Actual  Amount    Status"]
    total = 0.0
    for entry in entries:
        if employee_id and entry.employee_id != employee_id:
            continue
        total += entry.daily_amount
        if entry.is_missed:
            status = "missed"
        elif entry.is_anomalous:
            status = "anomalous"
        elif entry.has_attendance:
            status = "late" if entry.is_late else "attended"
        else:
            status = "scheduled"
        rows.append(
            f"{entry.shift_date.isoformat()}  {entry.employee_name or entry.employee_id:<20}  {entry.location_name:<14}  "
            f"{entry.scheduled_hours:>5.2f}  {entry.actual_hours:>6.2f}  {entry.daily_amount:>8.2f}  {status}"
        )
    rows.append(f"Total amount: {total:.2f}")
    return "\n".join(rows)


def format_locations(locations: Iterable[LocationSummary]) -> str:
    rows = ["Location        Shifts   Hours     Amount"]
    for location in locations:
        rows.append(
            f"{location.location_name:<14}  {location.shift_count:>6}  {location.total_hours:>6.2f}  {location.total_amount:>9.2f}"
        )
    return "\n".join(rows)
