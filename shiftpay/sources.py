from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from .models import (
    AttendanceLog,
    EmployeeRateProfile,
    LocationConfig,
    ShiftAssignment,
    ShiftRecord,
    TimeOffRequest,
)


class ScheduleSource(Protocol):
    def shifts_between(self, start: date, end: date, location_id: Optional[str] = None) -> List[ShiftRecord]:
        ...


class AttendanceSource(Protocol):
    def logs_between(self, start: date, end: date) -> List[AttendanceLog]:
        ...


class TimeOffSource(Protocol):
    def time_off_between(self, start: date, end: date) -> List[TimeOffRequest]:
        ...


class RosterSource(Protocol):
    def list_employees(self) -> List[EmployeeRateProfile]:
        ...


@dataclass(frozen=True)
class PayrollInputs:
    shifts: List[ShiftRecord]
    attendance_logs: List[AttendanceLog]
    time_off: List[TimeOffRequest]
    employees: List[EmployeeRateProfile] = field(default_factory=list)


async def fetch_inputs(
    schedule: ScheduleSource,
    attendance: AttendanceSource,
    start: date,
    end: date,
    location_id: Optional[str] = None,
    time_off: TimeOffSource | None = None,
    roster: RosterSource | None = None,
) -> PayrollInputs:
    """Run the independent source reads concurrently and wait for all of them."""

    async def _none() -> list:
        return []

    shifts, logs, requests, employees = await asyncio.gather(
        asyncio.to_thread(schedule.shifts_between, start, end, location_id),
        asyncio.to_thread(attendance.logs_between, start, end),
        asyncio.to_thread(time_off.time_off_between, start, end) if time_off is not None else _none(),
        asyncio.to_thread(roster.list_employees) if roster is not None else _none(),
    )
    return PayrollInputs(shifts=shifts, attendance_logs=logs, time_off=requests, employees=employees)


def parse_instant(value: str | None) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


class JsonDataStore:
    """Schedule, attendance and time-off read from a single JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.locations: Dict[str, LocationConfig] = {}
        self.employees: Dict[str, EmployeeRateProfile] = {}
        self.shifts: List[ShiftRecord] = []
        self.attendance_logs: List[AttendanceLog] = []
        self.time_off: List[TimeOffRequest] = []
        if path.exists():
            self.load()

    def load(self) -> None:
        content = json.loads(self.path.read_text(encoding="utf-8"))
        self.locations = {row["id"]: self._deserialize_location(row) for row in content.get("locations", [])}
        self.employees = {row["id"]: self._deserialize_employee(row) for row in content.get("employees", [])}
        self.shifts = [self._deserialize_shift(row) for row in content.get("shifts", [])]
        self.attendance_logs = [self._deserialize_attendance(row) for row in content.get("attendance_logs", [])]
        self.time_off = [self._deserialize_time_off(row) for row in content.get("time_off_requests", [])]

    def shifts_between(self, start: date, end: date, location_id: Optional[str] = None) -> List[ShiftRecord]:
        return [
            shift
            for shift in self.shifts
            if start <= shift.shift_date <= end
            and (location_id is None or shift.location.location_id == location_id)
        ]

    def logs_between(self, start: date, end: date) -> List[AttendanceLog]:
        lower, upper = start - timedelta(days=1), end + timedelta(days=1)
        return [log for log in self.attendance_logs if lower <= log.check_in_at.date() <= upper]

    def time_off_between(self, start: date, end: date) -> List[TimeOffRequest]:
        return [
            request
            for request in self.time_off
            if request.status == "approved" and request.start_date <= end and request.end_date >= start
        ]

    def list_employees(self) -> List[EmployeeRateProfile]:
        return sorted(self.employees.values(), key=lambda e: (e.full_name.lower(), e.employee_id))

    @staticmethod
    def _deserialize_location(data: dict) -> LocationConfig:
        return LocationConfig(
            location_id=data["id"],
            name=data.get("name") or "Unknown",
            requires_check_in=bool(data.get("requires_check_in", False)),
        )

    @staticmethod
    def _deserialize_employee(data: dict) -> EmployeeRateProfile:
        return EmployeeRateProfile(
            employee_id=data["id"],
            full_name=data.get("full_name", ""),
            role=data.get("role", ""),
            home_location_id=data.get("location_id"),
            hourly_rate=float(data.get("hourly_rate") or 0.0),
            overtime_rate=_optional_float(data.get("overtime_rate")),
            expected_weekly_hours=_optional_float(data.get("expected_weekly_hours")),
            expected_shifts_per_week=_optional_int(data.get("expected_shifts_per_week")),
        )

    def _deserialize_shift(self, data: dict) -> ShiftRecord:
        location_id = data["location_id"]
        location = self.locations.get(location_id) or LocationConfig(location_id=location_id)
        assignments = tuple(
            ShiftAssignment(
                employee_id=row["staff_id"],
                approval_status=row.get("approval_status", "pending"),
                employee=self.employees.get(row["staff_id"]),
            )
            for row in data.get("assignments", [])
        )
        return ShiftRecord(
            id=data["id"],
            shift_date=date.fromisoformat(data["shift_date"]),
            start_time=data["start_time"],
            end_time=data["end_time"],
            location=location,
            role=data.get("role", ""),
            assignments=assignments,
        )

    @staticmethod
    def _deserialize_attendance(data: dict) -> AttendanceLog:
        return AttendanceLog(
            id=data["id"],
            employee_id=data["staff_id"],
            shift_id=data.get("shift_id"),
            check_in_at=parse_instant(data["check_in_at"]),
            check_out_at=parse_instant(data.get("check_out_at")),
            is_late=bool(data.get("is_late", False)),
            late_minutes=int(data.get("late_minutes") or 0),
            auto_clocked_out=bool(data.get("auto_clocked_out", False)),
            location_id=data.get("location_id"),
            early_departure_reason=data.get("early_departure_reason"),
        )

    @staticmethod
    def _deserialize_time_off(data: dict) -> TimeOffRequest:
        return TimeOffRequest(
            id=data["id"],
            employee_id=data["employee_id"],
            start_date=date.fromisoformat(data["start_date"]),
            end_date=date.fromisoformat(data["end_date"]),
            request_type=data.get("request_type", ""),
            status=data.get("status", "pending"),
        )
