from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from app.models import AttendanceLog as AttendanceLogRow
from app.models import Employee, Shift, ShiftAssignment
from app.models import TimeOffRequest as TimeOffRow
from shiftpay.models import (
    AttendanceLog,
    EmployeeRateProfile,
    LocationConfig,
    ShiftAssignment as Assignment,
    ShiftRecord,
    TimeOffRequest,
)


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)


def employee_profile(row: Employee) -> EmployeeRateProfile:
    return EmployeeRateProfile(
        employee_id=row.id,
        full_name=row.full_name,
        role=row.role or "",
        home_location_id=row.location_id,
        hourly_rate=float(row.hourly_rate or 0),
        overtime_rate=_optional_float(row.overtime_rate),
        expected_weekly_hours=_optional_float(row.expected_weekly_hours),
        expected_shifts_per_week=row.expected_shifts_per_week,
    )


class SqlScheduleSource:
    """Shifts with their approved assignments and embedded rate profiles."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def shifts_between(self, start: date, end: date, location_id: Optional[str] = None) -> List[ShiftRecord]:
        query = (
            self.db.query(Shift)
            .options(
                joinedload(Shift.location),
                selectinload(Shift.assignments).joinedload(ShiftAssignment.employee),
            )
            .filter(Shift.shift_date >= start, Shift.shift_date <= end)
        )
        if location_id:
            query = query.filter(Shift.location_id == location_id)

        records: List[ShiftRecord] = []
        for row in query.order_by(Shift.shift_date.asc(), Shift.id.asc()).all():
            location = LocationConfig(
                location_id=row.location_id,
                name=row.location.name if row.location else "Unknown",
                requires_check_in=bool(row.location and row.location.requires_checkin),
            )
            assignments = tuple(
                Assignment(
                    employee_id=a.staff_id,
                    approval_status=a.approval_status,
                    employee=employee_profile(a.employee) if a.employee else None,
                )
                for a in row.assignments
                if a.approval_status == "approved"
            )
            records.append(
                ShiftRecord(
                    id=row.id,
                    shift_date=row.shift_date,
                    start_time=row.start_time,
                    end_time=row.end_time,
                    location=location,
                    role=row.role or "",
                    assignments=assignments,
                )
            )
        return records


class SqlAttendanceSource:
    def __init__(self, db: Session) -> None:
        self.db = db

    def logs_between(self, start: date, end: date) -> List[AttendanceLog]:
        # one day of slack each side; the engine dates check-ins in its own zone
        lower = datetime.combine(start - timedelta(days=1), time.min)
        upper = datetime.combine(end + timedelta(days=2), time.min)
        rows = (
            self.db.query(AttendanceLogRow)
            .filter(AttendanceLogRow.check_in_at >= lower, AttendanceLogRow.check_in_at < upper)
            .order_by(AttendanceLogRow.check_in_at.asc(), AttendanceLogRow.id.asc())
            .all()
        )
        return [
            AttendanceLog(
                id=row.id,
                employee_id=row.staff_id,
                shift_id=row.shift_id,
                check_in_at=row.check_in_at,
                check_out_at=row.check_out_at,
                is_late=bool(row.is_late),
                late_minutes=int(row.late_minutes or 0),
                auto_clocked_out=bool(row.auto_clocked_out),
                location_id=row.location_id,
                early_departure_reason=row.early_departure_reason,
            )
            for row in rows
        ]


class SqlTimeOffSource:
    def __init__(self, db: Session) -> None:
        self.db = db

    def time_off_between(self, start: date, end: date) -> List[TimeOffRequest]:
        rows = (
            self.db.query(TimeOffRow)
            .filter(
                TimeOffRow.status == "approved",
                TimeOffRow.start_date <= end,
                TimeOffRow.end_date >= start,
            )
            .order_by(TimeOffRow.start_date.asc(), TimeOffRow.id.asc())
            .all()
        )
        return [
            TimeOffRequest(
                id=row.id,
                employee_id=row.employee_id,
                start_date=row.start_date,
                end_date=row.end_date,
                request_type=row.request_type,
                status=row.status,
            )
            for row in rows
        ]


class SqlRosterSource:
    """Rate profiles for every employee still on the books."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_employees(self) -> List[EmployeeRateProfile]:
        rows = (
            self.db.query(Employee)
            .filter(Employee.status != "terminated")
            .order_by(Employee.full_name.asc(), Employee.id.asc())
            .all()
        )
        return [employee_profile(row) for row in rows]
