from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .config import EngineOptions
from .log import get_logger
from .models import (
    AttendanceLog,
    DailyPayrollEntry,
    EmployeeRateProfile,
    ShiftAssignment,
    ShiftOutcome,
    ShiftRecord,
)
from .timeutils import as_aware, elapsed_minutes, local_date, scheduled_hours

logger = get_logger(__name__)


def shift_outcome(requires_check_in: bool, has_attendance: bool, actual_hours: float) -> ShiftOutcome:
    """Classify one (employee, shift) pair.

    Both the daily builder and the period aggregator go through this function so
    the worked/missed rule lives in one place. An entry can be neither worked nor
    missed: a monitored shift with a check-in but no measurable duration yet.
    """

    if requires_check_in and not has_attendance:
        return ShiftOutcome.MISSED
    if actual_hours > 0 or not requires_check_in:
        return ShiftOutcome.WORKED
    return ShiftOutcome.PENDING


def entry_outcome(entry: DailyPayrollEntry) -> ShiftOutcome:
    return shift_outcome(entry.requires_check_in, entry.has_attendance, entry.actual_hours)


def daily_amount(outcome: ShiftOutcome, scheduled: float, actual: float, hourly_rate: float) -> float:
    if outcome is ShiftOutcome.MISSED:
        return 0.0
    if actual > 0:
        return actual * hourly_rate
    return scheduled * hourly_rate


class DailyEntryBuilder:
    def __init__(self, options: EngineOptions | None = None) -> None:
        self.options = options or EngineOptions()

    def match_attendance(
        self, shift: ShiftRecord, employee_id: str, attendance_logs: Iterable[AttendanceLog]
    ) -> Optional[AttendanceLog]:
        candidates = [log for log in attendance_logs if log.employee_id == employee_id and log.shift_id == shift.id]
        if not candidates and self.options.match_unlinked_by_date:
            candidates = [
                log
                for log in attendance_logs
                if log.employee_id == employee_id
                and log.shift_id is None
                and local_date(log.check_in_at, self.options.timezone) == shift.shift_date
            ]
        if not candidates:
            return None
        if len(candidates) > 1:
            logger.warning(
                "duplicate_attendance",
                shift_id=shift.id,
                employee_id=employee_id,
                attendance_ids=[log.id for log in candidates],
            )
        # min() keeps the first in source order on equal check-in times
        return min(candidates, key=lambda log: as_aware(log.check_in_at, self.options.timezone))

    def measure(self, log: AttendanceLog | None) -> Tuple[float, bool]:
        """Actual hours for a matched log and whether the clock data was unusable.

        A naive timestamp is read as wall-clock time in the configured zone, so a
        record mixing naive and offset-aware values still measures.
        """

        if log is None or log.check_out_at is None:
            return 0.0, False
        zone = self.options.timezone
        minutes = elapsed_minutes(as_aware(log.check_in_at, zone), as_aware(log.check_out_at, zone))
        if minutes < 0:
            logger.warning(
                "negative_attendance_duration",
                attendance_id=log.id,
                employee_id=log.employee_id,
                check_in_at=log.check_in_at.isoformat(),
                check_out_at=log.check_out_at.isoformat(),
            )
            return 0.0, True
        return minutes / 60, False

    def build(
        self,
        shift: ShiftRecord,
        assignment: ShiftAssignment,
        employee: EmployeeRateProfile,
        attendance_logs: Iterable[AttendanceLog],
    ) -> DailyPayrollEntry:
        planned = scheduled_hours(shift.shift_date, shift.start_time, shift.end_time, shift.id)
        log = self.match_attendance(shift, assignment.employee_id, list(attendance_logs))
        actual, anomalous = self.measure(log)
        requires_check_in = shift.location.requires_check_in
        outcome = shift_outcome(requires_check_in, log is not None, actual)

        return DailyPayrollEntry(
            shift_id=shift.id,
            employee_id=assignment.employee_id,
            employee_name=employee.full_name,
            shift_date=shift.shift_date,
            start_time=shift.start_time,
            location_id=shift.location.location_id,
            location_name=shift.location.name,
            scheduled_hours=planned,
            actual_hours=actual,
            hourly_rate=employee.hourly_rate,
            overtime_rate=employee.overtime_rate,
            daily_amount=daily_amount(outcome, planned, actual, employee.hourly_rate),
            requires_check_in=requires_check_in,
            is_missed=outcome is ShiftOutcome.MISSED,
            has_attendance=log is not None,
            has_check_out=bool(log and log.check_out_at),
            is_late=bool(log and log.is_late),
            late_minutes=(log.late_minutes or 0) if log and log.is_late else 0,
            auto_clocked_out=bool(log and log.auto_clocked_out),
            is_anomalous=anomalous,
            attendance_id=log.id if log else None,
            early_departure_reason=log.early_departure_reason if log else None,
            role=shift.role or employee.role,
        )


def build_entries(
    shifts: Iterable[ShiftRecord],
    attendance_by_employee: dict[str, List[AttendanceLog]],
    builder: DailyEntryBuilder,
) -> Tuple[List[DailyPayrollEntry], dict[str, EmployeeRateProfile]]:
    """Map every approved assignment to a daily entry, collecting the rate profiles seen."""

    entries: List[DailyPayrollEntry] = []
    profiles: dict[str, EmployeeRateProfile] = {}
    for shift in shifts:
        for assignment in shift.assignments:
            if not assignment.is_approved:
                continue
            if assignment.employee is None:
                logger.warning(
                    "employee_profile_missing",
                    shift_id=shift.id,
                    employee_id=assignment.employee_id,
                )
                continue
            profiles.setdefault(assignment.employee_id, assignment.employee)
            entries.append(
                builder.build(
                    shift,
                    assignment,
                    assignment.employee,
                    attendance_by_employee.get(assignment.employee_id, []),
                )
            )
    return entries, profiles
