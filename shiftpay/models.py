from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Tuple


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ShiftOutcome(str, Enum):
    WORKED = "worked"
    MISSED = "missed"
    PENDING = "pending"  # check-in required, attendance present but not yet measurable


VACATION_TYPES = ("vacation", "annual_leave")
MEDICAL_TYPES = ("medical", "sick_leave")


@dataclass(frozen=True)
class EmployeeRateProfile:
    employee_id: str
    full_name: str = ""
    role: str = ""
    home_location_id: Optional[str] = None
    hourly_rate: float = 0.0
    overtime_rate: Optional[float] = None
    expected_weekly_hours: Optional[float] = None
    expected_shifts_per_week: Optional[int] = None

    @property
    def overtime_differential(self) -> float:
        """Per-hour premium for extra shifts, zero unless the overtime rate beats the base rate."""

        if self.overtime_rate is None or self.overtime_rate <= self.hourly_rate:
            return 0.0
        return self.overtime_rate - self.hourly_rate


@dataclass(frozen=True)
class LocationConfig:
    location_id: str
    name: str = "Unknown"
    requires_check_in: bool = False


@dataclass(frozen=True)
class ShiftAssignment:
    employee_id: str
    approval_status: str = ApprovalStatus.APPROVED.value
    employee: Optional[EmployeeRateProfile] = None

    @property
    def is_approved(self) -> bool:
        return self.approval_status == ApprovalStatus.APPROVED.value


@dataclass(frozen=True)
class ShiftRecord:
    id: str
    shift_date: date
    start_time: str  # HH:MM, local
    end_time: str  # HH:MM, local; <= start_time means overnight
    location: LocationConfig
    role: str = ""
    assignments: Tuple[ShiftAssignment, ...] = ()


@dataclass(frozen=True)
class AttendanceLog:
    id: str
    employee_id: str
    check_in_at: datetime
    check_out_at: Optional[datetime] = None
    shift_id: Optional[str] = None
    is_late: bool = False
    late_minutes: int = 0
    auto_clocked_out: bool = False
    location_id: Optional[str] = None
    early_departure_reason: Optional[str] = None


@dataclass(frozen=True)
class TimeOffRequest:
    id: str
    employee_id: str
    start_date: date
    end_date: date
    request_type: str
    status: str = ApprovalStatus.APPROVED.value

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class DailyPayrollEntry:
    shift_id: str
    employee_id: str
    employee_name: str
    shift_date: date
    start_time: str
    location_id: str
    location_name: str
    scheduled_hours: float
    actual_hours: float
    hourly_rate: float
    overtime_rate: Optional[float]
    daily_amount: float
    requires_check_in: bool
    is_missed: bool
    has_attendance: bool = False
    has_check_out: bool = False
    is_late: bool = False
    late_minutes: int = 0
    auto_clocked_out: bool = False
    is_anomalous: bool = False
    attendance_id: Optional[str] = None
    early_departure_reason: Optional[str] = None
    role: str = ""

    @property
    def paid_hours(self) -> float:
        return self.actual_hours if self.actual_hours > 0 else self.scheduled_hours


@dataclass(frozen=True)
class CrossLocationShift:
    shift_date: date
    location_id: str
    location_name: str


@dataclass(frozen=True)
class EarlyDeparture:
    shift_date: date
    reason: str


@dataclass(frozen=True)
class PayrollSummaryItem:
    employee_id: str
    employee_name: str
    role: str
    home_location_id: Optional[str]
    hourly_rate: float
    overtime_rate: Optional[float]
    scheduled_hours: float
    actual_hours: float
    overtime_hours: float
    undertime_hours: float
    total_amount: float
    overtime_pay: float
    days_worked: int
    late_count: int
    late_minutes: int
    extra_shifts: int
    missing_shifts: int
    worked_dates: Tuple[date, ...]
    missed_dates: Tuple[date, ...]
    extra_shift_dates: Tuple[date, ...]
    days_confirmed: int = 0
    expected_shifts: Optional[int] = None
    expected_hours: Optional[float] = None
    vacation_days: int = 0
    medical_days: int = 0
    unexcused_missed_dates: Tuple[date, ...] = ()
    unscheduled_dates: Tuple[date, ...] = ()
    cross_location_shifts: Tuple[CrossLocationShift, ...] = ()
    early_departures: Tuple[EarlyDeparture, ...] = ()
    anomalies: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LocationSummary:
    location_id: str
    location_name: str
    total_hours: float
    total_amount: float
    shift_count: int


@dataclass(frozen=True)
class PayrollTotals:
    employee_count: int = 0
    scheduled_hours: float = 0.0
    actual_hours: float = 0.0
    overtime_hours: float = 0.0
    total_amount: float = 0.0
    overtime_pay: float = 0.0
    extra_shifts: int = 0
    missing_shifts: int = 0
    anomaly_count: int = 0


@dataclass(frozen=True)
class PayrollResult:
    period_start: date
    period_end: date
    weeks_in_period: int
    entries: List[DailyPayrollEntry] = field(default_factory=list)
    summary: List[PayrollSummaryItem] = field(default_factory=list)
    location_summary: List[LocationSummary] = field(default_factory=list)
    totals: PayrollTotals = field(default_factory=PayrollTotals)
