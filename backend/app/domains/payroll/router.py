from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db.session import get_session
from app.domains.payroll.sources import SqlAttendanceSource, SqlRosterSource, SqlScheduleSource, SqlTimeOffSource
from shiftpay.config import EngineOptions
from shiftpay.engine import compute_payroll
from shiftpay.errors import ValidationError
from shiftpay.log import get_logger

router = APIRouter(prefix="/payroll", tags=["payroll"])
logger = get_logger(__name__)


class DailyEntryOut(BaseModel):
    shift_id: str
    employee_id: str
    employee_name: str
    shift_date: date
    location_id: str
    location_name: str
    scheduled_hours: float
    actual_hours: float
    hourly_rate: float
    overtime_rate: float | None = None
    daily_amount: float
    requires_check_in: bool
    is_missed: bool
    is_late: bool
    late_minutes: int
    auto_clocked_out: bool
    is_anomalous: bool


class CrossLocationOut(BaseModel):
    shift_date: date
    location_id: str
    location_name: str


class EarlyDepartureOut(BaseModel):
    shift_date: date
    reason: str


class SummaryItemOut(BaseModel):
    employee_id: str
    employee_name: str
    role: str
    scheduled_hours: float
    actual_hours: float
    overtime_hours: float
    undertime_hours: float
    total_amount: float
    overtime_pay: float
    days_worked: int
    days_confirmed: int
    late_count: int
    late_minutes: int
    extra_shifts: int
    missing_shifts: int
    worked_dates: list[date]
    missed_dates: list[date]
    extra_shift_dates: list[date]
    unexcused_missed_dates: list[date]
    unscheduled_dates: list[date]
    vacation_days: int
    medical_days: int
    cross_location_shifts: list[CrossLocationOut]
    early_departures: list[EarlyDepartureOut]
    anomalies: list[str]


class LocationSummaryOut(BaseModel):
    location_id: str
    location_name: str
    total_hours: float
    total_amount: float
    shift_count: int


class TotalsOut(BaseModel):
    employee_count: int
    scheduled_hours: float
    actual_hours: float
    overtime_hours: float
    total_amount: float
    overtime_pay: float
    extra_shifts: int
    missing_shifts: int
    anomaly_count: int


class PayrollComputeOut(BaseModel):
    period_start: date
    period_end: date
    weeks_in_period: int
    entries: list[DailyEntryOut]
    summary: list[SummaryItemOut]
    location_summary: list[LocationSummaryOut]
    totals: TotalsOut


@router.get("/compute", response_model=PayrollComputeOut)
def compute(
    period_start: date,
    period_end: date,
    location_id: str | None = Query(default=None),
    db: Session = Depends(get_session),
) -> PayrollComputeOut:
    # one session, so the reads stay sequential here
    shifts = SqlScheduleSource(db).shifts_between(period_start, period_end, location_id)
    logs = SqlAttendanceSource(db).logs_between(period_start, period_end)
    time_off = SqlTimeOffSource(db).time_off_between(period_start, period_end)
    employees = SqlRosterSource(db).list_employees()
    try:
        result = compute_payroll(
            shifts,
            logs,
            period_start,
            period_end,
            location_id,
            time_off=time_off,
            employees=employees,
            options=EngineOptions.from_settings(),
        )
    except ValidationError as exc:
        logger.warning("payroll_rejected", shift_id=exc.shift_id, error=str(exc))
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return PayrollComputeOut.model_validate(asdict(result))
