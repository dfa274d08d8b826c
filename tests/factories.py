from datetime import date, datetime, timedelta

from shiftpay.models import (
    AttendanceLog,
    EmployeeRateProfile,
    LocationConfig,
    ShiftAssignment,
    ShiftRecord,
)

MONDAY = date(2024, 3, 4)
STORE = LocationConfig("loc-store", "Downtown Store", requires_check_in=True)
WAREHOUSE = LocationConfig("loc-warehouse", "Warehouse", requires_check_in=False)


def profile(employee_id="emp1", **overrides) -> EmployeeRateProfile:
    values = dict(
        employee_id=employee_id,
        full_name=f"Employee {employee_id}",
        role="Cashier",
        home_location_id=STORE.location_id,
        hourly_rate=20.0,
        overtime_rate=30.0,
        expected_shifts_per_week=5,
    )
    values.update(overrides)
    return EmployeeRateProfile(**values)


def shift(
    shift_id="s1",
    day=MONDAY,
    start="09:00",
    end="17:00",
    location=STORE,
    employees=(),
    approval_status="approved",
) -> ShiftRecord:
    assignments = tuple(
        ShiftAssignment(employee_id=emp.employee_id, approval_status=approval_status, employee=emp)
        for emp in employees
    )
    return ShiftRecord(
        id=shift_id,
        shift_date=day,
        start_time=start,
        end_time=end,
        location=location,
        role="Cashier",
        assignments=assignments,
    )


def attendance(
    log_id="a1",
    employee_id="emp1",
    shift_id="s1",
    day=MONDAY,
    check_in="09:00",
    check_out="17:00",
    **kwargs,
) -> AttendanceLog:
    def at(value):
        if value is None:
            return None
        hours, minutes = (int(part) for part in value.split(":"))
        return datetime.combine(day, datetime.min.time()) + timedelta(hours=hours, minutes=minutes)

    return AttendanceLog(
        id=log_id,
        employee_id=employee_id,
        shift_id=shift_id,
        check_in_at=at(check_in),
        check_out_at=at(check_out),
        **kwargs,
    )


def week_days(count, start=MONDAY):
    return [start + timedelta(days=offset) for offset in range(count)]
