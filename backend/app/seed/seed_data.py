from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from app.models import AttendanceLog, Employee, Location, Shift, ShiftAssignment, TimeOffRequest

WEEK_START = date(2024, 3, 4)  # a Monday


def seed(session: Session) -> None:
    """Load one demo week: a monitored store, an unmonitored warehouse, two employees."""

    store = Location(id="loc-store", name="Downtown Store", requires_checkin=True)
    warehouse = Location(id="loc-warehouse", name="Warehouse", requires_checkin=False)
    session.add_all([store, warehouse])
    session.flush()

    ada = Employee(
        id="emp-ada",
        full_name="Ada Lovelace",
        role="Cashier",
        location_id=store.id,
        hourly_rate=20,
        overtime_rate=30,
        expected_weekly_hours=40,
        expected_shifts_per_week=5,
    )
    alan = Employee(
        id="emp-alan",
        full_name="Alan Turing",
        role="Picker",
        location_id=warehouse.id,
        hourly_rate=18,
        expected_shifts_per_week=5,
    )
    session.add_all([ada, alan])
    session.flush()

    # Ada: six store shifts Mon-Sat, attends all but Wednesday
    for offset in range(6):
        day = WEEK_START + timedelta(days=offset)
        shift = Shift(
            id=f"store-{day.isoformat()}",
            location_id=store.id,
            shift_date=day,
            start_time="09:00",
            end_time="17:00",
            role="Cashier",
        )
        session.add(shift)
        session.add(ShiftAssignment(shift_id=shift.id, staff_id=ada.id, approval_status="approved"))
        if offset == 2:
            continue
        session.add(
            AttendanceLog(
                id=f"att-ada-{day.isoformat()}",
                staff_id=ada.id,
                shift_id=shift.id,
                location_id=store.id,
                check_in_at=datetime.combine(day, datetime.min.time()) + timedelta(hours=9),
                check_out_at=datetime.combine(day, datetime.min.time()) + timedelta(hours=17),
            )
        )

    # Alan: three overnight warehouse shifts, no attendance required
    for offset in range(3):
        day = WEEK_START + timedelta(days=offset)
        shift = Shift(
            id=f"wh-{day.isoformat()}",
            location_id=warehouse.id,
            shift_date=day,
            start_time="22:00",
            end_time="06:00",
            role="Picker",
        )
        session.add(shift)
        session.add(ShiftAssignment(shift_id=shift.id, staff_id=alan.id, approval_status="approved"))

    session.add(
        TimeOffRequest(
            id="pto-ada",
            employee_id=ada.id,
            start_date=WEEK_START + timedelta(days=2),
            end_date=WEEK_START + timedelta(days=2),
            request_type="sick_leave",
            status="approved",
        )
    )
    session.commit()
