from datetime import datetime, timezone

import pytest
from structlog.testing import capture_logs

from factories import MONDAY, STORE, WAREHOUSE, attendance, profile, shift
from shiftpay.config import EngineOptions
from shiftpay.daily import DailyEntryBuilder, shift_outcome
from shiftpay.errors import ValidationError
from shiftpay.timeutils import resolve_timezone
from shiftpay.models import AttendanceLog, ShiftOutcome

EMPLOYEE = profile()


def build(record, logs=(), options=None):
    return DailyEntryBuilder(options).build(record, record.assignments[0], EMPLOYEE, logs)


def test_overnight_shift_rolls_end_into_next_day():
    entry = build(shift(start="22:00", end="02:00", location=WAREHOUSE, employees=[EMPLOYEE]))

    assert entry.scheduled_hours == 4


def test_equal_start_and_end_is_a_full_day():
    entry = build(shift(start="08:00", end="08:00", location=WAREHOUSE, employees=[EMPLOYEE]))

    assert entry.scheduled_hours == 24


def test_missed_check_in_required_shift_pays_nothing():
    entry = build(shift(location=STORE, employees=[EMPLOYEE]))

    assert entry.is_missed
    assert entry.daily_amount == 0
    assert entry.actual_hours == 0
    assert not entry.is_late
    assert not entry.auto_clocked_out


def test_unmonitored_shift_without_attendance_pays_schedule():
    entry = build(shift(location=WAREHOUSE, employees=[EMPLOYEE]))

    assert not entry.is_missed
    assert entry.daily_amount == entry.scheduled_hours * EMPLOYEE.hourly_rate == 160
    assert shift_outcome(entry.requires_check_in, entry.has_attendance, entry.actual_hours) is ShiftOutcome.WORKED


def test_attended_shift_pays_measured_hours():
    entry = build(
        shift(employees=[EMPLOYEE]),
        [attendance(check_in="09:00", check_out="16:30", is_late=True, late_minutes=12, auto_clocked_out=True)],
    )

    assert entry.actual_hours == 7.5
    assert entry.daily_amount == 150
    assert entry.is_late and entry.late_minutes == 12
    assert entry.auto_clocked_out
    assert entry.attendance_id == "a1"


def test_open_attendance_record_is_neither_worked_nor_missed():
    entry = build(shift(employees=[EMPLOYEE]), [attendance(check_out=None)])

    assert entry.actual_hours == 0
    assert not entry.is_missed
    assert entry.daily_amount == 160
    assert shift_outcome(entry.requires_check_in, entry.has_attendance, entry.actual_hours) is ShiftOutcome.PENDING


def test_attendance_for_another_shift_does_not_match():
    entry = build(shift(employees=[EMPLOYEE]), [attendance(shift_id="other")])

    assert entry.is_missed
    assert entry.attendance_id is None


def test_duplicate_attendance_picks_earliest_check_in():
    logs = [
        attendance(log_id="late-log", check_in="09:30", check_out="17:00"),
        attendance(log_id="early-log", check_in="08:45", check_out="17:00"),
    ]

    with capture_logs() as captured:
        entry = build(shift(employees=[EMPLOYEE]), logs)

    assert entry.attendance_id == "early-log"
    assert entry.actual_hours == 8.25
    assert any(event["event"] == "duplicate_attendance" for event in captured)


def test_duplicate_attendance_with_equal_check_in_keeps_source_order():
    logs = [
        attendance(log_id="first", check_out="15:00"),
        attendance(log_id="second", check_out="17:00"),
    ]

    entry = build(shift(employees=[EMPLOYEE]), logs)

    assert entry.attendance_id == "first"


def test_checkout_before_check_in_is_clamped_and_flagged():
    logs = [attendance(check_in="17:00", check_out="09:00")]

    with capture_logs() as captured:
        entry = build(shift(employees=[EMPLOYEE]), logs)

    assert entry.actual_hours == 0
    assert entry.is_anomalous
    assert entry.daily_amount >= 0
    assert [event["event"] for event in captured] == ["negative_attendance_duration"]


def test_overnight_attendance_measures_across_midnight():
    log = AttendanceLog(
        id="night",
        employee_id=EMPLOYEE.employee_id,
        shift_id="s1",
        check_in_at=datetime(2024, 3, 4, 22, 0),
        check_out_at=datetime(2024, 3, 5, 6, 30),
    )

    entry = build(shift(start="22:00", end="06:00", employees=[EMPLOYEE]), [log])

    assert entry.scheduled_hours == 8
    assert entry.actual_hours == 8.5


def test_unparseable_time_names_the_shift():
    with pytest.raises(ValidationError) as excinfo:
        build(shift(shift_id="bad-shift", start="9am", employees=[EMPLOYEE]))

    assert excinfo.value.shift_id == "bad-shift"
    assert "bad-shift" in str(excinfo.value)


def test_unlinked_attendance_matches_by_date_only_when_enabled():
    record = shift(employees=[EMPLOYEE])
    logs = [attendance(shift_id=None, day=MONDAY)]

    default_entry = build(record, logs)
    by_date_entry = build(record, logs, EngineOptions(match_unlinked_by_date=True))

    assert default_entry.is_missed
    assert not by_date_entry.is_missed
    assert by_date_entry.actual_hours == 8


def test_mixed_naive_and_aware_timestamps_are_measured_in_configured_zone():
    log = AttendanceLog(
        id="mixed",
        employee_id=EMPLOYEE.employee_id,
        shift_id="s1",
        check_in_at=datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc),
        check_out_at=datetime(2024, 3, 4, 17, 0),
    )

    utc_entry = build(shift(employees=[EMPLOYEE]), [log])
    berlin_entry = build(shift(employees=[EMPLOYEE]), [log], EngineOptions(timezone=resolve_timezone("Europe/Berlin")))

    assert utc_entry.actual_hours == 8
    assert not utc_entry.is_anomalous
    # 17:00 Berlin wall clock is 16:00 UTC
    assert berlin_entry.actual_hours == 7


def test_duplicate_attendance_with_mixed_timestamp_kinds_still_picks_earliest():
    logs = [
        attendance(log_id="naive", check_in="09:30"),
        AttendanceLog(
            id="aware",
            employee_id=EMPLOYEE.employee_id,
            shift_id="s1",
            check_in_at=datetime(2024, 3, 4, 8, 45, tzinfo=timezone.utc),
            check_out_at=datetime(2024, 3, 4, 17, 0, tzinfo=timezone.utc),
        ),
    ]

    entry = build(shift(employees=[EMPLOYEE]), logs)

    assert entry.attendance_id == "aware"
