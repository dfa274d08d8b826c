import asyncio
import json
from datetime import date, datetime, timezone

from shiftpay.sources import JsonDataStore, fetch_inputs, parse_instant


def test_store_deserializes_document(store_path):
    store = JsonDataStore(store_path)

    shifts = {shift.id: shift for shift in store.shifts}
    assert shifts["w-mon"].location.requires_check_in is False
    assert shifts["s-mon"].location.name == "Downtown Store"
    pending = shifts["w-mon"].assignments[1]
    assert pending.approval_status == "pending" and not pending.is_approved
    assert shifts["s-mon"].assignments[0].employee.overtime_rate == 30
    assert store.employees["emp-b"].overtime_rate is None
    assert store.employees["emp-b"].expected_weekly_hours is None
    [log] = store.attendance_logs
    assert log.check_in_at == datetime(2024, 3, 4, 9, 10)
    assert log.late_minutes == 10 and log.auto_clocked_out is False


def test_missing_store_file_is_empty(tmp_path):
    store = JsonDataStore(tmp_path / "absent.json")

    assert store.shifts_between(date(2024, 1, 1), date(2024, 12, 31)) == []
    assert store.logs_between(date(2024, 1, 1), date(2024, 12, 31)) == []


def test_unknown_location_falls_back(tmp_path):
    document = {
        "shifts": [
            {
                "id": "s1",
                "shift_date": "2024-03-04",
                "start_time": "09:00",
                "end_time": "17:00",
                "location_id": "loc-gone",
                "assignments": [{"staff_id": "emp-x"}],
            }
        ]
    }
    path = tmp_path / "store.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    [shift] = JsonDataStore(path).shifts
    assert shift.location.name == "Unknown"
    assert not shift.location.requires_check_in
    assert shift.assignments[0].employee is None
    assert shift.assignments[0].approval_status == "pending"


def test_parse_instant_accepts_zulu_suffix():
    assert parse_instant("2024-03-04T09:00:00Z") == datetime(2024, 3, 4, 9, tzinfo=timezone.utc)
    assert parse_instant(None) is None
    assert parse_instant("") is None


def test_fetch_inputs_reads_every_source(store_path):
    store = JsonDataStore(store_path)

    inputs = asyncio.run(
        fetch_inputs(store, store, date(2024, 3, 4), date(2024, 3, 10), "loc-store", time_off=store)
    )

    assert sorted(shift.id for shift in inputs.shifts) == ["s-mon", "s-tue"]
    assert [log.id for log in inputs.attendance_logs] == ["a-mon"]
    assert [request.id for request in inputs.time_off] == ["pto-a"]


def test_fetch_inputs_without_time_off_source(store_path):
    store = JsonDataStore(store_path)

    inputs = asyncio.run(fetch_inputs(store, store, date(2024, 3, 4), date(2024, 3, 10)))

    assert inputs.time_off == []
    assert len(inputs.shifts) == 3


def test_pending_time_off_is_not_returned(tmp_path):
    document = {
        "time_off_requests": [
            {"id": "t1", "employee_id": "e", "start_date": "2024-03-01", "end_date": "2024-03-05", "request_type": "vacation", "status": "pending"},
            {"id": "t2", "employee_id": "e", "start_date": "2024-03-01", "end_date": "2024-03-05", "request_type": "vacation", "status": "approved"},
            {"id": "t3", "employee_id": "e", "start_date": "2024-02-01", "end_date": "2024-02-05", "request_type": "vacation", "status": "approved"},
        ]
    }
    path = tmp_path / "store.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    requests = JsonDataStore(path).time_off_between(date(2024, 3, 4), date(2024, 3, 10))

    assert [request.id for request in requests] == ["t2"]


def test_store_lists_roster_by_name(store_path):
    store = JsonDataStore(store_path)

    assert [employee.employee_id for employee in store.list_employees()] == ["emp-a", "emp-b"]


def test_fetch_inputs_includes_roster(store_path):
    store = JsonDataStore(store_path)

    inputs = asyncio.run(fetch_inputs(store, store, date(2024, 3, 4), date(2024, 3, 10), roster=store))

    assert [employee.full_name for employee in inputs.employees] == ["anna dev", "Zelda Ops"]
    assert inputs.time_off == []
