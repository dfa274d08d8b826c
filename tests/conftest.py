import json

import pytest


STORE_DOCUMENT = {
    "locations": [
        {"id": "loc-store", "name": "Downtown Store", "requires_check_in": True},
        {"id": "loc-warehouse", "name": "Warehouse", "requires_check_in": False},
    ],
    "employees": [
        {
            "id": "emp-b",
            "full_name": "Zelda Ops",
            "role": "Picker",
            "location_id": "loc-warehouse",
            "hourly_rate": 18,
            "expected_shifts_per_week": 1,
        },
        {
            "id": "emp-a",
            "full_name": "anna dev",
            "role": "Cashier",
            "location_id": "loc-store",
            "hourly_rate": 20,
            "overtime_rate": 30,
            "expected_weekly_hours": 16,
            "expected_shifts_per_week": 2,
        },
    ],
    "shifts": [
        {
            "id": "s-mon",
            "shift_date": "2024-03-04",
            "start_time": "09:00",
            "end_time": "17:00",
            "location_id": "loc-store",
            "assignments": [{"staff_id": "emp-a", "approval_status": "approved"}],
        },
        {
            "id": "s-tue",
            "shift_date": "2024-03-05",
            "start_time": "09:00",
            "end_time": "17:00",
            "location_id": "loc-store",
            "assignments": [{"staff_id": "emp-a", "approval_status": "approved"}],
        },
        {
            "id": "w-mon",
            "shift_date": "2024-03-04",
            "start_time": "22:00",
            "end_time": "06:00",
            "location_id": "loc-warehouse",
            "assignments": [
                {"staff_id": "emp-b", "approval_status": "approved"},
                {"staff_id": "emp-a", "approval_status": "pending"},
            ],
        },
    ],
    "attendance_logs": [
        {
            "id": "a-mon",
            "staff_id": "emp-a",
            "shift_id": "s-mon",
            "check_in_at": "2024-03-04T09:10:00",
            "check_out_at": "2024-03-04T17:10:00",
            "is_late": True,
            "late_minutes": 10,
        }
    ],
    "time_off_requests": [
        {
            "id": "pto-a",
            "employee_id": "emp-a",
            "start_date": "2024-03-05",
            "end_date": "2024-03-05",
            "request_type": "vacation",
            "status": "approved",
        }
    ],
}


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps(STORE_DOCUMENT), encoding="utf-8")
    return path
