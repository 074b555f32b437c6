from __future__ import annotations

import io
from datetime import date, time

import pytest

import hr_workflow.config.testing as testing_settings
from hr_workflow.container import build_container
from hr_workflow.core.enums import RequestStatus
from hr_workflow.main import create_app
from hr_workflow.notifications.notifier import NullNotifier


@pytest.fixture
def app(employees):
    container = build_container(employees=employees, notifier=NullNotifier())
    return create_app(testing_settings, container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, employee_id: str, role: str = "EMPLOYEE", department: str | None = None) -> None:
    with client.session_transaction() as sess:
        sess["employee_id"] = employee_id
        sess["role"] = role
        sess["department"] = department


LEAVE = {
    "leave_type": "Casual Leave",
    "start_date": "2026-02-10",
    "end_date": "2026-02-11",
    "reason": "family event",
}


def test_requires_login(client):
    resp = client.get("/api/requests")

    assert resp.status_code == 401


def test_leave_request_flow(client):
    login(client, "EMP02", department="IT")
    resp = client.post("/api/requests", json={"kind": "LEAVE", "payload": LEAVE})
    assert resp.status_code == 201
    request_id = resp.get_json()["request_id"]

    resp = client.post(f"/api/requests/{request_id}/approve")
    assert resp.status_code == 403

    login(client, "MGR01", role="MANAGER", department="IT")
    resp = client.get("/api/requests", query_string={"department": "IT", "status": "PENDING"})
    assert [r["request_id"] for r in resp.get_json()] == [request_id]

    resp = client.post(f"/api/requests/{request_id}/approve")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "APPROVED"
    assert resp.get_json()["decided_by"] == "MGR01"

    resp = client.post(f"/api/requests/{request_id}/reject")
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "InvalidTransitionError"

    login(client, "EMP02", department="IT")
    resp = client.get("/api/requests/counts")
    assert resp.get_json() == {"PENDING": 0, "APPROVED": 1, "REJECTED": 0}


def test_employee_cannot_read_others_requests(client):
    login(client, "EMP03")
    request_id = client.post("/api/requests", json={"kind": "LEAVE", "payload": LEAVE}).get_json()["request_id"]

    login(client, "EMP02")
    assert client.get(f"/api/requests/{request_id}").status_code == 403
    assert client.get("/api/requests", query_string={"employee_id": "EMP03"}).status_code == 403


def test_invalid_payload_is_bad_request(client):
    login(client, "EMP02")
    resp = client.post("/api/requests", json={"kind": "LEAVE", "payload": {**LEAVE, "leave_type": "Holiday"}})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"


def test_unknown_request_is_not_found(client):
    login(client, "ADM01", role="ADMIN")

    assert client.get("/api/requests/does-not-exist").status_code == 404


def test_check_in_and_out(client):
    login(client, "EMP01")
    resp = client.post("/api/attendance/check-in", json={"work_date": "2026-02-02", "check_in": "09:20"})
    assert resp.status_code == 201
    assert resp.get_json()["status"] == "LATE"

    assert client.post("/api/attendance/check-in", json={"work_date": "2026-02-02", "check_in": "09:30"}).status_code == 409

    resp = client.post("/api/attendance/check-out", json={"work_date": "2026-02-02", "check_out": "09:00"})
    assert resp.status_code == 422

    resp = client.post("/api/attendance/check-out", json={"work_date": "2026-02-02", "check_out": "17:20"})
    assert resp.status_code == 200
    assert resp.get_json()["work_minutes"] == 480

    resp = client.get("/api/attendance/summary", query_string={"start": "2026-02-01", "end": "2026-02-28"})
    body = resp.get_json()
    assert body["employee_id"] == "EMP01"
    assert body["total_work_minutes"] == 480
    assert body["count_by_status"]["LATE"] == 1


def test_approved_correction_updates_attendance(client):
    login(client, "EMP02", department="IT")
    client.post("/api/attendance/check-in", json={"work_date": "2026-02-02", "check_in": "09:30"})
    client.post("/api/attendance/check-out", json={"work_date": "2026-02-02", "check_out": "17:00"})
    resp = client.post(
        "/api/requests",
        json={"kind": "ATTENDANCE_CORRECTION", "payload": {"work_date": "2026-02-02", "check_in": "09:00"}},
    )
    request_id = resp.get_json()["request_id"]

    login(client, "MGR01", role="MANAGER", department="IT")
    assert client.post(f"/api/requests/{request_id}/approve").status_code == 200

    resp = client.get(
        "/api/attendance/history",
        query_string={"employee_id": "EMP02", "start": "2026-02-01", "end": "2026-02-28"},
    )
    (entry,) = resp.get_json()
    assert entry["check_in"] == "09:00:00"
    assert entry["work_minutes"] == 480


def test_status_override_is_admin_only(client):
    login(client, "MGR01", role="MANAGER")
    assert client.put("/api/attendance/EMP02/2026-02-02/status", json={"status": "SICK"}).status_code == 403

    login(client, "ADM01", role="ADMIN")
    resp = client.put("/api/attendance/EMP02/2026-02-02/status", json={"status": "SICK", "note": "flu"})
    assert resp.status_code == 200
    assert resp.get_json()["status_set_by"] == "ADM01"


def test_import_json_rows(client):
    login(client, "ADM01", role="ADMIN")
    resp = client.post(
        "/api/attendance/import",
        json={
            "rows": [
                {"employee_id": "EMP01", "work_date": "2026-02-02", "check_in": "09:00", "check_out": "17:00"},
                {"employee_id": "EMP02", "work_date": "2026-02-02", "check_in": "17:00", "check_out": "09:00"},
            ]
        },
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["accepted"] == 1
    assert body["rejected"][0]["reason"] == "InvalidTimeError"


def test_import_csv_upload_and_export(client):
    login(client, "ADM01", role="ADMIN")
    csv_data = b"Employee_ID,Date,In,Out,Status\nEMP02,2026-02-02,09:00,12:30,\nEMP02,2026-02-03,--,--,SICK\n"
    resp = client.post(
        "/api/attendance/import",
        data={"file": (io.BytesIO(csv_data), "biometric.csv")},
        content_type="multipart/form-data",
    )
    assert resp.get_json()["accepted"] == 2

    resp = client.get(
        "/api/attendance/export.csv",
        query_string={"employee_id": "EMP02", "start": "2026-02-01", "end": "2026-02-28"},
    )
    assert resp.status_code == 200
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "Employee_ID,Date,In,Out,Status,Minutes,Worked"
    assert lines[1] == "EMP02,2026-02-02,09:00,12:30,PRESENT,210,3h 30m"
    assert lines[2] == "EMP02,2026-02-03,--,--,SICK,0,0h 0m"


def test_payroll_preview_and_payslip(client):
    login(client, "EMP01")
    assert client.post("/api/payroll/preview", json={"base_amount": 1000}).status_code == 403

    login(client, "ADM01", role="ADMIN")
    resp = client.post(
        "/api/payroll/preview",
        json={
            "base_amount": "1000",
            "adjustments": [
                {"kind": "INCREMENT_PERCENT", "value": "10"},
                {"kind": "REFERRAL_BONUS", "value": "500"},
                {"kind": "DEDUCTION", "value": "200"},
            ],
        },
    )
    assert resp.get_json()["net_amount"] == "1400"

    resp = client.post("/api/payroll/payslips", json={"employee_id": "EMP01", "month": 2, "year": 2026, "base_amount": "900"})
    assert resp.status_code == 201
    assert resp.get_json()["period"] == "2026-02"

    resp = client.post("/api/payroll/payslips", json={"employee_id": "EMP01", "month": "feb", "year": 2026, "base_amount": "900"})
    assert resp.status_code == 400


def test_efficiency_display_is_clamped(client):
    login(client, "EMP01")
    resp = client.get("/api/performance/efficiency", query_string={"estimated": "300", "actual": "100"})

    assert resp.get_json() == {"raw": "300", "display": "150", "ceiling": "150"}


def test_non_text_correction_note_is_bad_request(client):
    login(client, "EMP02")
    resp = client.post(
        "/api/requests",
        json={"kind": "ATTENDANCE_CORRECTION", "payload": {"work_date": "2026-02-02", "note": 5}},
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"


def _checked_in_correction(client, check_in: str) -> str:
    login(client, "EMP02", department="IT")
    client.post("/api/attendance/check-in", json={"work_date": "2026-02-02", "check_in": "09:30"})
    client.post("/api/attendance/check-out", json={"work_date": "2026-02-02", "check_out": "17:00"})
    resp = client.post(
        "/api/requests",
        json={"kind": "ATTENDANCE_CORRECTION", "payload": {"work_date": "2026-02-02", "check_in": check_in}},
    )
    return resp.get_json()["request_id"]


def test_correction_rejected_during_approval_is_not_applied(app, client, monkeypatch, admin):
    container = app.extensions["hr_workflow"]
    request_id = _checked_in_correction(client, "09:00")

    ledger = container.attendance_ledger
    check = ledger.check_correction

    def check_then_reject(*args, **kwargs):
        result = check(*args, **kwargs)
        container.request_lifecycle.decide(request_id, RequestStatus.REJECTED, admin)
        return result

    monkeypatch.setattr(ledger, "check_correction", check_then_reject)

    login(client, "MGR01", role="MANAGER", department="IT")
    resp = client.post(f"/api/requests/{request_id}/approve")

    assert resp.status_code == 409
    assert container.request_lifecycle.get(request_id).status == RequestStatus.REJECTED
    entry = container.attendance_repo.get("EMP02", date(2026, 2, 2))
    assert entry.check_in == time(9, 30)
    assert entry.work_minutes == 450


def test_invalid_correction_leaves_request_pending(app, client):
    container = app.extensions["hr_workflow"]
    request_id = _checked_in_correction(client, "18:00")

    login(client, "MGR01", role="MANAGER", department="IT")
    resp = client.post(f"/api/requests/{request_id}/approve")

    assert resp.status_code == 422
    assert container.request_lifecycle.get(request_id).status == RequestStatus.PENDING
    assert container.attendance_repo.get("EMP02", date(2026, 2, 2)).check_in == time(9, 30)


def test_corrupt_excel_upload_is_bad_request(client):
    login(client, "ADM01", role="ADMIN")
    resp = client.post(
        "/api/attendance/import",
        data={"file": (io.BytesIO(b"not a zip"), "biometric.xlsx")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"


def test_malformed_mapping_is_bad_request(client):
    login(client, "ADM01", role="ADMIN")
    resp = client.post(
        "/api/attendance/import",
        data={"file": (io.BytesIO(b"Employee_ID,Date,In,Out\n"), "biometric.csv"), "mapping": "{bad"},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 400
