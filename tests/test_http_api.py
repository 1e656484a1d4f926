from __future__ import annotations

import csv
import io
import json

import pytest

from src.attendance_tracker.attendance_tracker.main import create_app

PACKAGE = "src.attendance_tracker.attendance_tracker"


@pytest.fixture
def app(container, monkeypatch, fixed_now):
    monkeypatch.setenv("APP_ENV", "testing")
    for module in ("attendance.service", "dashboard.service", "reports.service"):
        monkeypatch.setattr(f"{PACKAGE}.{module}.now_local", lambda offset: fixed_now)
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def _signup_and_signin(client, username="alice"):
    resp = client.post(
        "/auth/signup",
        json={
            "name": "Alice",
            "email": f"{username}@example.com",
            "phone": "+100",
            "organization": "Acme",
            "username": username,
            "password": "secret123",
            "security_question": "Pet?",
            "security_answer": "rex",
        },
    )
    assert resp.status_code == 201
    resp = client.post("/auth/signin", json={"username": username, "password": "secret123"})
    assert resp.status_code == 200


def test_protected_routes_require_session(client):
    for path in ("/employee/list", "/dashboard/summary", "/reports/summary", "/attendance/export"):
        resp = client.get(path)
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Authentication required"}


def test_check_without_session_is_unauthenticated(client):
    resp = client.get("/auth/check")

    assert resp.status_code == 401
    assert resp.get_json() == {"authenticated": False}


def test_signin_sets_strict_httponly_cookie(client):
    _signup_and_signin(client)

    resp = client.get("/auth/check")
    assert resp.get_json()["authenticated"] is True

    resp = client.post("/auth/signin", json={"username": "alice", "password": "secret123"})
    cookie = resp.headers["Set-Cookie"]
    assert "HttpOnly" in cookie
    assert "SameSite=Strict" in cookie
    assert "Expires=" in cookie


def test_bad_credentials(client):
    _signup_and_signin(client)
    client.post("/auth/logout")

    resp = client.post("/auth/signin", json={"username": "alice", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid credentials"}


def test_logout_is_idempotent(client):
    assert client.post("/auth/logout").status_code == 200
    assert client.post("/auth/logout").status_code == 200


def test_end_to_end_mark_flow(client):
    _signup_and_signin(client)

    resp = client.post("/employee/add", json={"name": "Bob", "email": "bob@example.com", "phone": "555"})
    assert resp.status_code == 201
    body = resp.get_json()
    payload = json.loads(body["qr_data"])
    assert payload == {"id": body["employee_id"], "name": "Bob"}
    assert body["qr_code"].startswith("data:image/png;base64,")

    resp = client.post("/attendance/mark", json={"employee_id": payload["id"]})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "Present"

    resp = client.post("/attendance/mark", json={"qr_data": body["qr_data"]})
    assert resp.status_code == 400
    conflict = resp.get_json()
    assert conflict["error"] == "Attendance already marked for today"
    assert conflict["status"] == "Present"
    assert conflict["employee"]["name"] == "Bob"

    resp = client.get(f"/attendance/stats/{payload['id']}")
    assert resp.get_json()["present_days"] == 1

    resp = client.get("/dashboard/employee-status")
    assert [e["status"] for e in resp.get_json()["employees"]] == ["Present"]


def test_mark_unknown_employee_returns_suggestions(client):
    _signup_and_signin(client)
    client.post("/employee/add", json={"name": "Bobby", "email": "bobby@example.com", "phone": "555"})

    resp = client.post("/attendance/mark", json={"employee_id": "bobb"})

    assert resp.status_code == 404
    body = resp.get_json()
    assert body["searchedId"] == "bobb"
    assert body["suggestions"][0]["name"] == "Bobby"


def test_update_attendance_route(client):
    _signup_and_signin(client)
    emp_id = client.post(
        "/employee/add", json={"name": "Bob", "email": "bob@example.com", "phone": "555"}
    ).get_json()["employee_id"]
    client.post("/attendance/mark", json={"employee_id": emp_id})

    resp = client.put(f"/attendance/update/{emp_id}", json={"status": "Late", "reason": "Traffic"})

    assert resp.get_json() == {
        "message": "Attendance updated successfully",
        "oldStatus": "Present",
        "newStatus": "Late",
    }


def test_export_csv_route(client):
    _signup_and_signin(client)
    emp_id = client.post(
        "/employee/add", json={"name": "Bob, Jr.", "email": "bob@example.com", "phone": "555"}
    ).get_json()["employee_id"]
    client.post("/attendance/mark", json={"employee_id": emp_id})

    resp = client.get("/attendance/export")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attachment; filename=attendance.csv" in resp.headers["Content-Disposition"]
    rows = list(csv.DictReader(io.StringIO(resp.get_data(as_text=True))))
    assert rows[0]["name"] == "Bob, Jr."


def test_deleted_employee_stats_and_face_status_are_404(client):
    _signup_and_signin(client)
    emp_id = client.post(
        "/employee/add", json={"name": "Bob", "email": "bob@example.com", "phone": "555"}
    ).get_json()["employee_id"]

    resp = client.delete(f"/employee/{emp_id}")
    assert resp.get_json() == {"success": True, "message": "Employee deleted successfully", "employee_id": emp_id}

    assert client.get(f"/attendance/stats/{emp_id}").status_code == 404
    assert client.get(f"/employee/face-status/{emp_id}").status_code == 404
    assert client.get(f"/employee/{emp_id}").status_code == 404


def test_tenants_cannot_see_each_other(app):
    alice, eve = app.test_client(), app.test_client()
    _signup_and_signin(alice, "alice")
    _signup_and_signin(eve, "eve")
    emp_id = alice.post(
        "/employee/add", json={"name": "Bob", "email": "bob@example.com", "phone": "555"}
    ).get_json()["employee_id"]

    assert eve.get(f"/employee/get/{emp_id}").status_code == 404
    assert eve.get("/employee/list").get_json() == {"employees": []}
    assert alice.get(f"/employee/get/{emp_id}").get_json()["employee"]["name"] == "Bob"


def test_search_too_short_is_400(client):
    _signup_and_signin(client)

    resp = client.get("/employee/search?q=a")

    assert resp.status_code == 400


def test_trend_route_defaults_bad_days(client):
    _signup_and_signin(client)

    trend = client.get("/dashboard/attendance-trend?days=oops").get_json()

    assert len(trend["labels"]) == 7


def test_report_generate_requires_dates(client):
    _signup_and_signin(client)

    resp = client.post("/reports/generate", json={"type": "attendance"})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Start date and end date are required"}


def test_unexpected_errors_become_json_500(app, client, container, monkeypatch):
    _signup_and_signin(client)

    def boom(admin_id):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(container.employee_service, "list_employees", boom)

    resp = client.get("/employee/list")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_health_without_database(client):
    assert client.get("/health").get_json() == {"status": "ok", "database": "not configured"}
