from __future__ import annotations

from datetime import date, datetime

import pytest
from werkzeug.security import generate_password_hash

from src.timeclock_system.timeclock_system.container import Container
from src.timeclock_system.timeclock_system.core.enums import Role
from src.timeclock_system.timeclock_system.corrections.service import CorrectionService
from src.timeclock_system.timeclock_system.kiosk.service import KioskClockService
from src.timeclock_system.timeclock_system.main import create_app
from src.timeclock_system.timeclock_system.pins.service import PinService
from src.timeclock_system.timeclock_system.reports.service import PeriodReportService
from src.timeclock_system.timeclock_system.timeclock.service import TimeclockService
from src.timeclock_system.timeclock_system.users.model import User
from src.timeclock_system.timeclock_system.users.service import AuthService
from tests.fakes import FixedClock, InMemoryEmployees, InMemoryPins, InMemoryPunches, at, make_employee, make_parent

DAY = date(2024, 6, 3)


class FakeUsersRepo:
    def __init__(self, users):
        self._users = {u.username: u for u in users}

    def get_by_id(self, user_id):
        return next((u for u in self._users.values() if u.user_id == int(user_id)), None)

    def get_by_username(self, username):
        return self._users.get(username)


@pytest.fixture
def employees():
    return InMemoryEmployees([make_employee(1, "Adams", pin_code="1111"), make_employee(2, "Baker")])


@pytest.fixture
def punches(employees):
    return InMemoryPunches(employees)


@pytest.fixture
def app(punches, employees):
    users = FakeUsersRepo(
        [
            User(10, "Dana Director", "dana", generate_password_hash("secret"), Role.ADMIN),
            User(11, "Sam Staff", "sam", generate_password_hash("secret"), Role.STAFF),
        ]
    )
    pins = InMemoryPins(employees=employees.by_id.values(), parents=[make_parent(2, pin_code="1234")])
    clock = FixedClock(at(DAY, 18))

    container = Container(
        conn=None,
        users_repo=users,
        employees_repo=employees,
        punches_repo=punches,
        pins_repo=pins,
        auth_service=AuthService(users),
        timeclock_service=TimeclockService(punches, employees, clock=clock),
        period_report_service=PeriodReportService(punches, employees, clock=clock),
        correction_service=CorrectionService(punches, employees, clock=clock),
        pin_service=PinService(pins),
        kiosk_service=KioskClockService(punches, employees, clock=clock),
    )
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def _login_as(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role.value


def test_admin_routes_require_login(client):
    res = client.get("/api/v1/timeclock/today")

    assert res.status_code == 401
    assert res.get_json() == {"success": False, "error": "Login required"}


def test_staff_is_forbidden(client):
    _login_as(client, 11, Role.STAFF)

    assert client.get("/api/v1/timeclock/today").status_code == 403


def test_login_then_today(client, punches):
    punches.add(1, at(DAY, 9), at(DAY, 12))

    res = client.post("/api/v1/auth/login", json={"username": "dana", "password": "secret"})
    assert res.status_code == 200
    assert res.get_json()["data"]["role"] == "admin"

    res = client.get("/api/v1/timeclock/today?date=2024-06-03")
    body = res.get_json()
    assert body["success"] is True
    assert body["data"]["stats"]["totalEmployees"] == 2
    assert body["data"]["stats"]["clockedOut"] == 1


def test_bad_login(client):
    res = client.post("/api/v1/auth/login", json={"username": "dana", "password": "nope"})

    assert res.status_code == 401
    assert res.get_json()["error"] == "Invalid username or password"


def test_bad_date_is_a_400(client):
    _login_as(client, 10, Role.ADMIN)

    assert client.get("/api/v1/timeclock/today?date=03-06-2024").status_code == 400
    assert client.get("/api/v1/timeclock/report?startDate=2024-06-09&endDate=2024-06-03").status_code == 400


def test_report_defaults_to_current_week(client):
    _login_as(client, 10, Role.ADMIN)

    data = client.get("/api/v1/timeclock/report").get_json()["data"]

    assert data["summary"]["periodStart"] == "2024-06-03"
    assert data["summary"]["periodEnd"] == "2024-06-09"


def test_add_edit_and_delete_punch(client, punches):
    _login_as(client, 10, Role.ADMIN)

    res = client.post("/api/v1/timeclock/add-punch", json={"employeeId": 2, "clockIn": "2024-06-03T09:00:00"})
    assert res.status_code == 201
    record = res.get_json()["data"]["timeRecord"]
    assert record["totalMinutes"] is None
    assert record["adjustedBy"] == 10

    res = client.put(f"/api/v1/timeclock/{record['id']}", json={"clockOut": "2024-06-03T17:00:00", "reason": "Fixed"})
    assert res.get_json()["data"]["timeRecord"]["totalMinutes"] == 480

    res = client.put(f"/api/v1/timeclock/{record['id']}", json={"clockOut": None})
    assert res.get_json()["data"]["timeRecord"]["totalMinutes"] is None

    assert client.delete(f"/api/v1/timeclock/{record['id']}").status_code == 200
    assert punches.get_by_id(record["id"]) is None


def test_edit_with_empty_body_is_a_400(client, punches):
    punch = punches.add(1, at(DAY, 9), at(DAY, 17))
    _login_as(client, 10, Role.ADMIN)

    res = client.put(f"/api/v1/timeclock/{punch.punch_id}", json={})

    assert res.status_code == 400
    assert res.get_json()["error"] == "No fields to update"


def test_delete_missing_punch_is_a_404(client):
    _login_as(client, 10, Role.ADMIN)

    assert client.delete("/api/v1/timeclock/999").status_code == 404


def test_employee_records(client, punches):
    punches.add(1, datetime(2024, 6, 3, 9), datetime(2024, 6, 3, 10))
    _login_as(client, 10, Role.ADMIN)

    data = client.get("/api/v1/timeclock/employee/1?limit=10").get_json()["data"]
    assert data["total"] == 1
    assert data["limit"] == 10

    assert client.get("/api/v1/timeclock/employee/404").status_code == 404


def test_pin_check_and_assignment(client):
    _login_as(client, 10, Role.ADMIN)

    res = client.get("/api/v1/pins/check?pin=1234&excludeId=1")
    assert res.get_json()["data"] == {"available": False}

    assert client.get("/api/v1/pins/check").get_json()["data"] == {"available": True}

    res = client.put("/api/v1/employees/2/pin", json={"pinCode": "1234"})
    assert res.status_code == 409

    res = client.put("/api/v1/employees/2/pin", json={"pinCode": "4321"})
    assert res.status_code == 200


def test_kiosk_clock_in_and_verify(client):
    res = client.post("/api/v1/kiosk/verify-pin", json={"pin": "1111"})
    assert res.get_json()["data"]["type"] == "employee"

    assert client.post("/api/v1/kiosk/verify-pin", json={"pin": "0000"}).status_code == 401

    res = client.post("/api/v1/kiosk/employee/clockin", json={"employeeId": 1, "pin": "1111"})
    assert res.status_code == 200
    assert client.post("/api/v1/kiosk/employee/clockin", json={"employeeId": 1, "pin": "1111"}).status_code == 409


def test_report_with_only_end_date(client):
    _login_as(client, 10, Role.ADMIN)

    res = client.get("/api/v1/timeclock/report?endDate=2024-05-22")

    assert res.status_code == 200
    assert res.get_json()["data"]["summary"]["periodStart"] == "2024-05-20"


def test_report_range_is_capped(client):
    _login_as(client, 10, Role.ADMIN)

    res = client.get("/api/v1/timeclock/report?startDate=1900-01-01&endDate=2100-12-31")
    assert res.status_code == 400

    res = client.get("/api/v1/timeclock/report?startDate=2024-06-03&endDate=9999-12-31")
    assert res.status_code == 400


def test_non_text_notes_are_a_400(client, punches):
    _login_as(client, 10, Role.ADMIN)

    res = client.post("/api/v1/timeclock/add-punch", json={"employeeId": 2, "clockIn": "2024-06-03T09:00:00", "notes": 123})
    assert res.status_code == 400
    assert res.get_json()["error"] == "notes must be a string"
    assert punches.by_id == {}
