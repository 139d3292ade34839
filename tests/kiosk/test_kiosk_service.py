from __future__ import annotations

from datetime import date

import pytest

from src.timeclock_system.timeclock_system.core.enums import EntryType
from src.timeclock_system.timeclock_system.core.exceptions import AuthenticationError, ConflictError, ValidationError
from src.timeclock_system.timeclock_system.kiosk.service import KioskClockService
from tests.fakes import FixedClock, InMemoryEmployees, InMemoryPunches, at, make_employee

DAY = date(2024, 6, 3)


@pytest.fixture
def employees():
    return InMemoryEmployees(
        [
            make_employee(1, "Adams", pin_code="1111"),
            make_employee(2, "Baker", pin_code="2222", is_active=False),
        ]
    )


@pytest.fixture
def punches(employees):
    return InMemoryPunches(employees)


@pytest.fixture
def clock():
    return FixedClock(at(DAY, 9))


@pytest.fixture
def kiosk(punches, employees, clock):
    return KioskClockService(punches, employees, clock=clock)


def test_full_day_at_the_kiosk(kiosk, punches, clock):
    kiosk.clock_in(employee_id=1, pin="1111")

    clock.now = at(DAY, 12)
    lunch = kiosk.start_lunch(employee_id=1, pin="1111")
    assert lunch["timeRecord"]["entryType"] == "lunch_break"

    clock.now = at(DAY, 12, 30)
    kiosk.end_lunch(employee_id=1, pin="1111")

    clock.now = at(DAY, 17)
    out = kiosk.clock_out(employee_id=1, pin="1111")
    assert out["totalTime"] == "4h 30m"

    ordered = sorted(punches.by_id.values(), key=lambda p: p.clock_in)
    assert [(p.entry_type, p.total_minutes) for p in ordered] == [
        (EntryType.SHIFT, 180),
        (EntryType.LUNCH_BREAK, 30),
        (EntryType.SHIFT, 270),
    ]


def test_wrong_or_inactive_pin_is_rejected(kiosk):
    with pytest.raises(AuthenticationError):
        kiosk.clock_in(employee_id=1, pin="9999")
    with pytest.raises(AuthenticationError):
        kiosk.clock_in(employee_id=2, pin="2222")


def test_second_clock_in_conflicts(kiosk):
    kiosk.clock_in(employee_id=1, pin="1111")

    with pytest.raises(ConflictError):
        kiosk.clock_in(employee_id=1, pin="1111")


def test_clock_out_without_open_punch(kiosk):
    with pytest.raises(ValidationError):
        kiosk.clock_out(employee_id=1, pin="1111")


def test_lunch_transitions_are_checked(kiosk):
    with pytest.raises(ValidationError):
        kiosk.start_lunch(employee_id=1, pin="1111")

    kiosk.clock_in(employee_id=1, pin="1111")
    with pytest.raises(ValidationError):
        kiosk.end_lunch(employee_id=1, pin="1111")

    kiosk.start_lunch(employee_id=1, pin="1111")
    with pytest.raises(ConflictError):
        kiosk.start_lunch(employee_id=1, pin="1111")


def test_status_reports_running_session(kiosk, punches, clock):
    punches.add(1, at(DAY, 7), at(DAY, 8))
    punches.add(1, at(DAY, 8, 30), None)
    clock.now = at(DAY, 10)

    status = kiosk.get_status(employee_id=1, pin="1111")

    assert status["status"] == "clocked_in"
    assert status["isClockedIn"] is True
    assert status["currentSession"]["currentMinutes"] == 90
    assert status["todayTotal"]["completedMinutes"] == 60
    assert status["todayTotal"]["includingCurrentMinutes"] == 150
    assert status["todayTotal"]["clockCount"] == 1


def test_status_when_not_clocked_in(kiosk):
    status = kiosk.get_status(employee_id=1, pin="1111")

    assert status["status"] == "not_clocked_in"
    assert status["currentSession"] is None
    assert status["todayTotal"]["includingCurrentMinutes"] == 0


def test_clock_in_racing_another_clock_in_conflicts(kiosk, punches):
    kiosk.clock_in(employee_id=1, pin="1111")
    punches.stale_open_reads = True

    with pytest.raises(ConflictError, match="Already clocked in"):
        kiosk.clock_in(employee_id=1, pin="1111")

    assert len(punches.by_id) == 1
