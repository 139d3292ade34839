from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import minutes_between, now_local
from ..core.enums import EntryType
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..timeclock.model import NewPunch, Punch
from ..timeclock.repository import PunchRepository
from ..timeclock.rules import derive_status, split_minutes

logger = logging.getLogger(__name__)


def _hm(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60}m"


class KioskClockService:
    """Use case: employees punching in and out at the front-desk kiosk."""

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._punches = punches
        self._employees = employees
        self._clock = clock

    def _verify(self, employee_id: int, pin: str) -> Employee:
        employee = self._employees.get_active_by_pin(int(employee_id), (pin or "").strip())
        if not employee:
            raise AuthenticationError("Invalid PIN")
        return employee

    def _latest_open(self, employee_id: int) -> Punch | None:
        open_punches = self._punches.list_open_for_employee(employee_id)
        return open_punches[0] if open_punches else None

    def clock_in(self, *, employee_id: int, pin: str) -> dict:
        employee = self._verify(employee_id, pin)

        try:
            punch = self._punches.create(NewPunch(employee_id=employee.employee_id, clock_in=self._clock()))
        except ConflictError:
            raise ConflictError("Already clocked in")
        logger.info("Employee %s clocked in (punch %s)", employee.employee_id, punch.punch_id)
        return {
            "message": f"{employee.full_name} clocked in successfully",
            "timeRecord": punch.to_dict(),
            "employeeName": employee.full_name,
        }

    def clock_out(self, *, employee_id: int, pin: str) -> dict:
        employee = self._verify(employee_id, pin)

        current = self._latest_open(employee.employee_id)
        if not current:
            raise ValidationError("Not currently clocked in")

        punch = self._punches.close(current.punch_id, clock_out=self._clock())
        logger.info("Employee %s clocked out (punch %s, %s min)", employee.employee_id, punch.punch_id, punch.total_minutes)
        return {
            "message": f"{employee.full_name} clocked out successfully",
            "timeRecord": punch.to_dict(),
            "totalTime": _hm(punch.total_minutes or 0),
            "employeeName": employee.full_name,
        }

    def start_lunch(self, *, employee_id: int, pin: str) -> dict:
        employee = self._verify(employee_id, pin)

        current = self._latest_open(employee.employee_id)
        if not current:
            raise ValidationError("Not currently clocked in")
        if current.is_lunch:
            raise ConflictError("Already on lunch break")

        punch = self._punches.close_and_open(current.punch_id, at=self._clock(), next_entry_type=EntryType.LUNCH_BREAK)
        logger.info("Employee %s started lunch (punch %s)", employee.employee_id, punch.punch_id)
        return {"message": f"{employee.full_name} started lunch break", "timeRecord": punch.to_dict()}

    def end_lunch(self, *, employee_id: int, pin: str) -> dict:
        employee = self._verify(employee_id, pin)

        current = self._latest_open(employee.employee_id)
        if not current or not current.is_lunch:
            raise ValidationError("Not currently on lunch break")

        punch = self._punches.close_and_open(current.punch_id, at=self._clock(), next_entry_type=EntryType.SHIFT)
        logger.info("Employee %s ended lunch (punch %s)", employee.employee_id, punch.punch_id)
        return {"message": f"{employee.full_name} ended lunch break", "timeRecord": punch.to_dict()}

    def get_status(self, *, employee_id: int, pin: str) -> dict:
        employee = self._verify(employee_id, pin)
        now = self._clock()

        today = [p for p in self._punches.list_for_day(now.date()) if p.employee_id == employee.employee_id]
        work, lunch = split_minutes(today)
        status = derive_status(today)

        current = self._latest_open(employee.employee_id)
        current_minutes = minutes_between(current.clock_in, now) if current else 0
        including_current = work + (current_minutes if current and not current.is_lunch else 0)

        return {
            "employee": employee.to_dict(),
            "status": status.value,
            "isClockedIn": current is not None,
            "currentSession": (
                {
                    "timeRecord": current.to_dict(),
                    "currentMinutes": current_minutes,
                    "currentTime": _hm(current_minutes),
                }
                if current
                else None
            ),
            "todayTotal": {
                "completedMinutes": work,
                "completedTime": _hm(work),
                "lunchMinutes": lunch,
                "includingCurrentMinutes": including_current,
                "includingCurrentTime": _hm(including_current),
                "clockCount": sum(1 for p in today if not p.is_open),
            },
        }
