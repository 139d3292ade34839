from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_RECORDS_LIMIT, MAX_RECORDS_LIMIT
from ..core.enums import ClockStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import Punch
from .repository import PunchRepository
from .rules import chronological, derive_status, split_minutes


@dataclass(frozen=True)
class EmployeeDay:
    employee: Employee
    punches: list[Punch]
    work_minutes: int
    lunch_minutes: int
    status: ClockStatus

    def to_dict(self) -> dict:
        return {
            **self.employee.to_dict(),
            "timeRecords": [p.to_dict() for p in self.punches],
            "workMinutes": self.work_minutes,
            "lunchMinutes": self.lunch_minutes,
            "totalHoursToday": round(self.work_minutes / 60, 2),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class DailySummary:
    work_date: date
    employees: list[EmployeeDay] = field(default_factory=list)

    @property
    def stats(self) -> dict:
        counts = {s: 0 for s in ClockStatus}
        for e in self.employees:
            counts[e.status] += 1
        return {
            "totalEmployees": len(self.employees),
            "clockedIn": counts[ClockStatus.CLOCKED_IN],
            "onLunch": counts[ClockStatus.ON_LUNCH],
            "clockedOut": counts[ClockStatus.CLOCKED_OUT],
            "notClockedIn": counts[ClockStatus.NOT_CLOCKED_IN],
            "totalWorkMinutes": sum(e.work_minutes for e in self.employees),
            "totalLunchMinutes": sum(e.lunch_minutes for e in self.employees),
        }

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "stats": self.stats,
            "employees": [e.to_dict() for e in self.employees],
        }


class TimeclockService:
    """Use case: read-side views of the time clock (daily board, employee history)."""

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

    def summarize_employee_day(self, employee: Employee, punches: list[Punch]) -> EmployeeDay:
        ordered = chronological(punches)
        work, lunch = split_minutes(ordered)
        return EmployeeDay(
            employee=employee,
            punches=ordered,
            work_minutes=work,
            lunch_minutes=lunch,
            status=derive_status(ordered),
        )

    def get_daily_summary(self, work_date: Optional[date] = None) -> DailySummary:
        work_date = work_date or self._clock().date()

        by_employee: dict[int, list[Punch]] = defaultdict(list)
        for p in self._punches.list_for_day(work_date):
            by_employee[p.employee_id].append(p)

        # Every active employee gets a row, punches or not, so headcounts reconcile.
        rows = [
            self.summarize_employee_day(emp, by_employee.get(emp.employee_id, []))
            for emp in self._employees.list_active()
        ]
        return DailySummary(work_date=work_date, employees=rows)

    def get_employee_records(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        limit: int = DEFAULT_RECORDS_LIMIT,
    ) -> dict:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("End date cannot be before start date")
        if page < 1:
            raise ValidationError("page must be >= 1")
        if not 1 <= limit <= MAX_RECORDS_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_RECORDS_LIMIT}")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        records = self._punches.list_for_employee(
            employee_id, start_date=start_date, end_date=end_date, limit=limit, offset=(page - 1) * limit
        )
        total, _ = self._punches.count_for_employee(employee_id, start_date=start_date, end_date=end_date)
        closed_count, closed_minutes = self._punches.count_for_employee(
            employee_id, start_date=start_date, end_date=end_date, closed_only=True
        )

        return {
            "employee": employee.to_dict(),
            "timeRecords": [p.to_dict() for p in records],
            "summary": {
                "totalMinutes": closed_minutes,
                "totalHours": f"{closed_minutes / 60:.2f}",
                "totalRecords": closed_count,
            },
            "total": total,
            "page": page,
            "limit": limit,
        }
