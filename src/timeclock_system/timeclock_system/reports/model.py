from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..employees.model import Employee


def _hours(minutes: int) -> str:
    return f"{minutes / 60:.2f}"


def _money(value: Optional[Decimal]) -> Optional[str]:
    return str(value) if value is not None else None


@dataclass
class EmployeePeriodRow:
    """Per-employee aggregate over the report range."""

    employee: Employee
    shift_punches: int = 0
    work_minutes: int = 0
    lunch_minutes: int = 0
    first_punch: Optional[datetime] = None
    last_punch: Optional[datetime] = None
    open_punches: int = 0
    estimated_pay: Optional[Decimal] = None

    def to_dict(self) -> dict:
        return {
            **self.employee.to_dict(),
            "hourlyRate": _money(self.employee.hourly_rate),
            "totalPunches": self.shift_punches,
            "workMinutes": self.work_minutes,
            "lunchMinutes": self.lunch_minutes,
            "totalHours": _hours(self.work_minutes),
            "firstPunch": self.first_punch.isoformat() if self.first_punch else None,
            "lastPunch": self.last_punch.isoformat() if self.last_punch else None,
            "openPunches": self.open_punches,
            "estimatedPay": _money(self.estimated_pay),
        }


@dataclass
class DailyBreakdownRow:
    work_date: date
    employees_worked: int = 0
    work_minutes: int = 0
    lunch_minutes: int = 0

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "employeesWorked": self.employees_worked,
            "workMinutes": self.work_minutes,
            "lunchMinutes": self.lunch_minutes,
            "totalHours": _hours(self.work_minutes),
        }


@dataclass(frozen=True)
class PeriodSummary:
    period_start: date
    period_end: date
    total_employees: int
    employees_with_hours: int
    total_work_minutes: int
    total_lunch_minutes: int
    open_punches: int
    estimated_pay: Decimal

    def to_dict(self) -> dict:
        return {
            "periodStart": self.period_start.isoformat(),
            "periodEnd": self.period_end.isoformat(),
            "totalEmployees": self.total_employees,
            "employeesWithHours": self.employees_with_hours,
            "totalMinutes": self.total_work_minutes,
            "totalLunchMinutes": self.total_lunch_minutes,
            "totalHours": _hours(self.total_work_minutes),
            "openPunches": self.open_punches,
            "estimatedPay": _money(self.estimated_pay),
        }


@dataclass(frozen=True)
class PeriodReport:
    summary: PeriodSummary
    employees: list[EmployeePeriodRow]
    daily_breakdown: list[DailyBreakdownRow]

    def to_dict(self) -> dict:
        return {
            "summary": self.summary.to_dict(),
            "employees": [e.to_dict() for e in self.employees],
            "dailyBreakdown": [d.to_dict() for d in self.daily_breakdown],
        }
