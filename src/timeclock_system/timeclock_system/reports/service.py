from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from ..common.datetime_utils import iter_days, now_local, week_range
from ..core.constants import MAX_REPORT_DAYS
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..timeclock.repository import PunchRepository
from .calculator.base import PayCalculator
from .calculator.hourly_calculator import HourlyPayCalculator
from .model import DailyBreakdownRow, EmployeePeriodRow, PeriodReport, PeriodSummary


class PeriodReportService:
    """Use case: pay-period report over a date range (inclusive)."""

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._punches = punches
        self._employees = employees
        self._calculator = calculator or HourlyPayCalculator()
        self._clock = clock

    def resolve_period(self, start: Optional[date], end: Optional[date]) -> tuple[date, date]:
        """Fill missing bounds from the Monday..Sunday week of the supplied bound, or of today."""
        if start is None or end is None:
            week_start, week_end = week_range(start or end or self._clock().date())
            start = start or week_start
            end = end or week_end
        if end < start:
            raise ValidationError("End date cannot be before start date")
        if (end - start).days + 1 > MAX_REPORT_DAYS:
            raise ValidationError(f"Report period cannot exceed {MAX_REPORT_DAYS} days")
        return start, end

    def build_period_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        department: Optional[str] = None,
    ) -> PeriodReport:
        start, end = self.resolve_period(start, end)
        department = (department or "").strip() or None

        rows: dict[int, EmployeePeriodRow] = {
            emp.employee_id: EmployeePeriodRow(employee=emp)
            for emp in self._employees.list_active(department=department)
        }
        days: dict[date, DailyBreakdownRow] = {d: DailyBreakdownRow(work_date=d) for d in iter_days(start, end)}
        workers_by_day: dict[date, set[int]] = {d: set() for d in days}

        for p in self._punches.list_between(start_date=start, end_date=end, department=department):
            row = rows.get(p.employee_id)
            if row is None:
                # Punch of an employee outside the active roster.
                continue

            day = p.clock_in.date()
            minutes = p.total_minutes or 0
            daily = days.get(day)

            if p.is_lunch:
                row.lunch_minutes += minutes
            else:
                row.shift_punches += 1
                row.work_minutes += minutes
            if p.is_open:
                row.open_punches += 1
            if row.first_punch is None or p.clock_in < row.first_punch:
                row.first_punch = p.clock_in
            if p.clock_out and (row.last_punch is None or p.clock_out > row.last_punch):
                row.last_punch = p.clock_out

            if daily is not None:
                workers_by_day[day].add(p.employee_id)
                if p.is_lunch:
                    daily.lunch_minutes += minutes
                else:
                    daily.work_minutes += minutes

        for day, workers in workers_by_day.items():
            days[day].employees_worked = len(workers)

        employees = list(rows.values())
        for row in employees:
            row.estimated_pay = self._calculator.estimated_pay(row.employee.hourly_rate, row.work_minutes)

        summary = PeriodSummary(
            period_start=start,
            period_end=end,
            total_employees=len(employees),
            employees_with_hours=sum(1 for r in employees if r.work_minutes > 0),
            total_work_minutes=sum(r.work_minutes for r in employees),
            total_lunch_minutes=sum(r.lunch_minutes for r in employees),
            open_punches=sum(r.open_punches for r in employees),
            estimated_pay=sum((r.estimated_pay for r in employees if r.estimated_pay is not None), Decimal("0.00")),
        )
        return PeriodReport(summary=summary, employees=employees, daily_breakdown=list(days.values()))
