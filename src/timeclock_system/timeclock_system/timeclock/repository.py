from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EntryType
from .model import NewPunch, Punch, PunchCorrection


class PunchRepository(Protocol):
    """Persistence of time-clock punches.

    Day/range queries only return punches of active employees; a punch belongs
    to the calendar day of its clock-in.
    """

    def get_by_id(self, punch_id: int) -> Optional[Punch]:
        raise NotImplementedError

    def list_for_day(self, work_date: date) -> Sequence[Punch]:
        raise NotImplementedError

    def list_between(self, *, start_date: date, end_date: date, department: Optional[str] = None) -> Sequence[Punch]:
        raise NotImplementedError

    def list_open_for_employee(self, employee_id: int) -> Sequence[Punch]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Punch]:
        """Newest first."""

        raise NotImplementedError

    def count_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        closed_only: bool = False,
    ) -> tuple[int, int]:
        """(record_count, summed total_minutes)."""

        raise NotImplementedError

    def create(self, punch: NewPunch) -> Punch:
        """An open punch is refused with ConflictError while the employee already has one."""

        raise NotImplementedError

    def apply_correction(self, punch_id: int, correction: PunchCorrection) -> Optional[Punch]:
        """Merge, recompute and write in one transaction. None if the id is unknown.

        Reopening a punch while the employee has another open one raises ConflictError.
        """

        raise NotImplementedError

    def close(self, punch_id: int, *, clock_out: datetime) -> Punch:
        raise NotImplementedError

    def close_and_open(self, punch_id: int, *, at: datetime, next_entry_type: EntryType) -> Punch:
        """Close an open punch and open the next one at the same instant; returns the new punch."""

        raise NotImplementedError

    def delete(self, punch_id: int) -> bool:
        raise NotImplementedError
