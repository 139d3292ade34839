from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import EntryType


class _Unset:
    """Marker for "field not supplied", distinct from an explicit None."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    return value is not UNSET


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Punch:
    """Domain entity: one clock-in/clock-out record of an employee."""

    punch_id: int
    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime] = None
    entry_type: EntryType = EntryType.SHIFT
    total_minutes: Optional[int] = None
    notes: Optional[str] = None
    adjusted_by: Optional[int] = None
    adjusted_at: Optional[datetime] = None
    adjustment_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def is_lunch(self) -> bool:
        return self.entry_type == EntryType.LUNCH_BREAK

    def to_dict(self) -> dict:
        return {
            "id": self.punch_id,
            "employeeId": self.employee_id,
            "clockIn": _iso(self.clock_in),
            "clockOut": _iso(self.clock_out),
            "entryType": self.entry_type.value,
            "totalMinutes": self.total_minutes,
            "totalHours": f"{self.total_minutes / 60:.2f}" if self.total_minutes is not None else None,
            "notes": self.notes,
            "adjustedBy": self.adjusted_by,
            "adjustedAt": _iso(self.adjusted_at),
            "adjustmentReason": self.adjustment_reason,
        }


@dataclass(frozen=True)
class NewPunch:
    """Write-model for inserting a punch. ``total_minutes`` is derived by the store."""

    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime] = None
    entry_type: EntryType = EntryType.SHIFT
    notes: Optional[str] = None
    adjusted_by: Optional[int] = None
    adjusted_at: Optional[datetime] = None
    adjustment_reason: Optional[str] = None


@dataclass(frozen=True)
class PunchCorrection:
    """Admin edit of an existing punch.

    ``clock_in``, ``clock_out`` and ``notes`` default to UNSET (leave as is);
    ``clock_out=None`` reopens the punch.
    """

    adjusted_by: int
    adjusted_at: datetime
    reason: str
    clock_in: Any = UNSET
    clock_out: Any = UNSET
    notes: Any = UNSET

    @property
    def has_changes(self) -> bool:
        return is_set(self.clock_in) or is_set(self.clock_out) or is_set(self.notes)
