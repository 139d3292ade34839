"""Punch rules with no I/O; the MySQL repository applies them inside its row-locking transaction."""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import minutes_between
from ..core.enums import ClockStatus
from ..core.exceptions import ValidationError
from .model import Punch, PunchCorrection, is_set


def compute_total_minutes(clock_in: datetime, clock_out: Optional[datetime]) -> Optional[int]:
    """Derived ``total_minutes``: None while open, else rounded whole minutes."""
    if clock_out is None:
        return None
    if clock_out < clock_in:
        raise ValidationError("Clock-out time cannot be earlier than clock-in time")
    return minutes_between(clock_in, clock_out)


def apply_correction(punch: Punch, correction: PunchCorrection) -> Punch:
    clock_in = correction.clock_in if is_set(correction.clock_in) else punch.clock_in
    clock_out = correction.clock_out if is_set(correction.clock_out) else punch.clock_out
    notes = correction.notes if is_set(correction.notes) else punch.notes

    if clock_in is None:
        raise ValidationError("Clock-in time is required")

    return replace(
        punch,
        clock_in=clock_in,
        clock_out=clock_out,
        notes=notes,
        total_minutes=compute_total_minutes(clock_in, clock_out),
        adjusted_by=correction.adjusted_by,
        adjusted_at=correction.adjusted_at,
        adjustment_reason=correction.reason,
    )


def chronological(punches: Iterable[Punch]) -> list[Punch]:
    return sorted(punches, key=lambda p: (p.clock_in, p.punch_id))


def derive_status(punches: Sequence[Punch]) -> ClockStatus:
    """Status of one employee from that day's punches.

    The most recent punch by clock-in (ties broken by id) decides, so several
    open punches never make the result ambiguous.
    """
    if not punches:
        return ClockStatus.NOT_CLOCKED_IN

    latest = max(punches, key=lambda p: (p.clock_in, p.punch_id))
    if not latest.is_open:
        return ClockStatus.CLOCKED_OUT
    return ClockStatus.ON_LUNCH if latest.is_lunch else ClockStatus.CLOCKED_IN


def split_minutes(punches: Iterable[Punch]) -> tuple[int, int]:
    """(work_minutes, lunch_minutes) over closed punches."""
    work = lunch = 0
    for p in punches:
        if p.total_minutes is None:
            continue
        if p.is_lunch:
            lunch += p.total_minutes
        else:
            work += p.total_minutes
    return work, lunch
