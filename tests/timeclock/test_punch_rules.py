from __future__ import annotations

from datetime import datetime

import pytest

from src.timeclock_system.timeclock_system.core.enums import ClockStatus, EntryType
from src.timeclock_system.timeclock_system.core.exceptions import ValidationError
from src.timeclock_system.timeclock_system.timeclock.model import Punch, PunchCorrection
from src.timeclock_system.timeclock_system.timeclock.rules import (
    apply_correction,
    compute_total_minutes,
    derive_status,
    split_minutes,
)


def _punch(punch_id, start, end=None, entry_type=EntryType.SHIFT):
    return Punch(
        punch_id=punch_id,
        employee_id=1,
        clock_in=start,
        clock_out=end,
        entry_type=entry_type,
        total_minutes=compute_total_minutes(start, end),
    )


def test_total_minutes_is_none_while_open():
    assert compute_total_minutes(datetime(2024, 6, 3, 9, 0), None) is None


def test_total_minutes_rounds_half_minutes_up():
    start = datetime(2024, 6, 3, 9, 0, 0)
    assert compute_total_minutes(start, datetime(2024, 6, 3, 9, 10, 29)) == 10
    assert compute_total_minutes(start, datetime(2024, 6, 3, 9, 10, 30)) == 11


def test_total_minutes_rejects_end_before_start():
    with pytest.raises(ValidationError):
        compute_total_minutes(datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 8, 59))


def test_status_without_punches_is_not_clocked_in():
    assert derive_status([]) == ClockStatus.NOT_CLOCKED_IN


def test_status_follows_most_recent_punch():
    morning = _punch(1, datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 12, 0))
    lunch = _punch(2, datetime(2024, 6, 3, 12, 0), entry_type=EntryType.LUNCH_BREAK)
    assert derive_status([morning, lunch]) == ClockStatus.ON_LUNCH

    back = _punch(3, datetime(2024, 6, 3, 12, 30))
    assert derive_status([back, morning]) == ClockStatus.CLOCKED_IN


def test_status_with_two_open_punches_uses_the_later_one():
    stale_lunch = _punch(1, datetime(2024, 6, 3, 8, 0), entry_type=EntryType.LUNCH_BREAK)
    shift = _punch(2, datetime(2024, 6, 3, 9, 0))
    assert derive_status([shift, stale_lunch]) == ClockStatus.CLOCKED_IN

    # identical clock-in: the higher id wins
    twin_lunch = _punch(3, datetime(2024, 6, 3, 9, 0), entry_type=EntryType.LUNCH_BREAK)
    assert derive_status([twin_lunch, shift]) == ClockStatus.ON_LUNCH


def test_split_minutes_ignores_open_punches():
    punches = [
        _punch(1, datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 12, 0)),
        _punch(2, datetime(2024, 6, 3, 12, 0), datetime(2024, 6, 3, 12, 30), EntryType.LUNCH_BREAK),
        _punch(3, datetime(2024, 6, 3, 12, 30)),
    ]
    assert split_minutes(punches) == (180, 30)


def test_correction_recomputes_total_and_stamps_audit_fields():
    punch = _punch(1, datetime(2024, 6, 3, 9, 0))
    adjusted_at = datetime(2024, 6, 4, 8, 0)

    closed = apply_correction(
        punch,
        PunchCorrection(adjusted_by=7, adjusted_at=adjusted_at, reason="Forgot", clock_out=datetime(2024, 6, 3, 17, 0)),
    )
    assert closed.total_minutes == 480
    assert (closed.adjusted_by, closed.adjusted_at, closed.adjustment_reason) == (7, adjusted_at, "Forgot")

    reopened = apply_correction(closed, PunchCorrection(adjusted_by=7, adjusted_at=adjusted_at, reason="x", clock_out=None))
    assert reopened.clock_out is None
    assert reopened.total_minutes is None


def test_correction_keeps_unsupplied_fields():
    punch = _punch(1, datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 10, 0))
    updated = apply_correction(
        punch, PunchCorrection(adjusted_by=1, adjusted_at=datetime(2024, 6, 4), reason="r", notes="late bus")
    )
    assert updated.clock_in == punch.clock_in
    assert updated.clock_out == punch.clock_out
    assert updated.total_minutes == 60
    assert updated.notes == "late bus"


def test_correction_cannot_clear_clock_in():
    punch = _punch(1, datetime(2024, 6, 3, 9, 0))
    with pytest.raises(ValidationError):
        apply_correction(punch, PunchCorrection(adjusted_by=1, adjusted_at=datetime(2024, 6, 4), reason="r", clock_in=None))
