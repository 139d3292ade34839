from datetime import date, datetime

import pytest

from src.timeclock_system.timeclock_system.common.datetime_utils import (
    iter_days,
    next_day,
    parse_iso_datetime,
    parse_optional_date,
    week_range,
)
from src.timeclock_system.timeclock_system.common.validators import normalize_pin, optional_text, require_int
from src.timeclock_system.timeclock_system.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "today",
    [date(2024, 6, 3), date(2024, 6, 5), date(2024, 6, 9)],
)
def test_week_range_is_monday_to_sunday(today):
    assert week_range(today) == (date(2024, 6, 3), date(2024, 6, 9))


def test_iter_days_is_inclusive():
    assert list(iter_days(date(2024, 6, 29), date(2024, 7, 1))) == [
        date(2024, 6, 29),
        date(2024, 6, 30),
        date(2024, 7, 1),
    ]


def test_last_week_of_the_calendar_is_clamped():
    assert week_range(date(9999, 12, 31)) == (date(9999, 12, 27), date.max)
    assert list(iter_days(date(9999, 12, 30), date.max)) == [date(9999, 12, 30), date.max]


def test_next_day_past_the_calendar_is_a_validation_error():
    assert next_day(date(2024, 2, 28)) == date(2024, 2, 29)
    with pytest.raises(ValidationError):
        next_day(date.max)


def test_parse_optional_date():
    assert parse_optional_date(None) is None
    assert parse_optional_date("  ") is None
    assert parse_optional_date("2024-06-03") == date(2024, 6, 3)
    with pytest.raises(ValidationError):
        parse_optional_date("06/03/2024")


def test_parse_iso_datetime_naive_value_is_kept():
    assert parse_iso_datetime("2024-06-03T09:00:00") == datetime(2024, 6, 3, 9, 0)


def test_parse_iso_datetime_with_offset_becomes_naive():
    parsed = parse_iso_datetime("2024-06-03T09:00:00Z")
    assert parsed.tzinfo is None


def test_parse_iso_datetime_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_iso_datetime("yesterday")


def test_require_int_rejects_booleans():
    assert require_int("12", "employeeId") == 12
    with pytest.raises(ValidationError):
        require_int(True, "employeeId")


def test_normalize_pin():
    assert normalize_pin(None) is None
    assert normalize_pin("   ") is None
    assert normalize_pin(" 1234 ") == "1234"
    with pytest.raises(ValidationError):
        normalize_pin("12a4")
    with pytest.raises(ValidationError):
        normalize_pin("123")
    with pytest.raises(ValidationError):
        normalize_pin("1234567")


def test_optional_text():
    assert optional_text(None, "notes") is None
    assert optional_text("  ", "notes") is None
    assert optional_text(" late ", "notes") == "late"
    with pytest.raises(ValidationError):
        optional_text(123, "notes")
