from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Back-office role used for access checks."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    STAFF = "staff"

    @property
    def is_admin(self) -> bool:
        return self in (Role.SUPER_ADMIN, Role.ADMIN)


class EntryType(str, Enum):
    """Classification of a punch."""

    SHIFT = "shift"
    LUNCH_BREAK = "lunch_break"


class ClockStatus(str, Enum):
    NOT_CLOCKED_IN = "not_clocked_in"
    CLOCKED_IN = "clocked_in"
    ON_LUNCH = "on_lunch"
    CLOCKED_OUT = "clocked_out"


class PinOwner(str, Enum):
    """The two identity pools sharing one kiosk PIN namespace."""

    EMPLOYEE = "employee"
    PARENT = "parent"
