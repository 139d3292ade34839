from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: a staff member who punches the time clock.

    Note: Plain data object (no DB access). ``pin_code`` is never serialized
    back to clients.
    """

    employee_id: int
    first_name: str
    last_name: str
    position: Optional[str] = None
    department: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    pin_code: Optional[str] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "position": self.position,
            "department": self.department,
        }
