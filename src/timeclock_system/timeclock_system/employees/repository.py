from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Directory lookup for employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self, *, department: Optional[str] = None) -> Sequence[Employee]:
        """Active employees ordered by last name, first name.

        ``department`` is a case-insensitive substring filter.
        """

        raise NotImplementedError

    def get_active_by_pin(self, employee_id: int, pin_code: str) -> Optional[Employee]:
        raise NotImplementedError
