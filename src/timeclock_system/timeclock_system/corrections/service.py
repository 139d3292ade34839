from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.constants import ADMIN_CORRECTION_REASON, ADMIN_INSERT_REASON
from ..core.enums import EntryType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..timeclock.model import UNSET, NewPunch, Punch, PunchCorrection, is_set
from ..timeclock.repository import PunchRepository
from ..timeclock.rules import compute_total_minutes

logger = logging.getLogger(__name__)


class CorrectionService:
    """Use case: admin corrections of the time clock (edit, add missing, delete).

    Every write is stamped with who adjusted it, when and why.
    """

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._punches = punches
        self._employees = employees
        self._clock = clock

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if not current_role.is_admin:
            raise AuthorizationError("Admin access required")

    def edit_punch(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        punch_id: int,
        clock_in: Any = UNSET,
        clock_out: Any = UNSET,
        notes: Any = UNSET,
        reason: Optional[str] = None,
    ) -> Punch:
        self._require_admin(current_role)

        correction = PunchCorrection(
            adjusted_by=int(admin_user_id),
            adjusted_at=self._clock(),
            reason=optional_text(reason, "reason") or ADMIN_CORRECTION_REASON,
            clock_in=clock_in,
            clock_out=clock_out,
            notes=optional_text(notes, "notes") if is_set(notes) else UNSET,
        )
        if not correction.has_changes:
            raise ValidationError("No fields to update")

        updated = self._punches.apply_correction(punch_id, correction)
        if updated is None:
            raise NotFoundError("Time record not found")

        logger.info(
            "Punch %s corrected by user %s (%s): total_minutes=%s",
            punch_id,
            admin_user_id,
            correction.reason,
            updated.total_minutes,
        )
        return updated

    def insert_punch(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        employee_id: int,
        clock_in: datetime,
        clock_out: Optional[datetime] = None,
        entry_type: EntryType = EntryType.SHIFT,
        notes: Optional[str] = None,
    ) -> Punch:
        self._require_admin(current_role)

        if clock_in is None:
            raise ValidationError("Clock-in time is required")
        compute_total_minutes(clock_in, clock_out)

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        created = self._punches.create(
            NewPunch(
                employee_id=employee.employee_id,
                clock_in=clock_in,
                clock_out=clock_out,
                entry_type=entry_type,
                notes=optional_text(notes, "notes"),
                adjusted_by=int(admin_user_id),
                adjusted_at=self._clock(),
                adjustment_reason=ADMIN_INSERT_REASON,
            )
        )
        logger.info("Punch %s added for employee %s by user %s", created.punch_id, employee_id, admin_user_id)
        return created

    def delete_punch(self, *, current_role: Role, admin_user_id: int, punch_id: int) -> None:
        self._require_admin(current_role)

        if not self._punches.delete(punch_id):
            raise NotFoundError("Time record not found")
        logger.info("Punch %s deleted by user %s", punch_id, admin_user_id)
