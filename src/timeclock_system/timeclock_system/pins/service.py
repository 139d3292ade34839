from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import normalize_pin
from ..core.constants import PIN_IN_USE_MESSAGE, PIN_MAX_LENGTH, PIN_MIN_LENGTH
from ..core.enums import PinOwner, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import PinHolder
from .repository import PinRepository

logger = logging.getLogger(__name__)


class PinService:
    """Use case: keep kiosk PINs unique across employees and parents.

    ``is_available`` / ``ensure_available`` are the fast pre-check; the
    repository's transactional write backed by unique keys is what actually
    guarantees uniqueness.
    """

    def __init__(self, pins: PinRepository, *, min_length: int = PIN_MIN_LENGTH, max_length: int = PIN_MAX_LENGTH):
        self._pins = pins
        self._min_length = int(min_length)
        self._max_length = int(max_length)

    def is_available(
        self,
        pin_code: Optional[str],
        *,
        exclude_owner: Optional[PinOwner] = None,
        exclude_id: Optional[int] = None,
    ) -> bool:
        pin = (pin_code or "").strip()
        if not pin:
            return True
        holders = self._pins.find_holders(pin, exclude_owner=exclude_owner, exclude_id=exclude_id)
        return not holders

    def ensure_available(
        self,
        pin_code: Optional[str],
        *,
        exclude_owner: Optional[PinOwner] = None,
        exclude_id: Optional[int] = None,
    ) -> None:
        if not self.is_available(pin_code, exclude_owner=exclude_owner, exclude_id=exclude_id):
            raise ConflictError(PIN_IN_USE_MESSAGE)

    def _assign(self, current_role: Role, owner_type: PinOwner, owner_id: int, pin_code: Optional[str]) -> Optional[str]:
        if not current_role.is_admin:
            raise AuthorizationError("Admin access required")

        pin = normalize_pin(pin_code, min_len=self._min_length, max_len=self._max_length)
        self.ensure_available(pin, exclude_owner=owner_type, exclude_id=owner_id)

        try:
            found = self._pins.assign(owner_type, owner_id, pin)
        except ConflictError:
            raise ConflictError(PIN_IN_USE_MESSAGE)
        if not found:
            raise NotFoundError(f"{owner_type.value.capitalize()} not found")

        logger.info("PIN %s for %s %s", "updated" if pin else "removed", owner_type.value, owner_id)
        return pin

    def assign_employee_pin(self, *, current_role: Role, employee_id: int, pin_code: Optional[str]) -> Optional[str]:
        return self._assign(current_role, PinOwner.EMPLOYEE, employee_id, pin_code)

    def assign_parent_pin(self, *, current_role: Role, parent_id: int, pin_code: Optional[str]) -> Optional[str]:
        return self._assign(current_role, PinOwner.PARENT, parent_id, pin_code)

    def resolve(self, pin_code: str) -> PinHolder:
        """Kiosk lookup: who does this PIN belong to."""
        pin = (pin_code or "").strip()
        if not pin or not pin.isdigit():
            raise ValidationError("PIN must contain only digits")

        holders = [h for h in self._pins.find_holders(pin) if h.is_active]
        if not holders:
            raise AuthenticationError("Invalid PIN")
        if len(holders) > 1:
            logger.warning("PIN shared by %d records; resolving to %s %s", len(holders), holders[0].owner_type.value, holders[0].owner_id)
        return holders[0]
