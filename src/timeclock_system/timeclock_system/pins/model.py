from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PinOwner


@dataclass(frozen=True)
class PinHolder:
    """A record (employee or parent) holding a kiosk PIN."""

    owner_type: PinOwner
    owner_id: int
    first_name: str
    last_name: str
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "type": self.owner_type.value,
            "id": self.owner_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }
