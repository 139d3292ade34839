from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PinOwner
from .model import PinHolder


class PinRepository(Protocol):
    """The kiosk PIN namespace spanning employees and parents."""

    def find_holders(
        self,
        pin_code: str,
        *,
        exclude_owner: Optional[PinOwner] = None,
        exclude_id: Optional[int] = None,
    ) -> Sequence[PinHolder]:
        """Holders of ``pin_code`` in both pools.

        The excluded record only exempts itself within its own pool.
        """

        raise NotImplementedError

    def assign(self, owner_type: PinOwner, owner_id: int, pin_code: Optional[str]) -> bool:
        """Set (or clear, with None) the PIN of one record atomically.

        Returns False when the owner does not exist; raises ConflictError when
        the PIN is already taken.
        """

        raise NotImplementedError
