from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for pay estimates)."""

    @abstractmethod
    def estimated_pay(self, hourly_rate: Optional[Decimal], work_minutes: int) -> Optional[Decimal]:
        raise NotImplementedError
