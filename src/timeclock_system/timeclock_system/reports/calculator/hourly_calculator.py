from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .base import PayCalculator

_CENTS = Decimal("0.01")


class HourlyPayCalculator(PayCalculator):
    """Standard rule: rate x worked hours, rounded to cents; no rate means no estimate."""

    def estimated_pay(self, hourly_rate: Optional[Decimal], work_minutes: int) -> Optional[Decimal]:
        if hourly_rate is None:
            return None
        amount = Decimal(hourly_rate) * Decimal(int(work_minutes)) / Decimal(60)
        return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
