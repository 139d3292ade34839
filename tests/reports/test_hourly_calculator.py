from decimal import Decimal

from src.timeclock_system.timeclock_system.reports.calculator.hourly_calculator import HourlyPayCalculator


def test_hourly_calculator_prorates_minutes():
    calc = HourlyPayCalculator()
    assert calc.estimated_pay(Decimal("20.00"), 90) == Decimal("30.00")
    assert calc.estimated_pay(Decimal("15.55"), 7) == Decimal("1.81")


def test_hourly_calculator_rounds_half_cent_up():
    assert HourlyPayCalculator().estimated_pay(Decimal("0.05"), 6) == Decimal("0.01")


def test_hourly_calculator_without_rate():
    assert HourlyPayCalculator().estimated_pay(None, 600) is None
