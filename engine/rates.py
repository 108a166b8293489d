"""
Rate resolution and real/nominal conversion.
"""

from __future__ import annotations

from core.config import INVESTMENT_STRATEGIES
from core.schema import InvestmentStrategy


def resolve_nominal_return(strategy: InvestmentStrategy, custom_rate: float = 0.0) -> float:
    """Nominal annual return as a decimal fraction (6.0% -> 0.06)."""
    strategy = InvestmentStrategy(strategy)
    if strategy is InvestmentStrategy.CUSTOM:
        return float(custom_rate) / 100.0
    return INVESTMENT_STRATEGIES[strategy].rate / 100.0


def adjust_future_to_real(future_value: float, inflation_rate: float, years: float) -> float:
    """Deflate a future nominal value to today's money."""
    return future_value / (1.0 + inflation_rate) ** years


def grow_real_to_nominal(present_value: float, inflation_rate: float, years: float) -> float:
    """Inflate a value in today's money to a future nominal value."""
    return present_value * (1.0 + inflation_rate) ** years


def monthly_inflation(annual_inflation: float) -> float:
    """Monthly rate that compounds to the annual rate over 12 months."""
    return (1.0 + annual_inflation) ** (1.0 / 12.0) - 1.0
