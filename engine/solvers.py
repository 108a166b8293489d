"""
Closed-form and bisection solvers on monthly-compounded savings.

Both work on an ordinary annuity (contribution at month end) with the
annual rate split evenly into twelve monthly rates, the same convention as
the projection loop.
"""

from __future__ import annotations

import math
from typing import Optional

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig

_ZERO_RATE = 1e-12


def future_value(
    principal: float,
    monthly_contribution: float,
    annual_rate: float,
    months: int,
) -> float:
    """Principal plus level monthly contributions compounded for `months`."""
    monthly_rate = annual_rate / 12.0
    if abs(monthly_rate) < _ZERO_RATE:
        return principal + monthly_contribution * months
    factor = (1.0 + monthly_rate) ** months
    return principal * factor + monthly_contribution * (factor - 1.0) / monthly_rate


def required_contribution(
    target_fv: float,
    current_principal: float,
    annual_rate: float,
    years: float,
) -> float:
    """
    Level monthly contribution needed to reach `target_fv` in `years`.

    Returns 0 when the principal alone gets there (or there is no horizon).
    Rounded up to the next whole unit.
    """
    if years <= 0:
        return 0.0

    months = years * 12
    monthly_rate = annual_rate / 12.0

    fv_principal = current_principal * (1.0 + monthly_rate) ** months
    shortfall = target_fv - fv_principal
    if shortfall <= 0:
        return 0.0

    if abs(monthly_rate) < _ZERO_RATE:
        return float(math.ceil(shortfall / months))

    annuity_factor = ((1.0 + monthly_rate) ** months - 1.0) / monthly_rate
    return float(math.ceil(shortfall / annuity_factor))


def required_return(
    target_fv: float,
    current_principal: float,
    monthly_contribution: float,
    years: float,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Optional[float]:
    """
    Annual rate (decimal) at which principal + contributions reach `target_fv`.

    Bisection over [config.return_search_low, config.return_search_high].
    Returns None when the target lies outside what that interval can produce.
    """
    if years <= 0:
        return 0.0

    months = int(round(years * 12))
    low = config.return_search_low
    high = config.return_search_high

    def fv_at(rate: float) -> float:
        return future_value(current_principal, monthly_contribution, rate, months)

    if fv_at(high) < target_fv:
        return None
    if fv_at(low) > target_fv + config.return_search_tolerance:
        return None

    for _ in range(config.return_search_iterations):
        mid = (low + high) / 2.0
        fv = fv_at(mid)
        if abs(fv - target_fv) < config.return_search_tolerance:
            return mid
        if fv < target_fv:
            low = mid
        else:
            high = mid

    return (low + high) / 2.0
