"""
Projection runner: month-by-month accumulation and drawdown across three buckets.

One call = one deterministic projection. All working state is local to the
call, so the function is safe to run concurrently for different inputs.

Flow:
  1. Validate age ordering (the only rejected input)
  2. Resolve contribution routing and the real income goal
  3. Monthly loop from today to life expectancy, yearly snapshots at month % 12 == 0
  4. Re-run accumulation alone to get exact buckets at the retirement instant
  5. Liquidation value, sustainable income, on-track comparison
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import (
    PlannerInput,
    SimulationResult,
    TargetType,
    YearlyProjection,
)
from core.utils import finite_or_zero, percent_to_fraction, round_currency

from .buckets import BucketState, resolve_contributions, split_current_portfolio
from .rates import (
    adjust_future_to_real,
    grow_real_to_nominal,
    monthly_inflation,
    resolve_nominal_return,
)
from .solvers import required_contribution

logger = logging.getLogger(__name__)

INVALID_AGE_ORDER = "Retirement age must not be before current age."


def resolve_target_income_real(
    inputs: PlannerInput,
    *,
    inflation: float,
    years_to_retirement: int,
    withdraw_rate: float,
    tax_rate: float,
) -> float:
    """
    Annual spendable-income goal in today's money.

    A portfolio-value goal is converted to the income it would pay: deflate to
    today's money, apply the withdrawal rate and the ordinary tax rate, then add
    the pension (already in today's money).
    """
    if TargetType(inputs.target_type) is TargetType.INCOME:
        return float(inputs.target_value)

    target_portfolio_real = adjust_future_to_real(
        float(inputs.target_value), inflation, years_to_retirement
    )
    net_portfolio_income = target_portfolio_real * withdraw_rate * (1.0 - tax_rate)
    return net_portfolio_income + float(inputs.monthly_pension) * 12.0


def required_portfolio_real(
    target_income_real: float, pension_annual_real: float, withdraw_rate: float, tax_rate: float
) -> float:
    """Traditional-only portfolio (today's money) whose net withdrawals cover the gap."""
    income_gap_real = max(0.0, target_income_real - pension_annual_real)
    denominator = withdraw_rate * (1.0 - tax_rate)
    if income_gap_real == 0 or denominator <= 0:
        return 0.0
    return income_gap_real / denominator


def simulate(
    inputs: PlannerInput,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> SimulationResult:
    """
    Run one full projection.

    Parameters
    ----------
    inputs : PlannerInput
        Complete input snapshot. Ranges are trusted; only the age ordering is checked.
    config : EngineConfig
        Engine constants (capital gains rate, tolerances).

    Returns
    -------
    SimulationResult. An invalid result (never an exception) when retirement
    age is before current age.
    """
    years_to_retirement = int(inputs.retirement_age) - int(inputs.current_age)
    if years_to_retirement < 0:
        logger.debug(
            "Rejecting inputs: retirement_age=%s current_age=%s",
            inputs.retirement_age, inputs.current_age,
        )
        return SimulationResult.invalid(INVALID_AGE_ORDER)
    years_in_retirement = max(0, int(inputs.life_expectancy) - int(inputs.retirement_age))

    inflation = percent_to_fraction(inputs.inflation_rate)
    nominal_return = resolve_nominal_return(inputs.strategy, inputs.custom_return_rate)
    withdraw_rate = percent_to_fraction(inputs.safe_withdrawal_rate)
    tax_rate = percent_to_fraction(inputs.retirement_tax_rate)
    cg_rate = config.capital_gains_rate

    contributions = resolve_contributions(inputs)
    starting = split_current_portfolio(inputs)
    starting_total = starting.total

    pension_annual_real = float(inputs.monthly_pension or 0.0) * 12.0
    target_income_real = resolve_target_income_real(
        inputs,
        inflation=inflation,
        years_to_retirement=years_to_retirement,
        withdraw_rate=withdraw_rate,
        tax_rate=tax_rate,
    )

    monthly_rate = nominal_return / 12.0
    inflation_m = monthly_inflation(inflation)
    retirement_month = years_to_retirement * 12
    total_months = (years_to_retirement + years_in_retirement) * 12

    logger.debug(
        "Simulating %d months (retire at month %d), return=%.4f inflation=%.4f",
        total_months, retirement_month, nominal_return, inflation,
    )

    # reference line: constant over the horizon
    target_line_real = required_portfolio_real(
        target_income_real, pension_annual_real, withdraw_rate, tax_rate
    )
    target_line_nominal = grow_real_to_nominal(target_line_real, inflation, years_to_retirement)

    # spending need in retirement, nominal at the retirement date
    base_real_monthly_need = max(0.0, (target_income_real - pension_annual_real) / 12.0)
    initial_nominal_monthly_need = grow_real_to_nominal(
        base_real_monthly_need, inflation, years_to_retirement
    )

    buckets = BucketState.from_amounts(starting)
    total_contributions = 0.0
    solvency_age: Optional[float] = None
    projections: List[YearlyProjection] = []

    # ========= MAIN MONTH LOOP =========
    for m in range(total_months + 1):
        year_index = m // 12
        age = int(inputs.current_age) + year_index

        if m % 12 == 0:
            total_nominal = buckets.total
            invested = total_contributions + starting_total
            projections.append(
                YearlyProjection(
                    year=year_index,
                    age=age,
                    balance_nominal=round_currency(total_nominal),
                    balance_real=round_currency(
                        adjust_future_to_real(total_nominal, inflation, year_index)
                    ),
                    contributions_total=round_currency(invested),
                    growth_nominal=round_currency(total_nominal - invested),
                    target_line_nominal=round_currency(target_line_nominal),
                    target_line_real=round_currency(target_line_real),
                )
            )

        if m < retirement_month:
            buckets.accumulate(monthly_rate, contributions)
            total_contributions += contributions.total
            continue

        # --- drawdown: growth first, then this month's spending ---
        buckets.grow(monthly_rate)
        need = initial_nominal_monthly_need * (1.0 + inflation_m) ** (m - retirement_month)
        unmet = buckets.withdraw(need, tax_rate=tax_rate, capital_gains_rate=cg_rate)

        if unmet > config.solvency_tolerance and solvency_age is None:
            solvency_age = age + (m % 12) / 12.0
            logger.debug("Funds depleted at month %d (age %.2f), unmet=%.2f", m, solvency_age, unmet)

    # ========= EXACT BUCKETS AT RETIREMENT =========
    at_retirement = BucketState.from_amounts(starting)
    for _ in range(retirement_month):
        at_retirement.accumulate(monthly_rate, contributions)

    gross_nominal = at_retirement.total
    gross_real = adjust_future_to_real(gross_nominal, inflation, years_to_retirement)

    liquidation_nominal = at_retirement.liquidation_value(
        tax_rate=tax_rate, capital_gains_rate=cg_rate
    )
    liquidation_real = adjust_future_to_real(liquidation_nominal, inflation, years_to_retirement)

    pension_nominal = grow_real_to_nominal(pension_annual_real, inflation, years_to_retirement)
    income_nominal = (
        at_retirement.sustainable_income(
            withdraw_rate, tax_rate=tax_rate, capital_gains_rate=cg_rate
        )
        + pension_nominal
    )
    income_real = adjust_future_to_real(income_nominal, inflation, years_to_retirement)

    target_income_nominal = grow_real_to_nominal(target_income_real, inflation, years_to_retirement)
    if TargetType(inputs.target_type) is TargetType.TOTAL:
        target_nominal = float(inputs.target_value)
        target_real = adjust_future_to_real(target_nominal, inflation, years_to_retirement)
    else:
        target_nominal = target_income_nominal
        target_real = target_income_real

    income_gap = income_real - target_income_real
    is_on_track = income_gap > -config.on_track_tolerance

    required_monthly = required_contribution(
        target_line_nominal, starting_total, nominal_return, years_to_retirement
    )

    return SimulationResult(
        is_valid=True,
        validation_error=None,
        years_to_retirement=years_to_retirement,
        years_in_retirement=years_in_retirement,
        projected_nominal=finite_or_zero(gross_nominal),
        projected_real=finite_or_zero(gross_real),
        projected_after_tax_nominal=finite_or_zero(liquidation_nominal),
        projected_after_tax_real=finite_or_zero(liquidation_real),
        target_nominal=finite_or_zero(target_nominal),
        target_real=finite_or_zero(target_real),
        projected_income_nominal=finite_or_zero(income_nominal),
        projected_income_real=finite_or_zero(income_real),
        target_income_nominal=finite_or_zero(target_income_nominal),
        target_income_real=finite_or_zero(target_income_real),
        is_on_track=bool(is_on_track),
        income_gap=finite_or_zero(income_gap),
        required_monthly_contribution=finite_or_zero(required_monthly),
        solvency_age=solvency_age,
        retirement_buckets=at_retirement.to_amounts(),
        projections=tuple(projections),
    )
