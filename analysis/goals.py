"""
Goal sandbox: price tag of a desired retirement income.

Answers two questions for a desired monthly income (today's money):
  Q1: "How much must I save each month at my assumed return?"
  Q2: "What return do I need with what I save today?"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.schema import PlannerInput, TargetType
from engine.buckets import resolve_contributions
from engine.rates import grow_real_to_nominal, resolve_nominal_return
from engine.solvers import required_contribution, required_return


@dataclass(frozen=True)
class GoalAnalysis:
    desired_income_real: float        # annual, today's money
    portfolio_income_needed_real: float
    target_portfolio_real: float
    target_portfolio_nominal: float
    years_to_retirement: int
    required_monthly_contribution: float
    required_return_pct: Optional[float]  # None when no rate in the search range works
    current_monthly_contribution: float

    @property
    def contribution_gap(self) -> float:
        """Positive when current saving falls short of what is required."""
        return self.required_monthly_contribution - self.current_monthly_contribution

    @property
    def is_covered(self) -> bool:
        return self.contribution_gap <= 0


def analyze_goal(
    inputs: PlannerInput,
    *,
    desired_monthly_income: Optional[float] = None,
    retirement_age: Optional[int] = None,
    return_rate_pct: Optional[float] = None,
    monthly_pension: Optional[float] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> GoalAnalysis:
    """
    Solve a desired income goal against the current savings picture.

    Any override left as None falls back to the planner inputs. The portfolio
    target ignores taxes: income needed / withdrawal rate.
    """
    if desired_monthly_income is None:
        desired_monthly_income = (
            inputs.target_value / 12.0
            if TargetType(inputs.target_type) is TargetType.INCOME
            else 5000.0
        )
    if retirement_age is None:
        retirement_age = inputs.retirement_age
    if return_rate_pct is None:
        return_rate_pct = resolve_nominal_return(inputs.strategy, inputs.custom_return_rate) * 100
    if monthly_pension is None:
        monthly_pension = inputs.monthly_pension

    # at least one year of saving
    retirement_age = max(inputs.current_age + 1, int(retirement_age))
    years = retirement_age - inputs.current_age
    inflation = inputs.inflation_rate / 100.0
    withdraw_rate = inputs.safe_withdrawal_rate / 100.0

    desired_annual_real = desired_monthly_income * 12.0
    income_needed_real = max(0.0, desired_annual_real - monthly_pension * 12.0)
    target_real = income_needed_real / withdraw_rate if withdraw_rate > 0 else 0.0
    target_nominal = grow_real_to_nominal(target_real, inflation, years)

    current_contribution = resolve_contributions(inputs).total

    contribution = required_contribution(
        target_nominal, inputs.current_portfolio, return_rate_pct / 100.0, years
    )
    rate = required_return(
        target_nominal, inputs.current_portfolio, current_contribution, years, config=config
    )

    return GoalAnalysis(
        desired_income_real=desired_annual_real,
        portfolio_income_needed_real=income_needed_real,
        target_portfolio_real=target_real,
        target_portfolio_nominal=target_nominal,
        years_to_retirement=years,
        required_monthly_contribution=max(0.0, contribution),
        required_return_pct=rate * 100.0 if rate is not None else None,
        current_monthly_contribution=current_contribution,
    )
