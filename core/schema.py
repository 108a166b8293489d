"""
Input and result records for the projection engine.

Percent-valued assumptions are stored as entered (6.0 means 6%); the engine
converts them to decimal fractions once at the start of a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class InvestmentStrategy(str, Enum):
    CONSERVATIVE = "Conservative"
    BALANCED = "Balanced"
    AGGRESSIVE = "Aggressive"
    CUSTOM = "Custom"


class TargetType(str, Enum):
    INCOME = "income"  # desired annual spendable income, today's money
    TOTAL = "total"    # target nominal portfolio value at retirement


@dataclass(frozen=True)
class BucketAmounts:
    """One amount per account type. Used for balances and for monthly contributions."""
    traditional: float = 0.0
    roth: float = 0.0
    brokerage: float = 0.0

    @property
    def total(self) -> float:
        return self.traditional + self.roth + self.brokerage


@dataclass(frozen=True)
class PlannerInput:
    current_age: int
    retirement_age: int
    life_expectancy: int

    # balances today; roth + brokerage are portions of current_portfolio
    current_portfolio: float = 0.0
    current_roth_balance: float = 0.0
    current_brokerage_balance: float = 0.0

    # granular monthly contributions
    traditional_contribution: float = 0.0
    roth_contribution: float = 0.0
    brokerage_contribution: float = 0.0

    # legacy aggregate shape: total + roth portion
    monthly_contribution: float = 0.0
    monthly_roth_contribution: float = 0.0

    # goal
    target_type: TargetType = TargetType.INCOME
    target_value: float = 0.0

    # assumptions (percent)
    strategy: InvestmentStrategy = InvestmentStrategy.BALANCED
    custom_return_rate: float = 7.0
    inflation_rate: float = 3.0
    safe_withdrawal_rate: float = 4.0
    retirement_tax_rate: float = 15.0

    # monthly government pension / benefit, today's money
    monthly_pension: float = 0.0


@dataclass(frozen=True)
class YearlyProjection:
    year: int
    age: int
    balance_nominal: float
    balance_real: float
    contributions_total: float
    growth_nominal: float
    target_line_nominal: float
    target_line_real: float


@dataclass(frozen=True)
class SimulationResult:
    is_valid: bool
    validation_error: Optional[str] = None
    years_to_retirement: int = 0
    years_in_retirement: int = 0

    # balances at retirement
    projected_nominal: float = 0.0
    projected_real: float = 0.0
    projected_after_tax_nominal: float = 0.0
    projected_after_tax_real: float = 0.0

    target_nominal: float = 0.0
    target_real: float = 0.0

    # annual after-tax spendable income at retirement
    projected_income_nominal: float = 0.0
    projected_income_real: float = 0.0
    target_income_nominal: float = 0.0
    target_income_real: float = 0.0

    is_on_track: bool = False
    income_gap: float = 0.0  # real dollars, negative means shortfall
    required_monthly_contribution: float = 0.0
    solvency_age: Optional[float] = None

    retirement_buckets: BucketAmounts = field(default_factory=BucketAmounts)
    projections: Tuple[YearlyProjection, ...] = ()

    @classmethod
    def invalid(cls, reason: str) -> "SimulationResult":
        """All-zero result carrying the reason the inputs were rejected."""
        return cls(is_valid=False, validation_error=reason)
