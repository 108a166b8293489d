"""
Education savings calculator.

Yearly projection from the child's current age to the end of college. The fund
grows at the investment return, receives the year's contributions until
graduation and pays tuition during the college years. Tuition is quoted in
today's money and inflated at the education inflation rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

import pandas as pd

from core.utils import round_currency

Country = Literal["US", "UK"]

COLLEGE_YEARS: Dict[str, int] = {"US": 4, "UK": 3}

# annual contribution above which a tax-advantaged account becomes a problem
US_GIFT_TAX_EXCLUSION = 18000
UK_JISA_LIMIT = 9000


@dataclass(frozen=True)
class EducationProjection:
    years_until_college: int
    college_years: int
    final_balance: float
    projected_total_cost: float
    shortfall: float
    required_monthly_contribution: float  # 0 when the plan is funded
    annual_tax_savings: float
    is_over_limit: bool
    schedule: pd.DataFrame  # age, balance, yearly_cost, total_contributed

    @property
    def is_funded(self) -> bool:
        return self.shortfall == 0


def project_education(
    child_age: int,
    college_start_age: int = 18,
    current_savings: float = 0.0,
    monthly_contribution: float = 0.0,
    annual_college_cost: float = 30000.0,
    education_inflation_pct: float = 5.0,
    investment_return_pct: float = 7.0,
    *,
    country: Country = "US",
    state_tax_rate_pct: float = 0.0,
) -> EducationProjection:
    if country not in COLLEGE_YEARS:
        raise ValueError(f"Unknown country '{country}'. Available: {list(COLLEGE_YEARS)}")

    duration = COLLEGE_YEARS[country]
    years_until_college = max(0, int(college_start_age) - int(child_age))
    end_age = int(college_start_age) + duration
    annual_contribution = monthly_contribution * 12.0
    growth = 1 + investment_return_pct / 100.0

    balance = float(current_savings)
    total_contributed = float(current_savings)
    total_cost = 0.0
    rows = []
    for age in range(int(child_age), end_age + 1):
        in_college = college_start_age <= age < end_age
        yearly_cost = 0.0
        if in_college:
            yearly_cost = annual_college_cost * (1 + education_inflation_pct / 100.0) ** (
                age - int(child_age)
            )
            total_cost += yearly_cost

        rows.append({
            "age": age,
            "balance": round_currency(balance),
            "yearly_cost": round_currency(yearly_cost),
            "total_contributed": round_currency(total_contributed),
        })

        # year end: growth, contributions until graduation, then tuition
        balance *= growth
        if age < end_age:
            balance += annual_contribution
            total_contributed += annual_contribution
        balance -= yearly_cost

    shortfall = 0.0
    required_monthly = 0.0
    if balance < 0:
        shortfall = -balance
        # discount to midway through college, spread over the months until then
        years_to_cover = years_until_college + duration / 2.0
        present_shortfall = shortfall / growth ** years_to_cover
        required_monthly = monthly_contribution + present_shortfall / (years_to_cover * 12.0)

    limit = UK_JISA_LIMIT if country == "UK" else US_GIFT_TAX_EXCLUSION

    return EducationProjection(
        years_until_college=years_until_college,
        college_years=duration,
        final_balance=balance,
        projected_total_cost=total_cost,
        shortfall=shortfall,
        required_monthly_contribution=required_monthly,
        annual_tax_savings=annual_contribution * state_tax_rate_pct / 100.0,
        is_over_limit=annual_contribution > limit,
        schedule=pd.DataFrame(rows, columns=["age", "balance", "yearly_cost", "total_contributed"]),
    )
