"""
Mortgage amortization and refinance analysis.

Full precision through the schedule; round_currency() only on the returned
summary figures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import pandas as pd

from core.utils import round_currency

_ZERO_RATE = 1e-12


def level_payment(principal: float, annual_rate_pct: float, years: float) -> float:
    """Standard fully-amortizing monthly payment (PMT) with near-zero rate guard."""
    n_months = int(round(years * 12))
    if n_months <= 0:
        return float(principal)
    monthly_rate = annual_rate_pct / 100.0 / 12.0
    if abs(monthly_rate) < _ZERO_RATE:
        return float(principal) / n_months
    growth = (1 + monthly_rate) ** n_months
    return float(principal) * monthly_rate * growth / (growth - 1)


@dataclass(frozen=True)
class MortgageResult:
    monthly_payment: float
    total_interest: float
    total_paid: float
    payoff_months: int
    schedule: pd.DataFrame  # month, balance, interest, principal, total_interest, total_paid


def amortize(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    extra_payment_monthly: float = 0.0,
    start_extra_payment_month: int = 0,
) -> MortgageResult:
    """
    Monthly schedule until paid off, with an optional extra principal payment
    starting at a 0-based month index.
    """
    monthly_rate = annual_rate_pct / 100.0 / 12.0
    scheduled = level_payment(principal, annual_rate_pct, term_years)

    balance = float(principal)
    total_interest = 0.0
    total_paid = 0.0
    rows = []
    month = 0
    max_months = int(round(term_years * 12)) + 120  # safety cap

    while balance > 0.01 and month < max_months:
        extra = extra_payment_monthly if month >= start_extra_payment_month else 0.0
        month += 1

        interest = balance * monthly_rate
        principal_paid = min(max(scheduled - interest, 0.0) + extra, balance)

        balance -= principal_paid
        total_interest += interest
        total_paid += interest + principal_paid

        rows.append({
            "month": month,
            "balance": max(balance, 0.0),
            "interest": interest,
            "principal": principal_paid,
            "total_interest": total_interest,
            "total_paid": total_paid,
        })

    return MortgageResult(
        monthly_payment=scheduled,
        total_interest=round_currency(total_interest, 2),
        total_paid=round_currency(total_paid, 2),
        payoff_months=month,
        schedule=pd.DataFrame(rows),
    )


@dataclass(frozen=True)
class RefinanceOption:
    term_years: float
    rate_pct: float
    closing_costs: float
    roll_in_costs: bool = False


@dataclass(frozen=True)
class RefinanceAnalysis:
    option: RefinanceOption
    new_monthly_payment: float
    monthly_savings: float
    break_even_months: float
    lifetime_savings: float

    @property
    def is_viable(self) -> bool:
        return self.lifetime_savings > 0 or self.monthly_savings > 0


NO_BREAK_EVEN = 9999.0


def analyze_refinance(
    current_balance: float,
    current_monthly_payment: float,
    current_remaining_total_cost: float,
    options: Sequence[RefinanceOption],
) -> List[RefinanceAnalysis]:
    """
    Compare each refinance option against what is left to pay on the current loan.

    Break-even is closing costs over monthly savings (NO_BREAK_EVEN when the
    payment does not drop). Lifetime savings compare remaining cost of the
    existing loan with the new loan's total payments plus upfront cash.
    """
    out = []
    for opt in options:
        loan_amount = current_balance + opt.closing_costs if opt.roll_in_costs else current_balance
        upfront = 0.0 if opt.roll_in_costs else opt.closing_costs

        new = amortize(loan_amount, opt.rate_pct, opt.term_years)
        savings = current_monthly_payment - new.monthly_payment
        break_even = opt.closing_costs / savings if savings > 0 else NO_BREAK_EVEN

        out.append(RefinanceAnalysis(
            option=opt,
            new_monthly_payment=new.monthly_payment,
            monthly_savings=savings,
            break_even_months=break_even,
            lifetime_savings=current_remaining_total_cost - (new.total_paid + upfront),
        ))
    return out
