"""
Illustrative US federal paycheck tax estimate: progressive brackets plus FICA.

Bracket and limit constants are 2025 projections for illustration only; this
is not a tax-law-complete calculator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

import pandas as pd

FilingStatus = Literal["single", "married"]

# (rate, lower bound, upper bound) of taxable income
TAX_BRACKETS_2025: Dict[str, List[Tuple[float, float, float]]] = {
    "single": [
        (0.10, 0, 11925),
        (0.12, 11925, 48475),
        (0.22, 48475, 103350),
        (0.24, 103350, 197300),
        (0.32, 197300, 250525),
        (0.35, 250525, 626350),
        (0.37, 626350, float("inf")),
    ],
    "married": [
        (0.10, 0, 23850),
        (0.12, 23850, 96950),
        (0.22, 96950, 206700),
        (0.24, 206700, 394600),
        (0.32, 394600, 501050),
        (0.35, 501050, 751600),
        (0.37, 751600, float("inf")),
    ],
}

STANDARD_DEDUCTION_2025: Dict[str, float] = {"single": 15000, "married": 30000}

SS_WAGE_BASE = 176100
SS_RATE = 0.062
MEDICARE_RATE = 0.0145
ADDITIONAL_MEDICARE_RATE = 0.009
ADDITIONAL_MEDICARE_THRESHOLD: Dict[str, float] = {"single": 200000, "married": 250000}


@dataclass(frozen=True)
class TaxResult:
    federal_tax: float
    social_security_tax: float
    medicare_tax: float
    taxable_income: float
    deduction_used: float
    marginal_rate: float  # percent
    gross_income: float
    pre_tax_deductions: float
    brackets_breakdown: List[Tuple[float, float]] = field(default_factory=list)

    @property
    def fica_tax(self) -> float:
        return self.social_security_tax + self.medicare_tax

    @property
    def total_tax(self) -> float:
        return self.federal_tax + self.fica_tax

    @property
    def net_pay(self) -> float:
        return self.gross_income - self.total_tax - self.pre_tax_deductions

    @property
    def effective_rate(self) -> float:
        """Total tax as percent of gross income."""
        if self.gross_income <= 0:
            return 0.0
        return self.total_tax / self.gross_income * 100.0

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"Rate": r, "Tax": amount} for r, amount in self.brackets_breakdown]
        )


def _check_status(filing_status: str) -> str:
    if filing_status not in TAX_BRACKETS_2025:
        raise ValueError(
            f"Unknown filing status '{filing_status}'. Available: {list(TAX_BRACKETS_2025)}"
        )
    return filing_status


def estimate_federal_tax(
    gross_income: float,
    pre_tax_deductions: float = 0.0,
    filing_status: FilingStatus = "single",
    itemized_deduction: Optional[float] = None,
) -> TaxResult:
    """
    Federal income tax on wages after pre-tax deductions and the standard (or
    itemized) deduction, plus Social Security and Medicare on gross wages.
    """
    status = _check_status(filing_status)
    deduction = (
        itemized_deduction if itemized_deduction is not None else STANDARD_DEDUCTION_2025[status]
    )

    agi = max(0.0, gross_income - pre_tax_deductions)
    taxable = max(0.0, agi - deduction)

    federal = 0.0
    marginal = 0.0
    breakdown: List[Tuple[float, float]] = []
    for rate, lower, upper in TAX_BRACKETS_2025[status]:
        if taxable > lower:
            in_bracket = (min(taxable, upper) - lower) * rate
            federal += in_bracket
            breakdown.append((rate, in_bracket))
            marginal = rate

    # FICA is computed on gross wages
    social_security = min(gross_income, SS_WAGE_BASE) * SS_RATE
    medicare = gross_income * MEDICARE_RATE
    threshold = ADDITIONAL_MEDICARE_THRESHOLD[status]
    if gross_income > threshold:
        medicare += (gross_income - threshold) * ADDITIONAL_MEDICARE_RATE

    return TaxResult(
        federal_tax=federal,
        social_security_tax=social_security,
        medicare_tax=medicare,
        taxable_income=taxable,
        deduction_used=deduction,
        marginal_rate=marginal * 100.0,
        gross_income=gross_income,
        pre_tax_deductions=pre_tax_deductions,
        brackets_breakdown=breakdown,
    )
