"""
Range validation for planner inputs before they reach the engine.

The engine itself only rejects a retirement age before the current age; the
caller is expected to run these checks first:
- Age ordering and plausible ages
- Negative balances / contributions
- Roth + brokerage portions larger than the total portfolio
- Rates outside plausible bounds (percent vs decimal mix-ups)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.schema import InvestmentStrategy, PlannerInput


@dataclass
class ValidationResult:
    """Blocking errors and informational warnings for one PlannerInput."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def summary(self) -> str:
        """One line per finding, errors first; a single line when there are none."""
        if not self.errors and not self.warnings:
            return "Inputs look fine."
        lines = [f"error: {e}" for e in self.errors]
        lines.extend(f"warning: {w}" for w in self.warnings)
        return "\n".join(lines)


def validate_inputs(inputs: PlannerInput) -> ValidationResult:
    """
    Run all validation checks on a planner input snapshot.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Ages ---
    if inputs.current_age < 0:
        result.error("Current age cannot be negative.")
    if inputs.retirement_age <= inputs.current_age:
        result.error("Retirement age must be greater than current age.")
    if inputs.life_expectancy < inputs.retirement_age:
        result.error("Life expectancy must be at least the retirement age.")
    if inputs.life_expectancy > 120:
        result.warn(f"Life expectancy {inputs.life_expectancy} is above 120.")

    # --- Balances ---
    for name in ["current_portfolio", "current_roth_balance", "current_brokerage_balance"]:
        if getattr(inputs, name) < 0:
            result.error(f"{name} cannot be negative.")
    if inputs.current_roth_balance + inputs.current_brokerage_balance > inputs.current_portfolio:
        result.error(
            "Roth and brokerage balances together exceed the current portfolio total."
        )

    # --- Contributions ---
    for name in [
        "traditional_contribution",
        "roth_contribution",
        "brokerage_contribution",
        "monthly_contribution",
        "monthly_roth_contribution",
    ]:
        if getattr(inputs, name) < 0:
            result.error(f"{name} cannot be negative.")
    if inputs.monthly_roth_contribution > inputs.monthly_contribution > 0:
        result.warn("Roth portion exceeds total monthly contribution; it will be capped.")

    # --- Goal ---
    if inputs.target_value < 0:
        result.error("Target value cannot be negative.")
    if inputs.monthly_pension < 0:
        result.error("Monthly pension cannot be negative.")

    # --- Rates (percent form) ---
    if not 0 <= inputs.retirement_tax_rate <= 100:
        result.error("Retirement tax rate must be between 0 and 100 percent.")
    elif inputs.retirement_tax_rate > 50:
        result.warn(
            f"Retirement tax rate {inputs.retirement_tax_rate}% is unusually high."
        )
    if inputs.inflation_rate <= -100:
        result.error("Inflation rate must be above -100 percent.")
    if inputs.safe_withdrawal_rate < 0:
        result.error("Safe withdrawal rate cannot be negative.")
    elif inputs.safe_withdrawal_rate == 0:
        result.warn("Safe withdrawal rate is 0%; portfolio income will be zero.")

    rate_fields = ["inflation_rate", "safe_withdrawal_rate"]
    if InvestmentStrategy(inputs.strategy) is InvestmentStrategy.CUSTOM:
        rate_fields.append("custom_return_rate")
    for name in rate_fields:
        value = getattr(inputs, name)
        if 0 < abs(value) < 0.5:
            result.warn(
                f"{name} = {value} looks like a decimal fraction; rates are in percent form."
            )
    if InvestmentStrategy(inputs.strategy) is InvestmentStrategy.CUSTOM and inputs.custom_return_rate > 20:
        result.warn(
            f"Custom return rate {inputs.custom_return_rate}% is far above historical averages."
        )

    return result
