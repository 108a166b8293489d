"""
Account buckets: contribution routing, per-bucket growth, and the withdrawal order.

Three buckets with different tax treatment on the way out:
  traditional: every dollar withdrawn is ordinary income (taxed at the retirement rate)
  brokerage:   only the unrealized-gain share of a withdrawal is taxed (capital gains rate)
  roth:        tax free

Drawdown order is a fixed policy: traditional, then brokerage, then Roth.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from core.schema import BucketAmounts, PlannerInput

logger = logging.getLogger(__name__)

WITHDRAWAL_ORDER: Tuple[str, ...] = ("traditional", "brokerage", "roth")


def resolve_contributions(inputs: PlannerInput) -> BucketAmounts:
    """
    Canonical monthly contribution per bucket.

    Granular fields win when any of them is non-zero. Otherwise the legacy
    aggregate (total + Roth portion) is split into traditional/Roth, with the
    Roth portion capped at the total and nothing routed to brokerage.
    """
    granular = BucketAmounts(
        traditional=max(0.0, float(inputs.traditional_contribution)),
        roth=max(0.0, float(inputs.roth_contribution)),
        brokerage=max(0.0, float(inputs.brokerage_contribution)),
    )
    total = max(0.0, float(inputs.monthly_contribution))
    if granular.total > 0 or total == 0:
        return granular

    roth_portion = max(0.0, float(inputs.monthly_roth_contribution))
    if roth_portion > total:
        logger.warning(
            "Roth portion %.2f exceeds total contribution %.2f; capping.", roth_portion, total
        )
        roth_portion = total
    logger.debug("Using legacy aggregate contribution: total=%.2f roth=%.2f", total, roth_portion)
    return BucketAmounts(traditional=total - roth_portion, roth=roth_portion, brokerage=0.0)


def split_current_portfolio(inputs: PlannerInput) -> BucketAmounts:
    """Split today's total into buckets so Roth + brokerage never exceed the total."""
    total = max(0.0, float(inputs.current_portfolio))
    roth_in = max(0.0, float(inputs.current_roth_balance))
    brokerage_in = max(0.0, float(inputs.current_brokerage_balance))

    roth = min(roth_in, total)
    brokerage = min(brokerage_in, total - roth)
    if roth < roth_in or brokerage < brokerage_in:
        logger.warning(
            "Roth (%.2f) + brokerage (%.2f) exceed current portfolio %.2f; clamped.",
            roth_in, brokerage_in, total,
        )
    return BucketAmounts(traditional=total - roth - brokerage, roth=roth, brokerage=brokerage)


@dataclass
class BucketState:
    """Working balances for one simulation run. Never shared between runs."""
    traditional: float
    roth: float
    brokerage: float
    brokerage_basis: float

    @classmethod
    def from_amounts(cls, amounts: BucketAmounts) -> "BucketState":
        # starting brokerage money is treated as all principal
        return cls(
            traditional=amounts.traditional,
            roth=amounts.roth,
            brokerage=amounts.brokerage,
            brokerage_basis=amounts.brokerage,
        )

    @property
    def total(self) -> float:
        return self.traditional + self.roth + self.brokerage

    @property
    def unrealized_gain_ratio(self) -> float:
        if self.brokerage <= 0:
            return 0.0
        return min(max((self.brokerage - self.brokerage_basis) / self.brokerage, 0.0), 1.0)

    def to_amounts(self) -> BucketAmounts:
        return BucketAmounts(
            traditional=self.traditional, roth=self.roth, brokerage=self.brokerage
        )

    def grow(self, monthly_rate: float) -> None:
        self.traditional += self.traditional * monthly_rate
        self.roth += self.roth * monthly_rate
        self.brokerage += self.brokerage * monthly_rate

    def accumulate(self, monthly_rate: float, contribution: BucketAmounts) -> None:
        """One accumulation month: growth then end-of-month contribution."""
        self.grow(monthly_rate)
        self.traditional += contribution.traditional
        self.roth += contribution.roth
        self.brokerage += contribution.brokerage
        # new money carries no unrealized gain
        self.brokerage_basis += contribution.brokerage

    def withdraw(self, cash_needed: float, *, tax_rate: float, capital_gains_rate: float) -> float:
        """
        Raise `cash_needed` of spendable (after-tax) money following WITHDRAWAL_ORDER.

        Returns the part of the need that could not be met.
        """
        remaining = cash_needed
        for bucket in WITHDRAWAL_ORDER:
            if remaining <= 0:
                break
            if bucket == "traditional":
                remaining = self._withdraw_traditional(remaining, tax_rate)
            elif bucket == "brokerage":
                remaining = self._withdraw_brokerage(remaining, capital_gains_rate)
            else:
                remaining = self._withdraw_roth(remaining)
        return max(remaining, 0.0)

    def _withdraw_traditional(self, remaining: float, tax_rate: float) -> float:
        net_factor = 1.0 - tax_rate
        if net_factor <= 0:
            # everything would go to tax; the bucket cannot fund spending
            return remaining
        gross = remaining / net_factor
        if self.traditional >= gross:
            self.traditional -= gross
            return 0.0
        remaining -= self.traditional * net_factor
        self.traditional = 0.0
        return remaining

    def _withdraw_brokerage(self, remaining: float, capital_gains_rate: float) -> float:
        if self.brokerage <= 0:
            return remaining
        net_factor = 1.0 - self.unrealized_gain_ratio * capital_gains_rate
        if net_factor <= 0:
            return remaining
        gross = remaining / net_factor
        if self.brokerage >= gross:
            self.brokerage_basis -= self.brokerage_basis * (gross / self.brokerage)
            self.brokerage -= gross
            return 0.0
        remaining -= self.brokerage * net_factor
        self.brokerage = 0.0
        self.brokerage_basis = 0.0
        return remaining

    def _withdraw_roth(self, remaining: float) -> float:
        if self.roth >= remaining:
            self.roth -= remaining
            return 0.0
        remaining -= self.roth
        self.roth = 0.0
        return remaining

    def liquidation_value(self, *, tax_rate: float, capital_gains_rate: float) -> float:
        """After-tax value if every bucket were cashed out now."""
        gain = self.brokerage - self.brokerage_basis if self.brokerage > 0 else 0.0
        return (
            self.roth
            + self.traditional * (1.0 - tax_rate)
            + self.brokerage
            - max(gain, 0.0) * capital_gains_rate
        )

    def sustainable_income(
        self, withdraw_rate: float, *, tax_rate: float, capital_gains_rate: float
    ) -> float:
        """Annual after-tax income the buckets support at `withdraw_rate`."""
        return withdraw_rate * (
            self.traditional * (1.0 - tax_rate)
            + self.roth
            + self.brokerage * (1.0 - self.unrealized_gain_ratio * capital_gains_rate)
        )
