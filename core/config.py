"""
Engine configuration and the named strategy table.
Tax brackets used by the extras live in extras/tax.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

from .schema import InvestmentStrategy


@dataclass(frozen=True)
class EngineConfig:
    # long-term capital gains rate applied to unrealized brokerage gains
    capital_gains_rate: float = 0.15

    # on-track when projected real income is within this of the target (annual)
    on_track_tolerance: float = 100.0

    # unmet monthly need above this counts as a failed withdrawal
    solvency_tolerance: float = 1.0

    # required-return bisection
    return_search_low: float = -0.5
    return_search_high: float = 2.0
    return_search_iterations: int = 50
    return_search_tolerance: float = 10.0


DEFAULT_ENGINE_CONFIG = EngineConfig()


@dataclass(frozen=True)
class StrategyProfile:
    strategy: InvestmentStrategy
    name: str
    rate: float  # nominal annual return, percent
    description: str
    volatility: Literal["Low", "Medium", "High"]
    asset_mix: str


INVESTMENT_STRATEGIES: Dict[InvestmentStrategy, StrategyProfile] = {
    InvestmentStrategy.CONSERVATIVE: StrategyProfile(
        strategy=InvestmentStrategy.CONSERVATIVE,
        name="Conservative",
        rate=4.0,
        description="Preservation of capital with modest growth.",
        volatility="Low",
        asset_mix="Mostly Bonds, Cash, Treasury Bills",
    ),
    InvestmentStrategy.BALANCED: StrategyProfile(
        strategy=InvestmentStrategy.BALANCED,
        name="Balanced",
        rate=6.0,
        description="A middle ground between growth and stability.",
        volatility="Medium",
        asset_mix="60% Stocks, 40% Bonds",
    ),
    InvestmentStrategy.AGGRESSIVE: StrategyProfile(
        strategy=InvestmentStrategy.AGGRESSIVE,
        name="Aggressive",
        rate=9.0,
        description="Maximum long-term growth potential.",
        volatility="High",
        asset_mix="Broad Equity Indices (Total Market), Small Cap, Emerging Markets",
    ),
    # rate is only the form default; the engine uses the caller's custom rate
    InvestmentStrategy.CUSTOM: StrategyProfile(
        strategy=InvestmentStrategy.CUSTOM,
        name="Custom",
        rate=7.0,
        description="User defined strategy.",
        volatility="Medium",
        asset_mix="Custom Mix",
    ),
}


# Starting values of the planner form (granular contribution shape).
DEFAULT_INPUTS: Dict[str, object] = {
    "current_age": 35,
    "retirement_age": 65,
    "life_expectancy": 90,
    "current_portfolio": 50000.0,
    "current_roth_balance": 0.0,
    "current_brokerage_balance": 0.0,
    "traditional_contribution": 1000.0,
    "roth_contribution": 0.0,
    "brokerage_contribution": 0.0,
    "monthly_pension": 2000.0,
    "target_type": "income",
    "target_value": 60000.0,
    "safe_withdrawal_rate": 4.0,
    "strategy": "Balanced",
    "custom_return_rate": 7.0,
    "inflation_rate": 3.0,
    "retirement_tax_rate": 15.0,
}
