"""
Reality check: compare a plan's assumptions against history and its own solvency.

Flags a caller can surface as warning banners:
  OPTIMISTIC_RETURN: assumed return beats the S&P 500 over a comparable window by > 1.5 points
  RUNS_OUT_EARLY:    projected depletion before life expectancy
  HIGH_WITHDRAWAL:   withdrawal rate above 4.5%
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from core.schema import PlannerInput, SimulationResult
from engine.rates import resolve_nominal_return

from .benchmarks import HISTORICAL_BENCHMARKS, get_benchmark

OPTIMISM_MARGIN_PCT = 1.5
HIGH_WITHDRAWAL_PCT = 4.5


def comparison_window(years_to_retirement: int) -> int:
    """Trailing history window (years) closest to the saving horizon."""
    if years_to_retirement >= 25:
        return 30
    if years_to_retirement >= 15:
        return 20
    return 10


@dataclass
class RealityCheckReport:
    window_years: int
    user_rate_pct: float
    sp500_cagr_pct: float
    is_optimistic: bool
    runs_out_early: bool
    solvency_age: Optional[float]
    high_withdrawal: bool
    flags: List[str] = field(default_factory=list)

    @property
    def show_solvency_warning(self) -> bool:
        return self.runs_out_early or self.high_withdrawal

    def to_dataframe(self) -> pd.DataFrame:
        """Assumed rate next to every benchmark for the same window."""
        rows = [{"Source": "Your assumption", "CAGR (%)": self.user_rate_pct, "Risk": ""}]
        for b in HISTORICAL_BENCHMARKS:
            rows.append({
                "Source": f"{b.ticker}: {b.name}",
                "CAGR (%)": b.cagr_for(self.window_years),
                "Risk": b.risk,
            })
        if self.flags:
            rows.append({"Source": "FLAGS", "CAGR (%)": None, "Risk": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def reality_check(inputs: PlannerInput, result: SimulationResult) -> RealityCheckReport:
    horizon = inputs.retirement_age - inputs.current_age
    window = comparison_window(horizon)
    user_rate = resolve_nominal_return(inputs.strategy, inputs.custom_return_rate) * 100.0
    sp500 = get_benchmark("SPY").cagr_for(window)

    is_optimistic = user_rate > sp500 + OPTIMISM_MARGIN_PCT
    runs_out_early = (
        result.solvency_age is not None and result.solvency_age < inputs.life_expectancy
    )
    high_withdrawal = inputs.safe_withdrawal_rate > HIGH_WITHDRAWAL_PCT

    flags = []
    if is_optimistic:
        flags.append(
            f"OPTIMISTIC_RETURN: {user_rate:.1f}% vs S&P 500 {sp500:.1f}% over {window} years"
        )
    if runs_out_early:
        flags.append(f"RUNS_OUT_EARLY: funds depleted at age {int(result.solvency_age)}")
    if high_withdrawal:
        flags.append(
            f"HIGH_WITHDRAWAL: {inputs.safe_withdrawal_rate}% exceeds {HIGH_WITHDRAWAL_PCT}%"
        )

    return RealityCheckReport(
        window_years=window,
        user_rate_pct=user_rate,
        sp500_cagr_pct=sp500,
        is_optimistic=is_optimistic,
        runs_out_early=runs_out_early,
        solvency_age=result.solvency_age,
        high_withdrawal=high_withdrawal,
        flags=flags,
    )
