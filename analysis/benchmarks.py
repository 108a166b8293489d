"""
Historical benchmark returns for sanity-checking an assumed growth rate.

Approximate annualized nominal returns with dividends reinvested, over
trailing windows of 5 to 35 years. Illustrative figures, not a data feed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal

import pandas as pd

WINDOWS = (5, 10, 15, 20, 25, 30, 35)


@dataclass(frozen=True)
class HistoricalBenchmark:
    ticker: str
    name: str
    description: str
    cagr: Dict[int, float]  # window (years) -> annualized return, percent
    risk: Literal["Low", "Medium", "High"]

    def cagr_for(self, window: int) -> float:
        if window not in self.cagr:
            raise KeyError(f"No {window}-year CAGR for {self.ticker}. Available: {sorted(self.cagr)}")
        return self.cagr[window]


HISTORICAL_BENCHMARKS: List[HistoricalBenchmark] = [
    HistoricalBenchmark(
        ticker="SPY",
        name="S&P 500 (Large Cap)",
        description="The 500 largest US companies. The standard benchmark for US equities.",
        cagr={5: 15.0, 10: 12.5, 15: 13.8, 20: 10.2, 25: 7.8, 30: 10.7, 35: 10.9},
        risk="High",
    ),
    HistoricalBenchmark(
        ticker="QQQ",
        name="Nasdaq-100 (Tech/Growth)",
        description="Top 100 non-financial companies on Nasdaq. Heavy tech focus.",
        cagr={5: 21.0, 10: 17.8, 15: 18.5, 20: 14.5, 25: 10.5, 30: 14.2, 35: 13.5},
        risk="High",
    ),
    HistoricalBenchmark(
        ticker="VTI",
        name="Total US Stock Market",
        description="Entire US equity market including small and mid-cap stocks.",
        cagr={5: 14.5, 10: 12.1, 15: 13.2, 20: 10.4, 25: 8.1, 30: 10.5, 35: 10.6},
        risk="High",
    ),
    HistoricalBenchmark(
        ticker="VXUS",
        name="Total Intl Stock",
        description="Global markets excluding the US. Provides geographic diversification.",
        cagr={5: 7.2, 10: 4.8, 15: 4.5, 20: 5.5, 25: 4.9, 30: 6.2, 35: 5.8},
        risk="High",
    ),
    HistoricalBenchmark(
        ticker="BND",
        name="Total Bond Market",
        description="US Investment Grade Bonds. Used for capital preservation and income.",
        cagr={5: 0.5, 10: 1.8, 15: 2.5, 20: 3.2, 25: 3.8, 30: 4.6, 35: 5.1},
        risk="Low",
    ),
]


def get_benchmark(ticker: str) -> HistoricalBenchmark:
    for bench in HISTORICAL_BENCHMARKS:
        if bench.ticker == ticker.upper():
            return bench
    raise KeyError(
        f"Unknown benchmark '{ticker}'. "
        f"Available: {[b.ticker for b in HISTORICAL_BENCHMARKS]}"
    )


def benchmarks_table() -> pd.DataFrame:
    """One row per benchmark, one column per window."""
    rows = []
    for b in HISTORICAL_BENCHMARKS:
        row = {"Ticker": b.ticker, "Name": b.name, "Risk": b.risk}
        for w in WINDOWS:
            row[f"CAGR {w}y"] = b.cagr.get(w)
        rows.append(row)
    return pd.DataFrame(rows)
