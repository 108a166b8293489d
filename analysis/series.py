from __future__ import annotations

import dataclasses

import pandas as pd

from core.schema import SimulationResult

SERIES_COLUMNS = [
    "year",
    "age",
    "balance_nominal",
    "balance_real",
    "contributions_total",
    "growth_nominal",
    "target_line_nominal",
    "target_line_real",
]


def projections_to_frame(result: SimulationResult) -> pd.DataFrame:
    """Yearly series as a DataFrame, one row per simulated year (empty frame when invalid)."""
    rows = [dataclasses.asdict(p) for p in result.projections]
    if not rows:
        return pd.DataFrame(columns=SERIES_COLUMNS)
    return pd.DataFrame(rows, columns=SERIES_COLUMNS).sort_values("age").reset_index(drop=True)


def retirement_row(result: SimulationResult) -> pd.Series:
    """Series row at the retirement year."""
    df = projections_to_frame(result)
    if df.empty:
        raise ValueError("Result has no projections.")
    return df.loc[df["year"] == result.years_to_retirement].iloc[0]
